from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

Severity = Literal["HIGH", "MEDIUM", "LOW"]
Priority = Literal["CRITICAL", "HIGH", "MEDIUM", "LOW"]
WCAGLevel = Literal["A", "AA", "AAA"]
NoteKind = Literal["FILE_READ_ERROR", "CONTRAST_CHECK_SKIPPED", "UNMAPPED_WCAG_RULE", "NO_COMPONENTS"]


@dataclass(frozen=True, slots=True)
class Finding:
    type: str
    severity: Severity
    file: str
    line: int | None
    message: str
    wcag_rule: str | None
    suggestion: str
    evidence_snippet: str | None = None
    column: int | None = None


@dataclass(frozen=True, slots=True)
class Success:
    type: str
    file: str
    message: str


@dataclass(frozen=True, slots=True)
class ScanNote:
    kind: NoteKind
    file: str | None
    message: str


@dataclass(frozen=True, slots=True)
class ColorPair:
    foreground: str
    background: str
    context: str = ""
    font_size: float = 16.0
    bold: bool = False


@dataclass(frozen=True, slots=True)
class ContrastResult:
    ratio: float
    required_ratio: float
    passes: bool
    is_large_text: bool


@dataclass(frozen=True, slots=True)
class FixSuggestion:
    suggested: str
    ratio: float
    improvement: bool


@dataclass(slots=True)
class PairValidation:
    pair: ColorPair
    result: ContrastResult | None = None
    error: str | None = None


@dataclass(slots=True)
class ContrastRecommendation:
    context: str
    issue: str
    foreground: str
    background: str
    suggestion: FixSuggestion | None
    priority: Priority


@dataclass(slots=True)
class ContrastValidation:
    results: list[PairValidation]
    total: int
    passed: int
    failed: int
    errors: int
    pass_rate: int
    recommendations: list[ContrastRecommendation] = field(default_factory=list)


@dataclass(slots=True)
class WCAGCriterion:
    id: str
    name: str
    level: WCAGLevel
    passed: int = 0
    failed: int = 0


@dataclass(slots=True)
class Recommendation:
    priority: Priority
    title: str
    description: str
    actions: list[str]


@dataclass(slots=True)
class ScanStats:
    files_scanned: int = 0
    components_scanned: int = 0
    files_skipped: int = 0
    incomplete: bool = False


@dataclass(slots=True)
class FileAnalysis:
    path: Path
    file: str
    findings: list[Finding] = field(default_factory=list)
    successes: list[Success] = field(default_factory=list)
    is_component: bool = False
    error: str | None = None


@dataclass(slots=True)
class ReportSummary:
    files_scanned: int
    components_scanned: int
    total_issues: int
    total_warnings: int
    total_successes: int
    overall_score: float
    compliance_level: str
    files_skipped: int = 0
    incomplete: bool = False
    scan_date: str | None = None


@dataclass(slots=True)
class ComplianceReport:
    summary: ReportSummary
    issues_by_type: dict[str, list[Finding]]
    warnings_by_type: dict[str, list[Finding]]
    successes: list[Success]
    wcag_compliance: dict[str, WCAGCriterion]
    recommendations: list[Recommendation]
    notes: list[ScanNote] = field(default_factory=list)

    @property
    def issues(self) -> list[Finding]:
        return [finding for group in self.issues_by_type.values() for finding in group]

    @property
    def warnings(self) -> list[Finding]:
        return [finding for group in self.warnings_by_type.values() for finding in group]


@dataclass(slots=True)
class ScanResult:
    findings: list[Finding]
    successes: list[Success]
    stats: ScanStats
    notes: list[ScanNote] = field(default_factory=list)
