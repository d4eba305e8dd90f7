from __future__ import annotations

from collections.abc import Iterable, Sequence

from a11yaudit.models import (
    ComplianceReport,
    Finding,
    Recommendation,
    ReportSummary,
    ScanNote,
    ScanStats,
    Success,
    WCAGCriterion,
)
from a11yaudit.scoring import compliance_level, score
from a11yaudit.wcag import WCAGMapper

ISSUE_SEVERITIES = frozenset({"HIGH"})


def split_findings(findings: Iterable[Finding]) -> tuple[list[Finding], list[Finding]]:
    """Split a corpus into issues (HIGH) and warnings (MEDIUM, LOW)."""
    issues: list[Finding] = []
    warnings: list[Finding] = []
    for finding in findings:
        if finding.severity in ISSUE_SEVERITIES:
            issues.append(finding)
        else:
            warnings.append(finding)
    return issues, warnings


def group_by_type(findings: Iterable[Finding]) -> dict[str, list[Finding]]:
    grouped: dict[str, list[Finding]] = {}
    for finding in findings:
        grouped.setdefault(finding.type, []).append(finding)
    return grouped


def aggregate(
    issues: Sequence[Finding],
    warnings: Sequence[Finding],
    successes: Sequence[Success],
    stats: ScanStats,
    notes: Sequence[ScanNote] = (),
    wcag: dict[str, WCAGCriterion] | None = None,
    scan_date: str | None = None,
) -> ComplianceReport:
    findings = [*issues, *warnings]
    all_notes = list(notes)
    if wcag is None:
        mapper = WCAGMapper()
        wcag = mapper.map(findings, stats.components_scanned)
        all_notes.extend(
            ScanNote(
                kind="UNMAPPED_WCAG_RULE",
                file=finding.file,
                message=f"{finding.type} references unknown WCAG rule {finding.wcag_rule!r}",
            )
            for finding in mapper.unmapped
        )

    overall = score(findings, stats.components_scanned, good_pattern_count=len(successes))
    high_count = sum(1 for finding in findings if finding.severity == "HIGH")
    summary = ReportSummary(
        files_scanned=stats.files_scanned,
        components_scanned=stats.components_scanned,
        total_issues=len(issues),
        total_warnings=len(warnings),
        total_successes=len(successes),
        overall_score=overall,
        compliance_level=compliance_level(overall, high_count),
        files_skipped=stats.files_skipped,
        incomplete=stats.incomplete,
        scan_date=scan_date,
    )
    return ComplianceReport(
        summary=summary,
        issues_by_type=group_by_type(issues),
        warnings_by_type=group_by_type(warnings),
        successes=list(successes),
        wcag_compliance=wcag,
        recommendations=build_recommendations(issues, warnings),
        notes=all_notes,
    )


def build_recommendations(issues: Sequence[Finding], warnings: Sequence[Finding]) -> list[Recommendation]:
    recommendations: list[Recommendation] = []
    findings = [*issues, *warnings]
    warning_types = {warning.type for warning in warnings}

    high = [finding for finding in findings if finding.severity == "HIGH"]
    if high:
        recommendations.append(
            Recommendation(
                priority="CRITICAL",
                title="Address High-Severity Accessibility Issues",
                description=(
                    f"Found {len(high)} critical accessibility issues that prevent users with disabilities "
                    "from using the app effectively."
                ),
                actions=[
                    "Add missing accessibility labels to all interactive elements",
                    "Ensure adequate color contrast ratios (4.5:1 minimum)",
                    "Verify touch targets meet 44px minimum size requirement",
                    "Provide text alternatives for all informative images",
                ],
            )
        )

    contrast = [finding for finding in findings if finding.type == "INSUFFICIENT_COLOR_CONTRAST"]
    if contrast:
        recommendations.append(
            Recommendation(
                priority="HIGH",
                title="Fix Insufficient Color Contrast",
                description=f"{len(contrast)} theme color pairs fall below the 4.5:1 WCAG AA minimum.",
                actions=list(dict.fromkeys(finding.suggestion for finding in contrast)),
            )
        )

    if "MISSING_FOCUS_HANDLERS" in warning_types:
        recommendations.append(
            Recommendation(
                priority="HIGH",
                title="Improve Keyboard Navigation Support",
                description="Many interactive elements lack proper keyboard navigation support.",
                actions=[
                    "Add onFocus and onBlur handlers to all interactive elements",
                    "Implement visible focus indicators",
                    "Test tab order and ensure logical navigation flow",
                    "Add keyboard shortcuts for common actions",
                ],
            )
        )

    if warning_types & {"MISSING_REDUCED_MOTION", "ANIMATION_TOO_LONG"}:
        recommendations.append(
            Recommendation(
                priority="MEDIUM",
                title="Implement Motion Preferences Support",
                description="Components with animations should respect user motion preferences.",
                actions=[
                    "Implement useReducedMotion hook across all animated components",
                    "Provide settings to disable animations",
                    "Reduce animation durations where possible",
                    "Use transforms instead of layout animations for better performance",
                ],
            )
        )

    if "MISSING_LIVE_REGION" in warning_types:
        recommendations.append(
            Recommendation(
                priority="MEDIUM",
                title="Announce Status Changes",
                description="Loading indicators and status banners are not announced to screen reader users.",
                actions=[
                    'Add accessibilityLiveRegion="polite" to status containers',
                    'Use accessibilityLiveRegion="assertive" for urgent alerts',
                    "Call AccessibilityInfo.announceForAccessibility after async state changes",
                ],
            )
        )

    return recommendations
