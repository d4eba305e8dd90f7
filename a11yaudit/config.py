from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib

from a11yaudit.collector import DEFAULT_EXTENSIONS
from a11yaudit.models import ColorPair, Severity
from a11yaudit.rules import FINDING_TYPES


DEFAULT_CONFIG_FILE = "a11yaudit.toml"
DEFAULT_SCAN_ROOT = "src"
DEFAULT_REPORT_PATH = "accessibility-audit-report.json"
SEVERITIES = ("HIGH", "MEDIUM", "LOW")


@dataclass(slots=True)
class ScanConfig:
    root: str = DEFAULT_SCAN_ROOT
    exclude: list[str] = field(default_factory=list)
    include_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    max_file_size_kb: int = 1024
    enabled_rules: list[str] | None = None
    disabled_rules: list[str] = field(default_factory=list)
    inline_ignore: bool = True
    jobs: int = 0


@dataclass(slots=True)
class QualityGateConfig:
    fail_on: Severity | None = None
    max_issues: int | None = 0
    max_warnings: int | None = None
    min_score: float | None = None
    baseline_report: str | None = None
    only_new_issues: bool = False


@dataclass(slots=True)
class ReportConfig:
    out: str | None = DEFAULT_REPORT_PATH


@dataclass(slots=True)
class ContrastConfig:
    pairs: list[ColorPair] = field(default_factory=list)


@dataclass(slots=True)
class Config:
    scan: ScanConfig = field(default_factory=ScanConfig)
    quality_gate: QualityGateConfig = field(default_factory=QualityGateConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    contrast: ContrastConfig = field(default_factory=ContrastConfig)


def load_config(path: str | None) -> Config:
    if path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.exists():
            return Config()
        path = str(default)

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    with cfg_path.open("rb") as fh:
        payload = tomllib.load(fh)

    scan = payload.get("scan", {})
    quality_gate = payload.get("quality_gate", {})
    report = payload.get("report", {})
    contrast = payload.get("contrast", {})

    config = Config()
    config.scan.root = str(scan.get("root", config.scan.root))
    config.scan.exclude = list(scan.get("exclude", config.scan.exclude))
    config.scan.include_extensions = list(scan.get("include_extensions", config.scan.include_extensions))
    config.scan.max_file_size_kb = int(scan.get("max_file_size_kb", config.scan.max_file_size_kb))
    enabled_rules = scan.get("enabled_rules")
    config.scan.enabled_rules = [str(rule).upper() for rule in enabled_rules] if enabled_rules is not None else None
    config.scan.disabled_rules = [str(rule).upper() for rule in scan.get("disabled_rules", config.scan.disabled_rules)]
    config.scan.inline_ignore = bool(scan.get("inline_ignore", config.scan.inline_ignore))
    config.scan.jobs = int(scan.get("jobs", config.scan.jobs))
    fail_on = quality_gate.get("fail_on")
    config.quality_gate.fail_on = str(fail_on).upper() if fail_on is not None else None
    config.quality_gate.max_issues = quality_gate.get("max_issues", config.quality_gate.max_issues)
    config.quality_gate.max_warnings = quality_gate.get("max_warnings")
    config.quality_gate.min_score = quality_gate.get("min_score")
    config.quality_gate.baseline_report = quality_gate.get("baseline_report")
    config.quality_gate.only_new_issues = bool(quality_gate.get("only_new_issues", config.quality_gate.only_new_issues))
    config.report.out = report.get("out", config.report.out)
    config.contrast.pairs = [_parse_pair(entry) for entry in contrast.get("pairs", [])]
    return config


def validate_config(config: Config) -> list[str]:
    errors: list[str] = []
    if config.quality_gate.fail_on is not None and config.quality_gate.fail_on not in SEVERITIES:
        errors.append("fail_on must be one of: HIGH, MEDIUM, LOW")

    numeric_gate_values: list[tuple[str, int | None]] = [
        ("max_issues", config.quality_gate.max_issues),
        ("max_warnings", config.quality_gate.max_warnings),
    ]
    for gate_name, value in numeric_gate_values:
        if value is not None and value < 0:
            errors.append(f"{gate_name} must be >= 0")

    if config.quality_gate.min_score is not None:
        if config.quality_gate.min_score < 0 or config.quality_gate.min_score > 100:
            errors.append("min_score must be between 0 and 100")
    if config.quality_gate.only_new_issues and not config.quality_gate.baseline_report:
        errors.append("only_new_issues requires baseline_report")
    if config.scan.enabled_rules is not None and len(config.scan.enabled_rules) == 0:
        errors.append("enabled_rules must be non-empty when set")

    for rule in [*(config.scan.enabled_rules or []), *config.scan.disabled_rules]:
        if rule not in FINDING_TYPES:
            errors.append(f"Unknown finding type: {rule}")
    if config.scan.jobs < 0:
        errors.append("jobs must be >= 0")
    if config.scan.max_file_size_kb < 0:
        errors.append("max_file_size_kb must be >= 0")
    return errors


def _parse_pair(entry: dict) -> ColorPair:
    if not isinstance(entry, dict) or "foreground" not in entry or "background" not in entry:
        raise ValueError("Each [[contrast.pairs]] entry needs 'foreground' and 'background'.")
    return ColorPair(
        foreground=str(entry["foreground"]),
        background=str(entry["background"]),
        context=str(entry.get("context", "")),
        font_size=float(entry.get("font_size", 16.0)),
        bold=bool(entry.get("bold", False)),
    )
