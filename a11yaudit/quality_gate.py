from __future__ import annotations

from a11yaudit.models import ComplianceReport, Severity


SEVERITY_ORDER: dict[Severity, int] = {
    "LOW": 1,
    "MEDIUM": 2,
    "HIGH": 3,
}


def evaluate_gate(
    report: ComplianceReport,
    fail_on: Severity | None = None,
    max_issues: int | None = 0,
    max_warnings: int | None = None,
    min_score: float | None = None,
) -> tuple[bool, list[str]]:
    failed_reasons: list[str] = []
    findings = [*report.issues, *report.warnings]

    if fail_on is not None:
        threshold = SEVERITY_ORDER[fail_on]
        if any(SEVERITY_ORDER.get(finding.severity, 0) >= threshold for finding in findings):
            failed_reasons.append(f"Detected finding severity >= '{fail_on}'")

    total_issues = report.summary.total_issues
    if max_issues is not None and total_issues > max_issues:
        failed_reasons.append(f"Issue count {total_issues} exceeds max_issues={max_issues}")

    total_warnings = report.summary.total_warnings
    if max_warnings is not None and total_warnings > max_warnings:
        failed_reasons.append(f"Warning count {total_warnings} exceeds max_warnings={max_warnings}")

    if min_score is not None and report.summary.overall_score < min_score:
        failed_reasons.append(
            f"Score {report.summary.overall_score:.2f} is below min_score={min_score:.2f}"
        )

    return (len(failed_reasons) == 0, failed_reasons)
