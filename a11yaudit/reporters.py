from __future__ import annotations

from collections import Counter
import json
from pathlib import Path
from typing import Any

from a11yaudit.models import (
    ComplianceReport,
    ContrastRecommendation,
    ContrastValidation,
    Finding,
    FixSuggestion,
    Recommendation,
    ScanNote,
    Success,
)


def _finding_to_dict(finding: Finding) -> dict[str, Any]:
    return {
        "type": finding.type,
        "severity": finding.severity,
        "file": finding.file,
        "line": finding.line,
        "message": finding.message,
        "wcagRule": finding.wcag_rule,
        "suggestion": finding.suggestion,
        "evidenceSnippet": finding.evidence_snippet,
    }


def _group_to_dict(grouped: dict[str, list[Finding]]) -> dict[str, list[dict[str, Any]]]:
    return {
        finding_type: [_finding_to_dict(finding) for finding in findings]
        for finding_type, findings in grouped.items()
    }


def _success_to_dict(success: Success) -> dict[str, Any]:
    return {"type": success.type, "file": success.file, "message": success.message}


def _note_to_dict(note: ScanNote) -> dict[str, Any]:
    return {"kind": note.kind, "file": note.file, "message": note.message}


def _recommendation_to_dict(recommendation: Recommendation) -> dict[str, Any]:
    return {
        "priority": recommendation.priority,
        "title": recommendation.title,
        "description": recommendation.description,
        "actions": list(recommendation.actions),
    }


def to_json_report(report: ComplianceReport) -> dict[str, Any]:
    summary = report.summary
    return {
        "summary": {
            "scanDate": summary.scan_date,
            "filesScanned": summary.files_scanned,
            "filesSkipped": summary.files_skipped,
            "componentsScanned": summary.components_scanned,
            "totalIssues": summary.total_issues,
            "totalWarnings": summary.total_warnings,
            "totalSuccesses": summary.total_successes,
            "overallScore": summary.overall_score,
            "complianceLevel": summary.compliance_level,
            "incomplete": summary.incomplete,
        },
        "issues": _group_to_dict(report.issues_by_type),
        "warnings": _group_to_dict(report.warnings_by_type),
        "successes": [_success_to_dict(success) for success in report.successes],
        "recommendations": [_recommendation_to_dict(item) for item in report.recommendations],
        "wcagCompliance": {
            rule_id: {
                "name": criterion.name,
                "level": criterion.level,
                "passed": criterion.passed,
                "failed": criterion.failed,
            }
            for rule_id, criterion in report.wcag_compliance.items()
        },
        "notes": [_note_to_dict(note) for note in report.notes],
    }


def _fix_to_dict(fix: FixSuggestion | None) -> dict[str, Any] | None:
    if fix is None:
        return None
    return {"suggested": fix.suggested, "ratio": fix.ratio, "improvement": fix.improvement}


def _contrast_recommendation_to_dict(recommendation: ContrastRecommendation) -> dict[str, Any]:
    return {
        "context": recommendation.context,
        "issue": recommendation.issue,
        "foreground": recommendation.foreground,
        "background": recommendation.background,
        "suggestion": _fix_to_dict(recommendation.suggestion),
        "priority": recommendation.priority,
    }


def to_contrast_report(validation: ContrastValidation) -> dict[str, Any]:
    results: list[dict[str, Any]] = []
    for item in validation.results:
        entry: dict[str, Any] = {
            "foreground": item.pair.foreground,
            "background": item.pair.background,
            "context": item.pair.context,
        }
        if item.result is not None:
            entry.update(
                {
                    "ratio": round(item.result.ratio, 2),
                    "requiredRatio": item.result.required_ratio,
                    "passes": item.result.passes,
                    "isLargeText": item.result.is_large_text,
                }
            )
        else:
            entry["error"] = item.error
        results.append(entry)

    return {
        "summary": {
            "total": validation.total,
            "passed": validation.passed,
            "failed": validation.failed,
            "errors": validation.errors,
            "passRate": validation.pass_rate,
        },
        "results": results,
        "recommendations": [_contrast_recommendation_to_dict(item) for item in validation.recommendations],
    }


def write_report(payload: dict[str, Any], out: str | None) -> None:
    rendered = json.dumps(payload, indent=2)
    if out is None:
        print(rendered)
        return
    output_path = Path(out)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")


def format_summary(report: ComplianceReport) -> str:
    """Human-readable digest of a report for the console."""
    summary = report.summary
    lines = [
        f"[summary] files={summary.files_scanned} skipped={summary.files_skipped} "
        f"components={summary.components_scanned}",
        f"[summary] score={summary.overall_score:.2f} level={summary.compliance_level}",
        f"[summary] issues={summary.total_issues} warnings={summary.total_warnings} "
        f"successes={summary.total_successes}",
    ]
    type_counts = Counter(finding.type for finding in [*report.issues, *report.warnings])
    for finding_type, count in sorted(type_counts.items(), key=lambda item: (-item[1], item[0]))[:5]:
        lines.append(f"[summary] {finding_type}: {count}")
    if summary.incomplete:
        lines.append("[summary] scan was cancelled; results are incomplete")
    for recommendation in report.recommendations:
        lines.append(f"[summary] {recommendation.priority}: {recommendation.title}")
    return "\n".join(lines)
