from __future__ import annotations

from collections.abc import Iterable
import json
from pathlib import Path
from typing import Any

from a11yaudit.models import Finding

Fingerprint = tuple[str, str, int | None, str]


def load_baseline_fingerprints(path: str) -> set[Fingerprint]:
    """Read a previous JSON report and fingerprint its issues and warnings."""
    payload = _read_json(path)
    issues = payload.get("issues")
    warnings = payload.get("warnings", {})
    if not isinstance(issues, dict) or not isinstance(warnings, dict):
        raise ValueError("Baseline report must contain 'issues' and 'warnings' maps.")

    fingerprints: set[Fingerprint] = set()
    for entry in _grouped_entries(issues) + _grouped_entries(warnings):
        if not isinstance(entry, dict):
            continue
        finding_type = entry.get("type")
        file_path = entry.get("file")
        line = entry.get("line")
        message = entry.get("message")
        if not isinstance(finding_type, str) or not isinstance(file_path, str) or not isinstance(message, str):
            continue
        if line is not None and not isinstance(line, int):
            continue
        fingerprints.add((file_path, finding_type, line, message))
    return fingerprints


def filter_new_findings(
    findings: Iterable[Finding], baseline_fingerprints: set[Fingerprint]
) -> tuple[list[Finding], int]:
    findings = list(findings)
    new_findings = [
        finding
        for finding in findings
        if (finding.file, finding.type, finding.line, finding.message) not in baseline_fingerprints
    ]
    return new_findings, len(findings) - len(new_findings)


def _read_json(path: str) -> dict[str, Any]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Baseline report must be a JSON object.")
    return payload


def _grouped_entries(grouped: dict[str, Any]) -> list[Any]:
    entries: list[Any] = []
    for group in grouped.values():
        if isinstance(group, list):
            entries.extend(group)
    return entries
