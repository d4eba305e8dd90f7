from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timezone
import logging
import os
from pathlib import Path
import re
import threading

from a11yaudit.aggregator import aggregate, split_findings
from a11yaudit.collector import DEFAULT_EXTENSIONS, collect
from a11yaudit.errors import FileReadError
from a11yaudit.models import ComplianceReport, FileAnalysis, Finding, ScanNote, ScanResult, ScanStats
from a11yaudit.reporters import to_json_report, write_report
from a11yaudit.rules import DETECTORS, NOTE_TYPES, Detector, detect_good_patterns, run_detectors

logger = logging.getLogger(__name__)

INLINE_IGNORE_PATTERN = re.compile(r"a11yaudit:ignore(?:\s+([A-Za-z0-9_, -]+))?", re.IGNORECASE)
COMMENT_ONLY_PATTERN = re.compile(r"^\s*(?://|/\*|\{\s*/\*|\*)")
COMPONENT_SUFFIXES = {".js", ".jsx", ".ts", ".tsx"}


def analyze_source(
    content: str,
    file_path: str,
    detectors: Sequence[Detector] = DETECTORS,
    location: str | None = None,
) -> FileAnalysis:
    """Run the detector registry against one file's text.

    Detectors see ``location`` (default ``file_path``), which may keep
    directory names that path-sensitive rules such as the theme contrast
    check rely on; reported results always carry ``file_path``.
    """
    analysis = FileAnalysis(path=Path(file_path), file=file_path)
    if not _is_component(content, file_path):
        return analysis
    analysis.is_component = True
    seen_as = location or file_path
    findings = run_detectors(content, seen_as, detectors)
    successes = detect_good_patterns(content, seen_as)
    if seen_as != file_path:
        findings = [replace(finding, file=file_path) for finding in findings]
        successes = [replace(success, file=file_path) for success in successes]
    analysis.findings = findings
    analysis.successes = successes
    return analysis


def analyze_file(
    path: Path,
    root: Path,
    detectors: Sequence[Detector] = DETECTORS,
    enabled_rules: set[str] | None = None,
    disabled_rules: set[str] | None = None,
    inline_ignore: bool = True,
) -> FileAnalysis:
    relative = _relative_path(path, root)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        error = FileReadError(relative, reason)
        logger.warning("Skipping file: %s", error)
        return FileAnalysis(path=path, file=relative, error=str(error))

    analysis = analyze_source(content, relative, detectors, location=_detection_path(relative, root))
    analysis.path = path
    analysis.findings = _filter_findings(
        analysis.findings,
        enabled_rules=enabled_rules,
        disabled_rules=disabled_rules or set(),
        inline_map=_inline_ignore_map(content) if inline_ignore else {},
    )
    return analysis


def scan(
    root: str | os.PathLike[str],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    excludes: Iterable[str] = (),
    max_file_size_kb: int = 0,
    enabled_rules: Iterable[str] | None = None,
    disabled_rules: Iterable[str] | None = None,
    inline_ignore: bool = True,
    jobs: int = 0,
    cancel_event: threading.Event | None = None,
    detectors: Sequence[Detector] = DETECTORS,
) -> ScanResult:
    """Analyze every collected file and join the per-file results in collection order.

    ``jobs <= 0`` uses one worker per CPU core. Setting ``cancel_event`` stops
    the scan between files; the result is then flagged incomplete.
    """
    root_path = Path(root)
    paths = collect(root_path, extensions=extensions, excludes=excludes, max_file_size_kb=max_file_size_kb)
    enabled_rule_set = {rule.upper() for rule in enabled_rules} if enabled_rules else None
    disabled_rule_set = {rule.upper() for rule in disabled_rules or []}
    workers = jobs if jobs > 0 else (os.cpu_count() or 1)

    def work(path: Path) -> FileAnalysis | None:
        if cancel_event is not None and cancel_event.is_set():
            return None
        return analyze_file(
            path,
            root_path,
            detectors=detectors,
            enabled_rules=enabled_rule_set,
            disabled_rules=disabled_rule_set,
            inline_ignore=inline_ignore,
        )

    analyses: list[FileAnalysis | None] = []
    if workers == 1:
        for path in paths:
            analyses.append(work(path))
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(work, path) for path in paths]
            for future in futures:
                analyses.append(future.result())

    stats = ScanStats()
    findings: list[Finding] = []
    successes = []
    notes: list[ScanNote] = []
    for analysis in analyses:
        if analysis is None:
            stats.incomplete = True
            continue
        stats.files_scanned += 1
        if analysis.error is not None:
            stats.files_skipped += 1
            notes.append(ScanNote(kind="FILE_READ_ERROR", file=analysis.file, message=analysis.error))
            continue
        if analysis.is_component:
            stats.components_scanned += 1
        for finding in analysis.findings:
            if finding.type in NOTE_TYPES:
                notes.append(ScanNote(kind="CONTRAST_CHECK_SKIPPED", file=finding.file, message=finding.message))
            else:
                findings.append(finding)
        successes.extend(analysis.successes)

    if stats.incomplete:
        logger.warning("Scan cancelled after %d files; report is incomplete", stats.files_scanned)
    if stats.components_scanned == 0:
        notes.append(ScanNote(kind="NO_COMPONENTS", file=None, message=f"No components were analyzed under {root_path}"))

    return ScanResult(findings=_dedupe_findings(findings), successes=successes, stats=stats, notes=notes)


def build_report(result: ScanResult, scan_date: str | None = None) -> ComplianceReport:
    issues, warnings = split_findings(result.findings)
    return aggregate(issues, warnings, result.successes, result.stats, notes=result.notes, scan_date=scan_date)


def run(
    root: str | os.PathLike[str],
    output_path: str | os.PathLike[str] | None = None,
    **scan_options,
) -> ComplianceReport:
    """Scan ``root`` and build the compliance report, writing JSON when ``output_path`` is set."""
    result = scan(root, **scan_options)
    report = build_report(result, scan_date=datetime.now(timezone.utc).isoformat())
    if output_path is not None:
        write_report(to_json_report(report), str(output_path))
        logger.info("Accessibility report written to %s", output_path)
    return report


def _is_component(content: str, file_path: str) -> bool:
    if Path(file_path).suffix.lower() in COMPONENT_SUFFIXES:
        return True
    return "React" in content or "component" in content


def _relative_path(path: Path, root: Path) -> str:
    if root.is_file():
        return path.name
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def _detection_path(relative: str, root: Path) -> str:
    """Prefix ``relative`` with the directory that holds it at the scan root.

    Scanning ``src/theme`` or ``src/theme/colors.js`` directly would otherwise
    strip the directory name from every path the detectors see.
    """
    anchor = root.resolve()
    prefix = anchor.name if anchor.is_dir() else anchor.parent.name
    return f"{prefix}/{relative}" if prefix else relative


def _dedupe_findings(findings: list[Finding]) -> list[Finding]:
    unique: dict[tuple[str, str, int | None, int | None, str], Finding] = {}
    for finding in findings:
        key = (finding.file, finding.type, finding.line, finding.column, finding.message)
        unique.setdefault(key, finding)
    return list(unique.values())


def _filter_findings(
    findings: list[Finding],
    enabled_rules: set[str] | None,
    disabled_rules: set[str],
    inline_map: dict[int, set[str]],
) -> list[Finding]:
    allowed: list[Finding] = []
    for finding in findings:
        if finding.type in NOTE_TYPES:
            allowed.append(finding)
            continue
        if finding.type in disabled_rules:
            continue
        if enabled_rules is not None and finding.type not in enabled_rules:
            continue
        ignored_rules = inline_map.get(finding.line) if finding.line is not None else None
        if ignored_rules is not None and ("*" in ignored_rules or finding.type in ignored_rules):
            continue
        allowed.append(finding)
    return allowed


def _inline_ignore_map(source: str) -> dict[int, set[str]]:
    """Map line numbers to suppressed finding types.

    A trailing ``a11yaudit:ignore`` applies to its own line; a comment-only
    line applies to the line below it.
    """
    rule_map: dict[int, set[str]] = {}
    for idx, line in enumerate(source.splitlines(), start=1):
        match = INLINE_IGNORE_PATTERN.search(line)
        if not match:
            continue
        target = idx + 1 if COMMENT_ONLY_PATTERN.match(line) else idx
        rules = match.group(1)
        if rules is None:
            parsed = {"*"}
        else:
            parsed = {token.strip().upper() for token in rules.split(",") if token.strip()} or {"*"}
        rule_map.setdefault(target, set()).update(parsed)
    return rule_map
