from __future__ import annotations

import argparse
from datetime import datetime, timezone
import logging
import sys

from a11yaudit import __version__
from a11yaudit.baseline import filter_new_findings, load_baseline_fingerprints
from a11yaudit.config import Config, load_config, validate_config
from a11yaudit.contrast import LARGE_TEXT_RATIO, validate_pairs
from a11yaudit.engine import build_report, scan
from a11yaudit.errors import RootDirectoryMissing
from a11yaudit.models import ColorPair, ComplianceReport, ContrastValidation, Finding, ScanResult
from a11yaudit.quality_gate import evaluate_gate
from a11yaudit.reporters import format_summary, to_contrast_report, to_json_report, write_report

CLI_MANUAL = """\
Accessibility audits for React Native sources:
  a11yaudit scan src
  a11yaudit scan src --fail-on MEDIUM --min-score 90
  a11yaudit scan src --baseline-report old.json --gate-new-only

Theme contrast checks:
  a11yaudit contrast --pair "#767676,#ffffff,Body text"

Exit codes: 0 gate passed, 1 gate failed, 2 configuration error.
Per-command help: a11yaudit scan -h, a11yaudit contrast -h
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="a11yaudit",
        description="Accessibility and UI-quality compliance scanner.",
        epilog=CLI_MANUAL,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="Scan component sources and write a compliance report.")
    scan_parser.add_argument("path", nargs="?", help="Directory or file to scan (default: src).")
    scan_parser.add_argument("--config", help="Path to a11yaudit TOML config.")
    scan_parser.add_argument("--out", help="Write the JSON report to this file.")
    scan_parser.add_argument("--stdout", action="store_true", help="Print the JSON report instead of writing a file.")
    scan_parser.add_argument("--exclude", action="append", default=[], help="Extra exclude directory names.")
    scan_parser.add_argument("--include-ext", action="append", default=[], help="Extension to include (repeatable).")
    scan_parser.add_argument("--enable-rule", action="append", default=[], help="Only report these finding types.")
    scan_parser.add_argument("--disable-rule", action="append", default=[], help="Suppress these finding types.")
    scan_parser.add_argument("--no-inline-ignore", action="store_true", help="Disable inline suppression comments.")
    scan_parser.add_argument("--jobs", type=int, help="Worker threads (0 = one per CPU).")
    scan_parser.add_argument("--fail-on", choices=["HIGH", "MEDIUM", "LOW"], type=str.upper, help="Fail on severity level.")
    scan_parser.add_argument("--max-issues", type=int, help="Fail if issue count exceeds this number.")
    scan_parser.add_argument("--max-warnings", type=int, help="Fail if warning count exceeds this number.")
    scan_parser.add_argument("--min-score", type=float, help="Fail if the overall score is below this value.")
    scan_parser.add_argument("--baseline-report", help="Path to a previous a11yaudit JSON report.")
    scan_parser.add_argument(
        "--gate-new-only",
        action="store_true",
        help="Evaluate quality gates against new findings only when a baseline report is set.",
    )
    scan_parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    contrast_parser = subparsers.add_parser("contrast", help="Validate foreground/background color pairs.")
    contrast_parser.add_argument(
        "--pair",
        action="append",
        default=[],
        metavar="FG,BG[,CONTEXT]",
        help="Color pair to check (repeatable).",
    )
    contrast_parser.add_argument("--config", help="Path to a11yaudit TOML config.")
    contrast_parser.add_argument("--out", help="Write the JSON contrast report to this file.")
    contrast_parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "scan":
        raise SystemExit(run_scan(args))
    if args.command == "contrast":
        raise SystemExit(run_contrast(args))


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_scan(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return 2
    merged = merge_cli_with_config(args, config)
    validation_errors = validate_config(merged)
    if validation_errors:
        for error in validation_errors:
            print(f"[config] {error}", file=sys.stderr)
        return 2

    try:
        result = scan(
            merged.scan.root,
            extensions=merged.scan.include_extensions,
            excludes=merged.scan.exclude,
            max_file_size_kb=merged.scan.max_file_size_kb,
            enabled_rules=merged.scan.enabled_rules,
            disabled_rules=merged.scan.disabled_rules,
            inline_ignore=merged.scan.inline_ignore,
            jobs=merged.scan.jobs,
        )
    except RootDirectoryMissing as exc:
        print(f"[scan] {exc}", file=sys.stderr)
        return 2

    report = build_report(result, scan_date=_now())
    write_report(to_json_report(report), merged.report.out)
    if merged.report.out is not None:
        print(f"[report] written to {merged.report.out}", file=sys.stderr)
    print(format_summary(report), file=sys.stderr)

    gate_report = report
    if merged.quality_gate.baseline_report:
        try:
            fingerprints = load_baseline_fingerprints(merged.quality_gate.baseline_report)
        except (OSError, ValueError) as exc:
            print(f"[baseline] {exc}", file=sys.stderr)
            return 2
        new_findings, baseline_matched = filter_new_findings(result.findings, fingerprints)
        print(
            "[baseline] "
            f"total={len(result.findings)} baseline_matches={baseline_matched} new={len(new_findings)}",
            file=sys.stderr,
        )
        if merged.quality_gate.only_new_issues:
            gate_report = _report_for(result, new_findings)

    passed, reasons = evaluate_gate(
        gate_report,
        fail_on=merged.quality_gate.fail_on,
        max_issues=merged.quality_gate.max_issues,
        max_warnings=merged.quality_gate.max_warnings,
        min_score=merged.quality_gate.min_score,
    )
    if not passed:
        for reason in reasons:
            print(f"[gate] {reason}", file=sys.stderr)
        return 1
    print("[gate] passed", file=sys.stderr)
    return 0


def run_contrast(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
        pairs = [parse_pair_argument(value) for value in args.pair] or config.contrast.pairs
    except (FileNotFoundError, ValueError) as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return 2
    if not pairs:
        print("[config] No color pairs given; use --pair or [[contrast.pairs]] in the config.", file=sys.stderr)
        return 2

    validation = validate_pairs(pairs)
    print_contrast_summary(validation)
    if args.out:
        write_report(to_contrast_report(validation), args.out)

    critical = [
        item for item in validation.results if item.result is not None and item.result.ratio < LARGE_TEXT_RATIO
    ]
    return 1 if critical else 0


def merge_cli_with_config(args: argparse.Namespace, config: Config) -> Config:
    merged = config
    if args.path:
        merged.scan.root = args.path
    if args.exclude:
        merged.scan.exclude = list(dict.fromkeys([*merged.scan.exclude, *args.exclude]))
    if args.include_ext:
        merged.scan.include_extensions = list(dict.fromkeys([*merged.scan.include_extensions, *args.include_ext]))
    if args.enable_rule:
        merged.scan.enabled_rules = list(
            dict.fromkeys([*(merged.scan.enabled_rules or []), *(rule.upper() for rule in args.enable_rule)])
        )
    if args.disable_rule:
        merged.scan.disabled_rules = list(
            dict.fromkeys([*merged.scan.disabled_rules, *(rule.upper() for rule in args.disable_rule)])
        )
    if args.no_inline_ignore:
        merged.scan.inline_ignore = False
    if args.jobs is not None:
        merged.scan.jobs = args.jobs
    if args.stdout:
        merged.report.out = None
    elif args.out:
        merged.report.out = args.out
    if args.fail_on:
        merged.quality_gate.fail_on = args.fail_on
    if args.max_issues is not None:
        merged.quality_gate.max_issues = args.max_issues
    if args.max_warnings is not None:
        merged.quality_gate.max_warnings = args.max_warnings
    if args.min_score is not None:
        merged.quality_gate.min_score = args.min_score
    if args.baseline_report:
        merged.quality_gate.baseline_report = args.baseline_report
    if args.gate_new_only:
        merged.quality_gate.only_new_issues = True
    return merged


def parse_pair_argument(value: str) -> ColorPair:
    parts = [part.strip() for part in value.split(",", 2)]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid --pair value {value!r}; expected FG,BG[,CONTEXT]")
    context = parts[2] if len(parts) == 3 else ""
    return ColorPair(foreground=parts[0], background=parts[1], context=context)


def print_contrast_summary(validation: ContrastValidation) -> None:
    for item in validation.results:
        label = item.pair.context or f"{item.pair.foreground} on {item.pair.background}"
        if item.result is None:
            print(f"[contrast] {label}: error: {item.error}", file=sys.stderr)
            continue
        status = "pass" if item.result.passes else "FAIL"
        print(
            f"[contrast] {label}: {item.result.ratio:.2f}:1 "
            f"(required {item.result.required_ratio}:1) {status}",
            file=sys.stderr,
        )
    for recommendation in validation.recommendations:
        fix = recommendation.suggestion
        if fix is None:
            continue
        verdict = "meets target" if fix.improvement else "still short; adjust manually"
        print(
            f"[contrast] {recommendation.priority} {recommendation.context or recommendation.foreground}: "
            f"try {fix.suggested} ({fix.ratio}:1, {verdict})",
            file=sys.stderr,
        )
    print(
        f"[summary] pairs={validation.total} passed={validation.passed} failed={validation.failed} "
        f"errors={validation.errors} pass_rate={validation.pass_rate}%",
        file=sys.stderr,
    )


def _report_for(result: ScanResult, findings: list[Finding]) -> ComplianceReport:
    return build_report(ScanResult(findings=findings, successes=result.successes, stats=result.stats, notes=result.notes))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


if __name__ == "__main__":
    main()
