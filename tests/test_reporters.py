from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from a11yaudit.aggregator import aggregate
from a11yaudit.contrast import validate_pairs
from a11yaudit.models import ColorPair, Finding, ScanNote, ScanStats, Success
from a11yaudit.reporters import format_summary, to_contrast_report, to_json_report, write_report


def _report():
    issue = Finding(
        type="MISSING_IMAGE_ALT_TEXT",
        severity="HIGH",
        file="Logo.js",
        line=4,
        message="<Image> missing accessibility description",
        wcag_rule="1.1.1 Non-text Content",
        suggestion="Add accessibilityLabel",
        evidence_snippet="<Image source={logo} />",
    )
    warning = Finding(
        type="MISSING_LOADING_STATE",
        severity="LOW",
        file="List.js",
        line=2,
        message="Async operations without a loading indicator",
        wcag_rule=None,
        suggestion="Render a loading state",
    )
    return aggregate(
        [issue],
        [warning],
        [Success("GOOD_ACCESSIBILITY_IMPLEMENTATION", "Go.js", "ok")],
        ScanStats(files_scanned=3, components_scanned=3, files_skipped=1),
        notes=[ScanNote("FILE_READ_ERROR", "Bad.js", "Unable to read Bad.js: invalid utf-8")],
        scan_date="2026-01-01T00:00:00+00:00",
    )


class JsonReportTests(unittest.TestCase):
    def test_top_level_shape(self) -> None:
        payload = to_json_report(_report())

        self.assertEqual(
            list(payload),
            ["summary", "issues", "warnings", "successes", "recommendations", "wcagCompliance", "notes"],
        )
        self.assertEqual(payload["summary"]["filesScanned"], 3)
        self.assertEqual(payload["summary"]["filesSkipped"], 1)
        self.assertEqual(payload["summary"]["totalIssues"], 1)
        self.assertEqual(payload["summary"]["totalWarnings"], 1)
        self.assertEqual(payload["summary"]["scanDate"], "2026-01-01T00:00:00+00:00")
        self.assertFalse(payload["summary"]["incomplete"])

    def test_finding_fields(self) -> None:
        payload = to_json_report(_report())

        self.assertEqual(
            payload["issues"]["MISSING_IMAGE_ALT_TEXT"][0],
            {
                "type": "MISSING_IMAGE_ALT_TEXT",
                "severity": "HIGH",
                "file": "Logo.js",
                "line": 4,
                "message": "<Image> missing accessibility description",
                "wcagRule": "1.1.1 Non-text Content",
                "suggestion": "Add accessibilityLabel",
                "evidenceSnippet": "<Image source={logo} />",
            },
        )
        self.assertIsNone(payload["warnings"]["MISSING_LOADING_STATE"][0]["wcagRule"])

    def test_findings_are_grouped_by_type(self) -> None:
        payload = to_json_report(_report())

        self.assertEqual(list(payload["issues"]), ["MISSING_IMAGE_ALT_TEXT"])
        self.assertEqual(list(payload["warnings"]), ["MISSING_LOADING_STATE"])
        self.assertEqual([entry["file"] for entry in payload["issues"]["MISSING_IMAGE_ALT_TEXT"]], ["Logo.js"])

    def test_wcag_and_notes(self) -> None:
        payload = to_json_report(_report())

        self.assertEqual(
            payload["wcagCompliance"]["1.1.1"],
            {"name": "Non-text Content", "level": "A", "passed": 2, "failed": 1},
        )
        self.assertEqual(payload["notes"][0]["kind"], "FILE_READ_ERROR")
        self.assertEqual(payload["recommendations"][0]["priority"], "CRITICAL")

    def test_payload_is_json_serializable(self) -> None:
        json.dumps(to_json_report(_report()))


class WriteReportTests(unittest.TestCase):
    def test_writes_file_and_creates_parents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "nested" / "report.json"

            write_report({"ok": True}, str(out))

            self.assertEqual(json.loads(out.read_text(encoding="utf-8")), {"ok": True})


class SummaryTests(unittest.TestCase):
    def test_format_summary(self) -> None:
        text = format_summary(_report())

        self.assertIn("[summary] files=3 skipped=1 components=3", text)
        self.assertIn("level=Non-Compliant", text)
        self.assertIn("MISSING_IMAGE_ALT_TEXT: 1", text)


class ContrastReportTests(unittest.TestCase):
    def test_contrast_report(self) -> None:
        validation = validate_pairs(
            [ColorPair("#777777", "#ffffff", context="Caption"), ColorPair("blue", "#ffffff")]
        )

        payload = to_contrast_report(validation)

        self.assertEqual(
            payload["summary"],
            {"total": 2, "passed": 0, "failed": 1, "errors": 1, "passRate": 0},
        )
        self.assertEqual(payload["results"][0]["ratio"], 4.48)
        self.assertIn("error", payload["results"][1])
        self.assertEqual(payload["recommendations"][0]["suggestion"]["suggested"], "#5f5f5f")


if __name__ == "__main__":
    unittest.main()
