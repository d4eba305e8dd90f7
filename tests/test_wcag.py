from __future__ import annotations

import unittest

from a11yaudit.errors import UnmappedWCAGRule
from a11yaudit.models import Finding
from a11yaudit.wcag import WCAG_CATALOG, WCAGMapper, criterion_id


def _finding(rule: str | None, finding_type: str = "MISSING_ACCESSIBILITY_LABEL") -> Finding:
    return Finding(
        type=finding_type,
        severity="HIGH",
        file="A.js",
        line=1,
        message="m",
        wcag_rule=rule,
        suggestion="s",
    )


class CriterionIdTests(unittest.TestCase):
    def test_extracts_catalog_id(self) -> None:
        self.assertEqual(criterion_id("4.1.2 Name, Role, Value"), "4.1.2")

    def test_unknown_rule_raises(self) -> None:
        with self.assertRaises(UnmappedWCAGRule):
            criterion_id("9.9.9 Imaginary")
        with self.assertRaises(KeyError):
            criterion_id("no id at all")


class WCAGMapperTests(unittest.TestCase):
    def test_complement_pass_counts(self) -> None:
        findings = [_finding("4.1.2 Name, Role, Value") for _ in range(3)]

        criteria = WCAGMapper().map(findings, components_scanned=10)

        self.assertEqual((criteria["4.1.2"].passed, criteria["4.1.2"].failed), (7, 3))
        self.assertEqual((criteria["1.1.1"].passed, criteria["1.1.1"].failed), (10, 0))
        self.assertEqual(set(criteria), set(WCAG_CATALOG))

    def test_passed_never_negative(self) -> None:
        findings = [_finding("2.5.5 Target Size", "TOUCH_TARGET_TOO_SMALL") for _ in range(4)]

        criteria = WCAGMapper().map(findings, components_scanned=1)

        self.assertEqual(criteria["2.5.5"].passed, 0)
        self.assertEqual(criteria["2.5.5"].failed, 4)

    def test_findings_without_rule_are_ignored(self) -> None:
        criteria = WCAGMapper().map([_finding(None, "MISSING_LOADING_STATE")], components_scanned=2)

        self.assertTrue(all(criterion.failed == 0 for criterion in criteria.values()))

    def test_unmapped_rules_are_dropped_with_warning(self) -> None:
        mapper = WCAGMapper()
        with self.assertLogs("a11yaudit.wcag", level="WARNING"):
            criteria = mapper.map([_finding("9.9.9 Imaginary")], components_scanned=2)

        self.assertEqual(len(mapper.unmapped), 1)
        self.assertTrue(all(criterion.failed == 0 for criterion in criteria.values()))

    def test_map_resets_between_runs(self) -> None:
        mapper = WCAGMapper()
        mapper.map([_finding("4.1.2 Name, Role, Value")], components_scanned=1)

        criteria = mapper.map([], components_scanned=1)

        self.assertEqual(criteria["4.1.2"].failed, 0)
        self.assertEqual(mapper.unmapped, [])


if __name__ == "__main__":
    unittest.main()
