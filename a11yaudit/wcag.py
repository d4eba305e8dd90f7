"""WCAG success-criterion catalog and per-run pass/fail tallies.

``passed`` is not verified independently: it is the number of scanned
components minus the observed failures for that criterion. A component where
a criterion never applies is therefore counted as a pass.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import re

from a11yaudit.errors import UnmappedWCAGRule
from a11yaudit.models import Finding, WCAGCriterion, WCAGLevel

logger = logging.getLogger(__name__)

CRITERION_ID_PATTERN = re.compile(r"(\d+\.\d+\.\d+)")

WCAG_CATALOG: dict[str, tuple[str, WCAGLevel]] = {
    "1.1.1": ("Non-text Content", "A"),
    "1.4.3": ("Contrast (Minimum)", "AA"),
    "2.1.1": ("Keyboard", "A"),
    "2.2.2": ("Pause, Stop, Hide", "A"),
    "2.3.3": ("Animation from Interactions", "AAA"),
    "2.5.5": ("Target Size", "AAA"),
    "3.3.1": ("Error Identification", "A"),
    "3.3.2": ("Labels or Instructions", "A"),
    "4.1.2": ("Name, Role, Value", "A"),
    "4.1.3": ("Status Messages", "AA"),
}


def criterion_id(rule: str) -> str:
    """Return the catalog id referenced by ``rule`` or raise ``UnmappedWCAGRule``."""
    match = CRITERION_ID_PATTERN.search(rule)
    if match is None or match.group(1) not in WCAG_CATALOG:
        raise UnmappedWCAGRule(rule)
    return match.group(1)


class WCAGMapper:
    def __init__(self) -> None:
        self.criteria: dict[str, WCAGCriterion] = {}
        self.unmapped: list[Finding] = []
        self.reset()

    def reset(self) -> None:
        self.criteria = {
            rule_id: WCAGCriterion(id=rule_id, name=name, level=level)
            for rule_id, (name, level) in WCAG_CATALOG.items()
        }
        self.unmapped = []

    def map(self, findings: Iterable[Finding], components_scanned: int) -> dict[str, WCAGCriterion]:
        self.reset()
        for finding in findings:
            if finding.wcag_rule is None:
                continue
            try:
                rule_id = criterion_id(finding.wcag_rule)
            except UnmappedWCAGRule as exc:
                logger.warning("Dropping %s finding in %s from WCAG tallies: %s", finding.type, finding.file, exc)
                self.unmapped.append(finding)
                continue
            self.criteria[rule_id].failed += 1

        for criterion in self.criteria.values():
            criterion.passed = max(0, components_scanned - criterion.failed)
        return self.criteria
