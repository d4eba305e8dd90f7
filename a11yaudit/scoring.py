from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
import logging

from a11yaudit.models import Finding, Severity

logger = logging.getLogger(__name__)

CHECK_CATEGORIES = 7
SEVERITY_WEIGHTS: dict[Severity, float] = {
    "HIGH": 3.0,
    "MEDIUM": 1.0,
    "LOW": 0.0,
}
GOOD_PATTERN_WEIGHT = 0.5


def score(findings: Iterable[Finding], components_scanned: int, good_pattern_count: int = 0) -> float:
    """Weighted 0-100 compliance score for a findings corpus.

    Each component is assumed to face ``CHECK_CATEGORIES`` checks; findings
    subtract their severity weight as a share of that total and good patterns
    add a flat bonus.
    """
    if components_scanned <= 0:
        logger.warning("No components were analyzed; reporting a vacuous score of 100")
        return 100.0

    counts = Counter(finding.severity for finding in findings)
    penalty = sum(SEVERITY_WEIGHTS.get(severity, 0.0) * count for severity, count in counts.items())
    bonus = good_pattern_count * GOOD_PATTERN_WEIGHT
    total_checks = components_scanned * CHECK_CATEGORIES

    value = 100 - (penalty / total_checks * 100) + bonus
    return round(max(0.0, min(100.0, value)), 2)


def compliance_level(overall_score: float, high_count: int) -> str:
    if high_count > 0:
        return "Non-Compliant"
    if overall_score >= 90:
        return "WCAG 2.1 AA Compliant"
    if overall_score >= 75:
        return "Mostly Compliant"
    if overall_score >= 60:
        return "Partially Compliant"
    return "Non-Compliant"
