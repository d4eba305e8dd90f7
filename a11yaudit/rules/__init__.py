from __future__ import annotations

from collections.abc import Callable, Sequence

from a11yaudit.models import Finding, Success
from a11yaudit.rules.accessibility import (
    find_good_accessibility,
    find_good_reduced_motion,
    find_long_animations,
    find_missing_error_indication,
    find_missing_focus_handlers,
    find_missing_image_alt_text,
    find_missing_input_labels,
    find_missing_labels,
    find_missing_live_regions,
    find_missing_reduced_motion,
    find_missing_roles,
    find_missing_selected_state,
    find_small_touch_targets,
)
from a11yaudit.rules.contrast import find_contrast_violations
from a11yaudit.rules.usability import (
    find_missing_back_navigation,
    find_missing_keyboard_avoidance,
    find_missing_loading_state,
)

Detector = Callable[[str, str], list[Finding]]
PatternDetector = Callable[[str, str], list[Success]]

DETECTORS: tuple[Detector, ...] = (
    find_small_touch_targets,
    find_missing_labels,
    find_missing_roles,
    find_missing_focus_handlers,
    find_long_animations,
    find_missing_reduced_motion,
    find_missing_image_alt_text,
    find_missing_input_labels,
    find_missing_error_indication,
    find_contrast_violations,
    find_missing_live_regions,
    find_missing_selected_state,
    find_missing_keyboard_avoidance,
    find_missing_loading_state,
    find_missing_back_navigation,
)
GOOD_PATTERN_DETECTORS: tuple[PatternDetector, ...] = (
    find_good_accessibility,
    find_good_reduced_motion,
)

FINDING_TYPES = frozenset(
    {
        "TOUCH_TARGET_TOO_SMALL",
        "MISSING_ACCESSIBILITY_LABEL",
        "MISSING_ACCESSIBILITY_ROLE",
        "MISSING_FOCUS_HANDLERS",
        "ANIMATION_TOO_LONG",
        "MISSING_REDUCED_MOTION",
        "MISSING_IMAGE_ALT_TEXT",
        "MISSING_INPUT_LABEL",
        "MISSING_ERROR_INDICATION",
        "INSUFFICIENT_COLOR_CONTRAST",
        "MISSING_LIVE_REGION",
        "MISSING_SELECTED_STATE",
        "MISSING_KEYBOARD_AVOIDANCE",
        "MISSING_LOADING_STATE",
        "MISSING_BACK_NAVIGATION",
    }
)
# Emitted by detectors but reported as scan notes rather than findings.
NOTE_TYPES = frozenset({"CONTRAST_CHECK_SKIPPED"})


def run_detectors(content: str, file_path: str, detectors: Sequence[Detector] = DETECTORS) -> list[Finding]:
    findings: list[Finding] = []
    for detector in detectors:
        findings.extend(detector(content, file_path))
    return findings


def detect_good_patterns(
    content: str, file_path: str, detectors: Sequence[PatternDetector] = GOOD_PATTERN_DETECTORS
) -> list[Success]:
    successes: list[Success] = []
    for detector in detectors:
        successes.extend(detector(content, file_path))
    return successes


__all__ = [
    "DETECTORS",
    "GOOD_PATTERN_DETECTORS",
    "FINDING_TYPES",
    "NOTE_TYPES",
    "Detector",
    "run_detectors",
    "detect_good_patterns",
]
