from __future__ import annotations

import re

from a11yaudit.models import Finding, Success
from a11yaudit.rules.patterns import (
    ACCESSIBLE_FALSE_PATTERN,
    ROLE_NONE_PATTERN,
    column_number,
    enclosing_block,
    has_prop,
    line_number,
    opening_tag_pattern,
    snippet,
)

TOUCH_TARGET_MIN_SIZE = 44
ANIMATION_DURATION_MAX = 5000

WCAG_NON_TEXT_CONTENT = "1.1.1 Non-text Content"
WCAG_KEYBOARD = "2.1.1 Keyboard"
WCAG_PAUSE_STOP_HIDE = "2.2.2 Pause, Stop, Hide"
WCAG_ANIMATION_FROM_INTERACTIONS = "2.3.3 Animation from Interactions"
WCAG_TARGET_SIZE = "2.5.5 Target Size"
WCAG_ERROR_IDENTIFICATION = "3.3.1 Error Identification"
WCAG_LABELS_OR_INSTRUCTIONS = "3.3.2 Labels or Instructions"
WCAG_NAME_ROLE_VALUE = "4.1.2 Name, Role, Value"
WCAG_STATUS_MESSAGES = "4.1.3 Status Messages"

DIMENSION_PATTERN = re.compile(
    r"\b(width|height|minWidth|minHeight|hitSlop|touchTargetSize)\s*:\s*(\d+(?:\.\d+)?)"
)
DURATION_PATTERN = re.compile(r"\b(duration|timing)\s*:\s*(\d+)")
ANIMATED_PATTERN = re.compile(r"\bAnimated\b")
REDUCED_MOTION_PATTERN = re.compile(r"useReducedMotion|prefersReducedMotion|isReduceMotionEnabled|reduceMotion")
SELECTABLE_PATTERN = re.compile(r"\b(?:selected|isSelected)\s*=\s*\{")
LIVE_REGION_PATTERN = re.compile(r"accessibilityLiveRegion|announceForAccessibility")
ROLE_PROP_PATTERN = re.compile(r"\baccessibilityRole\b")
INVALID_STATE_PATTERN = re.compile(r"\baccessibilityInvalid\b|aria-invalid")

INTERACTIVE_TAG_PATTERN = opening_tag_pattern(
    "TouchableOpacity", "TouchableHighlight", "TouchableWithoutFeedback", "Pressable", "Button"
)
FOCUSABLE_TAG_PATTERN = opening_tag_pattern("TouchableOpacity", "TouchableHighlight", "Pressable", "TextInput")
IMAGE_TAG_PATTERN = opening_tag_pattern("Image", "FastImage", "ImageBackground")
TEXT_INPUT_TAG_PATTERN = opening_tag_pattern("TextInput")
STATUS_TAG_PATTERN = opening_tag_pattern("ActivityIndicator", "Toast", "Snackbar", "Banner")


def find_small_touch_targets(content: str, file_path: str) -> list[Finding]:
    """Report each style object that declares a dimension under the 44dp minimum."""
    blocks: dict[int, list[re.Match[str]]] = {}
    spans: dict[int, tuple[int, int]] = {}
    for match in DIMENSION_PATTERN.finditer(content):
        if float(match.group(2)) >= TOUCH_TARGET_MIN_SIZE:
            continue
        span = enclosing_block(content, match.start())
        key = span[0] if span is not None else match.start()
        spans.setdefault(key, span or (match.start(), match.end()))
        blocks.setdefault(key, []).append(match)

    findings: list[Finding] = []
    for key, matches in blocks.items():
        first = matches[0]
        start, end = spans[key]
        if len(matches) == 1:
            message = (
                f"Touch target {first.group(1)} {first.group(2)}px is below the WCAG minimum "
                f"of {TOUCH_TARGET_MIN_SIZE}px"
            )
        else:
            sizes = ", ".join(f"{m.group(1)} {m.group(2)}px" for m in matches)
            message = f"Touch target dimensions ({sizes}) are below the WCAG minimum of {TOUCH_TARGET_MIN_SIZE}px"
        findings.append(
            Finding(
                type="TOUCH_TARGET_TOO_SMALL",
                severity="HIGH",
                file=file_path,
                line=line_number(content, first.start()),
                column=column_number(content, first.start()),
                message=message,
                wcag_rule=WCAG_TARGET_SIZE,
                suggestion=(
                    f"Increase touch target to minimum {TOUCH_TARGET_MIN_SIZE}px or add sufficient padding/hitSlop"
                ),
                evidence_snippet=snippet(content[start:end]),
            )
        )
    return findings


def find_missing_labels(content: str, file_path: str) -> list[Finding]:
    findings: list[Finding] = []
    for match in INTERACTIVE_TAG_PATTERN.finditer(content):
        props = match.group(2)
        if has_prop(props, "accessibilityLabel") or ACCESSIBLE_FALSE_PATTERN.search(props):
            continue
        findings.append(
            Finding(
                type="MISSING_ACCESSIBILITY_LABEL",
                severity="HIGH",
                file=file_path,
                line=line_number(content, match.start()),
                column=column_number(content, match.start()),
                message=f"Interactive element <{match.group(1)}> missing accessibilityLabel",
                wcag_rule=WCAG_NAME_ROLE_VALUE,
                suggestion='Add accessibilityLabel with descriptive text for screen readers, e.g. accessibilityLabel="Submit"',
                evidence_snippet=snippet(match.group(0)),
            )
        )
    return findings


def find_missing_roles(content: str, file_path: str) -> list[Finding]:
    findings: list[Finding] = []
    for match in INTERACTIVE_TAG_PATTERN.finditer(content):
        if ROLE_PROP_PATTERN.search(match.group(2)):
            continue
        findings.append(
            Finding(
                type="MISSING_ACCESSIBILITY_ROLE",
                severity="MEDIUM",
                file=file_path,
                line=line_number(content, match.start()),
                column=column_number(content, match.start()),
                message=f"Interactive element <{match.group(1)}> missing accessibilityRole",
                wcag_rule=WCAG_NAME_ROLE_VALUE,
                suggestion='Add accessibilityRole="button" or the appropriate role',
                evidence_snippet=snippet(match.group(0)),
            )
        )
    return findings


def find_missing_focus_handlers(content: str, file_path: str) -> list[Finding]:
    findings: list[Finding] = []
    for match in FOCUSABLE_TAG_PATTERN.finditer(content):
        props = match.group(2)
        if has_prop(props, "onFocus") or has_prop(props, "onBlur"):
            continue
        findings.append(
            Finding(
                type="MISSING_FOCUS_HANDLERS",
                severity="MEDIUM",
                file=file_path,
                line=line_number(content, match.start()),
                column=column_number(content, match.start()),
                message=f"Focusable element <{match.group(1)}> missing focus/blur handlers for keyboard navigation",
                wcag_rule=WCAG_KEYBOARD,
                suggestion="Add onFocus and onBlur handlers for keyboard accessibility",
                evidence_snippet=snippet(match.group(0)),
            )
        )
    return findings


def find_long_animations(content: str, file_path: str) -> list[Finding]:
    findings: list[Finding] = []
    for match in DURATION_PATTERN.finditer(content):
        duration = int(match.group(2))
        if duration <= ANIMATION_DURATION_MAX:
            continue
        findings.append(
            Finding(
                type="ANIMATION_TOO_LONG",
                severity="MEDIUM",
                file=file_path,
                line=line_number(content, match.start()),
                column=column_number(content, match.start()),
                message=(
                    f"Animation duration {duration}ms exceeds WCAG recommendation of {ANIMATION_DURATION_MAX}ms"
                ),
                wcag_rule=WCAG_PAUSE_STOP_HIDE,
                suggestion="Reduce animation duration or provide user controls to pause or disable animations",
                evidence_snippet=snippet(match.group(0)),
            )
        )
    return findings


def find_missing_reduced_motion(content: str, file_path: str) -> list[Finding]:
    match = ANIMATED_PATTERN.search(content)
    if match is None or REDUCED_MOTION_PATTERN.search(content):
        return []
    return [
        Finding(
            type="MISSING_REDUCED_MOTION",
            severity="MEDIUM",
            file=file_path,
            line=line_number(content, match.start()),
            column=column_number(content, match.start()),
            message="Component uses animations but doesn't respect reduced motion preferences",
            wcag_rule=WCAG_ANIMATION_FROM_INTERACTIONS,
            suggestion="Check AccessibilityInfo.isReduceMotionEnabled() or a useReducedMotion hook before animating",
            evidence_snippet=None,
        )
    ]


def find_missing_image_alt_text(content: str, file_path: str) -> list[Finding]:
    findings: list[Finding] = []
    for match in IMAGE_TAG_PATTERN.finditer(content):
        props = match.group(2)
        if (
            has_prop(props, "accessibilityLabel")
            or ACCESSIBLE_FALSE_PATTERN.search(props)
            or ROLE_NONE_PATTERN.search(props)
        ):
            continue
        findings.append(
            Finding(
                type="MISSING_IMAGE_ALT_TEXT",
                severity="HIGH",
                file=file_path,
                line=line_number(content, match.start()),
                column=column_number(content, match.start()),
                message=f"<{match.group(1)}> missing accessibility description",
                wcag_rule=WCAG_NON_TEXT_CONTENT,
                suggestion=(
                    'Add accessibilityLabel with a meaningful description, or accessibilityRole="none" '
                    "for decorative images"
                ),
                evidence_snippet=snippet(match.group(0)),
            )
        )
    return findings


def find_missing_input_labels(content: str, file_path: str) -> list[Finding]:
    findings: list[Finding] = []
    for match in TEXT_INPUT_TAG_PATTERN.finditer(content):
        props = match.group(2)
        if has_prop(props, "accessibilityLabel") or has_prop(props, "placeholder"):
            continue
        findings.append(
            Finding(
                type="MISSING_INPUT_LABEL",
                severity="HIGH",
                file=file_path,
                line=line_number(content, match.start()),
                column=column_number(content, match.start()),
                message="Text input missing accessible label",
                wcag_rule=WCAG_LABELS_OR_INSTRUCTIONS,
                suggestion="Add accessibilityLabel or a visible label for the input field",
                evidence_snippet=snippet(match.group(0)),
            )
        )
    return findings


def find_missing_error_indication(content: str, file_path: str) -> list[Finding]:
    if "error" not in content:
        return []
    findings: list[Finding] = []
    for match in TEXT_INPUT_TAG_PATTERN.finditer(content):
        if INVALID_STATE_PATTERN.search(match.group(2)):
            continue
        findings.append(
            Finding(
                type="MISSING_ERROR_INDICATION",
                severity="MEDIUM",
                file=file_path,
                line=line_number(content, match.start()),
                column=column_number(content, match.start()),
                message="Input field missing error state accessibility",
                wcag_rule=WCAG_ERROR_IDENTIFICATION,
                suggestion="Expose error states to assistive technology, e.g. accessibilityInvalid and an error message",
                evidence_snippet=snippet(match.group(0)),
            )
        )
    return findings


def find_missing_live_regions(content: str, file_path: str) -> list[Finding]:
    match = STATUS_TAG_PATTERN.search(content)
    if match is None or LIVE_REGION_PATTERN.search(content):
        return []
    return [
        Finding(
            type="MISSING_LIVE_REGION",
            severity="MEDIUM",
            file=file_path,
            line=line_number(content, match.start()),
            column=column_number(content, match.start()),
            message=f"Status element <{match.group(1)}> is not announced to screen readers",
            wcag_rule=WCAG_STATUS_MESSAGES,
            suggestion=(
                'Add accessibilityLiveRegion="polite" (or "assertive" for urgent content) '
                "or call AccessibilityInfo.announceForAccessibility"
            ),
            evidence_snippet=snippet(match.group(0)),
        )
    ]


def find_missing_selected_state(content: str, file_path: str) -> list[Finding]:
    match = SELECTABLE_PATTERN.search(content)
    if match is None or "accessibilityState" in content:
        return []
    return [
        Finding(
            type="MISSING_SELECTED_STATE",
            severity="MEDIUM",
            file=file_path,
            line=line_number(content, match.start()),
            column=column_number(content, match.start()),
            message="Selectable elements do not expose their selected state",
            wcag_rule=WCAG_NAME_ROLE_VALUE,
            suggestion="Add accessibilityState={{ selected }} to selectable elements",
            evidence_snippet=snippet(content[match.start() : match.start() + 60]),
        )
    ]


def find_good_accessibility(content: str, file_path: str) -> list[Success]:
    if "accessibilityLabel" in content and "accessibilityRole" in content:
        return [
            Success(
                type="GOOD_ACCESSIBILITY_IMPLEMENTATION",
                file=file_path,
                message="Component includes proper accessibility labels and roles",
            )
        ]
    return []


def find_good_reduced_motion(content: str, file_path: str) -> list[Success]:
    if ANIMATED_PATTERN.search(content) and REDUCED_MOTION_PATTERN.search(content):
        return [
            Success(
                type="GOOD_REDUCED_MOTION_SUPPORT",
                file=file_path,
                message="Animated component respects reduced motion preferences",
            )
        ]
    return []
