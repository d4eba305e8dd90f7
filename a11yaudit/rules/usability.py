from __future__ import annotations

from pathlib import PurePath
import re

from a11yaudit.models import Finding
from a11yaudit.rules.patterns import column_number, line_number, opening_tag_pattern, snippet

INPUT_TAG_PATTERN = opening_tag_pattern("TextInput", "Input")
KEYBOARD_AVOIDANCE_PATTERN = re.compile(r"KeyboardAvoidingView|KeyboardAware")
ASYNC_PATTERN = re.compile(r"\bawait\b|\bfetch\(|\.then\(|\baxios\b")
LOADING_PATTERN = re.compile(r"loading|ActivityIndicator|Spinner|Skeleton", re.IGNORECASE)
JSX_ELEMENT_PATTERN = re.compile(r"<[A-Z][A-Za-z0-9.]*[\s/>]")
BACK_NAVIGATION_PATTERN = re.compile(r"goBack|HeaderBackButton|navigation\.pop")
ROOT_SCREEN_MARKERS = ("Dashboard", "Home", "Splash")


def find_missing_keyboard_avoidance(content: str, file_path: str) -> list[Finding]:
    match = INPUT_TAG_PATTERN.search(content)
    if match is None or KEYBOARD_AVOIDANCE_PATTERN.search(content):
        return []
    return [
        Finding(
            type="MISSING_KEYBOARD_AVOIDANCE",
            severity="MEDIUM",
            file=file_path,
            line=line_number(content, match.start()),
            column=column_number(content, match.start()),
            message="Form inputs rendered without keyboard avoidance",
            wcag_rule=None,
            suggestion="Wrap the form in KeyboardAvoidingView so the keyboard does not cover focused inputs",
            evidence_snippet=snippet(match.group(0)),
        )
    ]


def find_missing_loading_state(content: str, file_path: str) -> list[Finding]:
    if not JSX_ELEMENT_PATTERN.search(content):
        return []
    match = ASYNC_PATTERN.search(content)
    if match is None or LOADING_PATTERN.search(content):
        return []
    return [
        Finding(
            type="MISSING_LOADING_STATE",
            severity="LOW",
            file=file_path,
            line=line_number(content, match.start()),
            column=column_number(content, match.start()),
            message="Async operations without a loading indicator",
            wcag_rule=None,
            suggestion="Render a loading state (e.g. ActivityIndicator) while async work is pending",
            evidence_snippet=None,
        )
    ]


def find_missing_back_navigation(content: str, file_path: str) -> list[Finding]:
    stem = PurePath(file_path).stem
    if not stem.endswith("Screen") or any(marker in stem for marker in ROOT_SCREEN_MARKERS):
        return []
    if BACK_NAVIGATION_PATTERN.search(content):
        return []
    return [
        Finding(
            type="MISSING_BACK_NAVIGATION",
            severity="LOW",
            file=file_path,
            line=None,
            message="Screen without back navigation handling",
            wcag_rule=None,
            suggestion="Provide a back action (navigation.goBack or a header back button)",
            evidence_snippet=None,
        )
    ]
