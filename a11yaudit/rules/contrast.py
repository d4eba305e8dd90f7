from __future__ import annotations

from a11yaudit.contrast import NORMAL_TEXT_RATIO, THEME_COLOR_PATTERN, check_pair, suggest_fix
from a11yaudit.errors import InvalidColorFormat
from a11yaudit.models import ColorPair, Finding
from a11yaudit.rules.patterns import column_number, line_number

WCAG_CONTRAST_MINIMUM = "1.4.3 Contrast (Minimum)"
THEME_PATH_MARKERS = ("theme", "color")
# (foreground, background) token names commonly paired in theme definitions.
CONTRAST_PAIRS = (
    ("textPrimary", "backgroundPrimary"),
    ("textSecondary", "backgroundSecondary"),
    ("primary", "background"),
    ("text", "background"),
    ("foreground", "background"),
)


def is_theme_file(file_path: str) -> bool:
    lower = file_path.lower()
    return any(marker in lower for marker in THEME_PATH_MARKERS)


def find_contrast_violations(content: str, file_path: str) -> list[Finding]:
    """Check known text/background token pairs declared in theme or color files.

    Theme tokens carry no font metadata, so every pair is held to the
    normal-text threshold.
    """
    if not is_theme_file(file_path):
        return []

    declarations: dict[str, tuple[str, int]] = {}
    for match in THEME_COLOR_PATTERN.finditer(content):
        declarations[match.group(1)] = (match.group(2), match.start())

    findings: list[Finding] = []
    for fg_name, bg_name in CONTRAST_PAIRS:
        if fg_name not in declarations or bg_name not in declarations:
            continue
        fg_value, fg_index = declarations[fg_name]
        bg_value, _ = declarations[bg_name]
        evidence = f"{fg_name}: {fg_value} / {bg_name}: {bg_value}"
        try:
            result = check_pair(ColorPair(fg_value, bg_value, context=f"{fg_name} on {bg_name}"))
        except InvalidColorFormat as exc:
            findings.append(
                Finding(
                    type="CONTRAST_CHECK_SKIPPED",
                    severity="LOW",
                    file=file_path,
                    line=line_number(content, fg_index),
                    column=column_number(content, fg_index),
                    message=f"Contrast check for {fg_name} on {bg_name} skipped: {exc}",
                    wcag_rule=None,
                    suggestion="Declare theme colors as 6-digit hex values so contrast can be verified",
                    evidence_snippet=evidence,
                )
            )
            continue
        if result.passes:
            continue

        fix = suggest_fix(fg_value, bg_value, result.required_ratio)
        if fix.improvement:
            suggestion = f"Use {fix.suggested} for {fg_name} ({fix.ratio}:1 against {bg_value})"
        else:
            suggestion = (
                f"Adjust {fg_name} ({fg_value}) or {bg_name} ({bg_value}) manually; "
                f"darkening the foreground reaches only {fix.ratio}:1"
            )
        findings.append(
            Finding(
                type="INSUFFICIENT_COLOR_CONTRAST",
                severity="HIGH",
                file=file_path,
                line=line_number(content, fg_index),
                column=column_number(content, fg_index),
                message=(
                    f"Color contrast ratio {result.ratio:.2f}:1 for {fg_name} on {bg_name} is below "
                    f"WCAG AA minimum of {NORMAL_TEXT_RATIO}:1"
                ),
                wcag_rule=WCAG_CONTRAST_MINIMUM,
                suggestion=suggestion,
                evidence_snippet=evidence,
            )
        )
    return findings
