"""WCAG 2.1 color contrast math.

Relative luminance and contrast ratio follow the WCAG 2.1 definitions. Only
hex colors are supported; anything else raises ``InvalidColorFormat`` so the
caller can skip the check instead of reporting a false pass or fail.
"""

from __future__ import annotations

from collections.abc import Iterable
import math
import re

from a11yaudit.errors import InvalidColorFormat
from a11yaudit.models import (
    ColorPair,
    ContrastRecommendation,
    ContrastResult,
    ContrastValidation,
    FixSuggestion,
    PairValidation,
)

NORMAL_TEXT_RATIO = 4.5
LARGE_TEXT_RATIO = 3.0
LARGE_TEXT_MIN_SIZE = 18.0
LARGE_BOLD_TEXT_MIN_SIZE = 14.0
DARKEN_FACTOR = 0.8

HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")
THEME_COLOR_PATTERN = re.compile(
    r"(\w+)\s*:\s*['\"`]?(#[a-fA-F0-9]{6}\b|#[a-fA-F0-9]{3}\b|rgba?\([^)]+\))['\"`]?"
)


def parse_hex(color: str) -> tuple[int, int, int]:
    match = HEX_COLOR_PATTERN.match(color.strip())
    if not match:
        raise InvalidColorFormat(color)
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _linearize(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def luminance(color: str) -> float:
    r, g, b = (_linearize(c / 255) for c in parse_hex(color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color_a: str, color_b: str) -> float:
    lum_a = luminance(color_a)
    lum_b = luminance(color_b)
    brightest = max(lum_a, lum_b)
    darkest = min(lum_a, lum_b)
    return (brightest + 0.05) / (darkest + 0.05)


def is_large_text(font_size: float, bold: bool = False) -> bool:
    return font_size >= LARGE_TEXT_MIN_SIZE or (font_size >= LARGE_BOLD_TEXT_MIN_SIZE and bold)


def required_ratio(font_size: float = 16.0, bold: bool = False) -> float:
    return LARGE_TEXT_RATIO if is_large_text(font_size, bold) else NORMAL_TEXT_RATIO


def check_pair(pair: ColorPair) -> ContrastResult:
    """Evaluate one pair against the AA threshold for its font metadata."""
    ratio = contrast_ratio(pair.foreground, pair.background)
    large = is_large_text(pair.font_size, pair.bold)
    needed = LARGE_TEXT_RATIO if large else NORMAL_TEXT_RATIO
    return ContrastResult(ratio=ratio, required_ratio=needed, passes=ratio >= needed, is_large_text=large)


def suggest_fix(foreground: str, background: str, target_ratio: float = NORMAL_TEXT_RATIO) -> FixSuggestion:
    """Darken the foreground by a fixed factor and report whether that is enough.

    This is a heuristic: ``improvement=False`` means the colors need a manual
    adjustment.
    """
    r, g, b = parse_hex(foreground)
    darkened = tuple(max(0, math.floor(channel * DARKEN_FACTOR)) for channel in (r, g, b))
    suggested = "#{:02x}{:02x}{:02x}".format(*darkened)
    ratio = contrast_ratio(suggested, background)
    return FixSuggestion(suggested=suggested, ratio=round(ratio, 2), improvement=ratio >= target_ratio)


def extract_theme_colors(source: str) -> dict[str, str]:
    """Map ``name: color`` declarations in a theme source to their values.

    Later declarations win, mirroring object-literal override semantics.
    """
    colors: dict[str, str] = {}
    for match in THEME_COLOR_PATTERN.finditer(source):
        colors[match.group(1)] = match.group(2)
    return colors


def validate_pairs(pairs: Iterable[ColorPair]) -> ContrastValidation:
    results: list[PairValidation] = []
    for pair in pairs:
        try:
            results.append(PairValidation(pair=pair, result=check_pair(pair)))
        except InvalidColorFormat as exc:
            results.append(PairValidation(pair=pair, error=str(exc)))

    passed = sum(1 for item in results if item.result is not None and item.result.passes)
    errors = sum(1 for item in results if item.error is not None)
    failed = len(results) - passed - errors
    pass_rate = round(passed / len(results) * 100) if results else 0

    recommendations: list[ContrastRecommendation] = []
    for item in results:
        if item.result is None or item.result.passes:
            continue
        ratio = round(item.result.ratio, 2)
        recommendations.append(
            ContrastRecommendation(
                context=item.pair.context,
                issue=f"Contrast ratio {ratio}:1 is below required {item.result.required_ratio}:1",
                foreground=item.pair.foreground,
                background=item.pair.background,
                suggestion=suggest_fix(item.pair.foreground, item.pair.background, item.result.required_ratio),
                priority="HIGH" if item.result.ratio < LARGE_TEXT_RATIO else "MEDIUM",
            )
        )

    return ContrastValidation(
        results=results,
        total=len(results),
        passed=passed,
        failed=failed,
        errors=errors,
        pass_rate=pass_rate,
        recommendations=recommendations,
    )
