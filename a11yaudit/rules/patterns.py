from __future__ import annotations

import re

# JSX prop expressions may nest braces (style={{...}}, onPress={() => {...}}).
_BRACED_1 = r"\{[^{}]*\}"
_BRACED_2 = r"\{(?:[^{}]|" + _BRACED_1 + r")*\}"
_BRACED_3 = r"\{(?:[^{}]|" + _BRACED_2 + r")*\}"
_TAG_BODY = r"((?:\"[^\"]*\"|'[^']*'|[^<>{}\"']|" + _BRACED_3 + r")*)"

ACCESSIBLE_FALSE_PATTERN = re.compile(r"\baccessible\s*=\s*\{\s*false\s*\}")
ROLE_NONE_PATTERN = re.compile(r"\baccessibilityRole\s*=\s*\{?\s*[\"']none[\"']")
SNIPPET_LIMIT = 80


def opening_tag_pattern(*names: str) -> re.Pattern[str]:
    """Compile a pattern matching opening JSX tags for the given element names.

    Group 1 is the element name and group 2 the raw prop text.
    """
    alternation = "|".join(re.escape(name) for name in names)
    return re.compile(r"<(" + alternation + r")(?![\w.])" + _TAG_BODY + r"/?>")


def line_number(content: str, index: int) -> int:
    return content.count("\n", 0, index) + 1


def column_number(content: str, index: int) -> int:
    return index - content.rfind("\n", 0, index)


def snippet(text: str) -> str:
    collapsed = " ".join(text.split())
    if len(collapsed) <= SNIPPET_LIMIT:
        return collapsed
    return collapsed[:SNIPPET_LIMIT] + "..."


def has_prop(props: str, name: str) -> bool:
    return re.search(rf"(?<![\w-]){re.escape(name)}\b", props) is not None


def enclosing_block(content: str, index: int) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the innermost ``{...}`` enclosing ``index``."""
    depth = 0
    start = -1
    for pos in range(index - 1, -1, -1):
        char = content[pos]
        if char == "}":
            depth += 1
        elif char == "{":
            if depth == 0:
                start = pos
                break
            depth -= 1
    if start < 0:
        return None

    depth = 0
    for pos in range(index, len(content)):
        char = content[pos]
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return start, pos + 1
            depth -= 1
    return start, len(content)
