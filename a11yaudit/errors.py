from __future__ import annotations


class AuditError(Exception):
    """Base class for errors raised by the audit engine."""


class FileReadError(AuditError, OSError):
    """A source file could not be read or decoded. Recovered as a skip."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to read {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidColorFormat(AuditError, ValueError):
    """A color string is not a supported hex color. The contrast check is omitted."""

    def __init__(self, color: str) -> None:
        super().__init__(f"Unsupported color format: {color!r}")
        self.color = color


class UnmappedWCAGRule(AuditError, KeyError):
    """A finding references a WCAG criterion absent from the catalog."""

    def __init__(self, rule: str) -> None:
        super().__init__(rule)
        self.rule = rule

    def __str__(self) -> str:
        return f"WCAG rule {self.rule!r} is not in the criterion catalog"


class RootDirectoryMissing(AuditError, FileNotFoundError):
    """The scan root does not exist or cannot be listed. Fatal for the run."""

    def __init__(self, root: str, reason: str | None = None) -> None:
        message = f"Scan root not found: {root}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.root = root
