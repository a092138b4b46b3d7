"""Application-level exception types for mdexec."""

from __future__ import annotations


class MdexecError(Exception):
    """Base exception for mdexec."""


class ParseError(MdexecError):
    """Base exception for markdown parsing failures."""


class BoundaryNotFoundError(ParseError):
    """Raised when a configured boundary marker never matched."""

    def __init__(self, marker: str, message: str) -> None:
        super().__init__(message)
        self.marker = marker


class FromNotFoundError(BoundaryNotFoundError):
    """Raised when the execute-from marker is absent."""

    def __init__(self, marker: str) -> None:
        super().__init__(marker, f"Could not find execute-from line: {marker!r}")


class UntilNotFoundError(BoundaryNotFoundError):
    """Raised when the execute-until marker is absent."""

    def __init__(self, marker: str, message: str | None = None) -> None:
        super().__init__(marker, message or f"Could not find execute-until line: {marker!r}")


class UntilNotFoundAfterFromError(UntilNotFoundError):
    """Raised when the execute-until marker is absent after the execute-from marker."""

    def __init__(self, marker: str, from_marker: str) -> None:
        super().__init__(
            marker,
            f"Could not find execute-until line: {marker!r} after execute-from line: {from_marker!r}",
        )
        self.from_marker = from_marker


class UnterminatedCommandError(ParseError):
    """Raised when a shell block ends while a command is still open."""

    def __init__(self, line_number: int) -> None:
        super().__init__(f"Unterminated command at line {line_number}")
        self.line_number = line_number


class MarkdownReadError(MdexecError):
    """Raised when a markdown file cannot be read."""


class ScriptError(MdexecError):
    """Raised when the generated shell script cannot be written or launched."""
