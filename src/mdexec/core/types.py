"""Shared core dataclasses."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass(frozen=True)
class Default:
    """Run every command straight away."""


@dataclass(frozen=True)
class DelayBetweenCommands:
    """Pause between two consecutive commands."""

    milliseconds: int

    def __post_init__(self) -> None:
        if self.milliseconds < 0:
            raise ValueError(f"delay must not be negative: {self.milliseconds}")


@dataclass(frozen=True)
class Interactive:
    """Ask for confirmation before every command."""


ExecutionMode: TypeAlias = Default | DelayBetweenCommands | Interactive


@dataclass(frozen=True)
class Command:
    """One logical shell command, possibly spread over several source lines.

    ``heredoc_at`` is the index of the line that opened a here-document. Lines
    after it are the document body and are kept verbatim when rendered.
    """

    lines: tuple[str, ...]
    heredoc_at: int | None = None

    @classmethod
    def of(cls, *lines: str) -> Command:
        return cls(lines=tuple(lines))

    def joined(self) -> str:
        """Single-line form used for skip matching."""
        return " ".join(self.lines)

    def __str__(self) -> str:
        if self.heredoc_at is None:
            return " \\\n ".join(self.lines)
        head = " \\\n ".join(self.lines[: self.heredoc_at + 1])
        body = self.lines[self.heredoc_at + 1 :]
        return "\n".join((head, *body))


@dataclass(frozen=True)
class ParseOptions:
    """Configuration for one parse call."""

    execute_from: str | None = None
    execute_until: str | None = None
    skip_pattern: re.Pattern[str] | None = None
    execution_mode: ExecutionMode = field(default_factory=Default)


@dataclass(frozen=True)
class Commands:
    """Parsed commands together with the mode they should run in."""

    commands: tuple[Command, ...] = ()
    mode: ExecutionMode = field(default_factory=Default)

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)
