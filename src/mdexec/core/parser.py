"""Markdown shell-block extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass

from loguru import logger

from mdexec.core.types import Command, Commands, ParseOptions
from mdexec.errors import (
    FromNotFoundError,
    UnterminatedCommandError,
    UntilNotFoundAfterFromError,
    UntilNotFoundError,
)

OPEN_FENCE = "```shell"
CLOSE_FENCE = "```"
PROMPT = "$ "
CONTINUATION = "\\"
HEREDOC_RE = re.compile(r"(?<!<)<<(?!<)(?P<dash>-?)\s*(?P<quote>['\"]?)(?P<delimiter>[^\s;&|<>()'\"]+)(?P=quote)")


@dataclass
class FenceState:
    """Transient scanner state for the block currently being read."""

    in_block: bool = False
    fence_indent: int = 0
    fence_prefix: str = ""
    in_heredoc: str | None = None
    heredoc_strips_tabs: bool = False


def parse_markdown(content: str, options: ParseOptions | None = None) -> Commands:
    """Extract the shell commands of ``content`` honoring ``options``.

    Raises:
        BoundaryNotFoundError: a configured execute-from/until marker never matched.
        UnterminatedCommandError: a block or the input ended inside a command.
    """

    options = options or ParseOptions()
    scanner = _Scanner(options)
    for number, line in enumerate(content.splitlines(), start=1):
        if scanner.feed(number, line):
            break
    scanner.finish()
    logger.debug("parse.done commands={}", len(scanner.commands))
    return Commands(commands=tuple(scanner.commands), mode=options.execution_mode)


def heredoc_delimiter(line: str) -> tuple[str, bool] | None:
    """Return the here-document delimiter opened on ``line`` and whether it is ``<<-``."""

    for match in HEREDOC_RE.finditer(line):
        before = line[: match.start()]
        if before.count("((") > before.count("))"):
            # Arithmetic shift such as $((1 << 2)).
            continue
        return match.group("delimiter"), bool(match.group("dash"))
    return None


class _Scanner:
    def __init__(self, options: ParseOptions) -> None:
        self._execute_from = options.execute_from
        self._execute_until = options.execute_until
        self._skip_pattern = options.skip_pattern
        self._fence = FenceState()
        self._buffer: list[str] = []
        self._heredoc_at: int | None = None
        self._from_found = options.execute_from is None
        self._until_found = False
        self._last_line = 0
        self.commands: list[Command] = []

    def feed(self, number: int, line: str) -> bool:
        """Scan one line. Returns True once scanning should stop."""

        self._last_line = number
        marker = line.strip().lower()
        if not self._from_found and marker == self._execute_from.lower():
            logger.debug("parse.execute_from line={}", number)
            self._from_found = True

        self._scan(number, line)

        if (
            self._from_found
            and self._execute_until is not None
            and not self._until_found
            and marker == self._execute_until.lower()
        ):
            logger.debug("parse.execute_until line={}", number)
            self._until_found = True

        # A command spanning the until line still has to be completed.
        return self._until_found and not self._buffer

    def finish(self) -> None:
        if not self._from_found:
            raise FromNotFoundError(self._execute_from)
        if self._execute_until is not None and not self._until_found:
            if self._execute_from is not None:
                raise UntilNotFoundAfterFromError(self._execute_until, self._execute_from)
            raise UntilNotFoundError(self._execute_until)
        if self._buffer:
            raise UnterminatedCommandError(self._last_line)

    def _scan(self, number: int, line: str) -> None:
        fence = self._fence
        if not fence.in_block:
            index = line.find(OPEN_FENCE)
            if index >= 0 and not line[index + len(OPEN_FENCE) :].strip():
                fence.in_block = True
                fence.fence_indent = index
                fence.fence_prefix = line[:index]
                logger.debug("parse.block.open line={} indent={}", number, fence.fence_indent)
            return

        content = self._strip_indent(line)

        if fence.in_heredoc is not None:
            self._buffer.append(content)
            closing = content.strip() if fence.heredoc_strips_tabs else content.rstrip()
            if closing == fence.in_heredoc:
                fence.in_heredoc = None
                self._seal()
            return

        if self._is_close_fence(line):
            if self._buffer:
                raise UnterminatedCommandError(number)
            fence.in_block = False
            logger.debug("parse.block.close line={}", number)
            return

        command_line = content.lstrip()
        if not self._buffer and command_line.startswith(PROMPT):
            command_line = command_line[len(PROMPT) :].lstrip()

        if command_line.endswith(CONTINUATION):
            self._buffer.append(command_line[: -len(CONTINUATION)].rstrip())
            return

        delimiter = heredoc_delimiter(command_line)
        if delimiter is not None:
            fence.in_heredoc, fence.heredoc_strips_tabs = delimiter
            self._heredoc_at = len(self._buffer)
            self._buffer.append(command_line)
            return

        self._buffer.append(command_line)
        self._seal()

    def _strip_indent(self, line: str) -> str:
        if self._has_prefix(line):
            return line[self._fence.fence_indent :]
        if line.rstrip() == self._fence.fence_prefix.rstrip():
            # Empty line of a blockquote, e.g. ">".
            return ""
        return line.lstrip()

    def _has_prefix(self, line: str) -> bool:
        """Whether ``line`` carries the opening fence's prefix (indent, ``> `` and so on)."""

        head = line[: self._fence.fence_indent]
        return head == self._fence.fence_prefix or not head.strip()

    def _is_close_fence(self, line: str) -> bool:
        return self._has_prefix(line) and line[self._fence.fence_indent :].rstrip() == CLOSE_FENCE

    def _seal(self) -> None:
        command = Command(lines=tuple(self._buffer), heredoc_at=self._heredoc_at)
        self._buffer = []
        self._heredoc_at = None

        if not self._from_found:
            return
        if self._skip_pattern is not None and self._skip_pattern.search(command.joined()):
            logger.debug("parse.skip command={}", command.joined())
            return
        self.commands.append(command)
