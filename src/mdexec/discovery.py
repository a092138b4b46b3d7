"""Markdown file discovery."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from mdexec.errors import MarkdownReadError


@dataclass(frozen=True)
class MarkdownFile:
    """One markdown document and the directory its script runs in."""

    path: Path

    @property
    def parent_dir(self) -> Path:
        return self.path.parent

    def read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MarkdownReadError(f"Failed to read markdown file: {self.path}") from exc


def discover_markdown(base_dir: Path, file_name: str, max_depth: int | None = None) -> list[MarkdownFile]:
    """Find the markdown files to process.

    Args:
        base_dir: Directory the search starts from.
        file_name: File name (or relative path without recursion) to look for.
        max_depth: Sub-directory levels to search below ``base_dir``. ``None``
            only considers ``base_dir / file_name`` itself.

    Returns:
        Files sorted by their directory relative to ``base_dir``, so the
        base directory itself always comes first.
    """

    if max_depth is None:
        path = base_dir / file_name
        if not path.is_file():
            raise MarkdownReadError(f"Markdown file not found: {path}")
        return [MarkdownFile(path)]

    if max_depth < 0:
        raise ValueError(f"max_depth must not be negative: {max_depth}")

    found = [MarkdownFile(path) for path in _walk(base_dir, file_name, max_depth)]
    found.sort(key=lambda markdown: markdown.parent_dir.relative_to(base_dir).parts)
    logger.debug("discover.done base={} file={} count={}", base_dir, file_name, len(found))
    return found


def _walk(directory: Path, file_name: str, depth: int):
    candidate = directory / file_name
    if candidate.is_file():
        yield candidate
    if depth == 0:
        return
    for child in directory.iterdir():
        if child.is_dir() and not child.name.startswith("."):
            yield from _walk(child, file_name, depth - 1)
