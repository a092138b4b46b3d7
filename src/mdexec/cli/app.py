"""CLI main module for mdexec."""

from __future__ import annotations

import re
from pathlib import Path

import typer
from loguru import logger

from mdexec import __version__
from mdexec.config import Settings, get_settings
from mdexec.core import (
    Default,
    DelayBetweenCommands,
    ExecutionMode,
    Interactive,
    ParseOptions,
    parse_markdown,
    render_script,
)
from mdexec.discovery import MarkdownFile, discover_markdown
from mdexec.errors import MdexecError
from mdexec.shell import ShellScript

app = typer.Typer(
    name="mdexec",
    help="Run the shell commands found in a markdown file.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mdexec {__version__}")
        raise typer.Exit()


def _compile_pattern(value: str | None) -> re.Pattern[str] | None:
    if value is None:
        return None
    try:
        return re.compile(value)
    except re.error as exc:
        raise typer.BadParameter(f"invalid regular expression: {exc}") from exc


def _execution_mode(delay: int | None, interactive: bool) -> ExecutionMode:
    if interactive and delay is not None:
        raise typer.BadParameter("--interactive cannot be combined with --delay-between-commands")
    if interactive:
        return Interactive()
    if delay is not None:
        return DelayBetweenCommands(delay)
    return Default()


def _run_file(markdown: MarkdownFile, options: ParseOptions, settings: Settings, *, dry_run: bool) -> int:
    commands = parse_markdown(markdown.read(), options)
    script = render_script(commands)
    if dry_run:
        typer.echo(script, nl=False)
        return 0

    logger.info("mdexec.run file={} commands={}", markdown.path, len(commands))
    with ShellScript(markdown.parent_dir, script, shell=settings.shell) as shell_script:
        return shell_script.run()


@app.command()
def main(
    file_name: str | None = typer.Option(None, "--file-name", "-f", help="Name of the markdown file to parse"),
    execute_from: str | None = typer.Option(
        None,
        "--execute-from",
        help="Start from the first line matching this text (case-insensitive). The matching command is run.",
    ),
    execute_until: str | None = typer.Option(
        None,
        "--execute-until",
        help="Stop at the first line matching this text (case-insensitive). The matching command is run.",
    ),
    skip_commands: str | None = typer.Option(
        None, "--skip-commands", "-s", help="Skip every command matching this regular expression"
    ),
    delay: int | None = typer.Option(
        None, "--delay-between-commands", "-d", min=0, help="Sleep between commands (milliseconds)"
    ),
    interactive: bool = typer.Option(False, "--interactive", "-i", help="Confirm each command before running it"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Also look for the file in sub-directories"),
    max_depth: int | None = typer.Option(None, "--max-depth", min=0, help="Sub-directory levels to search"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the generated scripts instead of running them"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Extract the shell blocks of a markdown file and run them."""

    _ = version
    settings = get_settings()
    options = ParseOptions(
        execute_from=execute_from,
        execute_until=execute_until,
        skip_pattern=_compile_pattern(skip_commands),
        execution_mode=_execution_mode(delay, interactive),
    )
    depth = (max_depth if max_depth is not None else settings.max_depth) if recursive else None

    try:
        files = discover_markdown(Path.cwd(), file_name or settings.file_name, depth)
        if not files:
            logger.warning("mdexec.discover no files named {}", file_name or settings.file_name)
        for markdown in files:
            status = _run_file(markdown, options, settings, dry_run=dry_run)
            if status != 0:
                logger.error("mdexec.run failed file={} status={}", markdown.path, status)
                raise typer.Exit(status)
    except MdexecError as exc:
        logger.error("mdexec.error {}", exc)
        raise typer.Exit(1) from exc
