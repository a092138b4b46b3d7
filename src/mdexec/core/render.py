"""Shell script rendering for parsed commands."""

from __future__ import annotations

import shlex

from mdexec.core.types import Command, Commands, DelayBetweenCommands, Interactive

PREAMBLE = "#!/bin/sh\n\nset -e\n\n"
EXECUTE_ALL = "EXECUTE_ALL"
SEPARATOR = "---"
CONFIRM_PROMPT = "Continue? [Y]es/[s]kip/[a]ll/[q]uit: "


def render_script(commands: Commands) -> str:
    """Render the complete executable script for ``commands``."""

    return PREAMBLE + render_body(commands)


def render_body(commands: Commands) -> str:
    mode = commands.mode
    if isinstance(mode, DelayBetweenCommands):
        return _render_delayed(commands, mode.milliseconds)
    if isinstance(mode, Interactive):
        return _render_interactive(commands)
    return "".join(f"{command}\n" for command in commands)


def _render_delayed(commands: Commands, milliseconds: int) -> str:
    parts: list[str] = []
    for index, command in enumerate(commands):
        if index:
            parts.append(f"sleep {milliseconds}\n")
        parts.append(f"{command}\n")
    return "".join(parts)


def _render_interactive(commands: Commands) -> str:
    parts = [f"{EXECUTE_ALL}=0\n"]
    for index, command in enumerate(commands, start=1):
        parts.append("\n")
        parts.append(_confirmed_function(f"command_{index}", command))
    return "".join(parts)


def _confirmed_function(name: str, command: Command) -> str:
    # The body stays at column zero so here-document terminators still match.
    shown = shlex.quote(f"$ {command}")
    return (
        f"{name}() {{\n"
        f'  if [ "${EXECUTE_ALL}" != "1" ]; then\n'
        f"    echo '{SEPARATOR}'\n"
        f"    printf '%s\\n' {shown}\n"
        f"    printf '%s' {shlex.quote(CONFIRM_PROMPT)}\n"
        '    read -r answer || answer=""\n'
        '    case "$answer" in\n'
        "      [sS]*) return 0 ;;\n"
        f"      [aA]*) {EXECUTE_ALL}=1 ;;\n"
        "      [qQ]*) exit 0 ;;\n"
        "    esac\n"
        "  fi\n"
        f"{command}\n"
        "}\n"
        f"{name}\n"
    )
