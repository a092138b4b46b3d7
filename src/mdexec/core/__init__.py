"""Core parsing and rendering for mdexec."""

from .parser import parse_markdown
from .render import render_script
from .types import Command, Commands, Default, DelayBetweenCommands, ExecutionMode, Interactive, ParseOptions

__all__ = [
    "Command",
    "Commands",
    "Default",
    "DelayBetweenCommands",
    "ExecutionMode",
    "Interactive",
    "ParseOptions",
    "parse_markdown",
    "render_script",
]
