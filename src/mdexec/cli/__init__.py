"""Command line interface for mdexec."""

from .app import app

__all__ = ["app"]
