"""mdexec CLI bootstrap."""

from __future__ import annotations

from mdexec.cli import app

if __name__ == "__main__":
    app()
