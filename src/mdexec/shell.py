"""Temporary shell script execution."""

from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path
from types import TracebackType

from loguru import logger

from mdexec.errors import ScriptError

DEFAULT_SHELL = "/bin/sh"
SCRIPT_MODE = 0o755


class ShellScript:
    """An executable script that lives only while the context is open.

    The file is created in ``directory`` as ``commands-<millis>.sh`` on enter
    and removed on exit, whether or not it ran successfully.
    """

    def __init__(self, directory: Path, script: str, *, shell: str = DEFAULT_SHELL) -> None:
        self.directory = directory
        self.script = script
        self.shell = shell
        self.path: Path | None = None

    def __enter__(self) -> ShellScript:
        self.path = self._create()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        _ = (exc_type, exc, tb)
        self.cleanup()

    def run(self) -> int:
        """Run the script from its directory and wait for it to finish."""

        if self.path is None:
            raise ScriptError("Shell script has not been created")
        target = self.path.resolve()
        logger.debug("shell.run script={} cwd={}", target, target.parent)
        try:
            # The script is generated from user markdown on purpose.
            result = subprocess.run(  # noqa: S603
                [self.shell, str(target)],
                cwd=target.parent,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise ScriptError(f"Failed to execute shell script {target}: {exc!s}") from exc
        return result.returncode

    def cleanup(self) -> None:
        if self.path is None:
            return
        try:
            self.path.unlink()
        except OSError as exc:
            logger.warning("shell.cleanup failed script={} error={}", self.path, exc)
        self.path = None

    def _create(self) -> Path:
        millis = time.time_ns() // 1_000_000
        while True:
            path = self.directory / f"commands-{millis}.sh"
            try:
                handle = path.open("x", encoding="utf-8")
            except FileExistsError:
                millis += 1
                continue
            except OSError as exc:
                raise ScriptError(f"Failed to create shell script {path}: {exc!s}") from exc
            try:
                with handle:
                    handle.write(self.script)
            except OSError as exc:
                path.unlink(missing_ok=True)
                raise ScriptError(f"Failed to write shell script {path}: {exc!s}") from exc
            break
        try:
            os.chmod(path, SCRIPT_MODE)
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise ScriptError(f"Failed to make shell script executable {path}: {exc!s}") from exc
        return path
