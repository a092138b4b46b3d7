from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from mdexec import logging_utils


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in list(os.environ):
        if name.upper().startswith("MDEXEC_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(logging_utils, "_CONFIGURED", None)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_markdown(tmp_path: Path) -> Callable[..., Path]:
    def _write(content: str, relative: str = "README.md") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
