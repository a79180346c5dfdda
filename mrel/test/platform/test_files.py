from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from mrel.platform.files import atomic_write_text


def test_replaces_content(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text("old\n", encoding="utf-8")

    atomic_write_text(path, '{\n\t"name": "é"\n}\n')

    assert path.read_bytes() == '{\n\t"name": "é"\n}\n'.encode("utf-8")
    assert [p.name for p in tmp_path.iterdir()] == ["package.json"]


def test_failed_replace_keeps_original(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "package.json"
    path.write_text("old\n", encoding="utf-8")

    def failing_replace(src: Any, dst: Any, *args: Any, **kwargs: Any) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)

    with pytest.raises(OSError, match="disk full"):
        atomic_write_text(path, "new\n")

    monkeypatch.undo()
    assert path.read_text(encoding="utf-8") == "old\n"
    assert [p.name for p in tmp_path.iterdir()] == ["package.json"]
