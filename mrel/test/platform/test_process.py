"""Tests for mrel.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

from mrel.core.result import Err, Ok
from mrel.platform.process import ProcessError, run_streaming


def test_success(tmp_path: Path) -> None:
    assert run_streaming([sys.executable, "-c", "pass"], cwd=tmp_path) == Ok(None)


def test_non_zero_exit(tmp_path: Path) -> None:
    result = run_streaming([sys.executable, "-c", "raise SystemExit(4)"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert result.error.returncode == 4
    assert result.error.started


def test_runs_in_cwd(tmp_path: Path) -> None:
    script = "import pathlib; pathlib.Path('marker').write_text('x')"

    assert isinstance(run_streaming([sys.executable, "-c", script], cwd=tmp_path), Ok)
    assert (tmp_path / "marker").exists()


def test_missing_executable(tmp_path: Path) -> None:
    result = run_streaming(["mrel-definitely-not-a-command"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert not result.error.started
    assert result.error.returncode == -1
    assert "could not be started" in str(result.error)


def test_error_str_truncates_long_commands() -> None:
    command = ("npm", "dist-tag", "add", "remotion@4.0.1", "latest")
    error = ProcessError(command=command, returncode=1)
    assert str(error) == "npm dist-tag add ... failed (exit 1)"
