from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from mrel import __version__
from mrel.cli.app import app
from mrel.test.services._monorepo import make_monorepo


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("release", "bump", "publish-single", "tag", "order"):
        assert command in result.output


def test_invalid_workspace_option(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["--workspace", str(tmp_path), "order"])

    assert result.exit_code == 2


def test_order_with_workspace_and_config(
    runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = make_monorepo(tmp_path, {"core": (), "renderer": ("core",)})
    (root / "mrel.toml").write_text(
        '[packages]\npublish_order = ["core", "renderer"]\n', encoding="utf-8"
    )
    # Restored on teardown; the --workspace option exports it for the process.
    monkeypatch.setenv("MREL_WORKSPACE", str(root))

    result = runner.invoke(app, ["--workspace", str(root), "order", "--check"])

    assert result.exit_code == 0, result.output
    assert "@remotion/renderer" in result.output


def test_release_rejects_bad_version(
    runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = make_monorepo(tmp_path, {"core": ()})
    monkeypatch.setenv("MREL_WORKSPACE", str(root))

    result = runner.invoke(app, ["release", "5.0.1"])

    assert result.exit_code == 1
    assert "Invalid version format: 5.0.1" in result.output


def test_release_requires_version_argument(
    runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = make_monorepo(tmp_path, {"core": ()})
    monkeypatch.setenv("MREL_WORKSPACE", str(root))

    result = runner.invoke(app, ["release"])

    assert result.exit_code == 2
    assert "Missing argument" in result.output
