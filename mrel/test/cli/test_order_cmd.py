from __future__ import annotations

from pathlib import Path

import pytest
import typer

from mrel.test.cli._ctx import patch_context
from mrel.test.services._monorepo import make_monorepo


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return make_monorepo(tmp_path, {"bundler": (), "renderer": (), "cli": ("bundler", "renderer")})


def test_order_prints_resolved_order(root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import mrel.cli.commands.order_cmd as order_cmd

    console = patch_context(monkeypatch, order_cmd, root)

    order_cmd.order(check=True)

    assert console.find("  1. @remotion/bundler")
    assert console.find("  3. @remotion/cli  (after bundler, renderer)")
    assert console.find("curated order respects workspace dependencies")


def test_order_check_fails_on_violation(root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import mrel.cli.commands.order_cmd as order_cmd

    console = patch_context(monkeypatch, order_cmd, root, order=("cli", "bundler", "renderer"))

    with pytest.raises(typer.Exit) as exc:
        order_cmd.order(check=True)

    assert exc.value.exit_code == 1
    assert console.find("cli is listed before its dependency bundler")
    assert console.find("  1. @remotion/bundler")


def test_order_without_check_only_warns(root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import mrel.cli.commands.order_cmd as order_cmd

    console = patch_context(monkeypatch, order_cmd, root, order=("cli", "bundler", "renderer"))

    order_cmd.order(check=False)

    assert console.has_warning()
    assert not console.has_error()


def test_order_unknown_package(root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import mrel.cli.commands.order_cmd as order_cmd

    console = patch_context(monkeypatch, order_cmd, root, order=("bundler", "ghost"))

    with pytest.raises(typer.Exit) as exc:
        order_cmd.order(check=False)

    assert exc.value.exit_code == 1
    assert console.find("Invalid publish order: packages without a manifest")


def test_order_unreadable_manifest_is_an_io_error(
    root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import mrel.cli.commands.order_cmd as order_cmd

    (root / "packages" / "cli" / "package.json").write_bytes(b'{"name": "\xff"}')
    console = patch_context(monkeypatch, order_cmd, root)

    with pytest.raises(typer.Exit) as exc:
        order_cmd.order(check=False)

    assert exc.value.exit_code == 5
    assert console.find("Cannot read manifest")
