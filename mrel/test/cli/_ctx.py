from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from mrel.cli.context import CLIContext
from mrel.core.workspace import Workspace
from mrel.output.console import MockConsole
from mrel.test.services._monorepo import make_config

ORDER = ("bundler", "renderer", "cli")


def patch_context(
    monkeypatch: pytest.MonkeyPatch,
    module: object,
    root: Path,
    order: Sequence[str] = ORDER,
) -> MockConsole:
    """Point ``module.build_context`` at ``root`` and return its console."""
    console = MockConsole()
    ctx = CLIContext(workspace=Workspace(root=root), config=make_config(order), console=console)
    monkeypatch.setattr(module, "build_context", lambda: ctx)
    return console
