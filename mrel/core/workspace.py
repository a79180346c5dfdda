"""Workspace detection and paths.

The workspace is the root of the JavaScript monorepo being released. It is
identified by a root ``package.json`` next to a ``packages/`` directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILE_NAME
from .result import Err, Ok, Result

__all__ = [
    "WORKSPACE_ENV_VAR",
    "Workspace",
    "WorkspaceError",
    "detect_workspace",
    "find_workspace_upward",
    "is_workspace_root",
]

WORKSPACE_ENV_VAR = "MREL_WORKSPACE"


@dataclass(frozen=True, slots=True)
class WorkspaceError:
    """Error when workspace cannot be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """A detected monorepo workspace."""

    root: Path

    @property
    def config_path(self) -> Path:
        """Path to mrel.toml (optional)."""
        return self.root / CONFIG_FILE_NAME

    def packages_dir(self, relative: str = "packages") -> Path:
        return self.root / relative

    def __str__(self) -> str:
        return str(self.root)


def is_workspace_root(path: Path) -> bool:
    return (path / "package.json").is_file() and (path / "packages").is_dir()


def find_workspace_upward(start: Path) -> Path | None:
    """Search upward from start directory for a workspace root."""
    for parent in (start, *start.parents):
        if is_workspace_root(parent):
            return parent
    return None


def detect_workspace(
    *,
    start_dir: Path | None = None,
    env_var: str = WORKSPACE_ENV_VAR,
) -> Result[Workspace, WorkspaceError]:
    """Detect the workspace root directory.

    Detection order:
    1. $MREL_WORKSPACE (if set, it must point at a valid workspace)
    2. Search upward from start_dir (or cwd)
    """
    env_value = os.environ.get(env_var)
    if env_value:
        env_path = Path(env_value).expanduser().resolve()
        if env_path.is_dir() and is_workspace_root(env_path):
            return Ok(Workspace(root=env_path))
        return Err(
            WorkspaceError(
                message=f"${env_var} is set to '{env_value}' but it is not a valid workspace",
                searched_from=env_path if env_path.is_dir() else None,
            )
        )

    search_start = (start_dir or Path.cwd()).resolve()
    found = find_workspace_upward(search_start)
    if found is None:
        return Err(
            WorkspaceError(
                message="Could not find workspace (package.json with a packages/ directory)",
                searched_from=search_start,
            )
        )
    return Ok(Workspace(root=found))
