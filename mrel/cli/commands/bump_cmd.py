"""Bump command - write the version into manifests and version files only."""

from __future__ import annotations

import typer

from mrel.cli.commands._helpers import exit_on_error, require_version
from mrel.cli.context import build_context
from mrel.core.errors import ErrorCode
from mrel.core.result import Err
from mrel.services.release.propagate import propagate_version
from mrel.services.release.templates import template_exclusions


def bump(
    version: str = typer.Argument(..., help="Release version (e.g. 4.0.428)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without modifying"),
) -> None:
    """Set the version of every package without building or publishing."""
    ctx = build_context()
    accepted = require_version(version, ctx)

    exclusions = template_exclusions(ctx.config.packages, ctx.workspace.root)
    if isinstance(exclusions, Err):
        ctx.console.error(exclusions.error.message)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    report = exit_on_error(
        propagate_version(
            workspace_root=ctx.workspace.root,
            config=ctx.config,
            version=accepted,
            exclusions=exclusions.value,
            console=ctx.console,
            dry_run=dry_run,
        ),
        ctx,
    )
    if report.unchanged:
        ctx.console.info(f"{len(report.unchanged)} packages were already at {accepted}")
