"""Tag command - re-run dist-tagging, optionally from a given package on."""

from __future__ import annotations

import typer

from mrel.cli.commands._helpers import (
    exit_on_error,
    exit_user_error,
    exit_with_pipeline_error,
    require_packages,
    require_version,
)
from mrel.cli.context import build_context
from mrel.core.result import Err
from mrel.output.console import Style
from mrel.services.release.executor import StepExecutor
from mrel.services.release.order import plan_publish_order
from mrel.services.release.tag import remaining_from, tag_packages


def tag(
    version: str = typer.Argument(..., help="Published version to tag (e.g. 4.0.428)"),
    from_package: str | None = typer.Option(
        None,
        "--from",
        help="Start at this package (skip the ones before it in publish order)",
        show_default=False,
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without modifying"),
) -> None:
    """Point the dist-tag at VERSION for every package in publish order."""
    ctx = build_context()
    accepted = require_version(version, ctx)

    packages = require_packages(ctx)
    order = exit_on_error(
        plan_publish_order(ctx.config.packages.publish_order, packages, ctx.console),
        ctx,
    )

    remaining = remaining_from(order, from_package)
    if remaining is None:
        exit_user_error(f"--from: {from_package} is not in the publish order", ctx)

    result = tag_packages(
        remaining,
        version=accepted,
        workspace_root=ctx.workspace.root,
        config=ctx.config,
        executor=StepExecutor(console=ctx.console, dry_run=dry_run),
    )
    if isinstance(result, Err):
        halt = result.error
        ctx.console.print(f"retry: mrel tag {accepted} --from {halt.failed}", Style.DIM)
        exit_with_pipeline_error(halt.error, ctx)

    ctx.console.success(f"Tagged {len(result.value)} packages as {ctx.config.registry.dist_tag}")
