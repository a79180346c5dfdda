"""Publish-single command - publish one package with tolerate-republish."""

from __future__ import annotations

import typer

from mrel.cli.commands._helpers import exit_user_error, exit_with_pipeline_error
from mrel.cli.context import build_context
from mrel.services.release.executor import StepExecutor
from mrel.services.release.manifests import MANIFEST_FILE
from mrel.services.release.publish import publish_step


def publish_single(
    package: str = typer.Argument(..., help="Package directory name (e.g. lambda-client)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without modifying"),
) -> None:
    """Publish a single package at its current manifest version."""
    ctx = build_context()

    package_dir = ctx.workspace.packages_dir(ctx.config.packages.dir) / package
    if not (package_dir / MANIFEST_FILE).is_file():
        exit_user_error(f"unknown package: {package} (no {package_dir / MANIFEST_FILE})", ctx)

    step = publish_step(package, workspace_root=ctx.workspace.root, config=ctx.config)
    result = StepExecutor(console=ctx.console, dry_run=dry_run).run(step)
    if result.is_fatal and result.error is not None:
        exit_with_pipeline_error(result.error, ctx)
