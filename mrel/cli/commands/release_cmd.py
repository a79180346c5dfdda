"""Release command - the full version/install/build/publish/tag pipeline."""

from __future__ import annotations

import typer

from mrel.cli.commands._helpers import exit_with_pipeline_error
from mrel.cli.context import build_context
from mrel.core.result import Err
from mrel.output.console import Style
from mrel.release.errors import StepFailed, StepStartFailed
from mrel.release.model import StageId
from mrel.services.release.pipeline import run_release


def release(
    version: str = typer.Argument(..., help="Release version (e.g. 4.0.428)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without modifying"),
) -> None:
    """Bump, install, build, publish and tag every package."""
    ctx = build_context()

    result = run_release(
        version,
        workspace_root=ctx.workspace.root,
        config=ctx.config,
        console=ctx.console,
        dry_run=dry_run,
    )
    if not isinstance(result, Err):
        return

    halt = result.error
    ctx.console.newline()
    ctx.console.print(f"release halted in stage: {halt.stage}", Style.BOLD)
    if halt.run.published:
        ctx.console.print(f"published: {', '.join(halt.run.published)}", Style.DIM)

    error = halt.error
    if halt.stage == StageId.TAG_ALL and isinstance(error, StepFailed | StepStartFailed):
        if halt.run.tagged:
            ctx.console.print(f"tagged: {', '.join(halt.run.tagged)}", Style.DIM)
        if error.package is not None:
            ctx.console.print(
                f"retry: mrel tag {version} --from {error.package}",
                Style.DIM,
            )
    exit_with_pipeline_error(error, ctx)
