from __future__ import annotations

import os
from pathlib import Path

import typer

from mrel import __version__
from mrel.cli.commands.bump_cmd import bump
from mrel.cli.commands.order_cmd import order
from mrel.cli.commands.publish_cmd import publish_single
from mrel.cli.commands.release_cmd import release
from mrel.cli.commands.tag_cmd import tag
from mrel.core.errors import ErrorCode
from mrel.core.workspace import WORKSPACE_ENV_VAR, is_workspace_root


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    invoke_without_command=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(release)
app.command()(bump)
app.command("publish-single")(publish_single)
app.command()(tag)
app.command()(order)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        help="Monorepo root (overrides auto detection)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if workspace is not None:
        try:
            root = workspace.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --workspace: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir() or not is_workspace_root(root):
            typer.echo(
                f"error: --workspace '{root}' is not a valid workspace "
                "(missing package.json or packages/)",
                err=True,
            )
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[WORKSPACE_ENV_VAR] = str(root)


def main() -> None:
    app()
