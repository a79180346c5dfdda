"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from mrel.core.errors import ErrorCode
from mrel.core.result import Err, Ok, Result
from mrel.output.errors import pipeline_error_exit_code, print_pipeline_error
from mrel.release.errors import ManifestUnreadable, PipelineError
from mrel.release.model import PackageDescriptor
from mrel.release.version import ReleaseVersion, parse_release_version
from mrel.services.release.manifests import discover_packages

if TYPE_CHECKING:
    from mrel.cli.context import CLIContext

T = TypeVar("T")


def exit_with_pipeline_error(error: PipelineError, ctx: CLIContext) -> NoReturn:
    """Render the error and exit with its mapped code."""
    print_pipeline_error(error, ctx.console)
    raise typer.Exit(code=pipeline_error_exit_code(error))


def exit_on_error(
    result: Result[T, PipelineError],
    ctx: CLIContext,
) -> T:
    """Return the Ok value, or render the error and exit.

    Replaces the common pattern:
        match result:
            case Err(e):
                print_pipeline_error(e, ctx.console)
                raise typer.Exit(code=pipeline_error_exit_code(e))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        exit_with_pipeline_error(result.error, ctx)
    return result.value


def require_version(text: str, ctx: CLIContext) -> ReleaseVersion:
    policy = ctx.config.version
    match parse_release_version(text, major=policy.major, minor=policy.minor):
        case Ok(version):
            return version
        case Err(error):
            exit_with_pipeline_error(error, ctx)


def exit_user_error(message: str, ctx: CLIContext) -> NoReturn:
    ctx.console.error(message)
    raise typer.Exit(code=int(ErrorCode.USER_ERROR))


def require_packages(ctx: CLIContext) -> dict[str, PackageDescriptor]:
    packages = discover_packages(ctx.workspace.packages_dir(ctx.config.packages.dir))
    if isinstance(packages, Err):
        e = packages.error
        exit_with_pipeline_error(ManifestUnreadable(path=e.path, reason=e.reason), ctx)
    return packages.value
