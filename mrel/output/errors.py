"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mrel.core.errors import ErrorCode
from mrel.output.console import Style
from mrel.release.errors import (
    ManifestUnreadable,
    OrderInvalid,
    PipelineError,
    PropagationIncomplete,
    StepFailed,
    StepStartFailed,
    VersionInvalid,
)

if TYPE_CHECKING:
    from mrel.output.console import ConsoleProtocol

__all__ = ["print_pipeline_error", "pipeline_error_exit_code"]


def print_pipeline_error(error: PipelineError, console: ConsoleProtocol) -> None:
    """Print a pipeline error with its identifying package and hint."""
    match error:
        case VersionInvalid(expected=expected):
            console.error(error.message)
            console.print(f"Expected format: {expected}", Style.DIM)
        case StepStartFailed(package=package) | StepFailed(package=package):
            console.error(error.message)
            if package is not None:
                console.print(f"package: {package}", Style.DIM)
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)
        case PropagationIncomplete(updated=updated, total=total):
            console.error(error.message)
            console.print(f"{updated}/{total} files updated before the failure", Style.DIM)
        case ManifestUnreadable():
            console.error(error.message)
        case OrderInvalid(details=details):
            console.error(error.message)
            for line in details:
                console.print(f"  {line}", Style.DIM)


def pipeline_error_exit_code(error: PipelineError) -> int:
    """Get exit code for a pipeline error.

    A failed step propagates its own exit code.
    """
    match error:
        case VersionInvalid() | OrderInvalid():
            return int(ErrorCode.USER_ERROR)
        case StepStartFailed():
            return int(ErrorCode.ENV_ERROR)
        case StepFailed(returncode=rc):
            return rc if rc > 0 else int(ErrorCode.STEP_ERROR)
        case PropagationIncomplete() | ManifestUnreadable():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.STEP_ERROR)
