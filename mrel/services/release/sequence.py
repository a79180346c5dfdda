"""Per-package step sequencing shared by publishing and tagging.

Packages are processed strictly one at a time in list order. The first
fatal step stops the sequence; later packages are never attempted.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from mrel.core.result import Err, Ok, Result
from mrel.release.errors import StepError, StepFailed
from mrel.release.model import Step
from mrel.services.release.executor import StepExecutor


@dataclass(frozen=True, slots=True)
class SequenceHalt:
    """A sequence stopped at ``failed``; ``completed`` ran before it."""

    failed: str
    error: StepError
    completed: tuple[str, ...]


def run_sequence(
    identifiers: Sequence[str],
    make_step: Callable[[str], Step],
    executor: StepExecutor,
) -> Result[tuple[str, ...], SequenceHalt]:
    completed: list[str] = []
    for identifier in identifiers:
        step = make_step(identifier)
        result = executor.run(step)
        if result.is_fatal:
            error = result.error
            if not isinstance(error, StepError):
                error = StepFailed(
                    description=step.description,
                    command=tuple(step.argv),
                    returncode=result.returncode or -1,
                    package=identifier,
                )
            return Err(SequenceHalt(failed=identifier, error=error, completed=tuple(completed)))
        completed.append(identifier)
    return Ok(tuple(completed))
