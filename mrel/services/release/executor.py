"""Step executor: run one external step and classify its outcome.

Classification:
- the command could not be started -> fatal, whatever the policy
- non-zero exit under FailurePolicy.FATAL -> fatal
- non-zero exit under FailurePolicy.TOLERATED -> tolerated (warning)
- exit 0 -> success

Console lines are printed before and after each step; they never influence
the classification.
"""

from __future__ import annotations

from dataclasses import dataclass

from mrel.core.result import Err
from mrel.output.console import ConsoleProtocol, Style
from mrel.platform.process import run_streaming
from mrel.release.errors import StepFailed, StepStartFailed
from mrel.release.model import FailurePolicy, Step, StepOutcome, StepResult


@dataclass(frozen=True, slots=True)
class StepExecutor:
    console: ConsoleProtocol
    dry_run: bool = False

    def run(self, step: Step) -> StepResult:
        self.console.step(step.description)
        self.console.print(" ".join(step.argv), Style.DIM)

        if self.dry_run:
            return StepResult(outcome=StepOutcome.SUCCESS, returncode=0, diagnostic="dry-run")

        result = run_streaming(step.argv, cwd=step.cwd)
        if not isinstance(result, Err):
            self.console.success(step.description)
            return StepResult(outcome=StepOutcome.SUCCESS, returncode=0)

        e = result.error
        if not e.started:
            start_error = StepStartFailed(
                description=step.description,
                command=tuple(step.argv),
                reason=e.stderr,
                package=step.package,
            )
            return StepResult(
                outcome=StepOutcome.FATAL,
                returncode=None,
                diagnostic=e.stderr,
                error=start_error,
            )

        if step.policy == FailurePolicy.TOLERATED:
            diagnostic = f"{step.description} exited with code {e.returncode}, continuing"
            self.console.warning(diagnostic)
            return StepResult(
                outcome=StepOutcome.TOLERATED,
                returncode=e.returncode,
                diagnostic=diagnostic,
            )

        failed = StepFailed(
            description=step.description,
            command=tuple(step.argv),
            returncode=e.returncode,
            package=step.package,
        )
        return StepResult(
            outcome=StepOutcome.FATAL,
            returncode=e.returncode,
            diagnostic=failed.message,
            error=failed,
        )
