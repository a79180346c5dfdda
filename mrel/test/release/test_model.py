from __future__ import annotations

from pathlib import Path

from mrel.release.model import (
    FailurePolicy,
    PipelineRun,
    RegistryNaming,
    StageId,
    StageStatus,
    Step,
    StepOutcome,
    StepResult,
)

_NAMING = RegistryNaming(scope="@remotion", core_package="core", core_name="remotion")


def test_core_package_is_unscoped() -> None:
    assert _NAMING.registry_name("core") == "remotion"


def test_other_packages_are_scoped() -> None:
    for identifier in ("cli", "renderer", "lambda-client", "compositor-linux-x64-gnu"):
        assert _NAMING.registry_name(identifier) == f"@remotion/{identifier}"


def test_step_argv_and_default_policy() -> None:
    step = Step(command="bun", args=("install",), cwd=Path("."), description="Install")
    assert step.argv == ["bun", "install"]
    assert step.policy == FailurePolicy.FATAL


def test_step_result_is_fatal() -> None:
    assert StepResult(outcome=StepOutcome.FATAL, returncode=1).is_fatal
    assert not StepResult(outcome=StepOutcome.TOLERATED, returncode=1).is_fatal


def test_pipeline_run_tracks_state() -> None:
    run = PipelineRun()
    assert all(status == StageStatus.PENDING for status in run.stages.values())

    run.mark(StageId.BUILD, StageStatus.RUNNING)
    assert run.state == StageId.BUILD

    run.mark(StageId.BUILD, StageStatus.FAILED)
    run.skip_remaining()
    assert run.stages[StageId.BUILD] == StageStatus.FAILED
    assert run.stages[StageId.TAG_ALL] == StageStatus.SKIPPED
    assert not run.done
