from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from mrel.release.errors import PipelineError
from mrel.release.version import ReleaseVersion


class FailurePolicy(StrEnum):
    """How a non-zero exit of a step is classified."""

    FATAL = "fatal"
    TOLERATED = "tolerated"


class StepOutcome(StrEnum):
    SUCCESS = "success"
    TOLERATED = "tolerated"
    FATAL = "fatal"


class StageId(StrEnum):
    VALIDATE_VERSION = "validate-version"
    PROPAGATE_VERSION = "propagate-version"
    INSTALL_DEPENDENCIES = "install-dependencies"
    BUILD = "build"
    PUBLISH_ALL = "publish-all"
    TAG_ALL = "tag-all"
    DONE = "done"


class StageStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    TOLERATED = "tolerated"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class Step:
    """One external command invocation."""

    command: str
    args: tuple[str, ...]
    cwd: Path
    description: str
    policy: FailurePolicy = FailurePolicy.FATAL
    package: str | None = None

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of one step, consumed immediately by the calling stage.

    ``returncode`` is None when the command never started.
    """

    outcome: StepOutcome
    returncode: int | None
    diagnostic: str = ""
    error: PipelineError | None = None

    @property
    def is_fatal(self) -> bool:
        return self.outcome == StepOutcome.FATAL


@dataclass(frozen=True, slots=True)
class PackageDescriptor:
    """A publishable package of the monorepo.

    Attributes:
        identifier: Directory name under packages/ (e.g. "renderer")
        path: Absolute path to the package directory
        name: The manifest ``name`` field
        workspace_dependencies: Registry names referenced with a ``workspace:`` range
    """

    identifier: str
    path: Path
    name: str
    workspace_dependencies: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RegistryNaming:
    """Maps package identifiers to registry names.

    The core package publishes un-scoped; everything else is ``scope/identifier``.
    """

    scope: str
    core_package: str
    core_name: str

    def registry_name(self, identifier: str) -> str:
        if identifier == self.core_package:
            return self.core_name
        return f"{self.scope}/{identifier}"


def _pending_stages() -> dict[StageId, StageStatus]:
    return {stage: StageStatus.PENDING for stage in StageId}


@dataclass(slots=True)
class PipelineRun:
    """Run-scoped pipeline state. Never persisted."""

    version: ReleaseVersion | None = None
    state: StageId = StageId.VALIDATE_VERSION
    order: tuple[str, ...] = ()
    stages: dict[StageId, StageStatus] = field(default_factory=_pending_stages)
    published: list[str] = field(default_factory=list)
    tagged: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def mark(self, stage: StageId, status: StageStatus) -> None:
        self.stages[stage] = status
        if status == StageStatus.RUNNING:
            self.state = stage

    def skip_remaining(self) -> None:
        for stage, status in self.stages.items():
            if status == StageStatus.PENDING:
                self.stages[stage] = StageStatus.SKIPPED

    @property
    def done(self) -> bool:
        return self.state == StageId.DONE
