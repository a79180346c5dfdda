"""Error types for the release bounded context.

Every variant exposes ``message`` (and ``hint`` when the operator has an
obvious next move) so view adapters can render errors without matching on
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class VersionInvalid:
    value: str
    expected: str

    @property
    def message(self) -> str:
        return f"Invalid version format: {self.value}"

    @property
    def hint(self) -> str:
        return f"Expected format: {self.expected}"


@dataclass(frozen=True, slots=True)
class StepStartFailed:
    """The step's command could not be started at all."""

    description: str
    command: tuple[str, ...]
    reason: str
    package: str | None = None

    @property
    def message(self) -> str:
        return f"{self.description} could not start: {self.reason}"

    @property
    def hint(self) -> str:
        return f"is '{self.command[0]}' installed and on PATH?"


@dataclass(frozen=True, slots=True)
class StepFailed:
    """The step ran and exited non-zero under a fatal policy."""

    description: str
    command: tuple[str, ...]
    returncode: int
    package: str | None = None

    @property
    def message(self) -> str:
        return f"{self.description} failed (exit code {self.returncode})"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class PropagationIncomplete:
    """A manifest or version file could not be read, parsed or written."""

    path: Path
    reason: str
    updated: int
    total: int

    @property
    def message(self) -> str:
        return f"Failed to update {self.path}: {self.reason}"

    @property
    def hint(self) -> str:
        return f"{self.updated}/{self.total} files were updated before the failure"


@dataclass(frozen=True, slots=True)
class ManifestUnreadable:
    """A package manifest could not be read while resolving the workspace."""

    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"Cannot read manifest {self.path}: {self.reason}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class OrderInvalid:
    reason: str
    details: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"Invalid publish order: {self.reason}"

    @property
    def hint(self) -> str | None:
        if not self.details:
            return None
        return "; ".join(self.details)


StepError = StepStartFailed | StepFailed

PipelineError = (
    VersionInvalid
    | StepStartFailed
    | StepFailed
    | PropagationIncomplete
    | ManifestUnreadable
    | OrderInvalid
)
