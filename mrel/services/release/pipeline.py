"""Release pipeline orchestrator.

    VALIDATE_VERSION -> PROPAGATE_VERSION -> INSTALL_DEPENDENCIES
        -> BUILD (tolerated) -> PUBLISH_ALL -> TAG_ALL -> DONE

Validation has no side effects: it checks the version string, loads the
manifests and resolves the publish order. Each later stage carries its
failure policy in the stage table; a fatal outcome halts the run in that
stage and every later stage is marked skipped. Under the tolerated policy a
non-zero exit becomes a warning, but a command that cannot start is still
fatal.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from mrel.core.config import ReleaseConfig
from mrel.core.result import Err, Ok, Result
from mrel.output.console import ConsoleProtocol, Style
from mrel.release.errors import (
    ManifestUnreadable,
    PipelineError,
    PropagationIncomplete,
    StepFailed,
)
from mrel.release.model import (
    FailurePolicy,
    PipelineRun,
    StageId,
    StageStatus,
    Step,
    StepOutcome,
    StepResult,
)
from mrel.release.version import ReleaseVersion, parse_release_version
from mrel.services.release.executor import StepExecutor
from mrel.services.release.manifests import discover_packages
from mrel.services.release.order import plan_publish_order
from mrel.services.release.propagate import propagate_version
from mrel.services.release.publish import publish_packages, registry_naming
from mrel.services.release.tag import tag_packages
from mrel.services.release.templates import template_exclusions


@dataclass(frozen=True, slots=True)
class StageDef:
    id: StageId
    title: str
    policy: FailurePolicy = FailurePolicy.FATAL


PIPELINE_STAGES: tuple[StageDef, ...] = (
    StageDef(StageId.PROPAGATE_VERSION, "Bump version"),
    StageDef(StageId.INSTALL_DEPENDENCIES, "Install dependencies"),
    StageDef(StageId.BUILD, "Build all packages", FailurePolicy.TOLERATED),
    StageDef(StageId.PUBLISH_ALL, "Publish packages"),
    StageDef(StageId.TAG_ALL, "Tag packages"),
)


@dataclass(frozen=True, slots=True)
class PipelineHalt:
    """The run stopped in ``stage`` because of ``error``."""

    stage: StageId
    error: PipelineError
    run: PipelineRun


StageHandler = Callable[[StageDef, PipelineRun], StepResult]


def _ok() -> StepResult:
    return StepResult(outcome=StepOutcome.SUCCESS, returncode=0)


def _fatal(error: PipelineError) -> StepResult:
    return StepResult(
        outcome=StepOutcome.FATAL,
        returncode=error.returncode if isinstance(error, StepFailed) else None,
        diagnostic=error.message,
        error=error,
    )


class ReleasePipeline:
    """Runs the fixed release stage sequence for one version."""

    def __init__(
        self,
        *,
        workspace_root: Path,
        config: ReleaseConfig,
        console: ConsoleProtocol,
        dry_run: bool = False,
        stages: tuple[StageDef, ...] = PIPELINE_STAGES,
    ) -> None:
        self._root = workspace_root
        self._config = config
        self._console = console
        self._dry_run = dry_run
        self._stages = stages
        self._executor = StepExecutor(console=console, dry_run=dry_run)
        self._handlers: Mapping[StageId, StageHandler] = {
            StageId.PROPAGATE_VERSION: self._propagate,
            StageId.INSTALL_DEPENDENCIES: self._install,
            StageId.BUILD: self._build,
            StageId.PUBLISH_ALL: self._publish,
            StageId.TAG_ALL: self._tag,
        }

    def run(self, version_text: str) -> Result[PipelineRun, PipelineHalt]:
        run = PipelineRun()

        run.mark(StageId.VALIDATE_VERSION, StageStatus.RUNNING)
        validated = self._validate(version_text, run)
        if isinstance(validated, Err):
            return self._halt(run, StageId.VALIDATE_VERSION, validated.error)
        run.mark(StageId.VALIDATE_VERSION, StageStatus.SUCCEEDED)
        version = validated.value

        self._console.newline()
        self._console.print(
            f"Releasing {version} to {self._config.registry.url}", Style.SUCCESS
        )

        for index, stage in enumerate(self._stages, start=1):
            handler = self._handlers.get(stage.id)
            if handler is None:
                raise AssertionError(f"no handler for stage: {stage.id}")

            self._console.header(f"{index}. {stage.title}")
            run.mark(stage.id, StageStatus.RUNNING)
            result = handler(stage, run)

            if result.outcome == StepOutcome.FATAL:
                error = result.error or StepFailed(
                    description=stage.title.lower(),
                    command=(),
                    returncode=result.returncode or -1,
                )
                return self._halt(run, stage.id, error)

            if result.outcome == StepOutcome.TOLERATED:
                run.mark(stage.id, StageStatus.TOLERATED)
                run.warnings.append(f"{stage.title}: {result.diagnostic}")
            else:
                run.mark(stage.id, StageStatus.SUCCEEDED)

        run.mark(StageId.DONE, StageStatus.RUNNING)
        run.mark(StageId.DONE, StageStatus.SUCCEEDED)
        self._print_summary(version, run)
        return Ok(run)

    def _halt(self, run: PipelineRun, stage: StageId, error: PipelineError) -> Err[PipelineHalt]:
        run.mark(stage, StageStatus.FAILED)
        run.skip_remaining()
        return Err(PipelineHalt(stage=stage, error=error, run=run))

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def _validate(
        self, version_text: str, run: PipelineRun
    ) -> Result[ReleaseVersion, PipelineError]:
        policy = self._config.version
        parsed = parse_release_version(version_text, major=policy.major, minor=policy.minor)
        if isinstance(parsed, Err):
            return parsed
        run.version = parsed.value

        packages = discover_packages(self._root / self._config.packages.dir)
        if isinstance(packages, Err):
            e = packages.error
            return Err(ManifestUnreadable(path=e.path, reason=e.reason))

        order = plan_publish_order(
            self._config.packages.publish_order, packages.value, self._console
        )
        if isinstance(order, Err):
            return order
        run.order = order.value
        return Ok(parsed.value)

    def _propagate(self, stage: StageDef, run: PipelineRun) -> StepResult:
        assert run.version is not None
        exclusions = template_exclusions(self._config.packages, self._root)
        if isinstance(exclusions, Err):
            e = exclusions.error
            return _fatal(PropagationIncomplete(path=e.path, reason=e.reason, updated=0, total=0))

        result = propagate_version(
            workspace_root=self._root,
            config=self._config,
            version=run.version,
            exclusions=exclusions.value,
            console=self._console,
            dry_run=self._dry_run,
        )
        if isinstance(result, Err):
            return _fatal(result.error)
        return _ok()

    def _command_step(self, stage: StageDef, command: tuple[str, ...]) -> StepResult:
        name, *args = command
        return self._executor.run(
            Step(
                command=name,
                args=tuple(args),
                cwd=self._root,
                description=stage.title,
                policy=stage.policy,
            )
        )

    def _install(self, stage: StageDef, run: PipelineRun) -> StepResult:
        return self._command_step(stage, self._config.commands.install)

    def _build(self, stage: StageDef, run: PipelineRun) -> StepResult:
        return self._command_step(stage, self._config.commands.build)

    def _publish(self, stage: StageDef, run: PipelineRun) -> StepResult:
        result = publish_packages(
            run.order,
            workspace_root=self._root,
            config=self._config,
            executor=self._executor,
        )
        if isinstance(result, Err):
            run.published = list(result.error.completed)
            return _fatal(result.error.error)
        run.published = list(result.value)
        return _ok()

    def _tag(self, stage: StageDef, run: PipelineRun) -> StepResult:
        assert run.version is not None
        result = tag_packages(
            run.published,
            version=run.version,
            workspace_root=self._root,
            config=self._config,
            executor=self._executor,
        )
        if isinstance(result, Err):
            run.tagged = list(result.error.completed)
            return _fatal(result.error.error)
        run.tagged = list(result.value)
        self._console.success(f"All packages tagged as {self._config.registry.dist_tag}")
        return _ok()

    def _print_summary(self, version: ReleaseVersion, run: PipelineRun) -> None:
        registry = self._config.registry
        example = registry_naming(self._config).registry_name(
            self._config.packages.install_example
        )
        self._console.newline()
        for warning in run.warnings:
            self._console.warning(warning)
        self._console.success(
            f"Successfully published {len(run.published)} packages at version {version}"
        )
        self._console.newline()
        self._console.print(f"Packages are now available at: {registry.url}/")
        self._console.print(
            f"You can install them with: npm install {example}@{version} --registry {registry.url}/"
        )


def run_release(
    version_text: str,
    *,
    workspace_root: Path,
    config: ReleaseConfig,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[PipelineRun, PipelineHalt]:
    return ReleasePipeline(
        workspace_root=workspace_root,
        config=config,
        console=console,
        dry_run=dry_run,
    ).run(version_text)
