"""Tag sequencer: point the dist-tag at the just-published version.

Runs only after every publish succeeded. A failure stops tagging; packages
already tagged stay tagged, and the remainder is retried with
``mrel tag VERSION --from PACKAGE``.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from mrel.core.config import ReleaseConfig
from mrel.core.result import Result
from mrel.release.model import FailurePolicy, Step
from mrel.release.version import ReleaseVersion
from mrel.services.release.executor import StepExecutor
from mrel.services.release.publish import registry_naming
from mrel.services.release.sequence import SequenceHalt, run_sequence


def tag_step(
    identifier: str,
    *,
    version: ReleaseVersion,
    workspace_root: Path,
    config: ReleaseConfig,
) -> Step:
    command, *args = config.commands.dist_tag
    spec = f"{registry_naming(config).registry_name(identifier)}@{version}"
    return Step(
        command=command,
        args=(*args, spec, config.registry.dist_tag, "--registry", f"{config.registry.url}/"),
        cwd=workspace_root,
        description=f"Tagging {spec} as {config.registry.dist_tag}",
        policy=FailurePolicy.FATAL,
        package=identifier,
    )


def tag_packages(
    published: Sequence[str],
    *,
    version: ReleaseVersion,
    workspace_root: Path,
    config: ReleaseConfig,
    executor: StepExecutor,
) -> Result[tuple[str, ...], SequenceHalt]:
    executor.console.info(f"Tagging {len(published)} packages as {config.registry.dist_tag}")
    return run_sequence(
        published,
        lambda identifier: tag_step(
            identifier, version=version, workspace_root=workspace_root, config=config
        ),
        executor,
    )


def remaining_from(published: Sequence[str], start: str | None) -> tuple[str, ...] | None:
    """Suffix of ``published`` starting at ``start`` (None if start is unknown)."""
    if start is None:
        return tuple(published)
    if start not in published:
        return None
    return tuple(published[list(published).index(start) :])
