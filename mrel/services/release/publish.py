"""Publish sequencer.

Each package is published from its own directory with the configured
publish command (``bun publish --tolerate-republish`` by default), which
resolves ``workspace:`` references to the concrete version and no-ops when
the name+version pair already exists on the registry. That is why versions
must be bumped before every publish run: republishing without a bump
updates nothing.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from mrel.core.config import ReleaseConfig
from mrel.core.result import Result
from mrel.release.model import FailurePolicy, RegistryNaming, Step
from mrel.services.release.executor import StepExecutor
from mrel.services.release.sequence import SequenceHalt, run_sequence


def registry_naming(config: ReleaseConfig) -> RegistryNaming:
    return RegistryNaming(
        scope=config.registry.scope,
        core_package=config.registry.core_package,
        core_name=config.registry.core_name,
    )


def publish_step(identifier: str, *, workspace_root: Path, config: ReleaseConfig) -> Step:
    command, *args = config.commands.publish
    name = registry_naming(config).registry_name(identifier)
    return Step(
        command=command,
        args=(*args, "--registry", config.registry.url),
        cwd=workspace_root / config.packages.dir / identifier,
        description=f"Publishing {name}",
        policy=FailurePolicy.FATAL,
        package=identifier,
    )


def publish_packages(
    order: Sequence[str],
    *,
    workspace_root: Path,
    config: ReleaseConfig,
    executor: StepExecutor,
) -> Result[tuple[str, ...], SequenceHalt]:
    """Publish every package in order; returns the identifiers published."""
    executor.console.info(f"Publishing {len(order)} packages to {config.registry.url}")
    return run_sequence(
        order,
        lambda identifier: publish_step(identifier, workspace_root=workspace_root, config=config),
        executor,
    )
