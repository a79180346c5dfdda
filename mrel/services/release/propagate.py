"""Version propagation: manifests and embedded version constants.

Runs in two phases. The plan phase reads and parses every targeted manifest
and checks every version-constant file exists, without writing anything. The
write phase then replaces files one by one. Each replacement is atomic and
idempotent, so a failure there leaves earlier files updated, later files
untouched, and is reported with the count of files written so far.

Version-constant files are always fully regenerated, never patched.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mrel.core.config import ReleaseConfig, VersionFileSpec
from mrel.core.result import Err, Ok, Result
from mrel.core.structured import get_str
from mrel.output.console import ConsoleProtocol, Style
from mrel.platform.files import atomic_write_text
from mrel.release.errors import PropagationIncomplete
from mrel.release.version import ReleaseVersion
from mrel.services.release.manifests import (
    MANIFEST_FILE,
    list_package_dirs,
    read_manifest,
    serialize_manifest,
    with_version,
)

GENERATED_HEADER = "// Automatically generated on publish"


@dataclass(frozen=True, slots=True)
class _PlannedWrite:
    path: Path
    label: str
    content: str
    is_manifest: bool


@dataclass(frozen=True, slots=True)
class PropagationReport:
    version: ReleaseVersion
    packages: tuple[str, ...]
    unchanged: tuple[str, ...]
    version_files: tuple[Path, ...]
    excluded: tuple[str, ...]

    @property
    def updated_count(self) -> int:
        return len(self.packages)


def render_version_file(version: ReleaseVersion, *, doc: str | None = None) -> str:
    """Full content of a generated version constant file."""
    constant = f"export const VERSION = '{version}';\n"
    if doc:
        return f"{GENERATED_HEADER}\n\n{doc}\n{constant}"
    return f"{GENERATED_HEADER}\n{constant}"


def _plan_manifests(
    packages_dir: Path,
    version: ReleaseVersion,
    exclusions: frozenset[str],
    total: int,
) -> Result[tuple[list[_PlannedWrite], list[str]], PropagationIncomplete]:
    writes: list[_PlannedWrite] = []
    excluded: list[str] = []
    for package_dir in list_package_dirs(packages_dir):
        if package_dir.name in exclusions:
            excluded.append(package_dir.name)
            continue

        path = package_dir / MANIFEST_FILE
        data = read_manifest(path)
        if isinstance(data, Err):
            return Err(
                PropagationIncomplete(path=path, reason=data.error.reason, updated=0, total=total)
            )

        writes.append(
            _PlannedWrite(
                path=path,
                label=get_str(data.value, "name") or package_dir.name,
                content=serialize_manifest(with_version(data.value, str(version))),
                is_manifest=True,
            )
        )
    return Ok((writes, excluded))


def _plan_version_files(
    packages_dir: Path,
    specs: tuple[VersionFileSpec, ...],
    version: ReleaseVersion,
    total: int,
) -> Result[list[_PlannedWrite], PropagationIncomplete]:
    writes: list[_PlannedWrite] = []
    for spec in specs:
        path = packages_dir / spec.package / spec.path
        if not path.is_file():
            return Err(
                PropagationIncomplete(
                    path=path, reason="version file not found", updated=0, total=total
                )
            )
        writes.append(
            _PlannedWrite(
                path=path,
                label=f"{spec.package}/{spec.path}",
                content=render_version_file(version, doc=spec.doc),
                is_manifest=False,
            )
        )
    return Ok(writes)


def _count_targets(
    packages_dir: Path, exclusions: frozenset[str], specs: tuple[VersionFileSpec, ...]
) -> int:
    manifests = [d for d in list_package_dirs(packages_dir) if d.name not in exclusions]
    return len(manifests) + len(specs)


def _is_current(path: Path, content: str) -> bool:
    try:
        return path.read_bytes() == content.encode("utf-8")
    except OSError:
        return False


def propagate_version(
    *,
    workspace_root: Path,
    config: ReleaseConfig,
    version: ReleaseVersion,
    exclusions: frozenset[str],
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[PropagationReport, PropagationIncomplete]:
    """Write ``version`` into every eligible manifest and version file.

    With ``dry_run`` the plan phase runs and is reported, but nothing is written.
    """
    packages_dir = workspace_root / config.packages.dir
    total = _count_targets(packages_dir, exclusions, config.version_files)

    planned = _plan_manifests(packages_dir, version, exclusions, total)
    if isinstance(planned, Err):
        return planned
    manifest_writes, excluded = planned.value

    version_writes = _plan_version_files(packages_dir, config.version_files, version, total)
    if isinstance(version_writes, Err):
        return version_writes

    verb = "Would update" if dry_run else "Updated"
    written = 0
    packages: list[str] = []
    unchanged: list[str] = []
    version_files: list[Path] = []
    for write in [*manifest_writes, *version_writes.value]:
        current = _is_current(write.path, write.content)
        if not current and not dry_run:
            try:
                atomic_write_text(write.path, write.content)
            except OSError as e:
                return Err(
                    PropagationIncomplete(
                        path=write.path, reason=str(e), updated=written, total=total
                    )
                )
        written += 1

        if write.is_manifest:
            packages.append(write.label)
            if current:
                unchanged.append(write.label)
        else:
            version_files.append(write.path)

        if current:
            console.print(f"{write.label} already at {version}", Style.DIM)
        else:
            console.print(f"{verb} {write.label} to {version}", Style.SUCCESS)

    for name in excluded:
        console.print(f"Skipped template {name}", Style.DIM)

    console.success(f"{verb} {len(packages)} packages to version {version}")
    console.success(f"{verb} {len(version_files)} version files")

    return Ok(
        PropagationReport(
            version=version,
            packages=tuple(packages),
            unchanged=tuple(unchanged),
            version_files=tuple(version_files),
            excluded=tuple(excluded),
        )
    )
