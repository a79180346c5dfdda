"""package.json reading, serialization and package discovery.

Manifests are serialized the way the JavaScript tooling writes them:
tab indentation, key order preserved, non-ASCII kept verbatim and a
trailing newline. Re-serializing an unchanged manifest is byte-identical.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from mrel.core.result import Err, Ok, Result
from mrel.core.structured import StrDict, as_str_dict, get_str, get_table
from mrel.release.model import PackageDescriptor

MANIFEST_FILE = "package.json"
WORKSPACE_PROTOCOL = "workspace:"

# Dependency maps resolved at publish time. devDependencies are not part of
# the published contract and may legitimately form cycles.
_RUNTIME_DEPENDENCY_FIELDS = ("dependencies", "peerDependencies", "optionalDependencies")


@dataclass(frozen=True, slots=True)
class ManifestError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"{self.path}: {self.reason}"


def read_manifest(path: Path) -> Result[StrDict, ManifestError]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ManifestError(path=path, reason="file not found"))
    except OSError as e:
        return Err(ManifestError(path=path, reason=str(e)))
    except UnicodeDecodeError as e:
        return Err(ManifestError(path=path, reason=f"not valid UTF-8: {e}"))

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ManifestError(path=path, reason=f"invalid JSON: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(ManifestError(path=path, reason="manifest root must be a JSON object"))
    return Ok(data)


def serialize_manifest(data: StrDict) -> str:
    return json.dumps(data, indent="\t", ensure_ascii=False) + "\n"


def with_version(data: StrDict, version: str) -> StrDict:
    """Return a copy of the manifest with ``version`` replaced.

    The key keeps its position; a manifest without a version gets it appended.
    """
    out = dict(data)
    out["version"] = version
    return out


def workspace_dependencies(data: StrDict) -> tuple[str, ...]:
    """Registry names referenced with a ``workspace:`` range, sorted."""
    names: set[str] = set()
    for field_name in _RUNTIME_DEPENDENCY_FIELDS:
        deps = get_table(data, field_name) or {}
        for name, spec in deps.items():
            if isinstance(spec, str) and spec.startswith(WORKSPACE_PROTOCOL):
                names.add(name)
    return tuple(sorted(names))


def list_package_dirs(packages_dir: Path) -> list[Path]:
    """Real directories under packages_dir that contain a package.json, sorted.

    Symlinked directories are skipped so an aliased package is never bumped or
    published twice.
    """
    if not packages_dir.is_dir():
        return []
    return [
        child
        for child in sorted(packages_dir.iterdir())
        if child.is_dir() and not child.is_symlink() and (child / MANIFEST_FILE).is_file()
    ]


def load_package(package_dir: Path) -> Result[PackageDescriptor, ManifestError]:
    manifest_path = package_dir / MANIFEST_FILE
    data = read_manifest(manifest_path)
    if isinstance(data, Err):
        return data

    name = get_str(data.value, "name")
    if name is None:
        return Err(ManifestError(path=manifest_path, reason="missing 'name' field"))

    return Ok(
        PackageDescriptor(
            identifier=package_dir.name,
            path=package_dir,
            name=name,
            workspace_dependencies=workspace_dependencies(data.value),
        )
    )


def discover_packages(packages_dir: Path) -> Result[dict[str, PackageDescriptor], ManifestError]:
    """Load every package under packages_dir, keyed by identifier."""
    packages: dict[str, PackageDescriptor] = {}
    for package_dir in list_package_dirs(packages_dir):
        loaded = load_package(package_dir)
        if isinstance(loaded, Err):
            return loaded
        packages[loaded.value.identifier] = loaded.value
    return Ok(packages)
