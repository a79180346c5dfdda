"""Template packages that must never be auto-versioned.

Templates live in the monorepo so they can be developed alongside the
packages, but they carry their own versions. The exclusion set is the
union of the configured identifiers and the ``templateInMonorepo`` entries of
an optional templates manifest (a JSON list of template objects).
"""

from __future__ import annotations

import json
from pathlib import Path

from mrel.core.config import PackagesConfig
from mrel.core.result import Err, Ok, Result
from mrel.core.structured import as_obj_list, as_str_dict, get_str
from mrel.services.release.manifests import ManifestError


def read_templates_manifest(path: Path) -> Result[frozenset[str], ManifestError]:
    try:
        obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ManifestError(path=path, reason="templates manifest not found"))
    except OSError as e:
        return Err(ManifestError(path=path, reason=str(e)))
    except json.JSONDecodeError as e:
        return Err(ManifestError(path=path, reason=f"invalid JSON: {e}"))
    except UnicodeDecodeError as e:
        return Err(ManifestError(path=path, reason=f"not valid UTF-8: {e}"))

    items = as_obj_list(obj)
    if items is None:
        return Err(ManifestError(path=path, reason="templates manifest must be a JSON list"))

    names: set[str] = set()
    for item in items:
        table = as_str_dict(item)
        if table is None:
            continue
        local = get_str(table, "templateInMonorepo")
        if local is not None:
            names.add(local)
    return Ok(frozenset(names))


def template_exclusions(
    packages: PackagesConfig, workspace_root: Path
) -> Result[frozenset[str], ManifestError]:
    excluded = set(packages.exclude)
    if packages.templates_manifest is None:
        return Ok(frozenset(excluded))

    from_manifest = read_templates_manifest(workspace_root / packages.templates_manifest)
    if isinstance(from_manifest, Err):
        return from_manifest
    return Ok(frozenset(excluded | from_manifest.value))
