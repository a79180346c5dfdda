"""Typed configuration loading and access.

The optional ``mrel.toml`` at the workspace root overrides the defaults
below. Every section is optional; a missing or mistyped value falls back to
its default, while a file that is not valid TOML is a ConfigError.

Example:

    [registry]
    url = "http://localhost:4873"
    scope = "@remotion"

    [version]
    major = 4
    minor = 0

    [packages]
    publish_order = ["core", "bundler", "renderer", "cli"]
    exclude = ["template-helloworld"]

    [[version_files]]
    package = "media-parser"
    path = "src/version.ts"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_list, get_str, get_str_tuple, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "CommandsConfig",
    "ConfigError",
    "DEFAULT_PUBLISH_ORDER",
    "PackagesConfig",
    "RegistryConfig",
    "ReleaseConfig",
    "VersionFileSpec",
    "VersionPolicy",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "mrel.toml"

DEFAULT_REGISTRY_URL = "http://localhost:4873"

# Curated publish order: every package is listed after the workspace
# packages it depends on. Keep this in sync when adding packages
# (`mrel order --check` verifies it against the manifests).
DEFAULT_PUBLISH_ORDER: tuple[str, ...] = (
    "core",
    "licensing",
    "streaming",
    "media-parser",
    "webcodecs",
    "zod-types",
    "studio-shared",
    "player",
    "media-utils",
    "compositor-darwin-arm64",
    "compositor-darwin-x64",
    "compositor-linux-arm64-gnu",
    "compositor-linux-arm64-musl",
    "compositor-linux-x64-gnu",
    "compositor-linux-x64-musl",
    "compositor-win32-x64-msvc",
    "renderer",
    "web-renderer",
    "studio",
    "bundler",
    "studio-server",
    "cli",
    "serverless-client",
    "serverless",
    "lambda-client",
    "lambda",
    "tailwind-v4",
    "enable-scss",
    "skia",
)

_CORE_VERSION_DOC = """\
/**
 * @description Provides the current version number of the Remotion library.
 * @see [Documentation](https://remotion.dev/docs/version)
 * @returns {string} The current version of the remotion package
 */"""


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    url: str = DEFAULT_REGISTRY_URL
    scope: str = "@remotion"
    core_package: str = "core"
    core_name: str = "remotion"
    dist_tag: str = "latest"


@dataclass(frozen=True, slots=True)
class VersionPolicy:
    """Pinned major/minor line; only the patch moves between releases."""

    major: int = 4
    minor: int = 0


@dataclass(frozen=True, slots=True)
class PackagesConfig:
    dir: str = "packages"
    publish_order: tuple[str, ...] = DEFAULT_PUBLISH_ORDER
    exclude: tuple[str, ...] = ()
    # JSON list of template objects; "templateInMonorepo" entries are excluded
    templates_manifest: str | None = None
    install_example: str = "cli"


@dataclass(frozen=True, slots=True)
class CommandsConfig:
    install: tuple[str, ...] = ("bun", "install")
    build: tuple[str, ...] = ("bun", "run", "build")
    publish: tuple[str, ...] = ("bun", "publish", "--tolerate-republish")
    dist_tag: tuple[str, ...] = ("npm", "dist-tag", "add")


@dataclass(frozen=True, slots=True)
class VersionFileSpec:
    """A source file embedding the version as an exported constant."""

    package: str
    path: str = "src/version.ts"
    doc: str | None = None


def _default_version_files() -> tuple[VersionFileSpec, ...]:
    return (
        VersionFileSpec(package="core", doc=_CORE_VERSION_DOC),
        VersionFileSpec(package="media-parser"),
    )


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    version: VersionPolicy = field(default_factory=VersionPolicy)
    packages: PackagesConfig = field(default_factory=PackagesConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
    version_files: tuple[VersionFileSpec, ...] = field(default_factory=_default_version_files)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create ReleaseConfig from a mapping (parsed TOML)."""
        registry: StrDict = get_table(data, "registry") or {}
        version: StrDict = get_table(data, "version") or {}
        packages: StrDict = get_table(data, "packages") or {}
        commands: StrDict = get_table(data, "commands") or {}

        d_registry = RegistryConfig()
        d_version = VersionPolicy()
        d_packages = PackagesConfig()
        d_commands = CommandsConfig()

        return cls(
            registry=RegistryConfig(
                url=(get_str(registry, "url") or d_registry.url).rstrip("/"),
                scope=get_str(registry, "scope") or d_registry.scope,
                core_package=get_str(registry, "core_package") or d_registry.core_package,
                core_name=get_str(registry, "core_name") or d_registry.core_name,
                dist_tag=get_str(registry, "dist_tag") or d_registry.dist_tag,
            ),
            version=VersionPolicy(
                major=_non_negative(get_int(version, "major"), d_version.major),
                minor=_non_negative(get_int(version, "minor"), d_version.minor),
            ),
            packages=PackagesConfig(
                dir=get_str(packages, "dir") or d_packages.dir,
                publish_order=get_str_tuple(packages, "publish_order") or d_packages.publish_order,
                exclude=get_str_tuple(packages, "exclude") or d_packages.exclude,
                templates_manifest=get_str(packages, "templates_manifest"),
                install_example=get_str(packages, "install_example") or d_packages.install_example,
            ),
            commands=CommandsConfig(
                install=get_str_tuple(commands, "install") or d_commands.install,
                build=get_str_tuple(commands, "build") or d_commands.build,
                publish=get_str_tuple(commands, "publish") or d_commands.publish,
                dist_tag=get_str_tuple(commands, "dist_tag") or d_commands.dist_tag,
            ),
            version_files=_version_files_or_default(data),
        )


def _non_negative(value: int | None, default: int) -> int:
    if value is None or value < 0:
        return default
    return value


def _version_files_or_default(data: Mapping[str, object]) -> tuple[VersionFileSpec, ...]:
    parsed = _parse_version_files(data)
    if parsed is None:
        return _default_version_files()
    return parsed


def _parse_version_files(data: Mapping[str, object]) -> tuple[VersionFileSpec, ...] | None:
    items = get_list(data, "version_files")
    if items is None:
        return None

    specs: list[VersionFileSpec] = []
    for item in items:
        table = as_str_dict(item)
        if table is None:
            continue
        package = get_str(table, "package")
        if package is None:
            continue
        specs.append(
            VersionFileSpec(
                package=package,
                path=get_str(table, "path") or "src/version.ts",
                doc=get_str(table, "doc"),
            )
        )
    return tuple(specs)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to mrel.toml

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Like load_config, but a missing file yields the defaults."""
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)
