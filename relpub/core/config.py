"""Typed loading of release.toml.

The file is optional. Every key has a default, so a run with no config
behaves like the historical Jenkins release job.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, as_str_tuple, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "LegacyConfig",
    "PathsConfig",
    "UploadConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "release.toml"

DEFAULT_MANIFESTS_DIR = "jenkins"
DEFAULT_PACKAGE_GLOB = "**/pkg/*"
DEFAULT_OUTPUT = "platform-support.json"
DEFAULT_UPLOAD_COMMAND = "s3cmd"
# Large installers need time to transfer.
DEFAULT_UPLOAD_TIMEOUT_SECONDS = 20 * 60
DEFAULT_LEGACY_PROJECTS: tuple[str, ...] = ("chef",)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Locations of inputs and outputs, relative to the working directory."""

    manifests: str = DEFAULT_MANIFESTS_DIR
    packages: str = DEFAULT_PACKAGE_GLOB
    output: str = DEFAULT_OUTPUT


@dataclass(frozen=True, slots=True)
class UploadConfig:
    command: str = DEFAULT_UPLOAD_COMMAND
    timeout_seconds: int = DEFAULT_UPLOAD_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class LegacyConfig:
    """Projects that also publish to the unscoped platform-support/ path.

    Only exists for an external consumer that still reads the old location.
    Drop the entries (and this table) once that consumer reads
    <project>-platform-support/.
    """

    projects: tuple[str, ...] = DEFAULT_LEGACY_PROJECTS

    def enabled_for(self, project: str) -> bool:
        return project in self.projects


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    legacy: LegacyConfig = field(default_factory=LegacyConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        paths: StrDict = get_table(data, "paths") or {}
        upload: StrDict = get_table(data, "upload") or {}
        legacy: StrDict = get_table(data, "legacy") or {}

        timeout = get_int(upload, "timeout_seconds")
        if timeout is not None and timeout <= 0:
            raise ValueError("upload.timeout_seconds must be positive")

        legacy_projects = as_str_tuple(legacy.get("projects"))

        return cls(
            paths=PathsConfig(
                manifests=get_str(paths, "manifests") or DEFAULT_MANIFESTS_DIR,
                packages=get_str(paths, "packages") or DEFAULT_PACKAGE_GLOB,
                output=get_str(paths, "output") or DEFAULT_OUTPUT,
            ),
            upload=UploadConfig(
                command=get_str(upload, "command") or DEFAULT_UPLOAD_COMMAND,
                timeout_seconds=timeout or DEFAULT_UPLOAD_TIMEOUT_SECONDS,
            ),
            legacy=LegacyConfig(
                projects=(
                    legacy_projects if legacy_projects is not None else DEFAULT_LEGACY_PROJECTS
                ),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax in {path}: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config {path}: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse release.toml.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure in {path}: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config if the file exists, otherwise return defaults.

    A file that exists but is broken is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
