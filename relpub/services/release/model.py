from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PlatformTuple:
    """One deployment target. All three fields are opaque strings."""

    platform: str
    version: str
    arch: str

    @property
    def label(self) -> str:
        return f"{self.platform}-{self.version}-{self.arch}"

    def package_location(self, filename: str) -> str:
        """Bucket-relative path a package built for this target is stored at."""
        return f"/{self.platform}/{self.version}/{self.arch}/{filename}"


@dataclass(frozen=True, slots=True)
class Build:
    """A build declared in <project>.json.

    By convention the first platform is the one the build was produced on
    (the canonical platform); the rest are targets it also supports.
    """

    name: str
    platforms: tuple[PlatformTuple, ...]

    @property
    def canonical(self) -> PlatformTuple:
        return self.platforms[0]


@dataclass(frozen=True, slots=True)
class BuildSupport:
    """Builds in the order the manifest declares them."""

    builds: tuple[Build, ...]


@dataclass(frozen=True, slots=True)
class ProjectManifests:
    project: str
    build_support: BuildSupport
    platform_names_path: Path


@dataclass(frozen=True, slots=True)
class LocalPackage:
    """A package file found on disk.

    ``relpath`` is relative to the discovery root, POSIX separators.
    """

    path: Path
    relpath: str

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class UploadedBuild:
    build: str
    package: LocalPackage
    location: str


def s3_url(bucket: str, location: str) -> str:
    """Full object URL for a bucket-relative location."""
    return f"s3://{bucket}/{location.lstrip('/')}"


def _empty_tree() -> dict[str, dict[str, dict[str, dict[str, str]]]]:
    return {}


@dataclass
class PlatformSupportManifest:
    """platform -> platform version -> arch -> release version -> location.

    Levels are created on first write and never removed. Writing an
    existing leaf replaces it.
    """

    tree: dict[str, dict[str, dict[str, dict[str, str]]]] = field(default_factory=_empty_tree)

    def record(self, target: PlatformTuple, release_version: str, location: str) -> None:
        versions = self.tree.setdefault(target.platform, {})
        arches = versions.setdefault(target.version, {})
        releases = arches.setdefault(target.arch, {})
        releases[release_version] = location

    def as_dict(self) -> dict[str, dict[str, dict[str, dict[str, str]]]]:
        return self.tree

    def to_json(self) -> str:
        return json.dumps(self.tree, indent=2, sort_keys=True) + "\n"


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    project: str
    version: str
    bucket: str
    ignore_missing_packages: bool = False
    legacy_path: bool = False


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    uploaded: tuple[UploadedBuild, ...]
    skipped: tuple[str, ...]
    manifest_path: Path
    published: tuple[str, ...]
