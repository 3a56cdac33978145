"""Loading of the per-project build support manifests.

For a project ``chef`` the manifest directory holds:

- ``chef.json``: build name -> list of [platform, version, arch]. The first
  entry of each list is the platform the build was produced on.
- ``chef-platform-names.json``: display names for platforms. Never parsed,
  it is republished as-is.
"""

from __future__ import annotations

import json
from pathlib import Path

from relpub.core.result import Err, Ok, Result
from relpub.core.structured import as_obj_list, as_str_dict, as_str_tuple
from relpub.services.release.errors import ReleaseError
from relpub.services.release.model import Build, BuildSupport, PlatformTuple, ProjectManifests


def build_support_path(manifests_dir: Path, project: str) -> Path:
    return manifests_dir / f"{project}.json"


def platform_names_path(manifests_dir: Path, project: str) -> Path:
    return manifests_dir / f"{project}-platform-names.json"


def _missing(what: str, project: str, path: Path) -> ReleaseError:
    return ReleaseError(
        kind="manifest_missing",
        message=f"Could not locate {what} file for {project} at {path.resolve()}.",
        hint="Pass --manifests-dir or set [paths].manifests in release.toml.",
    )


def _invalid(path: Path, reason: str) -> ReleaseError:
    return ReleaseError(kind="manifest_invalid", message=f"{path}: {reason}")


def parse_build_support(data: object, *, path: Path) -> Result[BuildSupport, ReleaseError]:
    """Validate decoded JSON and turn it into a BuildSupport.

    JSON object order is kept: it is the order builds are published in.
    """
    table = as_str_dict(data)
    if table is None:
        return Err(_invalid(path, "expected an object mapping build names to platforms"))

    builds: list[Build] = []
    for name, raw_platforms in table.items():
        entries = as_obj_list(raw_platforms)
        if not entries:
            return Err(_invalid(path, f"build '{name}' must list at least one platform"))

        platforms: list[PlatformTuple] = []
        for entry in entries:
            fields = as_str_tuple(entry)
            if fields is None or len(fields) != 3:
                return Err(
                    _invalid(
                        path,
                        f"build '{name}': expected [platform, version, arch], got {entry!r}",
                    )
                )
            platforms.append(PlatformTuple(*fields))

        builds.append(Build(name=name, platforms=tuple(platforms)))

    return Ok(BuildSupport(builds=tuple(builds)))


def load_build_support(manifests_dir: Path, project: str) -> Result[BuildSupport, ReleaseError]:
    path = build_support_path(manifests_dir, project)
    if not path.is_file():
        return Err(_missing("build support", project, path))

    try:
        data: object = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        return Err(_invalid(path, f"invalid JSON: {e}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(_invalid(path, f"cannot read: {e}"))

    return parse_build_support(data, path=path)


def load_project_manifests(
    manifests_dir: Path, project: str
) -> Result[ProjectManifests, ReleaseError]:
    """Load both required manifests for ``project``.

    Either file missing is fatal; the error names the expected absolute path.
    """
    build_support = load_build_support(manifests_dir, project)
    if isinstance(build_support, Err):
        return build_support

    names_path = platform_names_path(manifests_dir, project)
    if not names_path.is_file():
        return Err(_missing("platform names", project, names_path))

    return Ok(
        ProjectManifests(
            project=project,
            build_support=build_support.value,
            platform_names_path=names_path,
        )
    )
