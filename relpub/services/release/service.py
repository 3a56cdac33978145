from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relpub.core.config import Config
from relpub.core.result import Err, Ok, Result
from relpub.output.console import ConsoleProtocol, Style
from relpub.services.release.aggregate import upload_builds
from relpub.services.release.errors import ReleaseError
from relpub.services.release.manifests import load_project_manifests
from relpub.services.release.model import ReleaseRequest, ReleaseSummary
from relpub.services.release.packages import discover_packages
from relpub.services.release.publish import publish_manifests
from relpub.services.release.storage import Uploader


@dataclass(frozen=True, slots=True)
class ReleasePaths:
    """Absolute inputs and outputs of a run."""

    root: Path
    manifests_dir: Path
    package_glob: str
    output: Path

    @classmethod
    def from_config(
        cls,
        root: Path,
        config: Config,
        *,
        manifests_dir: Path | None = None,
        output: Path | None = None,
    ) -> ReleasePaths:
        return cls(
            root=root,
            manifests_dir=root / (manifests_dir or Path(config.paths.manifests)),
            package_glob=config.paths.packages,
            output=root / (output or Path(config.paths.output)),
        )


def _validate_request(request: ReleaseRequest, paths: ReleasePaths) -> Result[None, ReleaseError]:
    for name, value in (
        ("project", request.project),
        ("version", request.version),
        ("bucket", request.bucket),
    ):
        if not value.strip():
            return Err(ReleaseError(kind="invalid_input", message=f"--{name} must not be empty"))
        if any(ch.isspace() for ch in value) or "/" in value:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"--{name} must not contain whitespace or '/': {value!r}",
                )
            )

    if Path(paths.package_glob).is_absolute():
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"package pattern must be relative: {paths.package_glob}",
            )
        )
    return Ok(None)


def run_release(
    *,
    request: ReleaseRequest,
    paths: ReleasePaths,
    uploader: Uploader,
    console: ConsoleProtocol,
) -> Result[ReleaseSummary, ReleaseError]:
    """Publish one release of ``request.project``.

    Fails fast: the first error ends the run. Nothing is written locally
    before every build has been uploaded.
    """
    ok = _validate_request(request, paths)
    if isinstance(ok, Err):
        return ok

    manifests = load_project_manifests(paths.manifests_dir, request.project)
    if isinstance(manifests, Err):
        return manifests

    ok = uploader.ensure_available()
    if isinstance(ok, Err):
        return ok

    packages = discover_packages(paths.root, paths.package_glob)
    console.print(
        f"{len(manifests.value.build_support.builds)} build(s) declared, "
        f"{len(packages)} local package(s) found",
        Style.DIM,
    )

    console.header(f"Uploading {request.project} {request.version} packages")
    aggregated = upload_builds(
        build_support=manifests.value.build_support,
        packages=packages,
        version=request.version,
        bucket=request.bucket,
        uploader=uploader,
        console=console,
        ignore_missing_packages=request.ignore_missing_packages,
    )
    if isinstance(aggregated, Err):
        return aggregated

    console.header("Publishing platform support")
    published = publish_manifests(
        manifest=aggregated.value.manifest,
        out_path=paths.output,
        platform_names_path=manifests.value.platform_names_path,
        project=request.project,
        version=request.version,
        bucket=request.bucket,
        uploader=uploader,
        console=console,
        legacy_path=request.legacy_path,
    )
    if isinstance(published, Err):
        return published

    return Ok(
        ReleaseSummary(
            uploaded=aggregated.value.uploaded,
            skipped=aggregated.value.skipped,
            manifest_path=paths.output,
            published=published.value,
        )
    )
