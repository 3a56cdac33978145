from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from relpub.core.result import Err, Ok, Result
from relpub.output.console import ConsoleProtocol
from relpub.services.release.errors import ReleaseError
from relpub.services.release.model import (
    BuildSupport,
    LocalPackage,
    PlatformSupportManifest,
    UploadedBuild,
    s3_url,
)
from relpub.services.release.packages import find_package
from relpub.services.release.storage import Uploader


@dataclass(frozen=True, slots=True)
class AggregateResult:
    manifest: PlatformSupportManifest
    uploaded: tuple[UploadedBuild, ...]
    skipped: tuple[str, ...]


def upload_builds(
    *,
    build_support: BuildSupport,
    packages: Sequence[LocalPackage],
    version: str,
    bucket: str,
    uploader: Uploader,
    console: ConsoleProtocol,
    ignore_missing_packages: bool = False,
) -> Result[AggregateResult, ReleaseError]:
    """Upload the package of every build and collect the platforms it supports.

    Builds are handled in manifest order. A build is recorded in the manifest
    only after its upload succeeded, under every platform it declares. A later
    build declaring the same platform/version/arch replaces the earlier entry.

    A build with no local package is an error, or a warning and a skip when
    ``ignore_missing_packages`` is set. Any upload failure stops the loop.
    """
    manifest = PlatformSupportManifest()
    uploaded: list[UploadedBuild] = []
    skipped: list[str] = []

    for build in build_support.builds:
        canonical = build.canonical
        package = find_package(build.name, packages)

        if package is None:
            message = f"Could not locate build package for [{canonical.label}]."
            if ignore_missing_packages:
                console.warning(message)
                skipped.append(build.name)
                continue
            return Err(
                ReleaseError(
                    kind="package_missing",
                    message=message,
                    hint=(
                        f"No file under pkg/ contains '{build.name}'. "
                        "Use --ignore-missing-packages to publish without it."
                    ),
                )
            )

        location = canonical.package_location(package.filename)
        console.print(f"UPLOAD: {package.relpath} -> {location}")

        url = s3_url(bucket, location)
        result = uploader.put(package.path, url, public=True, progress=True)
        if isinstance(result, Err):
            return result
        console.success(url)

        for target in build.platforms:
            manifest.record(target, version, location)
        uploaded.append(UploadedBuild(build=build.name, package=package, location=location))

    return Ok(
        AggregateResult(manifest=manifest, uploaded=tuple(uploaded), skipped=tuple(skipped))
    )
