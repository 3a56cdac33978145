from __future__ import annotations

import os
from pathlib import Path

from relpub.core.result import Err, Ok, Result
from relpub.output.console import ConsoleProtocol
from relpub.services.release.errors import ReleaseError
from relpub.services.release.model import PlatformSupportManifest
from relpub.services.release.storage import Uploader


def platform_support_url(bucket: str, project: str, version: str) -> str:
    return f"s3://{bucket}/{project}-platform-support/{version}.json"


def platform_names_url(bucket: str, project: str) -> str:
    return f"s3://{bucket}/{project}-platform-support/{project}-platform-names.json"


def legacy_platform_support_url(bucket: str, version: str) -> str:
    return f"s3://{bucket}/platform-support/{version}.json"


def write_manifest(manifest: PlatformSupportManifest, out_path: Path) -> Result[Path, ReleaseError]:
    """Write pretty-printed JSON, replacing any previous file in one step."""
    tmp = Path(f"{out_path}.tmp")
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(manifest.to_json(), encoding="utf-8")
        os.replace(tmp, out_path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        return Err(ReleaseError(kind="io_failed", message=f"cannot write {out_path}: {e}"))
    return Ok(out_path)


def _put(
    uploader: Uploader, console: ConsoleProtocol, source: Path, label: str, url: str
) -> Result[None, ReleaseError]:
    console.print(f"UPLOAD: {label} -> {url}")
    result = uploader.put(source, url)
    if isinstance(result, Ok):
        console.success(url)
    return result


def publish_manifests(
    *,
    manifest: PlatformSupportManifest,
    out_path: Path,
    platform_names_path: Path,
    project: str,
    version: str,
    bucket: str,
    uploader: Uploader,
    console: ConsoleProtocol,
    legacy_path: bool = False,
) -> Result[tuple[str, ...], ReleaseError]:
    """Write platform-support.json and upload it with the platform names file.

    Returns the URLs published, in order. Uploads are not transactional: on
    failure, earlier uploads stay in place.
    """
    written = write_manifest(manifest, out_path)
    if isinstance(written, Err):
        return written

    uploads = [
        (out_path, out_path.name, platform_support_url(bucket, project, version)),
        (
            platform_names_path,
            platform_names_path.name,
            platform_names_url(bucket, project),
        ),
    ]
    # Compatibility copy for consumers that still read the unscoped path.
    # Remove once they read <project>-platform-support/.
    if legacy_path:
        uploads.append((out_path, out_path.name, legacy_platform_support_url(bucket, version)))

    published: list[str] = []
    for source, label, url in uploads:
        result = _put(uploader, console, source, label, url)
        if isinstance(result, Err):
            return result
        published.append(url)

    return Ok(tuple(published))
