"""Object store uploads.

Uploads go through s3cmd, one blocking call per object. There is no retry:
the first failure ends the run and anything already uploaded stays
published.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from relpub.core.config import DEFAULT_UPLOAD_COMMAND, DEFAULT_UPLOAD_TIMEOUT_SECONDS
from relpub.core.result import Err, Ok, Result
from relpub.output.console import ConsoleProtocol, Style
from relpub.platform.process import run_live, which
from relpub.services.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class UploadRequest:
    source: Path
    destination: str
    public: bool = False
    progress: bool = False


class Uploader(Protocol):
    def ensure_available(self) -> Result[None, ReleaseError]: ...

    def put(
        self,
        source: Path,
        destination: str,
        *,
        public: bool = False,
        progress: bool = False,
    ) -> Result[None, ReleaseError]: ...


def s3cmd_put_command(
    request: UploadRequest, *, command: str = DEFAULT_UPLOAD_COMMAND
) -> list[str]:
    cmd = [command, "put"]
    if request.progress:
        cmd.append("--progress")
    if request.public:
        cmd.append("--acl-public")
    cmd += [str(request.source), request.destination]
    return cmd


class S3CmdUploader:
    """Uploads with ``s3cmd put``; its output streams to the terminal."""

    def __init__(
        self,
        *,
        cwd: Path,
        command: str = DEFAULT_UPLOAD_COMMAND,
        timeout: float = DEFAULT_UPLOAD_TIMEOUT_SECONDS,
    ) -> None:
        self._cwd = cwd
        self._command = command
        self._timeout = timeout

    def ensure_available(self) -> Result[None, ReleaseError]:
        if which(self._command) is None:
            return Err(
                ReleaseError(
                    kind="uploader_missing",
                    message=f"{self._command}: missing",
                    hint="Install s3cmd and configure credentials (s3cmd --configure).",
                )
            )
        return Ok(None)

    def put(
        self,
        source: Path,
        destination: str,
        *,
        public: bool = False,
        progress: bool = False,
    ) -> Result[None, ReleaseError]:
        request = UploadRequest(source, destination, public=public, progress=progress)
        cmd = s3cmd_put_command(request, command=self._command)
        result = run_live(cmd, cwd=self._cwd, timeout=self._timeout)
        if isinstance(result, Err):
            error = result.error
            return Err(
                ReleaseError(
                    kind="upload_failed",
                    message=f"upload of {source} to {destination} failed: {error}",
                    hint=error.stderr or None,
                )
            )
        return Ok(None)


def _empty_requests() -> list[UploadRequest]:
    return []


@dataclass
class DryRunUploader:
    """Prints what would be uploaded and records it; runs nothing."""

    console: ConsoleProtocol
    command: str = DEFAULT_UPLOAD_COMMAND
    requests: list[UploadRequest] = field(default_factory=_empty_requests)

    def ensure_available(self) -> Result[None, ReleaseError]:
        return Ok(None)

    def put(
        self,
        source: Path,
        destination: str,
        *,
        public: bool = False,
        progress: bool = False,
    ) -> Result[None, ReleaseError]:
        request = UploadRequest(source, destination, public=public, progress=progress)
        self.requests.append(request)
        self.console.print(
            "[dry-run] " + " ".join(s3cmd_put_command(request, command=self.command)),
            Style.DIM,
        )
        return Ok(None)
