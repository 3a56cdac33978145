"""Error presentation for release failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relpub.core.errors import ErrorCode
from relpub.output.console import Style
from relpub.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from relpub.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    match error:
        case ReleaseError(kind="upload_failed", message=message, hint=hint):
            console.error(message)
            if hint:
                console.print(hint, Style.DIM)
            console.print(
                "hint: uploads that already succeeded remain published; rerun to overwrite",
                Style.DIM,
            )
        case ReleaseError(message=message, hint=hint):
            console.error(message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Every release failure aborts the run with the same status."""
    return int(ErrorCode.ERROR)
