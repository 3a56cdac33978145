"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relpub.core.result import Err, Result
from relpub.output.errors import print_release_error, release_error_exit_code
from relpub.services.release.errors import ReleaseError

T = TypeVar("T")

if TYPE_CHECKING:
    from relpub.output.console import ConsoleProtocol


def exit_on_error(result: Result[T, ReleaseError], console: ConsoleProtocol) -> T:
    """Return the value of an Ok, or print the error and exit.

    Replaces the pattern:
        if isinstance(result, Err):
            print_release_error(result.error, console)
            raise typer.Exit(code=1)
        value = result.value
    """
    if isinstance(result, Err):
        print_release_error(result.error, console)
        exit_with_code(release_error_exit_code(result.error))
    return result.value


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
