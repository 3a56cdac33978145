from __future__ import annotations

import typer

from relpub.cli.commands.release_cmd import release
from relpub.core.errors import ErrorCode

# Exit status typer uses after printing a usage error.
_USAGE_ERROR_STATUS = 2

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)

app.command()(release)


def main() -> None:
    """Console script entry point.

    Option parsing errors exit with status 1, like every other failure.
    """
    try:
        app()
    except SystemExit as e:
        if e.code == _USAGE_ERROR_STATUS:
            raise SystemExit(int(ErrorCode.ERROR)) from None
        raise
