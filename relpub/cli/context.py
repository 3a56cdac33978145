from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relpub.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from relpub.core.errors import ErrorCode
from relpub.core.result import Err
from relpub.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    """Resolve the working directory and release.toml.

    An explicit ``--config`` must exist; the implicit ./release.toml is
    optional.
    """
    console = RichConsole()
    root = Path.cwd().resolve()

    if config_path is not None:
        result = load_config(config_path)
    else:
        result = load_config_or_default(root / CONFIG_FILENAME)

    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.ERROR))

    return CLIContext(root=root, config=result.value, console=console)
