"""Subprocess execution with Result-based error handling.

This is the only module that spawns processes. Output is never captured:
the child writes straight to the terminal so long transfers show live
progress.

Usage:
    result = run_live(["s3cmd", "put", "pkg/foo.deb", "s3://b/foo.deb"], cwd=Path("."))
    match result:
        case Ok(_):
            print("uploaded")
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from relpub.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_live", "which"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran or timed out).
        stderr: Error details when known; empty if the child printed them itself.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run_live(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, streaming its output to the terminal.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit). The child is
            killed when it expires.

    Returns:
        Ok(None) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)


def which(cmd: str) -> str | None:
    """Return the full path of an executable on PATH, or None."""
    return shutil.which(cmd)
