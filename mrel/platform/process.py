"""Subprocess execution with Result-based error handling.

Release steps are long-running installs, builds and publishes whose live
progress the operator watches, so the child's stdio is passed straight
through and never captured.

A command that cannot be started at all (not on PATH, bad cwd) yields a
ProcessError with ``started=False`` and ``returncode=-1``.

Usage:
    result = run_streaming(["bun", "install"], cwd=workspace_root)
    match result:
        case Ok(_):
            ...
        case Err(error) if not error.started:
            print(f"could not start: {error.stderr}")
        case Err(error):
            print(f"exit {error.returncode}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from mrel.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_streaming"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never started).
        stderr: The start failure reason (empty when the child ran).
        started: False if the process could not be spawned.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""
    started: bool = True

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if not self.started:
            return f"{cmd_str} could not be started: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"


def run_streaming(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with inherited stdio and wait for it to exit.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(None) on exit code 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            check=False,
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stderr=str(e),
                started=False,
            )
        )

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)
