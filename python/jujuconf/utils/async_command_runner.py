"""
jujuconf/utils/async_command_runner.py

Asynchronous runner for a local command. Launch problems (missing binary,
permission errors), timeouts and non-zero exit codes are all reported as a
single CommandError so that callers only have one failure type to handle.

The command is run exactly once. If the waiting task is cancelled or the
timeout expires, the child process is killed before returning.

Usage example:
    from jujuconf.utils.async_command_runner import run_command, CommandError

    try:
        output = await run_command(["juju", "controllers", "--format=json"])
    except CommandError as err:
        print(f"Command failed: {err}")
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional


class CommandError(Exception):
    """Represents a failure when executing a local command.

    Attributes:
        message (str): The error message describing the command failure.
        return_code (Optional[int]): The exit code if the process ran at all.
    """

    def __init__(self, message: str, return_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.return_code = return_code


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


async def run_command(
    command: List[str],
    *,
    sensitive: bool = True,
    timeout: Optional[float] = None,
    error_parser: Optional[Callable[[str], Optional[str]]] = None,
) -> str:
    """
    Execute a local command in a subprocess and return its stdout.

    When `sensitive=True`, the command line, stdout and stderr are left out of
    the raised error message. Commands such as `juju show-controller
    --show-password` print credentials, so this is the default.

    Args:
        command (List[str]):
            The command and arguments to execute.
        sensitive (bool):
            If True, hides command details in the raised error.
        timeout (Optional[float]):
            Seconds to wait for the process before killing it. None waits
            forever.
        error_parser (Optional[Callable[[str], Optional[str]]]):
            Receives stderr; a non-None return value becomes the error message.

    Returns:
        str: The captured stdout, decoded as UTF-8 and stripped.

    Raises:
        CommandError: If the process cannot be started, times out, or exits
            with a non-zero code.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        # FileNotFoundError when the binary is not on PATH
        raise CommandError(f"Failed to launch {command[0]!r}: {exc}") from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            proc.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError as exc:
        await _kill(proc)
        raise CommandError(
            f"Command {command[0]!r} timed out after {timeout} seconds."
        ) from exc
    except asyncio.CancelledError:
        await _kill(proc)
        raise
    except OSError as exc:
        await _kill(proc)
        raise CommandError(f"Error reading output of {command[0]!r}: {exc}") from exc

    stdout_str = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr_str = stderr_bytes.decode("utf-8", errors="replace").strip()

    if proc.returncode != 0:
        short_message = error_parser(stderr_str) if error_parser else None
        if short_message is not None:
            raise CommandError(short_message, proc.returncode)

        detail = ""
        if not sensitive:
            detail = (
                f"\nCommand: {' '.join(command)}"
                f"\nStdout: {stdout_str}"
                f"\nStderr: {stderr_str}"
            )

        raise CommandError(
            f"Command failed with return code {proc.returncode}.{detail}",
            proc.returncode,
        )

    return stdout_str
