"""Asynchronous subprocess execution with Result-based error handling.

Every external invocation the doctor performs goes through a CommandRunner.
Failures (missing binary, non-zero exit, timeout) come back as
Err(ProcessError) values instead of exceptions, and every call is bounded by
a timeout.

Usage:
    runner = AsyncCommandRunner()
    match await runner.run(["git", "--version"], timeout=10.0):
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import Protocol

from deebo_doctor.core.result import Err, Ok, Result

__all__ = ["AsyncCommandRunner", "CommandRunner", "ProcessError"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran or timed out).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


class CommandRunner(Protocol):
    """Protocol for running external commands.

    This abstraction allows faking process invocations in tests.
    """

    async def run(self, args: list[str], *, timeout: float | None = None) -> Result[str, ProcessError]:
        """Run a command and return its stdout or a ProcessError.

        Args:
            args: Command and arguments
            timeout: Maximum seconds to wait (None for no limit)
        """
        ...


class AsyncCommandRunner:
    """Default command runner built on asyncio subprocesses."""

    async def run(self, args: list[str], *, timeout: float | None = None) -> Result[str, ProcessError]:
        command = tuple(args)
        logger.debug("running: %s", " ".join(command))

        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.debug("%s could not be started: %s", command[0], e)
            return Err(ProcessError(command=command, returncode=-1, stdout="", stderr=str(e)))

        try:
            raw_out, raw_err = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            logger.debug("%s timed out after %ss", command[0], timeout)
            return Err(
                ProcessError(
                    command=command,
                    returncode=-1,
                    stdout="",
                    stderr=f"Command timed out after {timeout}s",
                )
            )

        stdout = raw_out.decode("utf-8", errors="replace")
        stderr = raw_err.decode("utf-8", errors="replace")
        returncode = proc.returncode if proc.returncode is not None else -1

        if returncode != 0:
            logger.debug("%s exited with %d", command[0], returncode)
            return Err(
                ProcessError(
                    command=command,
                    returncode=returncode,
                    stdout=stdout,
                    stderr=stderr,
                )
            )

        return Ok(stdout)
