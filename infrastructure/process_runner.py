"""Runs external programs and maps their exit status to results or errors."""

import asyncio
import logging
import subprocess
from pathlib import Path

from domain.models import ProcessResult
from exceptions import ExternalToolError, ToolTimeoutError

logger = logging.getLogger(__name__)

MAX_LOGGED_OUTPUT_CHARS = 2000


def _truncate(text: str) -> str:
    if len(text) > MAX_LOGGED_OUTPUT_CHARS:
        return text[:MAX_LOGGED_OUTPUT_CHARS] + "..."
    return text


class ProcessRunner:
    """Executes external commands with an optional timeout.

    The blocking and the awaitable variants share one contract: exit status 0
    yields a ProcessResult, anything else raises ExternalToolError, and
    exceeding the timeout kills the process and raises ToolTimeoutError.
    """

    def __init__(self, default_timeout: float | None = None):
        self._default_timeout = default_timeout

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        """Runs a command to completion, blocking the calling thread."""
        timeout = self._resolve_timeout(timeout)
        program = args[0]
        logger.info("Running command", extra={"command": " ".join(args)})
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.error(
                "Command timed out",
                extra={"program": program, "timeout_seconds": timeout},
            )
            raise ToolTimeoutError(program, timeout) from e
        except OSError as e:
            logger.error(
                "Command could not be started",
                extra={"program": program, "error": str(e)},
            )
            raise ExternalToolError(program, None, str(e)) from e

        return self._to_result(args, completed.returncode, completed.stdout, completed.stderr)

    async def run_async(
        self,
        args: list[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        """Runs a command as an awaitable subprocess."""
        timeout = self._resolve_timeout(timeout)
        program = args[0]
        logger.info("Running command", extra={"command": " ".join(args)})
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(
                "Command could not be started",
                extra={"program": program, "error": str(e)},
            )
            raise ExternalToolError(program, None, str(e)) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                "Command timed out",
                extra={"program": program, "timeout_seconds": timeout},
            )
            raise ToolTimeoutError(program, timeout) from e
        finally:
            if process.returncode is None:
                process.kill()
                await process.wait()

        return self._to_result(
            args,
            process.returncode,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    def run_attached(self, args: list[str]) -> ProcessResult:
        """Runs a command with inherited stdio so its output reaches the operator."""
        program = args[0]
        logger.info("Running command", extra={"command": " ".join(args)})
        try:
            completed = subprocess.run(args)
        except OSError as e:
            raise ExternalToolError(program, None, str(e)) from e
        return self._to_result(args, completed.returncode, "", "")

    def _resolve_timeout(self, timeout: float | None) -> float | None:
        return self._default_timeout if timeout is None else timeout

    def _to_result(
        self, args: list[str], exit_code: int, stdout: str, stderr: str
    ) -> ProcessResult:
        program = args[0]
        if stdout:
            logger.debug("Command stdout", extra={"program": program, "stdout": _truncate(stdout)})
        if exit_code != 0:
            logger.error(
                "Command failed",
                extra={
                    "program": program,
                    "exit_code": exit_code,
                    "stderr": _truncate(stderr),
                },
            )
            raise ExternalToolError(program, exit_code, stderr)

        logger.info("Command succeeded", extra={"program": program})
        return ProcessResult(args=args, exit_code=exit_code, stdout=stdout, stderr=stderr)
