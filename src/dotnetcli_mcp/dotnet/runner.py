"""Synchronous child process execution."""

from __future__ import annotations

import logging
import subprocess
import time
from collections.abc import Mapping, Sequence

from .errors import ProcessStartError
from .state import ProcessResult

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Runs exactly one child process per call and waits for it to exit.

    No timeout, no retry, never a shell. When output is not captured the
    child inherits this process's stdio so interactive prompts still work.
    """

    def run(
        self,
        executable: str,
        arguments: Sequence[str],
        working_directory: str | None = None,
        environment: Mapping[str, str] | None = None,
        capture_output: bool = False,
    ) -> ProcessResult:
        """Run executable with arguments.

        Args:
            executable: Resolved executable path
            arguments: Raw argv tokens (not including the executable)
            working_directory: Child working directory
            environment: Full child environment; inherited when None
            capture_output: Capture stdout/stderr instead of passing through

        Returns:
            Process result with exit code (and output when captured)

        Raises:
            ProcessStartError: If the OS cannot start the executable
        """
        command = [executable, *arguments]
        stream = subprocess.PIPE if capture_output else None
        started = time.monotonic()

        try:
            completed = subprocess.run(
                command,
                cwd=working_directory,
                env=dict(environment) if environment is not None else None,
                stdout=stream,
                stderr=stream,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            reason = e.strerror or str(e)
            logger.error(f"Failed to start {executable}: {reason}")
            raise ProcessStartError(executable, reason) from e

        duration_ms = (time.monotonic() - started) * 1000
        logger.debug(f"{executable} exited with code {completed.returncode} in {duration_ms:.0f}ms")

        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout if capture_output else None,
            stderr=completed.stderr if capture_output else None,
            duration_ms=duration_ms,
        )
