"""
Command adapter — runs a unit's declared capability commands.

Commands run through the shell in the unit's root directory, with the
unit's identity and final metadata exported in the environment.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time

from fullstack.core.models.unit import Unit

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300


class CommandError(Exception):
    """Raised when a capability command fails or times out."""

    def __init__(self, message: str, return_code: int | None = None):
        super().__init__(message)
        self.return_code = return_code


def command_environment(unit: Unit) -> dict[str, str]:
    """Process environment for a unit's commands."""
    env = dict(os.environ)
    env["FULLSTACK_UNIT"] = unit.identity
    env["FULLSTACK_GROUP"] = unit.group or ""
    env["FULLSTACK_VERSION"] = unit.version
    env["FULLSTACK_OUTPUT"] = str(unit.output_path)
    return env


def run_command(unit: Unit, command: str, timeout: int = DEFAULT_TIMEOUT) -> str:
    """Run ``command`` for ``unit`` and return its stdout.

    Raises:
        CommandError: On a non-zero exit code or a timeout.
    """
    logger.debug("Executing: %s (cwd=%s)", command, unit.root_path)
    start = time.monotonic()

    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=unit.root_path,
            env=command_environment(unit),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"Command timed out after {timeout}s: {command}") from e

    elapsed_ms = int((time.monotonic() - start) * 1000)
    output = result.stdout.strip()
    stderr = result.stderr.strip()

    if result.returncode != 0:
        raise CommandError(
            stderr or f"Command exited with code {result.returncode}: {command}",
            return_code=result.returncode,
        )

    logger.debug("%s: '%s' done in %dms", unit.identity, command, elapsed_ms)
    return output
