"""Subprocess execution for the external build tools."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Raised when an external tool exits with a non-zero status code."""

    def __init__(
        self, command: Sequence[str], returncode: int, stdout: str, stderr: str
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"Command {' '.join(self.command)} failed with exit code {returncode}"
            f"\nSTDOUT:{stdout}\nSTDERR:{stderr}"
        )


def run_command(
    command: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute *command* and block until it exits.

    There is no timeout: a hung tool hangs the build.
    """
    process_env = os.environ.copy()
    if env:
        process_env.update(env)

    logger.debug("Executing: %s (cwd=%s)", " ".join(command), cwd or ".")
    result = subprocess.run(
        list(command),
        cwd=str(cwd) if cwd else None,
        env=process_env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=False,
    )
    if check and result.returncode != 0:
        raise CommandError(command, result.returncode, result.stdout, result.stderr)
    return result


# Signature shared by ``run_command`` and the test doubles that replace it.
CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]
