"""External build driver — veewee builds the VM, vagrant exports it.

The VM is tracked by name only; existence and force-rebuild semantics are
left to the external tools (every call passes ``--force``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from stemforge.config import BuilderSettings
from stemforge.core.commands import CommandRunner, run_command

logger = logging.getLogger(__name__)


class VmDriver(Protocol):
    """Operations the pipeline needs from the VM tooling."""

    def build(self, name: str) -> None:
        """Build the named VM, replacing any existing one. Raises on failure."""
        ...

    def export(self, name: str) -> None:
        """Export the named VM to ``<workdir>/<name>.box``. Raises on failure."""
        ...

    def destroy(self, name: str) -> None:
        """Best-effort removal of the named VM. Never raises."""
        ...


class VeeweeDriver:
    """``VmDriver`` backed by the veewee and vagrant command-line tools."""

    def __init__(
        self,
        workdir: Path,
        settings: BuilderSettings | None = None,
        *,
        runner: CommandRunner = run_command,
    ) -> None:
        self.workdir = workdir
        self.settings = settings or BuilderSettings()
        self._run = runner

    def _veewee(self, *args: str) -> list[str]:
        return [self.settings.veewee_bin, self.settings.veewee_provider, *args]

    def build(self, name: str) -> None:
        logger.info("Building vm %s", name)
        self._run(self._veewee("build", name, "--force", "--nogui", "--auto"), cwd=self.workdir)

    def export(self, name: str) -> None:
        logger.info("Export built VM %s to %s", name, self.workdir)
        self._run(
            [self.settings.vagrant_bin, "basebox", "export", name, "--force"],
            cwd=self.workdir,
        )

    def destroy(self, name: str) -> None:
        logger.debug("Sending veewee destroy for %s", name)
        try:
            result = self._run(
                self._veewee("destroy", name, "--force", "--nogui"),
                cwd=self.workdir,
                check=False,
            )
        except OSError as exc:
            logger.debug("veewee destroy for %s could not be started: %s", name, exc)
            return
        if result.returncode != 0:
            logger.debug("veewee destroy for %s exited with %s", name, result.returncode)
