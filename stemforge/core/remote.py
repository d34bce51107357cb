"""Remote file download from the freshly built VM over scp."""

from __future__ import annotations

import logging
from pathlib import Path

from stemforge.config import BuilderSettings
from stemforge.core.commands import CommandRunner, run_command

logger = logging.getLogger(__name__)


class RemoteShell:
    """Copies files off the build VM using the ssh settings."""

    def __init__(
        self,
        settings: BuilderSettings | None = None,
        *,
        runner: CommandRunner = run_command,
    ) -> None:
        self.settings = settings or BuilderSettings()
        self._run = runner

    def download_file(self, remote_path: str, local_path: Path) -> Path:
        s = self.settings
        command = [
            s.scp_bin,
            "-P",
            str(s.ssh_port),
            "-o",
            "StrictHostKeyChecking=no",
            "-o",
            "UserKnownHostsFile=/dev/null",
        ]
        if s.ssh_key_path is not None:
            command += ["-i", str(s.ssh_key_path)]
        command += [f"{s.ssh_user}@{s.ssh_host}:{remote_path}", str(local_path)]

        logger.info("Downloading %s from %s to %s", remote_path, s.ssh_host, local_path)
        self._run(command)
        return local_path
