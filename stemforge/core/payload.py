"""Payload packager — places the bosh agent gem into the definition dir."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from stemforge.core.commands import CommandRunner, run_command
from stemforge.models.defaults import AGENT_GEM_NAME, AGENT_GEMSPEC

logger = logging.getLogger(__name__)


class PayloadError(RuntimeError):
    """Raised when the agent payload cannot be produced or placed."""


def package_agent(
    agent_src_path: Path,
    dest_dir: Path,
    agent_version: str,
    *,
    gem_bin: str = "gem",
    runner: CommandRunner = run_command,
) -> Path:
    """Put the agent gem at ``dest_dir/_bosh_agent.gem``.

    A directory is treated as the agent source tree: the gem is built there
    and moved into place. A file is treated as a pre-built gem and copied.
    """
    destination = dest_dir / AGENT_GEM_NAME
    logger.debug("Packaging bosh agent to %s", destination)

    if agent_src_path.is_dir():
        runner([gem_bin, "build", AGENT_GEMSPEC], cwd=agent_src_path)
        built = agent_src_path / f"bosh_agent-{agent_version}.gem"
        if not built.is_file():
            raise PayloadError(f"Unable to build bosh agent gem: {built} was not produced")
        shutil.move(str(built), str(destination))
    else:
        shutil.copyfile(agent_src_path, destination)
    return destination
