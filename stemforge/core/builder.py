"""Stemcell builder — the pipeline controller.

Construction resolves the ``BuildConfig`` and ``StemcellManifest`` once and
runs the sanity check; nothing touches the VM tooling until ``run()``.

    builder = StemcellBuilder({"type": "centos", "agent_src_path": "agent.gem"})
    archive_path = builder.run()   # setup -> build_vm -> package_stemcell

One builder owns its staging directory (``prefix``) for the duration of a
run. Concurrent runs against the same prefix are not supported.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from stemforge.config import BuilderSettings
from stemforge.core.commands import CommandRunner, run_command
from stemforge.core.driver import VeeweeDriver, VmDriver
from stemforge.core.manifest import build_manifest
from stemforge.core.remote import RemoteShell
from stemforge.core.resolver import (
    ConfigurationError,
    resolve_build_config,
    unknown_option_keys,
)
from stemforge.models.config import BuildConfig
from stemforge.models.manifest import StemcellManifest
from stemforge.models.stages import StageRecord
from stemforge.models.variants import VariantKind
from stemforge.stages import STAGE_ORDER, StageContext, get_stage
from stemforge.variants import Variant, get_variant

logger = logging.getLogger(__name__)


class AgentSourceNotFoundError(ConfigurationError):
    """Raised when the configured agent source path does not exist."""


class DefinitionNotFoundError(ConfigurationError):
    """Raised when the variant's template directory does not exist."""


class StemcellBuilder:
    """Drives one stemcell build through the fixed stage order.

    Parameters
    ----------
    options:
        Construction options (``name``, ``type``, ``target``, ``prefix``,
        ``infrastructure``, ``architecture``, ``agent_src_path``, ``iso``,
        ``iso_md5``, ``iso_filename``, ``logger`` and variant keys).
    manifest:
        Optional mapping deep-merged over the computed manifest.
    settings:
        Tool environment; read from STEMFORGE_* variables if omitted.
    driver, remote, runner:
        Collaborators for the external tools. Defaults use veewee/vagrant,
        scp and ``run_command``.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        manifest: Mapping[str, Any] | None = None,
        *,
        settings: BuilderSettings | None = None,
        driver: VmDriver | None = None,
        remote: RemoteShell | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        options = dict(options or {})
        self.logger: logging.Logger = options.get("logger") or logger
        self.settings = settings or BuilderSettings()
        self.runner = runner

        self.variant: Variant = get_variant(options.get("type") or VariantKind.NOOP, options)
        unknown = unknown_option_keys(options, self.variant.option_keys)
        if unknown:
            self.logger.warning("Ignoring unknown build options: %s", ", ".join(unknown))

        self.config: BuildConfig = resolve_build_config(
            options,
            variant_type=self.variant.kind,
            variant_defaults=self.variant.default_options(),
            extra_keys=self.variant.option_keys,
        )
        self.manifest: StemcellManifest = build_manifest(manifest, self.config)

        self.driver: VmDriver = driver or VeeweeDriver(
            self.config.prefix, self.settings, runner=runner
        )
        self.remote = remote or RemoteShell(self.settings, runner=runner)
        self.stage_records: list[StageRecord] = []

        self.sanity_check()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def type(self) -> str:
        return self.variant.kind.value

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def target(self) -> Path:
        return self.config.target

    @property
    def definition_dir(self) -> Path:
        """Source template directory for this variant."""
        return self.settings.template_dir(self.variant.template_name)

    @property
    def definition_dest_dir(self) -> Path:
        return self.config.definitions_dir

    # ------------------------------------------------------------------
    # Sanity check
    # ------------------------------------------------------------------

    def sanity_check(self) -> None:
        """Validate inputs before any stage runs.

        A pre-existing target is moved to ``<target>.bak``; a missing agent
        source or template directory aborts construction.
        """
        log = self.logger
        log.info("Sanity check")
        self.variant.validate(self.config)

        target = self.config.target
        log.info("Checking target file: %s...", target)
        if target.is_file():
            backup = self.config.backup_path
            log.warning("Target file %s exists. Moving old file to %s.", target, backup)
            shutil.move(str(target), str(backup))

        agent_src = self.config.agent_src_path
        log.info("Checking agent source: %s", agent_src)
        if not agent_src.exists():
            raise AgentSourceNotFoundError(f"Agent source {agent_src} doesn't exist")

        log.info("Checking definitions dir...")
        if not self.definition_dir.is_dir():
            raise DefinitionNotFoundError(
                f"Definition for '{self.type}' does not exist at path '{self.definition_dir}'"
            )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _context(self) -> StageContext:
        return StageContext(
            config=self.config,
            manifest=self.manifest,
            variant=self.variant,
            driver=self.driver,
            remote=self.remote,
            settings=self.settings,
            runner=self.runner,
            logger=self.logger,
        )

    def _run_stage(self, stage_id: str) -> dict[str, Any]:
        return get_stage(stage_id).run_stage(self._context(), self.stage_records)

    def setup(self) -> dict[str, Any]:
        return self._run_stage("setup")

    def build_vm(self) -> dict[str, Any]:
        return self._run_stage("build_vm")

    def package_stemcell(self) -> dict[str, Any]:
        return self._run_stage("package_stemcell")

    def run(self) -> Path:
        """Run every stage in order and return the archive path.

        The first failing stage aborts the run; staging state is left on
        disk for inspection.
        """
        for stage_id in STAGE_ORDER:
            self._run_stage(stage_id)
        self.logger.info("Stemcell %s written to %s", self.name, self.target)
        return self.target

    def __repr__(self) -> str:
        return f"<StemcellBuilder type={self.type!r} name={self.name!r}>"
