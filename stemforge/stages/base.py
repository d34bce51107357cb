"""Abstract base stage with an enforced lifecycle.

Every concrete stage inherits from BaseStage and implements only
``execute()``. The ``run_stage()`` wrapper is **not overridable**; it
enforces the lifecycle:

    log start -> execute -> record (passed | failed) -> return / raise

A failing stage is recorded as FAILED and re-raised as
``StageExecutionError`` chained to the original error. Nothing is retried
and nothing is rolled back.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, final

from stemforge.config import BuilderSettings
from stemforge.core.commands import CommandRunner, run_command
from stemforge.core.driver import VmDriver
from stemforge.core.remote import RemoteShell
from stemforge.models.config import BuildConfig
from stemforge.models.manifest import StemcellManifest
from stemforge.models.stages import StageRecord, StageState
from stemforge.variants.base import Variant

module_logger = logging.getLogger(__name__)


class StageExecutionError(RuntimeError):
    """Raised when a stage's execute() method fails."""

    def __init__(self, stage_id: str, message: str) -> None:
        self.stage_id = stage_id
        super().__init__(message)


@dataclass(frozen=True)
class StageContext:
    """Everything a stage may read. Shared, never mutated by stages."""

    config: BuildConfig
    manifest: StemcellManifest
    variant: Variant
    driver: VmDriver
    remote: RemoteShell
    settings: BuilderSettings
    runner: CommandRunner = run_command
    logger: logging.Logger = field(default=module_logger)


class BaseStage(abc.ABC):
    """Abstract base for the stemcell pipeline stages.

    Subclasses **must** implement ``stage_id``, ``display_name`` and
    ``execute(ctx)``. Subclasses **must not** override ``run_stage()``.
    """

    @property
    @abc.abstractmethod
    def stage_id(self) -> str:
        """Unique stage identifier (e.g. ``'build_vm'``)."""
        ...

    @property
    @abc.abstractmethod
    def display_name(self) -> str:
        ...

    @abc.abstractmethod
    def execute(self, ctx: StageContext) -> dict[str, Any]:
        """Run the stage and return a JSON-friendly summary of its outputs."""
        ...

    @final
    def run_stage(self, ctx: StageContext, records: list[StageRecord]) -> dict[str, Any]:
        """Execute the stage and append its ``StageRecord`` to *records*."""
        log = ctx.logger
        started_at = datetime.now(timezone.utc)
        log.info("%s [%s] started", self.display_name, self.stage_id)

        try:
            result = self.execute(ctx)
        except Exception as exc:
            log.error("%s [%s] failed: %s", self.display_name, self.stage_id, exc)
            records.append(
                StageRecord(
                    stage_id=self.stage_id,
                    display_name=self.display_name,
                    state=StageState.FAILED,
                    error=str(exc),
                    started_at=started_at,
                )
            )
            raise StageExecutionError(
                self.stage_id, f"Stage {self.stage_id} failed: {exc}"
            ) from exc

        record = StageRecord(
            stage_id=self.stage_id,
            display_name=self.display_name,
            state=StageState.PASSED,
            outputs=result,
            started_at=started_at,
        )
        records.append(record)
        log.info(
            "%s [%s] passed in %.1fs", self.display_name, self.stage_id, record.duration_s
        )
        return result

    def __repr__(self) -> str:
        return f"<{type(self).__name__} stage_id={self.stage_id!r}>"
