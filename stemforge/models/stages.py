"""Pipeline stage models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StageState(str, Enum):
    """State of a single pipeline stage within one run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    FAILED = "failed"
    PASSED = "passed"


class StageDefinition(BaseModel):
    """Identity and position of a stage in the fixed pipeline order."""

    model_config = ConfigDict(frozen=True)

    stage_id: str
    display_name: str
    ordinal: int


class StageRecord(BaseModel):
    """Immutable record of one stage execution."""

    model_config = ConfigDict(frozen=True)

    stage_id: str
    display_name: str
    state: StageState
    outputs: dict[str, Any] = {}
    error: str = ""
    started_at: datetime
    finished_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def duration_s(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


# The fixed stemcell pipeline. Variants never reorder these.
DEFAULT_STAGE_DEFINITIONS: list[StageDefinition] = [
    StageDefinition(stage_id="setup", display_name="Setup", ordinal=1),
    StageDefinition(stage_id="build_vm", display_name="Build VM", ordinal=2),
    StageDefinition(
        stage_id="package_stemcell", display_name="Package Stemcell", ordinal=3
    ),
]
