"""Build configuration models."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stemforge.models.frozen import freeze
from stemforge.models.variants import VariantKind


class IsoReference(BaseModel):
    """Installation ISO used by the VM definition."""

    model_config = ConfigDict(frozen=True)

    url: str
    md5: str
    filename: str


class BuildConfig(BaseModel):
    """Resolved, immutable configuration for one stemcell build.

    Produced once by ``resolve_build_config`` and handed to every stage.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: VariantKind = VariantKind.NOOP
    infrastructure: str
    architecture: str
    agent_src_path: Path
    agent_version: str
    bosh_protocol: str
    prefix: Path
    target: Path
    iso: IsoReference | None = None
    extras: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("extras", mode="after")
    @classmethod
    def _freeze_extras(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @model_validator(mode="after")
    def _target_is_absolute(self) -> "BuildConfig":
        if not self.target.is_absolute():
            raise ValueError(f"target must be an absolute path, got {self.target}")
        return self

    @property
    def definitions_dir(self) -> Path:
        return self.prefix / "definitions" / self.name

    @property
    def box_path(self) -> Path:
        return self.prefix / f"{self.name}.box"

    @property
    def backup_path(self) -> Path:
        return self.target.with_name(self.target.name + ".bak")
