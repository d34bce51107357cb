"""Variables exposed to definition templates."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from stemforge.models.config import BuildConfig


class RenderContext(BaseModel):
    """The complete set of names a ``*.tmpl`` file may reference.

    Variant-specific values live under ``extras``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    architecture: str
    infrastructure: str
    agent_version: str
    bosh_protocol: str
    iso_url: str | None = None
    iso_md5: str | None = None
    iso_filename: str | None = None
    extras: dict[str, Any] = {}

    @classmethod
    def from_config(
        cls, config: BuildConfig, extras: dict[str, Any] | None = None
    ) -> "RenderContext":
        iso = config.iso
        return cls(
            name=config.name,
            type=config.type.value,
            architecture=config.architecture,
            infrastructure=config.infrastructure,
            agent_version=config.agent_version,
            bosh_protocol=config.bosh_protocol,
            iso_url=iso.url if iso else None,
            iso_md5=iso.md5 if iso else None,
            iso_filename=iso.filename if iso else None,
            extras=dict(extras or {}),
        )

    def variables(self) -> dict[str, Any]:
        return self.model_dump()
