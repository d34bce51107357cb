"""Stemcell manifest model (``stemcell.MF``)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from stemforge.models.frozen import freeze, thaw


class StemcellManifest(BaseModel):
    """Immutable wrapper around the merged manifest document.

    The document always carries ``name``, ``version``, ``bosh_protocol`` and
    ``cloud_properties``; caller overrides may add arbitrary keys. It is
    stored as a read-only view, so neither attribute assignment nor in-place
    edits can change what ends up in ``stemcell.MF``.
    """

    model_config = ConfigDict(frozen=True)

    document: Mapping[str, Any]

    @field_validator("document", mode="after")
    @classmethod
    def _freeze_document(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @property
    def name(self) -> Any:
        return self.document["name"]

    @property
    def version(self) -> Any:
        return self.document["version"]

    @property
    def bosh_protocol(self) -> Any:
        return self.document["bosh_protocol"]

    @property
    def cloud_properties(self) -> dict[str, Any]:
        return thaw(self.document["cloud_properties"])

    def as_dict(self) -> dict[str, Any]:
        """Return an independent plain-dict copy of the document."""
        return thaw(self.document)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.as_dict(), default_flow_style=False, sort_keys=False)
