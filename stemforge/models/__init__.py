"""stemforge data models — Pydantic v2, frozen (immutable)."""

from stemforge.models.config import BuildConfig, IsoReference
from stemforge.models.manifest import StemcellManifest
from stemforge.models.render import RenderContext
from stemforge.models.stages import (
    DEFAULT_STAGE_DEFINITIONS,
    StageDefinition,
    StageRecord,
    StageState,
)
from stemforge.models.variants import VariantKind

__all__ = [
    "BuildConfig",
    "IsoReference",
    "StemcellManifest",
    "RenderContext",
    "DEFAULT_STAGE_DEFINITIONS",
    "StageDefinition",
    "StageRecord",
    "StageState",
    "VariantKind",
]
