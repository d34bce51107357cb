"""stemforge pipeline stages — registry mapping stage_id to stage class.

Usage::

    from stemforge.stages import STAGE_ORDER, get_stage

    for stage_id in STAGE_ORDER:
        get_stage(stage_id).run_stage(ctx, records)
"""

from __future__ import annotations

from stemforge.models.stages import DEFAULT_STAGE_DEFINITIONS
from stemforge.stages.base import BaseStage, StageContext, StageExecutionError
from stemforge.stages.s1_setup import SetupStage
from stemforge.stages.s2_build_vm import BuildVmStage
from stemforge.stages.s3_package import PackageStemcellStage

STAGE_REGISTRY: dict[str, type[BaseStage]] = {
    "setup": SetupStage,
    "build_vm": BuildVmStage,
    "package_stemcell": PackageStemcellStage,
}

# Fixed execution order; variants cannot change it.
STAGE_ORDER: tuple[str, ...] = tuple(
    d.stage_id for d in sorted(DEFAULT_STAGE_DEFINITIONS, key=lambda d: d.ordinal)
)


def get_stage(stage_id: str) -> BaseStage:
    """Instantiate and return a stage by its ``stage_id``.

    Raises ``KeyError`` if the stage_id is not registered.
    """
    try:
        cls = STAGE_REGISTRY[stage_id]
    except KeyError:
        raise KeyError(
            f"Unknown stage_id {stage_id!r}. "
            f"Registered stages: {sorted(STAGE_REGISTRY.keys())}"
        ) from None
    return cls()


__all__ = [
    "BaseStage",
    "StageContext",
    "StageExecutionError",
    "STAGE_REGISTRY",
    "STAGE_ORDER",
    "get_stage",
    "SetupStage",
    "BuildVmStage",
    "PackageStemcellStage",
]
