"""Stage 2 — Build VM.

Ordering: build -> variant post-build hook -> export -> destroy.

Destroy is best-effort and its outcome is ignored. It is only reached when
build, hook and export succeed, so a failed export leaves the VM allocated
under its name until the next ``--force`` build replaces it.
"""

from __future__ import annotations

from typing import Any

from stemforge.stages.base import BaseStage, StageContext


class BuildVmStage(BaseStage):
    """Stage 2: drive the external VM builder and exporter."""

    @property
    def stage_id(self) -> str:
        return "build_vm"

    @property
    def display_name(self) -> str:
        return "Build VM"

    def execute(self, ctx: StageContext) -> dict[str, Any]:
        config = ctx.config
        name = config.name

        ctx.driver.build(name)
        collected = ctx.variant.post_build_hook(config, ctx.remote)
        ctx.driver.export(name)
        ctx.driver.destroy(name)

        return {
            "vm_name": name,
            "box": str(config.box_path),
            "collected_files": [str(p) for p in collected],
        }
