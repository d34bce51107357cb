"""Stage 3 — Package Stemcell.

Assembles ``image`` from the exported box, writes ``stemcell.MF`` and the
package inventory, then archives them (plus any variant members) into the
configured target.
"""

from __future__ import annotations

from typing import Any

from stemforge.core.archive import archive, write_manifest, write_package_list
from stemforge.core.image import assemble_image
from stemforge.stages.base import BaseStage, StageContext


class PackageStemcellStage(BaseStage):
    """Stage 3: image + manifest + inventory -> stemcell archive."""

    @property
    def stage_id(self) -> str:
        return "package_stemcell"

    @property
    def display_name(self) -> str:
        return "Package Stemcell"

    def execute(self, ctx: StageContext) -> dict[str, Any]:
        config = ctx.config
        prefix = config.prefix

        image = assemble_image(prefix, config.name)
        manifest = write_manifest(prefix, ctx.manifest)
        package_list = write_package_list(prefix)

        members = [image, manifest, package_list]
        members += ctx.variant.stage_package_extra(config)
        archive(prefix, config.target, *members)

        return {
            "target": str(config.target),
            "members": [p.name for p in members],
        }
