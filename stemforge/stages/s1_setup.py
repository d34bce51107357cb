"""Stage 1 — Setup.

Stages the variant's definition templates into
``<prefix>/definitions/<name>/``, renders them, injects the agent gem and
finally lets the variant add its own payloads.
"""

from __future__ import annotations

from typing import Any

from stemforge.core import templates
from stemforge.core.payload import package_agent
from stemforge.models.render import RenderContext
from stemforge.stages.base import BaseStage, StageContext


class SetupStage(BaseStage):
    """Stage 1: copy + render definitions, package the agent."""

    @property
    def stage_id(self) -> str:
        return "setup"

    @property
    def display_name(self) -> str:
        return "Setup"

    def execute(self, ctx: StageContext) -> dict[str, Any]:
        config = ctx.config
        dest_dir = config.definitions_dir
        template_dir = ctx.settings.template_dir(ctx.variant.template_name)

        ctx.logger.info("Creating definition dest dir %s", dest_dir)
        templates.stage(template_dir, dest_dir)

        render_context = RenderContext.from_config(
            config, ctx.variant.render_extras(config)
        )
        rendered = templates.render_templates(dest_dir, render_context)

        agent_gem = package_agent(
            config.agent_src_path,
            dest_dir,
            config.agent_version,
            gem_bin=ctx.settings.gem_bin,
            runner=ctx.runner,
        )

        extras = ctx.variant.stage_setup_extra(config, dest_dir)

        return {
            "definition_dir": str(dest_dir),
            "rendered": [str(p.relative_to(dest_dir)) for p in rendered],
            "agent_gem": str(agent_gem),
            "extra_payloads": [str(p) for p in extras],
        }
