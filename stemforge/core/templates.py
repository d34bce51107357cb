"""Template stager — copies a variant's definition templates and renders them.

Rendering is destructive: every ``*.tmpl`` file under the destination is
replaced by its rendered counterpart (same path, suffix stripped). A failure
part-way leaves the already-rendered files on disk.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from stemforge.models.defaults import TEMPLATE_SUFFIX
from stemforge.models.render import RenderContext

logger = logging.getLogger(__name__)


class TemplateRenderError(RuntimeError):
    """Raised when a definition template cannot be rendered."""


def _get_env() -> Environment:
    return Environment(
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )


def stage(template_dir: Path, dest_dir: Path) -> list[Path]:
    """Recursively copy every entry of *template_dir* into *dest_dir*.

    *dest_dir* is created if absent; existing files are overwritten.
    Returns the top-level paths created under *dest_dir*.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Copying definition from %s to %s", template_dir, dest_dir)

    copied: list[Path] = []
    for entry in sorted(template_dir.iterdir()):
        target = dest_dir / entry.name
        if entry.is_dir():
            shutil.copytree(entry, target, dirs_exist_ok=True)
        else:
            shutil.copy2(entry, target)
        copied.append(target)
    return copied


def render_file(template_path: Path, context: RenderContext) -> Path:
    """Render one template in place and delete its source."""
    output_path = template_path.with_name(template_path.name[: -len(TEMPLATE_SUFFIX)])
    logger.info("Rendering template %s to %s", template_path, output_path)

    source = template_path.read_text(encoding="utf-8")
    try:
        rendered = _get_env().from_string(source).render(**context.variables())
    except TemplateError as exc:
        raise TemplateRenderError(f"Unable to render {template_path}: {exc}") from exc

    output_path.write_text(rendered, encoding="utf-8")
    shutil.copymode(template_path, output_path)
    template_path.unlink()
    return output_path


def render_templates(dest_dir: Path, context: RenderContext) -> list[Path]:
    """Render every ``*.tmpl`` file anywhere below *dest_dir*.

    Returns the rendered output paths in a stable order.
    """
    templates = sorted(p for p in dest_dir.rglob(f"*{TEMPLATE_SUFFIX}") if p.is_file())
    return [render_file(path, context) for path in templates]
