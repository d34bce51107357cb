"""Image assembler — turns the exported box into the generic ``image`` file."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

from stemforge.models.defaults import IMAGE_FILE

logger = logging.getLogger(__name__)

# Descriptor and disk files repacked into the image.
IMAGE_PATTERNS: tuple[str, ...] = ("*.vmdk", "*.ovf")


class ImageAssemblyError(RuntimeError):
    """Raised when the box cannot be unpacked or the image cannot be written."""


def unpack_box(box_path: Path, dest_dir: Path) -> list[str]:
    if not box_path.is_file():
        raise ImageAssemblyError(f"Unable to unpack .box file: {box_path} does not exist")
    logger.info("Unpacking %s", box_path)
    try:
        with tarfile.open(box_path, "r:*") as tar:
            names = tar.getnames()
            tar.extractall(dest_dir, filter="data")
    except (tarfile.TarError, OSError) as exc:
        raise ImageAssemblyError(f"Unable to unpack .box file {box_path}: {exc}") from exc
    return names


def image_members(workdir: Path) -> list[Path]:
    members: list[Path] = []
    for pattern in IMAGE_PATTERNS:
        members.extend(sorted(workdir.glob(pattern)))
    return members


def assemble_image(prefix: Path, name: str) -> Path:
    """Unpack ``<prefix>/<name>.box`` and pack its disks into ``<prefix>/image``."""
    unpack_box(prefix / f"{name}.box", prefix)

    members = image_members(prefix)
    if not members:
        raise ImageAssemblyError(
            f"Unable to create image file: no {' or '.join(IMAGE_PATTERNS)} files in {prefix}"
        )

    image_path = prefix / IMAGE_FILE
    logger.info("Creating %s from %s", image_path, ", ".join(m.name for m in members))
    try:
        with tarfile.open(image_path, "w:gz") as tar:
            for member in members:
                tar.add(member, arcname=member.name)
    except (tarfile.TarError, OSError) as exc:
        raise ImageAssemblyError(f"Unable to create image file from ovf and vmdk: {exc}") from exc
    return image_path
