"""Archiver — writes the manifest and inventory, bundles the stemcell."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path

from stemforge.models.defaults import MANIFEST_FILE, PACKAGE_LIST_FILE
from stemforge.models.manifest import StemcellManifest

logger = logging.getLogger(__name__)


class ArchiveError(RuntimeError):
    """Raised when the stemcell archive cannot be created."""


def write_manifest(prefix: Path, manifest: StemcellManifest) -> Path:
    path = prefix / MANIFEST_FILE
    path.write_text(manifest.to_yaml(), encoding="utf-8")
    return path


def write_package_list(prefix: Path) -> Path:
    # Placeholder inventory; the package list is not collected yet.
    path = prefix / PACKAGE_LIST_FILE
    path.touch()
    return path


def archive(prefix: Path, target: Path, *members: str | Path) -> Path:
    """Create a gzip tarball at *target* holding exactly *members*.

    Members are paths relative to *prefix* (absolute paths inside *prefix*
    are accepted) and keep that relative name inside the archive. The
    caller is responsible for moving any pre-existing *target* aside.
    """
    relative = [_relative_member(prefix, m) for m in members]
    missing = [str(m) for m in relative if not (prefix / m).exists()]
    if missing:
        raise ArchiveError(
            f"unable to package {' '.join(missing)} into a stemcell: missing from {prefix}"
        )

    logger.info("Packaging %s to %s", " ".join(str(m) for m in relative), target)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tarfile.open(target, "w:gz") as tar:
            for member in relative:
                tar.add(prefix / member, arcname=member.as_posix())
    except (tarfile.TarError, OSError) as exc:
        raise ArchiveError(f"unable to write stemcell archive {target}: {exc}") from exc
    return target


def _relative_member(prefix: Path, member: str | Path) -> Path:
    path = Path(member)
    if path.is_absolute():
        try:
            return path.relative_to(prefix)
        except ValueError:
            raise ArchiveError(f"archive member {path} is outside {prefix}") from None
    return path
