"""CentOS micro-bosh variant.

Builds a CentOS stemcell with a complete micro-bosh release baked in. On
top of the CentOS definition it stages three payloads into the definition
directory and, once the VM is built, pulls two diagnostic files off it that
end up in the stemcell archive.

Release inputs are produced outside this tool: build the bosh packages with
``rake all:build_with_deps`` and create the release with
``bosh create release --force --with-tarball`` using the microbosh dev
template as ``release/config/dev.yml``.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from stemforge.core.resolver import ConfigurationError
from stemforge.models.config import BuildConfig
from stemforge.models.variants import VariantKind
from stemforge.variants.distros import CentosVariant

if TYPE_CHECKING:
    from stemforge.core.remote import RemoteShell

logger = logging.getLogger(__name__)

PACKAGE_COMPILER_FILE = "_package_compiler.tar"
RELEASE_TAR_FILE = "_release.tgz"
RELEASE_MANIFEST_FILE = "_release.yml"

# Remote path on the built VM -> file name inside the staging directory.
DOWNLOADED_FILES: dict[str, str] = {
    "/var/vcap/bosh/stemcell_yum_list_installed.out": "stemcell_yum_list_installed.out",
    "/var/vcap/micro/apply_spec.yml": "apply_spec.yml",
}


class MicroCentosVariant(CentosVariant):
    """CentOS stemcell with an embedded micro-bosh release."""

    kind: ClassVar[VariantKind] = VariantKind.CENTOS_MICRO
    option_keys: ClassVar[frozenset[str]] = frozenset(
        {"release_manifest", "release_tar", "package_compiler_tar"}
    )

    def _path(self, config: BuildConfig, key: str) -> Path | None:
        value = config.extras.get(key)
        return Path(value).expanduser().resolve() if value else None

    def _inputs(self, config: BuildConfig) -> dict[str, Path]:
        """Resolved release inputs; raises if any is unset or missing."""
        paths = {key: self._path(config, key) for key in sorted(self.option_keys)}
        missing = [
            f"{key}={path}" for key, path in paths.items() if path is None or not path.exists()
        ]
        if missing:
            raise ConfigurationError(
                "Please confirm release_tar, release_manifest and package_compiler_tar "
                f"exist: {', '.join(missing)}"
            )
        return {key: path for key, path in paths.items() if path is not None}

    def validate(self, config: BuildConfig) -> None:
        self._inputs(config)

    def render_extras(self, config: BuildConfig) -> dict[str, Any]:
        return {
            "package_compiler_file": PACKAGE_COMPILER_FILE,
            "release_tar_file": RELEASE_TAR_FILE,
            "release_manifest_file": RELEASE_MANIFEST_FILE,
        }

    def stage_setup_extra(self, config: BuildConfig, dest_dir: Path) -> list[Path]:
        inputs = self._inputs(config)
        compiler = inputs["package_compiler_tar"]
        release_tar = inputs["release_tar"]
        release_manifest = inputs["release_manifest"]

        compiler_dest = dest_dir / PACKAGE_COMPILER_FILE
        if compiler.is_dir():
            logger.info("Packing package compiler directory %s", compiler)
            _tar_directory_contents(compiler, compiler_dest)
        else:
            shutil.copyfile(compiler, compiler_dest)

        release_tar_dest = dest_dir / RELEASE_TAR_FILE
        release_manifest_dest = dest_dir / RELEASE_MANIFEST_FILE
        shutil.copyfile(release_tar, release_tar_dest)
        shutil.copyfile(release_manifest, release_manifest_dest)
        return [compiler_dest, release_tar_dest, release_manifest_dest]

    def post_build_hook(self, config: BuildConfig, remote: RemoteShell) -> list[Path]:
        return [
            remote.download_file(remote_path, config.prefix / local_name)
            for remote_path, local_name in DOWNLOADED_FILES.items()
        ]

    def stage_package_extra(self, config: BuildConfig) -> list[Path]:
        return [config.prefix / local_name for local_name in DOWNLOADED_FILES.values()]


def _tar_directory_contents(source_dir: Path, tar_path: Path) -> None:
    """Uncompressed tar of the entries of *source_dir* (not the dir itself)."""
    with tarfile.open(tar_path, "w") as tar:
        for entry in sorted(source_dir.iterdir()):
            tar.add(entry, arcname=entry.name)
