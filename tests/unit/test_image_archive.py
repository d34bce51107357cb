"""Unit tests for the image assembler and the archiver."""

from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest
import yaml

from stemforge.core.archive import (
    ArchiveError,
    archive,
    write_manifest,
    write_package_list,
)
from stemforge.core.image import ImageAssemblyError, assemble_image
from stemforge.core.manifest import build_manifest
from stemforge.core.resolver import resolve_build_config


class TestAssembleImage:
    def test_repacks_disk_and_descriptor(self, prefix: Path, box_writer):
        box_writer(prefix / "cell.box")
        image = assemble_image(prefix, "cell")

        assert image == prefix / "image"
        with tarfile.open(image, "r:gz") as tar:
            assert sorted(tar.getnames()) == ["box-disk1.vmdk", "box.ovf"]

    def test_missing_box_raises(self, prefix: Path):
        with pytest.raises(ImageAssemblyError, match="cell.box"):
            assemble_image(prefix, "cell")

    def test_corrupt_box_raises(self, prefix: Path):
        (prefix / "cell.box").write_bytes(b"not a tarball")
        with pytest.raises(ImageAssemblyError, match="unpack"):
            assemble_image(prefix, "cell")

    def test_box_member_escaping_prefix_is_refused(self, prefix: Path, tmp_path: Path):
        payload = b"\x00" * 16
        info = tarfile.TarInfo("../escaped-disk1.vmdk")
        info.size = len(payload)
        with tarfile.open(prefix / "cell.box", "w:gz") as tar:
            tar.addfile(info, io.BytesIO(payload))

        with pytest.raises(ImageAssemblyError, match="unpack"):
            assemble_image(prefix, "cell")
        assert not (tmp_path / "escaped-disk1.vmdk").exists()

    def test_box_without_disks_raises(self, prefix: Path, tmp_path: Path):
        readme = tmp_path / "README"
        readme.write_text("no disks here")
        with tarfile.open(prefix / "cell.box", "w:gz") as tar:
            tar.add(readme, arcname="README")
        with pytest.raises(ImageAssemblyError, match="no"):
            assemble_image(prefix, "cell")


class TestArchive:
    def test_contains_exactly_named_members(self, prefix: Path):
        for name in ("image", "stemcell.MF", "stemcell_dpkg_l.txt", "unrelated.txt"):
            (prefix / name).write_text(name)
        target = prefix / "out.tgz"

        archive(prefix, target, "image", prefix / "stemcell.MF", "stemcell_dpkg_l.txt")

        with tarfile.open(target, "r:gz") as tar:
            assert sorted(tar.getnames()) == ["image", "stemcell.MF", "stemcell_dpkg_l.txt"]

    def test_missing_member_raises(self, prefix: Path):
        with pytest.raises(ArchiveError, match="image"):
            archive(prefix, prefix / "out.tgz", "image")

    def test_member_outside_prefix_raises(self, prefix: Path, tmp_path: Path):
        outside = tmp_path / "outside.txt"
        outside.write_text("x")
        with pytest.raises(ArchiveError, match="outside"):
            archive(prefix, prefix / "out.tgz", outside)

    def test_target_parent_created(self, prefix: Path):
        (prefix / "image").write_text("i")
        target = prefix / "nested" / "dir" / "out.tgz"
        archive(prefix, target, "image")
        assert target.is_file()


class TestManifestAndInventory:
    def test_write_manifest_is_parsable_yaml(self, prefix: Path):
        config = resolve_build_config({"prefix": str(prefix), "name": "cell"})
        path = write_manifest(prefix, build_manifest({"extra": 1}, config))

        assert path == prefix / "stemcell.MF"
        data = yaml.safe_load(path.read_text())
        assert data["name"] == "cell"
        assert data["extra"] == 1
        assert data["cloud_properties"] == {"infrastructure": "vsphere", "architecture": "x86_64"}

    def test_package_list_is_empty_placeholder(self, prefix: Path):
        path = write_package_list(prefix)
        assert path == prefix / "stemcell_dpkg_l.txt"
        assert path.read_text() == ""
