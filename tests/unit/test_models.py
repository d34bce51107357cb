"""Tests for the Pydantic data models — validation, immutability, defaults."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from stemforge.models import (
    DEFAULT_STAGE_DEFINITIONS,
    BuildConfig,
    IsoReference,
    RenderContext,
    StageState,
    StemcellManifest,
    VariantKind,
)


def _config(tmp_path: Path, **overrides) -> BuildConfig:
    fields = dict(
        name="cell",
        infrastructure="vsphere",
        architecture="x86_64",
        agent_src_path=tmp_path / "agent.gem",
        agent_version="0.7.0",
        bosh_protocol="1",
        prefix=tmp_path,
        target=tmp_path / "cell.tgz",
    )
    fields.update(overrides)
    return BuildConfig(**fields)


class TestStageModels:
    def test_stage_state_values(self):
        assert StageState.NOT_STARTED == "not_started"
        assert StageState.PASSED == "passed"

    def test_default_stages_ordered(self):
        ordinals = [sd.ordinal for sd in DEFAULT_STAGE_DEFINITIONS]
        assert ordinals == sorted(ordinals)
        assert [sd.stage_id for sd in DEFAULT_STAGE_DEFINITIONS] == [
            "setup",
            "build_vm",
            "package_stemcell",
        ]


class TestBuildConfig:
    def test_derived_paths(self, tmp_path: Path):
        config = _config(tmp_path)
        assert config.definitions_dir == tmp_path / "definitions" / "cell"
        assert config.box_path == tmp_path / "cell.box"
        assert config.backup_path == tmp_path / "cell.tgz.bak"
        assert config.type == VariantKind.NOOP

    def test_frozen(self, tmp_path: Path):
        config = _config(tmp_path)
        with pytest.raises(ValidationError):
            config.name = "other"  # type: ignore[misc]

    def test_extras_are_read_only(self, tmp_path: Path):
        config = _config(tmp_path, extras={"release_tar": "r.tgz"})
        with pytest.raises(TypeError):
            config.extras["release_tar"] = "other.tgz"  # type: ignore[index]
        with pytest.raises(TypeError):
            _config(tmp_path).extras["k"] = "v"  # type: ignore[index]
        assert config.extras == {"release_tar": "r.tgz"}

    def test_relative_target_rejected(self, tmp_path: Path):
        with pytest.raises(ValidationError, match="absolute"):
            _config(tmp_path, target=Path("cell.tgz"))

    def test_type_accepts_string_value(self, tmp_path: Path):
        assert _config(tmp_path, type="centosmicro").type == VariantKind.CENTOS_MICRO


class TestStemcellManifest:
    def test_accessors_and_yaml(self):
        manifest = StemcellManifest(
            document={
                "name": "cell",
                "version": "0.7.0",
                "bosh_protocol": "1",
                "cloud_properties": {"infrastructure": "aws"},
            }
        )
        assert manifest.name == "cell"
        assert manifest.version == "0.7.0"
        assert list(yaml.safe_load(manifest.to_yaml())) == [
            "name",
            "version",
            "bosh_protocol",
            "cloud_properties",
        ]

    def test_copies_do_not_leak(self):
        manifest = StemcellManifest(
            document={"name": "c", "version": "v", "bosh_protocol": "1", "cloud_properties": {}}
        )
        manifest.cloud_properties["disk"] = 1
        manifest.as_dict()["name"] = "changed"
        assert manifest.cloud_properties == {}
        assert manifest.name == "c"

    def test_document_cannot_be_edited_in_place(self):
        source = {
            "name": "c",
            "version": "v",
            "bosh_protocol": "1",
            "cloud_properties": {"disks": [1, 2]},
        }
        manifest = StemcellManifest(document=source)
        source["name"] = "changed-after"

        with pytest.raises(TypeError):
            manifest.document["name"] = "changed"  # type: ignore[index]
        with pytest.raises(TypeError):
            manifest.document["cloud_properties"]["disk"] = 1  # type: ignore[index]

        assert manifest.name == "c"
        assert yaml.safe_load(manifest.to_yaml())["cloud_properties"] == {"disks": [1, 2]}


class TestRenderContext:
    def test_from_config_flattens_iso(self, tmp_path: Path):
        iso = IsoReference(url="http://mirror/x.iso", md5="abc", filename="x.iso")
        ctx = RenderContext.from_config(_config(tmp_path, iso=iso), {"k": "v"})
        variables = ctx.variables()
        assert variables["type"] == "noop"
        assert variables["iso_filename"] == "x.iso"
        assert variables["extras"] == {"k": "v"}

    def test_without_iso(self, tmp_path: Path):
        ctx = RenderContext.from_config(_config(tmp_path))
        assert ctx.iso_url is None
        assert ctx.extras == {}
