"""Tests for builder settings — env-driven."""

from __future__ import annotations

from pathlib import Path

from stemforge.config import PACKAGE_TEMPLATES_ROOT, BuilderSettings


class TestBuilderSettings:
    def test_defaults(self):
        settings = BuilderSettings()
        assert settings.log_level == "INFO"
        assert settings.veewee_bin == "veewee"
        assert settings.veewee_provider == "vbox"
        assert settings.vagrant_bin == "vagrant"
        assert settings.ssh_key_path is None

    def test_templates_root_defaults_to_package(self):
        assert BuilderSettings().templates_root == PACKAGE_TEMPLATES_ROOT
        assert PACKAGE_TEMPLATES_ROOT.is_dir()

    def test_template_dir(self, tmp_path: Path):
        settings = BuilderSettings(templates_root=tmp_path)
        assert settings.template_dir("centos") == tmp_path / "centos"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STEMFORGE_VEEWEE_PROVIDER", "kvm")
        monkeypatch.setenv("STEMFORGE_SSH_PORT", "2200")
        settings = BuilderSettings()
        assert settings.veewee_provider == "kvm"
        assert settings.ssh_port == 2200
