"""Tool environment settings — env-driven.

Reads from a .env file and STEMFORGE_* environment variables. These
settings describe *where the external tools live*; per-build inputs
(name, infrastructure, agent source, ...) are construction options
resolved into a ``BuildConfig``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Template directories shipped with the package, one per variant.
PACKAGE_TEMPLATES_ROOT = Path(__file__).resolve().parent / "templates"


class BuilderSettings(BaseSettings):
    """Settings for the external collaborators driven by the builder.

    Examples
    --------
    Override via environment::

        export STEMFORGE_LOG_LEVEL=DEBUG
        export STEMFORGE_VEEWEE_PROVIDER=kvm
        export STEMFORGE_TEMPLATES_ROOT=/srv/stemcell-templates
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STEMFORGE_",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"

    # Definition templates: <templates_root>/<variant type>/
    templates_root: Path = PACKAGE_TEMPLATES_ROOT

    # VM builder / exporter
    veewee_bin: str = "veewee"
    veewee_provider: str = "vbox"
    vagrant_bin: str = "vagrant"

    # Agent build-from-source
    gem_bin: str = "gem"

    # Remote file download from the freshly built VM
    scp_bin: str = "scp"
    ssh_host: str = "127.0.0.1"
    ssh_port: int = 7222
    ssh_user: str = "vcap"
    ssh_key_path: Path | None = None

    def template_dir(self, variant_type: str) -> Path:
        return self.templates_root / variant_type
