"""Variant capability interface.

A variant picks the definition template directory and may contribute data
around the fixed pipeline stages:

    setup:            base staging -> ``stage_setup_extra``
    build_vm:         build -> ``post_build_hook`` -> export -> destroy
    package_stemcell: base members + ``stage_package_extra``

Variants never reorder stages; they only add payloads, hooks and members.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from stemforge.models.config import BuildConfig
from stemforge.models.variants import VariantKind

if TYPE_CHECKING:
    from stemforge.core.remote import RemoteShell


class Variant:
    """Base variant. Used directly it is the ``noop`` sentinel."""

    kind: ClassVar[VariantKind] = VariantKind.NOOP

    # Construction option keys this variant consumes beyond the core ones.
    option_keys: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        self.options = dict(options or {})

    @property
    def template_name(self) -> str:
        """Directory name under the templates root."""
        return self.kind.value

    def default_options(self) -> dict[str, Any]:
        """Options applied beneath the caller's options."""
        return {}

    def validate(self, config: BuildConfig) -> None:
        """Check variant inputs; raise ``ConfigurationError`` when invalid."""

    def render_extras(self, config: BuildConfig) -> dict[str, Any]:
        """Additional variables exposed to templates under ``extras``."""
        return {}

    def stage_setup_extra(self, config: BuildConfig, dest_dir: Path) -> list[Path]:
        """Place extra payloads into the definition directory."""
        return []

    def post_build_hook(self, config: BuildConfig, remote: RemoteShell) -> list[Path]:
        """Runs after the VM is built and before it is exported and destroyed."""
        return []

    def stage_package_extra(self, config: BuildConfig) -> list[Path]:
        """Extra files (inside ``config.prefix``) to add to the archive."""
        return []

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind.value!r}>"
