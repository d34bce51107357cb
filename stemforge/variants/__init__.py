"""stemforge variants — registry mapping variant kind to variant class.

Usage::

    from stemforge.variants import get_variant

    variant = get_variant("centos", options)
    variant.template_name  # "centos"
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from stemforge.core.resolver import ConfigurationError
from stemforge.models.variants import VariantKind
from stemforge.variants.base import Variant
from stemforge.variants.centos_micro import MicroCentosVariant
from stemforge.variants.distros import CentosVariant, RedhatVariant, UbuntuVariant

VARIANT_REGISTRY: dict[VariantKind, type[Variant]] = {
    VariantKind.NOOP: Variant,
    VariantKind.UBUNTU: UbuntuVariant,
    VariantKind.REDHAT: RedhatVariant,
    VariantKind.CENTOS: CentosVariant,
    VariantKind.CENTOS_MICRO: MicroCentosVariant,
}


def get_variant(
    kind: str | VariantKind, options: Mapping[str, Any] | None = None
) -> Variant:
    """Instantiate the variant registered for *kind*.

    Raises ``ConfigurationError`` if *kind* is not a known variant.
    """
    try:
        cls = VARIANT_REGISTRY[VariantKind(kind)]
    except ValueError:
        raise ConfigurationError(
            f"Unknown stemcell type {kind!r}. "
            f"Known types: {sorted(k.value for k in VARIANT_REGISTRY)}"
        ) from None
    return cls(options)


__all__ = [
    "VARIANT_REGISTRY",
    "get_variant",
    "Variant",
    "UbuntuVariant",
    "RedhatVariant",
    "CentosVariant",
    "MicroCentosVariant",
]
