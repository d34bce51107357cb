"""Distribution variants that only select a template directory."""

from __future__ import annotations

from typing import Any, ClassVar

from stemforge.models.variants import VariantKind
from stemforge.variants.base import Variant

CENTOS_ISO_URL = (
    "http://www.mirrorservice.org/sites/mirror.centos.org/6.3/isos/x86_64/"
    "CentOS-6.3-x86_64-minimal.iso"
)
CENTOS_ISO_MD5 = "087713752fa88c03a5e8471c661ad1a2"
CENTOS_ISO_FILENAME = "CentOS-6.3-x86_64-minimal.iso"


class UbuntuVariant(Variant):
    kind: ClassVar[VariantKind] = VariantKind.UBUNTU


class RedhatVariant(Variant):
    kind: ClassVar[VariantKind] = VariantKind.REDHAT


class CentosVariant(Variant):
    """CentOS 6.3 minimal, installed from the upstream ISO by default."""

    kind: ClassVar[VariantKind] = VariantKind.CENTOS

    def default_options(self) -> dict[str, Any]:
        return {
            "iso": CENTOS_ISO_URL,
            "iso_md5": CENTOS_ISO_MD5,
            "iso_filename": CENTOS_ISO_FILENAME,
        }
