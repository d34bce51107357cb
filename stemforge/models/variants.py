"""Stemcell variant kinds."""

from __future__ import annotations

from enum import Enum


class VariantKind(str, Enum):
    """Closed set of distributions a stemcell can be built for.

    ``NOOP`` is the sentinel used when no real distribution is selected;
    it ships no templates and is useful for dry-run builders.
    """

    NOOP = "noop"
    UBUNTU = "ubuntu"
    REDHAT = "redhat"
    CENTOS = "centos"
    CENTOS_MICRO = "centosmicro"
