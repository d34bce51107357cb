"""Configuration resolver — options mapping to an immutable ``BuildConfig``.

User options are layered over the variant's default options, which are
layered over the package defaults in ``stemforge.models.defaults``.
``agent_version`` and ``bosh_protocol`` always come from the bundled agent.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from stemforge.models import defaults
from stemforge.models.config import BuildConfig, IsoReference
from stemforge.models.variants import VariantKind

# Installation ISO settings are taken as a unit: a user ISO replaces every
# variant ISO default.
_ISO_KEYS = frozenset({"iso", "iso_md5", "iso_filename"})

# Derived from the bundled agent; accepted as options but never applied.
_DERIVED_KEYS = frozenset({"agent_version", "bosh_protocol"})

# Keys that map onto BuildConfig fields; anything else a variant declares
# in ``option_keys`` is carried in ``BuildConfig.extras``.
_CORE_KEYS = frozenset(
    {
        "name",
        "type",
        "target",
        "infrastructure",
        "architecture",
        "agent_src_path",
        "prefix",
    }
) | _ISO_KEYS


class ConfigurationError(ValueError):
    """Raised when build options are invalid or required inputs are missing."""


def resolve_build_config(
    options: Mapping[str, Any],
    *,
    variant_type: VariantKind = VariantKind.NOOP,
    variant_defaults: Mapping[str, Any] | None = None,
    extra_keys: frozenset[str] = frozenset(),
) -> BuildConfig:
    """Merge *options* with defaults into a ``BuildConfig``.

    Raises ``ConfigurationError`` when an ISO url is given without its md5.
    """
    user = {k: v for k, v in options.items() if v is not None}
    merged: dict[str, Any] = dict(variant_defaults or {})
    if user.get("iso"):
        for key in _ISO_KEYS:
            merged.pop(key, None)
    merged.update(user)

    agent_version = defaults.AGENT_VERSION
    bosh_protocol = defaults.BOSH_PROTOCOL

    prefix = Path(merged.get("prefix") or os.getcwd()).expanduser().resolve()
    agent_src_path = Path(
        merged.get("agent_src_path") or defaults.default_agent_src_path(agent_version)
    ).expanduser()

    target_option = merged.get("target")
    if target_option:
        target = Path(target_option).expanduser()
        if not target.is_absolute():
            target = prefix / target
    else:
        target = prefix / defaults.default_target_name(variant_type.value, agent_version)

    return BuildConfig(
        name=merged.get("name") or defaults.DEFAULT_STEMCELL_NAME,
        type=variant_type,
        infrastructure=merged.get("infrastructure") or defaults.DEFAULT_INFRASTRUCTURE,
        architecture=merged.get("architecture") or defaults.DEFAULT_ARCHITECTURE,
        agent_src_path=agent_src_path,
        agent_version=agent_version,
        bosh_protocol=bosh_protocol,
        prefix=prefix,
        target=target,
        iso=_resolve_iso(merged),
        extras={k: merged[k] for k in sorted(extra_keys) if k in merged},
    )


def _resolve_iso(merged: Mapping[str, Any]) -> IsoReference | None:
    url = merged.get("iso")
    if not url:
        return None
    md5 = merged.get("iso_md5")
    if not md5:
        raise ConfigurationError("MD5 must be specified if ISO is specified")
    filename = merged.get("iso_filename") or os.path.basename(urlparse(str(url)).path)
    return IsoReference(url=str(url), md5=str(md5), filename=filename)


def unknown_option_keys(
    options: Mapping[str, Any], extra_keys: frozenset[str] = frozenset()
) -> list[str]:
    """Option keys that neither the core config nor the variant recognise."""
    known = _CORE_KEYS | _DERIVED_KEYS | extra_keys | {"logger"}
    return sorted(k for k in options if k not in known)
