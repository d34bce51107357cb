"""Manifest builder — deep-merges caller overrides onto computed defaults."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from stemforge.models.config import BuildConfig
from stemforge.models.manifest import StemcellManifest


def deep_merge(override: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Merge *override* onto *defaults*, returning a new mapping.

    Override leaves win at every level. When both sides hold a mapping for
    the same key the two are merged key-by-key instead of replaced, so a
    partial override never erases sibling defaults. Neither input is
    modified.
    """
    merged: dict[str, Any] = copy.deepcopy(dict(defaults))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(value, current)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def default_manifest(config: BuildConfig) -> dict[str, Any]:
    return {
        "name": config.name,
        "version": config.agent_version,
        "bosh_protocol": config.bosh_protocol,
        "cloud_properties": {
            "infrastructure": config.infrastructure,
            "architecture": config.architecture,
        },
    }


def build_manifest(
    override: Mapping[str, Any] | None, config: BuildConfig
) -> StemcellManifest:
    return StemcellManifest(document=deep_merge(override or {}, default_manifest(config)))
