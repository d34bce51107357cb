"""Read-only views for the mapping fields of frozen models.

``ConfigDict(frozen=True)`` only blocks attribute assignment; a ``dict``
field can still be edited in place. ``freeze`` turns nested mappings into
``MappingProxyType`` and lists into tuples, ``thaw`` turns them back into
plain, independent containers.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any


def freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value
