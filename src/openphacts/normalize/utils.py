"""Helpers for reading Linked Data API payloads.

The upstream service returns a field as a single object when there is one
value and as a list when there are several; ``to_sequence`` is the one place
that quirk is absorbed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from openphacts.errors import ShapeError

ABOUT = "_about"
IN_DATASET = "inDataset"
EXACT_MATCH = "exactMatch"
PRIMARY_TOPIC = "primaryTopic"
ITEMS = "items"
PREF_LABEL = "prefLabel"
LABEL = "label"


def to_sequence(value: object) -> list[object]:
    """Return ``value`` as a list: None -> [], singleton -> [value]."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def mappings(value: object) -> list[Mapping[str, object]]:
    """Like ``to_sequence`` but keeps only mapping members."""
    return [item for item in to_sequence(value) if isinstance(item, Mapping)]


def lookup(block: object, *path: str) -> object:
    """Walk ``path`` through nested mappings, returning None when any step is missing."""
    current: object = block
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def require(block: object, *path: str) -> object:
    """Like ``lookup`` but raise ShapeError naming the missing path."""
    value = lookup(block, *path)
    if value is None:
        raise ShapeError(".".join(path))
    return value


def first_mapping(value: object) -> Optional[Mapping[str, object]]:
    """Return the first mapping in a singleton-or-list value."""
    found = mappings(value)
    return found[0] if found else None


def last_segment(uri: object) -> str:
    """Trailing path segment of a URI (``http://x/y/CHEMBL25`` -> ``CHEMBL25``)."""
    return str(uri).rstrip("/").split("/")[-1]


def about(block: object) -> Optional[str]:
    """The ``_about`` identity of a block, if it has one."""
    value = lookup(block, ABOUT)
    return str(value) if value is not None else None
