"""Shared plumbing for the resource clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from openphacts.normalize.sources import SourceClassifier, default_classifier
from openphacts.normalize.utils import ITEMS, PRIMARY_TOPIC, lookup, mappings, require
from openphacts.params import merge_params
from openphacts.transport import ApiResponse, Transport


class ResourceClient:
    """Base class for one API resource family.

    Subclasses build request parameters and call ``_get``; the lens given
    per call wins over the configured default lens.
    """

    def __init__(
        self,
        transport: Transport,
        classifier: SourceClassifier | None = None,
    ) -> None:
        self.transport = transport
        self.classifier = classifier or default_classifier()

    def _get(
        self,
        path: str,
        *groups: object,
        lens: str | None = None,
        use_lens: bool = True,
    ) -> ApiResponse:
        params = merge_params(*groups)
        if use_lens:
            chosen = lens or self.transport.config.default_lens
            if chosen:
                params["_lens"] = chosen
        return self.transport.get(path, params)


def parse_count(result: object, key: str) -> int:
    """Read an integer count from ``primaryTopic.<key>``."""
    value = require(result, PRIMARY_TOPIC, key)
    try:
        return int(str(value))
    except ValueError as e:
        raise ValueError(f"Count {PRIMARY_TOPIC}.{key} is not an integer: {value!r}") from e


def result_items(result: object) -> list:
    """The ``items`` list of a paged result; absent means no items."""
    return mappings(lookup(result, ITEMS))


@dataclass
class PageInfo:
    """Paging links of a ``/pages`` response."""

    start_index: Optional[int] = None
    items_per_page: Optional[int] = None
    next: Optional[str] = None
    prev: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "startIndex": self.start_index,
            "itemsPerPage": self.items_per_page,
            "next": self.next,
            "prev": self.prev,
        }


def parse_page_info(result: object) -> PageInfo:
    def as_int(value: object) -> Optional[int]:
        return int(str(value)) if value is not None else None

    def as_link(value: object) -> Optional[str]:
        if isinstance(value, dict):
            value = value.get("_about")
        return str(value) if value is not None else None

    return PageInfo(
        start_index=as_int(lookup(result, "startIndex")),
        items_per_page=as_int(lookup(result, "itemsPerPage")),
        next=as_link(lookup(result, "next")),
        prev=as_link(lookup(result, "prev")),
    )
