"""Tissue resource."""

from __future__ import annotations

from collections.abc import Iterable

from openphacts.normalize.merge import BatchEntry, map_items
from openphacts.normalize.utils import (
    ABOUT,
    IN_DATASET,
    LABEL,
    PRIMARY_TOPIC,
    lookup,
    require,
    to_sequence,
)
from openphacts.transport import ApiResponse

from .base import ResourceClient, result_items


def _tissue(block: object) -> dict[str, object]:
    return {
        "uri": require(block, ABOUT),
        "label": lookup(block, LABEL),
        "definition": lookup(block, "definition"),
        "dataset": lookup(block, IN_DATASET),
        "dbXrefs": to_sequence(lookup(block, "hasDbXref")),
    }


def parse_tissue(result: object) -> dict[str, object]:
    return _tissue(require(result, PRIMARY_TOPIC))


def parse_tissue_batch(result: object) -> list[BatchEntry[dict[str, object]]]:
    return map_items(result_items(result), _tissue)


class TissueClient(ResourceClient):
    def information(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/tissue", {"uri": uri}, lens=lens)

    def batch(self, uris: Iterable[str], lens: str | None = None) -> ApiResponse:
        return self._get("/tissue/batch", {"uri_list": "|".join(uris)}, lens=lens)
