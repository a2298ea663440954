"""Classification hierarchies (ChEBI, GO, enzyme, ChEMBL target tree)."""

from __future__ import annotations

from openphacts.normalize.merge import BatchEntry
from openphacts.normalize.sources import SourceClassifier
from openphacts.normalize.utils import (
    ABOUT,
    EXACT_MATCH,
    PREF_LABEL,
    PRIMARY_TOPIC,
    lookup,
    mappings,
    require,
    to_sequence,
)
from openphacts.params import ActivityFilters, Paging
from openphacts.transport import ApiResponse

from .base import ResourceClient, parse_count
from .pharmacology import ActivityRecord, PharmacologyParser


def _first(value: object) -> object:
    values = to_sequence(value)
    return values[0] if values else None


def _named_nodes(value: object) -> list[dict[str, object]]:
    return [
        {"uri": node.get(ABOUT), "names": to_sequence(node.get(PREF_LABEL))}
        for node in mappings(value)
    ]


def parse_root_nodes(result: object) -> dict[str, object]:
    """Root classes of a hierarchy with the hierarchy's label."""
    part = lookup(require(result, PRIMARY_TOPIC), "hasPart")
    return {
        "label": lookup(part, PREF_LABEL),
        "rootClasses": [
            {"uri": node.get(ABOUT), "name": node.get(PREF_LABEL)}
            for node in mappings(lookup(part, "rootNode"))
        ],
    }


def parse_child_nodes(result: object) -> dict[str, object]:
    """Direct children of a class.

    Depending on the hierarchy the children sit on the topic itself or
    inside its ``exactMatch`` block.
    """
    topic = require(result, PRIMARY_TOPIC)
    children = lookup(topic, "childNode")
    if children is None:
        children = lookup(topic, EXACT_MATCH, "childNode")
    return {"label": lookup(topic, PREF_LABEL), "children": _named_nodes(children)}


def parse_parent_nodes(result: object) -> dict[str, object]:
    topic = require(result, PRIMARY_TOPIC)
    return {
        "label": _first(lookup(topic, PREF_LABEL)),
        "parents": _named_nodes(lookup(topic, "parentNode")),
    }


def parse_target_class_pharmacology_count(result: object) -> int:
    return parse_count(result, "targetPharmacologyTotalResults")


def parse_compound_class_pharmacology_count(result: object) -> int:
    return parse_count(result, "compoundPharmacologyTotalResults")


def parse_class_pharmacology(
    result: object, classifier: SourceClassifier | None = None
) -> list[BatchEntry[ActivityRecord]]:
    return PharmacologyParser(classifier).parse_page(result)


class TreeClient(ResourceClient):
    """Requests for the ``/tree`` endpoints and class-level pharmacology."""

    def root_nodes(self, root: str) -> ApiResponse:
        """Root classes of the hierarchy named ``root`` (e.g. ``chebi``, ``enzyme``)."""
        return self._get("/tree", {"root": root}, use_lens=False)

    def child_nodes(self, uri: str) -> ApiResponse:
        return self._get("/tree/children", {"uri": uri}, use_lens=False)

    def parent_nodes(self, uri: str) -> ApiResponse:
        return self._get("/tree/parents", {"uri": uri}, use_lens=False)

    def target_class_pharmacology_count(
        self, uri: str, filters: ActivityFilters | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/target/tree/pharmacology/count", {"uri": uri}, filters, lens=lens)

    def target_class_pharmacology(
        self,
        uri: str,
        filters: ActivityFilters | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get(
            "/target/tree/pharmacology/pages", {"uri": uri}, filters, paging, lens=lens
        )

    def compound_class_pharmacology_count(
        self, uri: str, filters: ActivityFilters | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/compound/tree/pharmacology/count", {"uri": uri}, filters, lens=lens)

    def compound_class_pharmacology(
        self,
        uri: str,
        filters: ActivityFilters | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get(
            "/compound/tree/pharmacology/pages", {"uri": uri}, filters, paging, lens=lens
        )
