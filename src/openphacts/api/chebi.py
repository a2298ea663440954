"""ChEBI ontology classes and their pharmacology."""

from __future__ import annotations

from openphacts.normalize.merge import BatchEntry
from openphacts.normalize.sources import SourceClassifier
from openphacts.normalize.utils import ABOUT, LABEL, PRIMARY_TOPIC, lookup, mappings, require
from openphacts.params import ActivityFilters, Paging
from openphacts.transport import ApiResponse

from .base import ResourceClient, parse_count
from .pharmacology import ActivityRecord, PharmacologyParser


def _labelled(value: object) -> list[dict[str, object]]:
    return [{"uri": node.get(ABOUT), "label": node.get(LABEL)} for node in mappings(value)]


def parse_class_members(result: object) -> list[dict[str, object]]:
    return _labelled(lookup(require(result, PRIMARY_TOPIC), "has_member"))


def parse_root_classes(result: object) -> list[dict[str, object]]:
    return _labelled(lookup(require(result, PRIMARY_TOPIC), "rootNode"))


def parse_class(result: object) -> list[dict[str, object]]:
    """Siblings of a ChEBI class."""
    return _labelled(lookup(require(result, PRIMARY_TOPIC), "sibling"))


def parse_pharmacology_count(result: object) -> int:
    return parse_count(result, "chebiPharmacologyTotalResults")


def parse_pharmacology(
    result: object, classifier: SourceClassifier | None = None
) -> list[BatchEntry[ActivityRecord]]:
    return PharmacologyParser(classifier).parse_page(result)


class ChebiClient(ResourceClient):
    """Requests for the ``/compound/chebi`` endpoints."""

    def class_members(self, uri: str) -> ApiResponse:
        return self._get("/compound/chebi/members", {"uri": uri}, use_lens=False)

    def root_classes(self) -> ApiResponse:
        return self._get("/compound/chebi/root", use_lens=False)

    def ontology_class(self, uri: str) -> ApiResponse:
        return self._get("/compound/chebi/node", {"uri": uri}, use_lens=False)

    def pharmacology_count(
        self, uri: str, filters: ActivityFilters | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/compound/chebi/pharmacology/count", {"uri": uri}, filters, lens=lens)

    def pharmacology(
        self,
        uri: str,
        filters: ActivityFilters | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get(
            "/compound/chebi/pharmacology/pages", {"uri": uri}, filters, paging, lens=lens
        )
