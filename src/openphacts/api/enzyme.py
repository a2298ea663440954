"""Enzyme classification (EC) hierarchy and its pharmacology."""

from __future__ import annotations

from openphacts.normalize.merge import BatchEntry
from openphacts.normalize.sources import SourceClassifier
from openphacts.normalize.utils import ABOUT, PRIMARY_TOPIC, lookup, mappings, require, to_sequence
from openphacts.params import ActivityFilters, Paging
from openphacts.transport import ApiResponse

from .base import ResourceClient, parse_count
from .pharmacology import ActivityRecord, PharmacologyParser


def _named(value: object) -> list[dict[str, object]]:
    return [{"uri": node.get(ABOUT), "name": node.get("name")} for node in mappings(value)]


def parse_root_classes(result: object) -> list[dict[str, object]]:
    return _named(lookup(require(result, PRIMARY_TOPIC), "rootNode"))


def parse_class(result: object) -> dict[str, object]:
    """A class with its siblings."""
    topic = require(result, PRIMARY_TOPIC)
    return {
        "uri": lookup(topic, ABOUT),
        "name": lookup(topic, "name"),
        "siblings": _named(lookup(topic, "sibling")),
    }


def parse_class_members(result: object) -> list[dict[str, object]]:
    members = lookup(require(result, PRIMARY_TOPIC), "has_member")
    return [
        {"uri": member.get(ABOUT), "names": to_sequence(member.get("name"))}
        for member in mappings(members)
    ]


def parse_pharmacology_count(result: object) -> int:
    return parse_count(result, "enzymePharmacologyTotalResults")


def parse_pharmacology(
    result: object, classifier: SourceClassifier | None = None
) -> list[BatchEntry[ActivityRecord]]:
    return PharmacologyParser(classifier).parse_page(result)


class EnzymeClient(ResourceClient):
    """Requests for the ``/target/enzyme`` endpoints."""

    def root_classes(self) -> ApiResponse:
        return self._get("/target/enzyme/root", use_lens=False)

    def classification_class(self, uri: str) -> ApiResponse:
        return self._get("/target/enzyme/node", {"uri": uri}, use_lens=False)

    def class_members(self, uri: str) -> ApiResponse:
        return self._get("/target/enzyme/members", {"uri": uri}, use_lens=False)

    def pharmacology_count(
        self, uri: str, filters: ActivityFilters | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/target/enzyme/pharmacology/count", {"uri": uri}, filters, lens=lens)

    def pharmacology(
        self,
        uri: str,
        filters: ActivityFilters | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get(
            "/target/enzyme/pharmacology/pages", {"uri": uri}, filters, paging, lens=lens
        )
