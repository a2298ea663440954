"""Pathway resource (WikiPathways)."""

from __future__ import annotations

from openphacts.normalize.merge import BatchEntry, map_items
from openphacts.normalize.utils import (
    ABOUT,
    EXACT_MATCH,
    LABEL,
    PREF_LABEL,
    PRIMARY_TOPIC,
    about,
    first_mapping,
    lookup,
    mappings,
    require,
    to_sequence,
)
from openphacts.params import Paging
from openphacts.transport import ApiResponse

from .base import ResourceClient, parse_count, result_items

PATHWAY_COUNT = "pathway_count"
WIKIPATHWAYS = "wikipathways"


def parse_information(result: object) -> dict[str, object]:
    """Describe the latest revision of a pathway.

    Provenance for title and description is the pathway identifier; the
    organism label links to the organism URI.
    """
    topic = require(result, PRIMARY_TOPIC)
    identifier = require(topic, ABOUT)
    latest = lookup(topic, "latest_version")
    organism = lookup(latest, "organism")
    organism_uri = about(organism)

    record: dict[str, object] = {
        "URI": identifier,
        "identifier": identifier,
        "title": lookup(latest, "title"),
        "description": lookup(latest, "description"),
        "revision": about(latest),
        "pathwayOntologies": to_sequence(lookup(latest, "pathwayOntology")),
        "organism": organism_uri,
        "organismLabel": lookup(organism, LABEL),
        "parts": [
            {"about": about(part), "type": part.get("type")}
            for part in mappings(lookup(latest, "hasPart"))
        ],
    }

    provenance: dict[str, object] = {}
    for name in ("title", "description"):
        if record[name] is not None:
            provenance[name] = identifier
    if record["organismLabel"] is not None and organism_uri is not None:
        provenance["organismLabel"] = organism_uri
    record["provenance"] = {WIKIPATHWAYS: provenance}
    return record


def _pathway_summary(item: object) -> dict[str, object]:
    organism = lookup(item, "pathway_organism")
    return {
        "URI": require(item, ABOUT),
        "title": lookup(item, "title"),
        "identifier": lookup(item, "identifier"),
        "description": lookup(item, "description"),
        "pathwayOntology": to_sequence(lookup(item, "pathwayOntology")),
        "organism": about(organism),
        "organismLabel": lookup(organism, LABEL),
    }


def _parts(item: object) -> list[dict[str, object]]:
    """Pathway parts with the labelled concepts they match."""
    return [
        {
            "URI": about(part),
            "type": part.get("type"),
            "exactMatch": [
                {"label": match.get(PREF_LABEL), "URI": about(match)}
                for match in mappings(part.get(EXACT_MATCH))
            ],
        }
        for part in mappings(lookup(item, "hasPart"))
    ]


def parse_by_compound(result: object) -> list[BatchEntry[dict[str, object]]]:
    """Pathways containing a compound; ``parts`` holds the matched compound."""
    return map_items(
        result_items(result), lambda item: {**_pathway_summary(item), "parts": _parts(item)}
    )


def parse_by_target(result: object) -> list[BatchEntry[dict[str, object]]]:
    """Pathways containing a target; ``geneProducts`` holds the matched products."""
    return map_items(
        result_items(result), lambda item: {**_pathway_summary(item), "geneProducts": _parts(item)}
    )


def parse_by_reference(result: object) -> list[BatchEntry[dict[str, object]]]:
    def pathway(item: object) -> dict[str, object]:
        publication = first_mapping(lookup(item, "hasPart"))
        return {**_pathway_summary(item), "publication": about(publication)}

    return map_items(result_items(result), pathway)


def parse_pathway_count(result: object) -> int:
    """Count from any of the pathway ``/count`` endpoints."""
    return parse_count(result, PATHWAY_COUNT)


def _latest_parts(result: object, name: str) -> dict[str, object]:
    latest = lookup(require(result, PRIMARY_TOPIC), "latest_version")
    return {
        "title": lookup(latest, "title"),
        "revision": about(latest),
        name: to_sequence(lookup(latest, "hasPart")),
    }


def parse_targets(result: object) -> dict[str, object]:
    return _latest_parts(result, "geneProducts")


def parse_compounds(result: object) -> dict[str, object]:
    return _latest_parts(result, "metabolites")


def parse_references(result: object) -> dict[str, object]:
    return _latest_parts(result, "references")


def parse_list(result: object) -> list[BatchEntry[dict[str, object]]]:
    return map_items(result_items(result), _pathway_summary)


def parse_organisms(result: object) -> list[BatchEntry[dict[str, object]]]:
    def organism(item: object) -> dict[str, object]:
        return {
            "URI": require(item, ABOUT),
            "count": lookup(item, PATHWAY_COUNT),
            "label": lookup(item, LABEL),
        }

    return map_items(result_items(result), organism)


class PathwayClient(ResourceClient):
    """Requests for the ``/pathway`` and ``/pathways`` endpoints."""

    def information(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/pathway", {"uri": uri}, lens=lens)

    def by_compound(
        self,
        uri: str,
        organism: str | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get(
            "/pathways/byCompound", {"uri": uri, "pathway_organism": organism}, paging, lens=lens
        )

    def count_by_compound(
        self, uri: str, organism: str | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get(
            "/pathways/byCompound/count", {"uri": uri, "pathway_organism": organism}, lens=lens
        )

    def by_target(
        self,
        uri: str,
        organism: str | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get(
            "/pathways/byTarget", {"uri": uri, "pathway_organism": organism}, paging, lens=lens
        )

    def count_by_target(
        self, uri: str, organism: str | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get(
            "/pathways/byTarget/count", {"uri": uri, "pathway_organism": organism}, lens=lens
        )

    def by_reference(
        self,
        uri: str,
        organism: str | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get(
            "/pathways/byReference", {"uri": uri, "pathway_organism": organism}, paging, lens=lens
        )

    def count_by_reference(
        self, uri: str, organism: str | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get(
            "/pathways/byReference/count", {"uri": uri, "pathway_organism": organism}, lens=lens
        )

    def targets(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/pathway/getTargets", {"uri": uri}, lens=lens)

    def compounds(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/pathway/getCompounds", {"uri": uri}, lens=lens)

    def references(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/pathway/getReferences", {"uri": uri}, lens=lens)

    def count(self, organism: str | None = None, lens: str | None = None) -> ApiResponse:
        return self._get("/pathways/count", {"pathway_organism": organism}, lens=lens)

    def list_pathways(
        self, organism: str | None = None, paging: Paging | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/pathways", {"pathway_organism": organism}, paging, lens=lens)

    def organisms(self, paging: Paging | None = None, lens: str | None = None) -> ApiResponse:
        return self._get("/pathways/organisms", paging, lens=lens)
