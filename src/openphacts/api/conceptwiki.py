"""Concept search (ConceptWiki) for free-text lookup of compounds and targets."""

from __future__ import annotations

from openphacts.normalize.utils import (
    ABOUT,
    PREF_LABEL,
    PRIMARY_TOPIC,
    lookup,
    mappings,
    require,
    to_sequence,
)
from openphacts.transport import ApiResponse

from .base import ResourceClient

# Semantic tags restricting a search to one concept type
COMPOUND_TAG = "07a84994-e464-4bbf-812a-a4b96fa3d197"
TARGET_TAG = "eeaec894-d856-4106-9fa1-662b1dc6c6f1"


def parse_search(result: object) -> list[dict[str, object]]:
    """Concept hits with the text that matched."""
    hits = lookup(require(result, PRIMARY_TOPIC), "result")
    return [
        {"uri": hit.get(ABOUT), "prefLabel": hit.get(PREF_LABEL), "match": hit.get("match")}
        for hit in mappings(hits)
    ]


def parse_concept(result: object) -> dict[str, object]:
    topic = require(result, PRIMARY_TOPIC)
    return {
        "prefLabel": lookup(topic, "prefLabel_en"),
        "definition": lookup(topic, "definition"),
        "altLabels": to_sequence(lookup(topic, "altLabel_en")),
    }


class ConceptWikiClient(ResourceClient):
    """Requests for concept search; none of them take a lens."""

    def by_tag(
        self,
        query: str,
        tag: str,
        limit: int | None = None,
        branch: int | None = None,
    ) -> ApiResponse:
        """Search concepts carrying the semantic tag ``tag``.

        ``branch`` restricts results to one ConceptWiki branch
        (e.g. 3 for UniProt, 4 for ChemSpider).
        """
        return self._get(
            "/search/byTag",
            {"q": query, "limit": limit, "branch": branch, "uuid": tag},
            use_lens=False,
        )

    def free_text(
        self, query: str, limit: int | None = None, branch: int | None = None
    ) -> ApiResponse:
        return self._get(
            "/search/freetext", {"q": query, "limit": limit, "branch": branch}, use_lens=False
        )

    def find_compounds(
        self, query: str, limit: int | None = None, branch: int | None = None
    ) -> ApiResponse:
        return self.by_tag(query, COMPOUND_TAG, limit, branch)

    def find_targets(
        self, query: str, limit: int | None = None, branch: int | None = None
    ) -> ApiResponse:
        return self.by_tag(query, TARGET_TAG, limit, branch)

    def find_concept(self, uuid: str, branch: int | None = None) -> ApiResponse:
        """Description (labels and definition) of one concept."""
        return self._get(
            "/getConceptDescription", {"uuid": uuid, "branch": branch}, use_lens=False
        )
