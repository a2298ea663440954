"""Compound resource: records merged from ChemSpider, DrugBank, ChEMBL and ConceptWiki."""

from __future__ import annotations

from collections.abc import Iterable

from openphacts.normalize.extract import FieldExtractor, rules
from openphacts.normalize.merge import (
    BatchEntry,
    CollectionMerger,
    EntityMerger,
    MergedRecord,
    group_by_source,
    map_items,
)
from openphacts.normalize.sources import SourceClassifier, SourceTag
from openphacts.normalize.utils import (
    ABOUT,
    EXACT_MATCH,
    PREF_LABEL,
    PRIMARY_TOPIC,
    lookup,
    mappings,
    require,
)
from openphacts.params import ActivityFilters, Paging
from openphacts.transport import ApiResponse

from .base import ResourceClient, parse_count, result_items
from .pharmacology import CHEMBL_COMPOUND_LINK, ActivityRecord, PharmacologyParser

COMPOUND_PROFILE = {
    SourceTag.CHEMSPIDER: rules(
        (ABOUT, "csURI"),
        "hba",
        "hbd",
        "inchi",
        ("inchikey", "inchiKey"),
        "logp",
        "psa",
        ("ro5_violations", "ro5Violations"),
        "smiles",
        "rtb",
        ("molweight", "fullMWT"),
        ("molformula", "molform"),
    ),
    SourceTag.DRUGBANK: rules(
        (ABOUT, "drugbankURI"),
        "description",
        ("biotransformation", "biotransformationItem"),
        "toxicity",
        "proteinBinding",
    ),
    SourceTag.CHEMBL: rules(
        (ABOUT, "chemblURI"),
        ("mw_freebase", "mwFreebase"),
        link_base=CHEMBL_COMPOUND_LINK,
    ),
    SourceTag.CONCEPTWIKI: rules((ABOUT, "cwURI"), PREF_LABEL),
}


def compound_merger(classifier: SourceClassifier | None = None) -> EntityMerger:
    return EntityMerger(FieldExtractor(COMPOUND_PROFILE, classifier))


def parse_compound(result: object, classifier: SourceClassifier | None = None) -> MergedRecord:
    """Merge the primary topic of a ``/compound`` result with its exact matches."""
    return compound_merger(classifier).merge_topic(require(result, PRIMARY_TOPIC))


def parse_compound_batch(
    result: object, classifier: SourceClassifier | None = None
) -> list[BatchEntry[MergedRecord]]:
    return CollectionMerger(compound_merger(classifier)).merge_all(result_items(result))


def parse_compound_lens(
    result: object, classifier: SourceClassifier | None = None
) -> dict[str, list[dict[str, object]]]:
    """Group the blocks of a lensed ``/compound`` result by source.

    With a lens applied the exact matches may describe several distinct
    compounds, so blocks are not merged; each source gets the list of what
    its blocks contributed.
    """
    extractor = FieldExtractor(COMPOUND_PROFILE, classifier)
    topic = require(result, PRIMARY_TOPIC)
    blocks = [topic, *mappings(lookup(topic, EXACT_MATCH))]
    grouped: dict[str, list[dict[str, object]]] = {}
    for source, source_blocks in group_by_source(extractor, blocks).items():
        if source == SourceTag.UNKNOWN.value:
            continue
        contributions = [
            {**extraction.fields, "provenance": dict(extraction.provenance)}
            for extraction in map(extractor.extract_block, source_blocks)
            if extraction
        ]
        if contributions:
            grouped[source] = contributions
    return grouped


def parse_pharmacology_count(result: object) -> int:
    return parse_count(result, "compoundPharmacologyTotalResults")


def parse_pharmacology(
    result: object, classifier: SourceClassifier | None = None
) -> list[BatchEntry[ActivityRecord]]:
    return PharmacologyParser(classifier).parse_page(result)


def parse_class_members_count(result: object) -> int:
    return parse_count(result, "memberCount")


def parse_class_members(result: object) -> list[BatchEntry[dict[str, object]]]:
    """Compounds classified under a class, as ``{"label", "URI"}`` pairs."""

    def member(item: object) -> dict[str, object]:
        return {
            "label": lookup(item, EXACT_MATCH, PREF_LABEL),
            "URI": require(item, ABOUT),
        }

    return map_items(result_items(result), member)


class CompoundClient(ResourceClient):
    """Requests for the ``/compound`` family of endpoints."""

    def information(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/compound", {"uri": uri}, lens=lens)

    def batch(self, uris: Iterable[str], lens: str | None = None) -> ApiResponse:
        return self._get("/compound/batch", {"uri_list": "|".join(uris)}, lens=lens)

    def class_members_count(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/compound/members/count", {"uri": uri}, lens=lens)

    def class_members(
        self, uri: str, paging: Paging | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/compound/members/pages", {"uri": uri}, paging, lens=lens)

    def pharmacology_count(
        self, uri: str, filters: ActivityFilters | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/compound/pharmacology/count", {"uri": uri}, filters, lens=lens)

    def pharmacology(
        self,
        uri: str,
        filters: ActivityFilters | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get("/compound/pharmacology/pages", {"uri": uri}, filters, paging, lens=lens)

    def classifications(self, uri: str, tree: str) -> ApiResponse:
        """Classes (e.g. ChEBI) the compound has been classified with."""
        return self._get("/compound/classifications", {"uri": uri, "tree": tree}, use_lens=False)

    def fetch(self, uri: str, lens: str | None = None) -> MergedRecord:
        """Fetch and merge one compound.

        Raises:
            TransportError: If the request fails.
        """
        return parse_compound(self.information(uri, lens).unwrap(), self.classifier)
