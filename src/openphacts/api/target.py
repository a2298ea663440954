"""Target resource: records merged from DrugBank, UniProt, ChEMBL and ConceptWiki."""

from __future__ import annotations

from collections.abc import Iterable

from openphacts.normalize.extract import FieldExtractor, FieldRule, rules
from openphacts.normalize.merge import BatchEntry, CollectionMerger, EntityMerger, MergedRecord
from openphacts.normalize.sources import SourceClassifier, SourceTag
from openphacts.normalize.utils import ABOUT, LABEL, PREF_LABEL, PRIMARY_TOPIC, require
from openphacts.params import ActivityFilters, Paging
from openphacts.transport import ApiResponse

from .base import ResourceClient, parse_count, result_items
from .pharmacology import ActivityRecord, PharmacologyParser

CHEMBL_TARGET_INSPECT = "https://www.ebi.ac.uk/chembldb/target/inspect/"

TARGET_PROFILE = {
    SourceTag.DRUGBANK: rules(
        (ABOUT, "drugbankURI"),
        "cellularLocation",
        "numberOfResidues",
        "theoreticalPi",
    ),
    SourceTag.UNIPROT: rules(
        (ABOUT, "uniprotURI"),
        "molecularWeight",
        ("Function_Annotation", "functionAnnotation"),
        FieldRule.of("alternativeName", many=True),
        "existence",
        "organism",
        "sequence",
        "mass",
        FieldRule.of("classifiedWith", many=True),
        FieldRule.of("seeAlso", many=True),
    ),
    SourceTag.CHEMBL: rules(
        (ABOUT, "chemblURI"),
        FieldRule.of(LABEL, "synonyms", many=True),
        FieldRule.of("hasTargetComponent", "targetComponents", many=True),
        "type",
        link_base=CHEMBL_TARGET_INSPECT,
    ),
    SourceTag.CONCEPTWIKI: rules((ABOUT, "cwURI"), PREF_LABEL),
}


def target_merger(classifier: SourceClassifier | None = None) -> EntityMerger:
    return EntityMerger(FieldExtractor(TARGET_PROFILE, classifier))


def parse_target(result: object, classifier: SourceClassifier | None = None) -> MergedRecord:
    """Merge the primary topic of a ``/target`` result with its exact matches."""
    return target_merger(classifier).merge_topic(require(result, PRIMARY_TOPIC))


def parse_target_batch(
    result: object, classifier: SourceClassifier | None = None
) -> list[BatchEntry[MergedRecord]]:
    return CollectionMerger(target_merger(classifier)).merge_all(result_items(result))


def parse_pharmacology_count(result: object) -> int:
    return parse_count(result, "targetPharmacologyTotalResults")


def parse_pharmacology(
    result: object, classifier: SourceClassifier | None = None
) -> list[BatchEntry[ActivityRecord]]:
    return PharmacologyParser(classifier).parse_page(result)


class TargetClient(ResourceClient):
    """Requests for the ``/target`` family of endpoints."""

    def information(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/target", {"uri": uri}, lens=lens)

    def batch(self, uris: Iterable[str], lens: str | None = None) -> ApiResponse:
        return self._get("/target/batch", {"uri_list": "|".join(uris)}, lens=lens)

    def compounds_for_target(self, uri: str) -> ApiResponse:
        """Compound classes associated with a target (result passed through)."""
        return self._get("/target/classificationsForCompounds", {"uri": uri}, use_lens=False)

    def pharmacology_count(
        self, uri: str, filters: ActivityFilters | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/target/pharmacology/count", {"uri": uri}, filters, lens=lens)

    def pharmacology(
        self,
        uri: str,
        filters: ActivityFilters | None = None,
        paging: Paging | None = None,
        lens: str | None = None,
    ) -> ApiResponse:
        return self._get("/target/pharmacology/pages", {"uri": uri}, filters, paging, lens=lens)

    def types(self, lens: str | None = None) -> ApiResponse:
        """Target types known to the platform (result passed through)."""
        return self._get("/types", lens=lens)

    def fetch(self, uri: str, lens: str | None = None) -> MergedRecord:
        """Fetch and merge one target.

        Raises:
            TransportError: If the request fails.
        """
        return parse_target(self.information(uri, lens).unwrap(), self.classifier)
