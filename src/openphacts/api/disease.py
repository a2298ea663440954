"""Disease resource: diseases, their targets and disease-target associations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from openphacts.normalize.merge import BatchEntry, map_items
from openphacts.normalize.utils import (
    ABOUT,
    EXACT_MATCH,
    IN_DATASET,
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


@dataclass
class DiseaseClass:
    uri: Optional[str]
    name: Optional[str] = None
    dataset: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {"URI": self.uri, "name": self.name, "dataset": self.dataset}


@dataclass
class Disease:
    uri: str
    name: Optional[str] = None
    disease_classes: list[DiseaseClass] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "URI": self.uri,
            "name": self.name,
            "diseaseClass": [c.to_dict() for c in self.disease_classes],
        }


def _disease_classes(value: object) -> list[DiseaseClass]:
    return [
        DiseaseClass(
            uri=about(block),
            name=_str(block.get("name")),
            dataset=_str(block.get(IN_DATASET)),
        )
        for block in mappings(value)
    ]


def _disease(block: object) -> Disease:
    return Disease(
        uri=str(require(block, ABOUT)),
        name=_str(lookup(block, "name")),
        disease_classes=_disease_classes(lookup(block, "diseaseClass")),
    )


def parse_disease(result: object) -> Disease:
    return _disease(require(result, PRIMARY_TOPIC))


def parse_disease_batch(result: object) -> list[BatchEntry[Disease]]:
    return map_items(result_items(result), _disease)


def _encoded_products(gene: object) -> list[dict[str, object]]:
    """Gene products a gene encodes, with the label of their first exact match."""
    products = []
    for encode in mappings(lookup(gene, "encodes")):
        match = first_mapping(encode.get(EXACT_MATCH))
        products.append(
            {
                "uri": about(encode),
                "provenance": about(match),
                "label": lookup(match, PREF_LABEL),
            }
        )
    return products


def parse_diseases_by_target_count(result: object) -> int:
    return parse_count(result, "diseaseCount")


def parse_diseases_by_target(result: object) -> list[BatchEntry[dict[str, object]]]:
    """Diseases linked to a target, each with the gene it was linked through."""

    def disease(item: object) -> dict[str, object]:
        gene = lookup(item, "forGene")
        return {
            "name": lookup(item, "name"),
            "URI": require(item, ABOUT),
            "gene": {"URI": about(gene), "encodes": _encoded_products(gene)},
        }

    return map_items(result_items(result), disease)


def parse_targets_by_disease_count(result: object) -> int:
    return parse_count(result, "targetCount")


def parse_targets_by_disease(result: object) -> list[BatchEntry[dict[str, object]]]:
    def target(item: object) -> dict[str, object]:
        return {"dataset": lookup(item, IN_DATASET), "URI": require(item, ABOUT)}

    return map_items(result_items(result), target)


def parse_associations_count(result: object) -> int:
    return parse_count(result, "associationsCount")


def _association(item: object) -> dict[str, object]:
    gene = lookup(item, "gene")
    encodes = first_mapping(lookup(gene, "encodes"))
    encodes_match = first_mapping(lookup(encodes, EXACT_MATCH))
    disease = lookup(item, "disease")

    # Associations by target carry assoc_type, associations by disease carry type
    types = lookup(item, "assoc_type")
    if types is None:
        types = lookup(item, "type")

    return {
        "about": require(item, ABOUT),
        "dataset": lookup(item, IN_DATASET),
        "gene": {
            "URI": about(gene),
            "encodes": about(encodes),
            "encodesProvenance": about(encodes_match),
            "encodesLabel": lookup(encodes_match, PREF_LABEL),
        },
        "pmid": to_sequence(lookup(item, "pmid")),
        "type": [{"about": about(t), "label": t.get(LABEL)} for t in mappings(types)],
        "description": to_sequence(lookup(item, "description")),
        "primarySource": to_sequence(lookup(item, "primarySource")),
        "disease": {
            "URI": about(disease),
            "dataset": lookup(disease, IN_DATASET),
            "diseaseClasses": [
                c.to_dict() for c in _disease_classes(lookup(disease, "diseaseClass"))
            ],
        },
    }


def parse_associations(result: object) -> list[BatchEntry[dict[str, object]]]:
    """Disease-target associations from either association endpoint."""
    return map_items(result_items(result), _association)


def _str(value: object) -> Optional[str]:
    return str(value) if value is not None else None


class DiseaseClient(ResourceClient):
    """Requests for the ``/disease`` family of endpoints."""

    def information(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/disease", {"uri": uri}, lens=lens)

    def batch(self, uris: Iterable[str], lens: str | None = None) -> ApiResponse:
        return self._get("/disease/batch", {"uri_list": "|".join(uris)}, lens=lens)

    def diseases_by_target_count(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/disease/byTarget/count", {"uri": uri}, lens=lens)

    def diseases_by_target(
        self, uri: str, paging: Paging | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/disease/byTarget", {"uri": uri}, paging, lens=lens)

    def targets_by_disease_count(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/disease/getTargets/count", {"uri": uri}, lens=lens)

    def targets_by_disease(
        self, uri: str, paging: Paging | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/disease/getTargets", {"uri": uri}, paging, lens=lens)

    def associations_by_target_count(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/disease/assoc/byTarget/count", {"uri": uri}, lens=lens)

    def associations_by_target(
        self, uri: str, paging: Paging | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/disease/assoc/byTarget", {"uri": uri}, paging, lens=lens)

    def associations_by_disease_count(self, uri: str, lens: str | None = None) -> ApiResponse:
        return self._get("/disease/assoc/byDisease/count", {"uri": uri}, lens=lens)

    def associations_by_disease(
        self, uri: str, paging: Paging | None = None, lens: str | None = None
    ) -> ApiResponse:
        return self._get("/disease/assoc/byDisease", {"uri": uri}, paging, lens=lens)
