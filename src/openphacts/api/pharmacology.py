"""Flattening of pharmacology (activity) pages.

Compound, target, tree, enzyme and ChEBI pharmacology endpoints all return
pages of ChEMBL activities with the same item shape: the activity itself,
the molecule it measured (with cross-references to other sources) and the
assay and target it was measured in.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional, cast

from openphacts.normalize.extract import FieldExtractor, FieldRule, rules
from openphacts.normalize.merge import BatchEntry, EntityMerger, MergedRecord, map_items
from openphacts.normalize.sources import SourceClassifier, SourceTag
from openphacts.normalize.utils import (
    ABOUT,
    EXACT_MATCH,
    IN_DATASET,
    PREF_LABEL,
    about,
    first_mapping,
    last_segment,
    lookup,
    mappings,
    require,
)

from .base import result_items

CHEMBL_COMPOUND_LINK = "https://www.ebi.ac.uk/chembldb/compound/inspect/"
CHEMBL_ASSAY_LINK = "https://www.ebi.ac.uk/chembldb/assay/inspect/"
CHEMBL_TARGET_LINK = "https://www.ebi.ac.uk/chembl/target/inspect/"
CHEMSPIDER_LINK = "http://www.chemspider.com/"

HAS_MOLECULE = "hasMolecule"
HAS_ASSAY = "hasAssay"
HAS_TARGET = "hasTarget"
HAS_TARGET_COMPONENT = "hasTargetComponent"

# Molecule fields shown alongside an activity
MOLECULE_PROFILE = {
    SourceTag.CHEMBL: rules((ABOUT, "chemblURI"), link_base=CHEMBL_COMPOUND_LINK),
    SourceTag.CONCEPTWIKI: rules((ABOUT, "cwURI"), PREF_LABEL),
    SourceTag.CHEMSPIDER: rules(
        (ABOUT, "csURI"),
        "inchi",
        ("inchikey", "inchiKey"),
        "smiles",
        ("molweight", "fullMWT"),
        link_base=CHEMSPIDER_LINK,
    ),
    SourceTag.DRUGBANK: rules((ABOUT, "drugbankURI"), "drugType", "genericName"),
}

# Activity-level fields copied onto every record
_ACTIVITY_FIELDS = (
    FieldRule.of("activity_type", "activityType"),
    FieldRule.of("activity_relation", "activityRelation"),
    FieldRule.of("activity_value", "activityValue"),
    FieldRule.of("activity_unit.prefLabel", "activityUnit"),
    FieldRule.of("standardValue", "standardValue"),
    FieldRule.of("pChembl", "pChembl"),
    FieldRule.of("activityComment", "activityComment"),
    FieldRule.of("publishedRelation", "publishedRelation"),
    FieldRule.of("publishedType", "publishedType"),
    FieldRule.of("publishedUnits", "publishedUnits"),
    FieldRule.of("publishedValue", "publishedValue"),
    FieldRule.of("standardUnits", "standardUnits"),
    FieldRule.of("qudt_uri", "qudtURI"),
    FieldRule.of("pmid", "pmid", many=True),
    FieldRule.of("hasDocument", "documents", many=True),
)


@dataclass
class TargetComponent:
    uri: Optional[str]
    label: Optional[str] = None
    label_provenance: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {"uri": self.uri, "label": self.label, "labelProvenance": self.label_provenance}


@dataclass
class AssayTarget:
    """The target an assay measured against."""

    uri: Optional[str]
    title: Optional[str] = None
    organism: Optional[str] = None
    components: list[TargetComponent] = field(default_factory=list)
    provenance: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "uri": self.uri,
            "title": self.title,
            "organism": self.organism,
            "components": [c.to_dict() for c in self.components],
            "provenance": self.provenance,
        }


@dataclass
class Assay:
    uri: Optional[str]
    description: Optional[str] = None
    organism: Optional[str] = None
    target: Optional[AssayTarget] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "uri": self.uri,
            "description": self.description,
            "organism": self.organism,
            "target": self.target.to_dict() if self.target else None,
        }


@dataclass
class ActivityRecord:
    """One pharmacology activity, flattened.

    Attributes:
        uri: The activity's ``_about``.
        dataset: Dataset URI of the activity block.
        activity: Activity-level values (type, relation, value, unit, ...).
        molecule: Merged record for the measured molecule.
        assay: Assay summary, None when the activity carries no assay.
        provenance: ChEMBL inspection links keyed by the output field they
            back (``activity``, ``assayDescription``, ``assayOrganism``,
            ``target``).
    """

    uri: str
    dataset: Optional[str]
    activity: dict[str, object]
    molecule: MergedRecord
    assay: Optional[Assay] = None
    provenance: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "uri": self.uri,
            "dataset": self.dataset,
            "activity": dict(self.activity),
            "molecule": self.molecule.to_dict(),
            "assay": self.assay.to_dict() if self.assay else None,
            "provenance": dict(self.provenance),
        }


def activity_link(activity_uri: str) -> str:
    """EBI search link for a ChEMBL activity (``.../activity/CHEMBL_ACT_93713`` -> ``t=93713``)."""
    return (
        "https://www.ebi.ac.uk/ebisearch/search.ebi?t="
        + last_segment(activity_uri).split("_")[-1]
        + "&db=chembl-activity"
    )


class PharmacologyParser:
    """Turn pharmacology items into ``ActivityRecord`` values."""

    def __init__(self, classifier: SourceClassifier | None = None) -> None:
        self.molecules = EntityMerger(FieldExtractor(MOLECULE_PROFILE, classifier))

    def parse_item(self, item: object) -> ActivityRecord:
        """Flatten one activity.

        Raises:
            ShapeError: If the activity has no ``_about`` or no ``hasMolecule``
                identity.
        """
        uri = str(require(item, ABOUT))
        molecule_block = require(item, HAS_MOLECULE)
        require(item, HAS_MOLECULE, ABOUT)
        molecule = self.molecules.merge(molecule_block, lookup(molecule_block, EXACT_MATCH))

        activity: dict[str, object] = {}
        for rule in _ACTIVITY_FIELDS:
            value = rule.read(cast(Mapping[str, object], item))
            if value is not None:
                activity[rule.target] = value

        provenance = {"activity": activity_link(uri)}
        assay = _parse_assay(lookup(item, HAS_ASSAY))
        if assay is not None and assay.uri:
            assay_link = CHEMBL_ASSAY_LINK + last_segment(assay.uri)
            provenance["assayDescription"] = assay_link
            provenance["assayOrganism"] = assay_link
        if assay is not None and assay.target is not None and assay.target.provenance:
            provenance["target"] = assay.target.provenance

        dataset = lookup(item, IN_DATASET)
        return ActivityRecord(
            uri=uri,
            dataset=str(dataset) if dataset is not None else None,
            activity=activity,
            molecule=molecule,
            assay=assay,
            provenance=provenance,
        )

    def parse_page(self, result: object) -> list[BatchEntry[ActivityRecord]]:
        """Flatten every activity of a ``/pages`` result, one slot per item."""
        return map_items(result_items(result), self.parse_item)


def _parse_assay(block: object) -> Optional[Assay]:
    if not isinstance(block, Mapping):
        return None
    return Assay(
        uri=about(block),
        description=_optional_str(block.get("description")),
        organism=_optional_str(block.get("assayOrganismName")),
        target=_parse_target(block.get(HAS_TARGET)),
    )


def _parse_target(block: object) -> Optional[AssayTarget]:
    if not isinstance(block, Mapping):
        return None
    uri = about(block)
    components = []
    for component in mappings(block.get(HAS_TARGET_COMPONENT)):
        first = first_mapping(lookup(component, EXACT_MATCH))
        components.append(
            TargetComponent(
                uri=about(component),
                label=_optional_str(lookup(first, PREF_LABEL)),
                label_provenance=about(first),
            )
        )
    return AssayTarget(
        uri=uri,
        title=_optional_str(block.get("title")),
        organism=_optional_str(block.get("targetOrganismName")),
        components=components,
        provenance=CHEMBL_TARGET_LINK + last_segment(uri) if uri else None,
    )


def _optional_str(value: object) -> Optional[str]:
    return str(value) if value is not None else None
