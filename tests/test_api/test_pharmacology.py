"""Tests for pharmacology page flattening."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from openphacts.api import chebi, compound, enzyme, target, tree
from openphacts.api.base import parse_page_info
from openphacts.api.pharmacology import PharmacologyParser, activity_link
from openphacts.errors import ShapeError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def load_result(name: str) -> dict:
    with (FIXTURES_DIR / name).open() as f:
        return json.load(f)["result"]


class TestPharmacologyParser:
    """Tests for PharmacologyParser."""

    def test_parse_page(self) -> None:
        """Test flattening a page with one good and one malformed activity."""
        entries = PharmacologyParser().parse_page(load_result("compound_pharmacology.json"))

        assert len(entries) == 2
        assert entries[0].ok
        assert not entries[1].ok
        assert "hasMolecule" in (entries[1].error or "")

    def test_activity_fields(self) -> None:
        """Test activity-level values."""
        record = PharmacologyParser().parse_page(load_result("compound_pharmacology.json"))[0].value
        assert record is not None

        assert record.uri == "http://rdf.ebi.ac.uk/resource/chembl/activity/CHEMBL_ACT_93713"
        assert record.dataset == "http://www.ebi.ac.uk/chembl"
        assert record.activity == {
            "activityType": "IC50",
            "activityRelation": "=",
            "activityValue": 2.1,
            "activityUnit": "nM",
            "pChembl": 8.68,
            "standardUnits": "nM",
            "pmid": ["http://identifiers.org/pubmed/1234567"],
        }

    def test_molecule_is_merged(self) -> None:
        """Test that the molecule and its matches become one record."""
        record = PharmacologyParser().parse_page(load_result("compound_pharmacology.json"))[0].value
        assert record is not None

        molecule = record.molecule
        assert molecule.uri == "http://rdf.ebi.ac.uk/resource/chembl/molecule/CHEMBL25"
        assert molecule.get("prefLabel") == "Aspirin"
        assert molecule.get("inchiKey") == "BSYNRYMUTXBXSQ-UHFFFAOYSA-N"
        assert molecule.get("fullMWT") == 180.1574
        assert molecule.provenance["chemspider"]["smiles"] == "http://www.chemspider.com/OPS2157"
        assert molecule.provenance["chembl"]["chemblURI"] == (
            "https://www.ebi.ac.uk/chembldb/compound/inspect/CHEMBL25"
        )

    def test_assay_and_target(self) -> None:
        """Test assay and target summaries with their provenance."""
        record = PharmacologyParser().parse_page(load_result("compound_pharmacology.json"))[0].value
        assert record is not None
        assert record.assay is not None
        assert record.assay.target is not None

        assert record.assay.description == "Inhibition of COX-1"
        assert record.assay.organism == "Homo sapiens"
        assert record.assay.target.title == "Cyclooxygenase-1"
        assert [c.label for c in record.assay.target.components] == [
            "Prostaglandin G/H synthase 1"
        ]
        assert record.provenance == {
            "activity": "https://www.ebi.ac.uk/ebisearch/search.ebi?t=93713&db=chembl-activity",
            "assayDescription": "https://www.ebi.ac.uk/chembldb/assay/inspect/CHEMBL1227733",
            "assayOrganism": "https://www.ebi.ac.uk/chembldb/assay/inspect/CHEMBL1227733",
            "target": "https://www.ebi.ac.uk/chembl/target/inspect/CHEMBL221",
        }

    def test_activity_without_assay(self) -> None:
        """Test that a missing assay block is treated as absent."""
        item = {
            "_about": "http://rdf.ebi.ac.uk/resource/chembl/activity/CHEMBL_ACT_1",
            "hasMolecule": {"_about": "http://rdf.ebi.ac.uk/resource/chembl/molecule/CHEMBL1"},
        }

        record = PharmacologyParser().parse_item(item)

        assert record.assay is None
        assert record.activity == {}
        assert list(record.provenance) == ["activity"]
        assert record.molecule.fields == {}

    def test_molecule_without_identity(self) -> None:
        """Test that a molecule block without _about is a shape error."""
        item = {"_about": "http://x/activity/1", "hasMolecule": {"inDataset": "x"}}
        with pytest.raises(ShapeError, match="hasMolecule._about"):
            PharmacologyParser().parse_item(item)

    def test_to_dict(self) -> None:
        """Test serialization of an activity record."""
        record = PharmacologyParser().parse_page(load_result("compound_pharmacology.json"))[0].value
        assert record is not None

        d = record.to_dict()

        assert d["molecule"]["URI"] == "http://rdf.ebi.ac.uk/resource/chembl/molecule/CHEMBL25"
        assert d["assay"]["target"]["components"][0]["labelProvenance"] == (
            "http://www.conceptwiki.org/concept/7c2c0fc2-a4b8-4a4a-8f1c-92f2e5a5e8c1"
        )

    def test_activity_link(self) -> None:
        """Test the activity search link."""
        assert activity_link("http://x/activity/CHEMBL_ACT_42") == (
            "https://www.ebi.ac.uk/ebisearch/search.ebi?t=42&db=chembl-activity"
        )


class TestSharedPharmacology:
    """Tests that every pharmacology endpoint family flattens the same way."""

    @pytest.mark.parametrize(
        "parse",
        [
            compound.parse_pharmacology,
            target.parse_pharmacology,
            tree.parse_class_pharmacology,
            enzyme.parse_pharmacology,
            chebi.parse_pharmacology,
        ],
    )
    def test_same_records(self, parse) -> None:  # type: ignore[no-untyped-def]
        """Test that each family produces the same activity records."""
        entries = parse(load_result("compound_pharmacology.json"))
        assert [e.ok for e in entries] == [True, False]
        assert entries[0].value.activity["activityType"] == "IC50"


class TestPageInfo:
    """Tests for paging metadata."""

    def test_parse_page_info(self) -> None:
        """Test reading paging links."""
        info = parse_page_info(load_result("compound_pharmacology.json"))

        assert info.start_index == 1
        assert info.items_per_page == 2
        assert info.next == "https://beta.openphacts.org/1.5/compound/pharmacology/pages?_page=2"
        assert info.prev is None

    def test_link_blocks(self) -> None:
        """Test that links given as blocks use their _about."""
        info = parse_page_info({"prev": {"_about": "https://x/pages?_page=1"}})
        assert info.prev == "https://x/pages?_page=1"
        assert info.to_dict()["startIndex"] is None
