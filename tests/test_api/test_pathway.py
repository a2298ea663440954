"""Tests for the pathway resource."""

from __future__ import annotations

from unittest.mock import MagicMock

from openphacts.api.pathway import (
    PathwayClient,
    parse_by_compound,
    parse_by_reference,
    parse_by_target,
    parse_compounds,
    parse_information,
    parse_list,
    parse_organisms,
    parse_pathway_count,
    parse_targets,
)
from openphacts.config import Config
from openphacts.params import Paging
from openphacts.transport import ApiResponse, Transport

PATHWAY = "http://identifiers.org/wikipathways/WP1019"
HUMAN = "http://purl.obolibrary.org/obo/NCBITaxon_9606"

SUMMARY = {
    "_about": PATHWAY,
    "title": "Glycolysis",
    "identifier": "WP1019",
    "description": "Glycolysis pathway",
    "pathwayOntology": "http://purl.obolibrary.org/obo/PW_0000034",
    "pathway_organism": {"_about": HUMAN, "label": "Homo sapiens"},
}


def make_client(default_lens: str | None = None) -> tuple[PathwayClient, MagicMock]:
    transport = MagicMock(spec=Transport)
    transport.config = Config(default_lens=default_lens)
    transport.get.return_value = ApiResponse(True, 200, result={})
    return PathwayClient(transport), transport


class TestParsePathway:
    """Tests for pathway parsing."""

    def test_parse_information(self) -> None:
        """Test the latest revision with provenance."""
        result = {
            "primaryTopic": {
                "_about": PATHWAY,
                "latest_version": {
                    "_about": "http://identifiers.org/wikipathways/WP1019_r1234",
                    "title": "Glycolysis",
                    "organism": {"_about": HUMAN, "label": "Homo sapiens"},
                    "hasPart": {"_about": "http://x/part/1", "type": "DataNode"},
                },
            }
        }

        record = parse_information(result)

        assert record["URI"] == PATHWAY
        assert record["title"] == "Glycolysis"
        assert record["description"] is None
        assert record["revision"] == "http://identifiers.org/wikipathways/WP1019_r1234"
        assert record["organismLabel"] == "Homo sapiens"
        assert record["parts"] == [{"about": "http://x/part/1", "type": "DataNode"}]
        assert record["pathwayOntologies"] == []
        assert record["provenance"] == {
            "wikipathways": {"title": PATHWAY, "organismLabel": HUMAN}
        }

    def test_parse_by_compound(self) -> None:
        """Test pathways containing a compound."""
        item = {
            **SUMMARY,
            "hasPart": {
                "_about": "http://x/part/2",
                "type": "Metabolite",
                "exactMatch": {
                    "_about": "http://www.conceptwiki.org/concept/1",
                    "prefLabel": "ATP",
                },
            },
        }

        entries = parse_by_compound({"items": [item]})

        value = entries[0].value
        assert value is not None
        assert value["organism"] == HUMAN
        assert value["pathwayOntology"] == ["http://purl.obolibrary.org/obo/PW_0000034"]
        assert value["parts"][0]["exactMatch"] == [
            {"label": "ATP", "URI": "http://www.conceptwiki.org/concept/1"}
        ]

    def test_parse_by_target(self) -> None:
        """Test that target matches are reported as gene products."""
        entries = parse_by_target({"items": [SUMMARY]})
        assert entries[0].value is not None
        assert entries[0].value["geneProducts"] == []

    def test_parse_by_reference(self) -> None:
        """Test pathways citing a publication."""
        item = {**SUMMARY, "hasPart": {"_about": "http://identifiers.org/pubmed/1"}}
        entries = parse_by_reference({"items": item})
        assert entries[0].value is not None
        assert entries[0].value["publication"] == "http://identifiers.org/pubmed/1"

    def test_parse_list_and_count(self) -> None:
        """Test listing and counting pathways."""
        entries = parse_list({"items": [SUMMARY, {"title": "no identity"}]})
        assert [e.ok for e in entries] == [True, False]
        assert parse_pathway_count({"primaryTopic": {"pathway_count": "2"}}) == 2

    def test_parse_latest_parts(self) -> None:
        """Test targets and compounds of a pathway."""
        result = {
            "primaryTopic": {
                "latest_version": {
                    "title": "Glycolysis",
                    "hasPart": {"_about": "http://x/part/1"},
                }
            }
        }
        assert parse_targets(result)["geneProducts"] == [{"_about": "http://x/part/1"}]
        assert parse_compounds(result)["metabolites"] == [{"_about": "http://x/part/1"}]

    def test_parse_organisms(self) -> None:
        """Test organism listing."""
        result = {"items": [{"_about": HUMAN, "pathway_count": 500, "label": "Homo sapiens"}]}
        entries = parse_organisms(result)
        assert entries[0].value == {"URI": HUMAN, "count": 500, "label": "Homo sapiens"}


class TestPathwayClient:
    """Tests for PathwayClient requests."""

    def test_by_compound_sends_organism(self) -> None:
        """Test that the organism filter uses the pathway_organism parameter."""
        client, transport = make_client()
        client.by_compound("http://x/compound/1", organism="Homo sapiens", paging=Paging(page=1))
        transport.get.assert_called_once_with(
            "/pathways/byCompound",
            {"uri": "http://x/compound/1", "pathway_organism": "Homo sapiens", "_page": 1},
        )

    def test_count_without_organism(self) -> None:
        """Test that an unset organism is not sent."""
        client, transport = make_client(default_lens="Default")
        client.count()
        transport.get.assert_called_once_with("/pathways/count", {"_lens": "Default"})

    def test_organisms(self) -> None:
        """Test the organisms request with paging only."""
        client, transport = make_client()
        client.organisms(Paging(page_size=5))
        transport.get.assert_called_once_with("/pathways/organisms", {"_pageSize": 5})
