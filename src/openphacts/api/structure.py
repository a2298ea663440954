"""Chemical structure search and structure-to-URI conversion."""

from __future__ import annotations

from openphacts.normalize.utils import ABOUT, PRIMARY_TOPIC, lookup, mappings, require, to_sequence
from openphacts.params import StructureOptions
from openphacts.transport import ApiResponse

from .base import ResourceClient

RELEVANCE = "relevance"


def parse_exact(result: object) -> list[object]:
    """Matches of an exact structure search, as returned."""
    return to_sequence(lookup(require(result, PRIMARY_TOPIC), "result"))


def parse_scored(result: object) -> list[dict[str, object]]:
    """Hits of a substructure or similarity search with their relevance."""
    hits = lookup(require(result, PRIMARY_TOPIC), "result")
    return [{"about": hit.get(ABOUT), "relevance": hit.get(RELEVANCE)} for hit in mappings(hits)]


def parse_substructure(result: object) -> list[dict[str, object]]:
    return parse_scored(result)


def parse_similarity(result: object) -> list[dict[str, object]]:
    return parse_scored(result)


def parse_structure_uri(result: object) -> str:
    """Compound URI resolved from an InChIKey, InChI or SMILES."""
    return str(require(result, PRIMARY_TOPIC, ABOUT))


class StructureClient(ResourceClient):
    """Requests for the ``/structure`` endpoints; none of them take a lens."""

    def exact(self, smiles: str, match_type: int | None = None) -> ApiResponse:
        return self._get(
            "/structure/exact",
            {"searchOptions.Molecule": smiles, "searchOptions.MatchType": match_type},
            use_lens=False,
        )

    def substructure(
        self,
        smiles: str,
        mol_type: int | None = None,
        start: int | None = None,
        count: int | None = None,
    ) -> ApiResponse:
        return self._get(
            "/structure/substructure",
            {
                "searchOptions.Molecule": smiles,
                "searchOptions.MolType": mol_type,
                "resultOptions.Start": start,
                "resultOptions.Count": count,
            },
            use_lens=False,
        )

    def similarity(self, smiles: str, options: StructureOptions | None = None) -> ApiResponse:
        return self._get(
            "/structure/similarity",
            {"searchOptions.Molecule": smiles},
            options or StructureOptions(),
            use_lens=False,
        )

    def inchi_key_to_uri(self, inchi_key: str) -> ApiResponse:
        return self._get("/structure", {"inchi_key": inchi_key}, use_lens=False)

    def inchi_to_uri(self, inchi: str) -> ApiResponse:
        return self._get("/structure", {"inchi": inchi}, use_lens=False)

    def smiles_to_uri(self, smiles: str) -> ApiResponse:
        return self._get("/structure", {"smiles": smiles}, use_lens=False)
