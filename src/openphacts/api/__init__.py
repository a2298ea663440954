"""Resource clients for the Open PHACTS Linked Data API."""

from .base import PageInfo, ResourceClient, parse_count, parse_page_info
from .chebi import ChebiClient
from .compound import CompoundClient
from .conceptwiki import ConceptWikiClient
from .datasources import DataSourcesClient
from .disease import DiseaseClient
from .enzyme import EnzymeClient
from .mapping import MapClient
from .pathway import PathwayClient
from .pharmacology import ActivityRecord, PharmacologyParser
from .structure import StructureClient
from .target import TargetClient
from .tissue import TissueClient
from .tree import TreeClient

__all__ = [
    "ActivityRecord",
    "ChebiClient",
    "CompoundClient",
    "ConceptWikiClient",
    "DataSourcesClient",
    "DiseaseClient",
    "EnzymeClient",
    "MapClient",
    "PageInfo",
    "PathwayClient",
    "PharmacologyParser",
    "ResourceClient",
    "StructureClient",
    "TargetClient",
    "TissueClient",
    "TreeClient",
    "parse_count",
    "parse_page_info",
]
