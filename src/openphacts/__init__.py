"""
Client library for the Open PHACTS Linked Data API.

Each resource family (compounds, targets, diseases, pathways, ...) has a
client that builds requests and pure parsers that flatten the responses.
Entities published by several linked-data sources are merged into a single
record carrying per-field provenance.
"""

from __future__ import annotations

from openphacts.api import (
    ChebiClient,
    CompoundClient,
    ConceptWikiClient,
    DataSourcesClient,
    DiseaseClient,
    EnzymeClient,
    MapClient,
    PathwayClient,
    StructureClient,
    TargetClient,
    TissueClient,
    TreeClient,
)
from openphacts.config import Config
from openphacts.errors import OpenPhactsError, ShapeError, TransportError
from openphacts.normalize import (
    BatchEntry,
    CollectionMerger,
    EntityMerger,
    FieldExtractor,
    MergedRecord,
    SourceClassifier,
    SourceTag,
)
from openphacts.transport import ApiResponse, Transport
from openphacts.version import __version__


class OpenPhacts:
    """One client per resource family, sharing a transport and dataset table."""

    def __init__(self, config: Config | None = None, transport: Transport | None = None) -> None:
        self.config = config or Config.from_env()
        self.transport = transport or Transport(self.config)
        if self.config.datasets_file:
            self.classifier = SourceClassifier.from_yaml(self.config.datasets_file)
        else:
            self.classifier = SourceClassifier.from_yaml()

        self.compounds = CompoundClient(self.transport, self.classifier)
        self.targets = TargetClient(self.transport, self.classifier)
        self.diseases = DiseaseClient(self.transport, self.classifier)
        self.pathways = PathwayClient(self.transport, self.classifier)
        self.tissues = TissueClient(self.transport, self.classifier)
        self.structures = StructureClient(self.transport, self.classifier)
        self.trees = TreeClient(self.transport, self.classifier)
        self.concepts = ConceptWikiClient(self.transport, self.classifier)
        self.enzymes = EnzymeClient(self.transport, self.classifier)
        self.chebi = ChebiClient(self.transport, self.classifier)
        self.sources = DataSourcesClient(self.transport, self.classifier)
        self.mapping = MapClient(self.transport, self.classifier)


__all__ = [
    "ApiResponse",
    "BatchEntry",
    "CollectionMerger",
    "Config",
    "EntityMerger",
    "FieldExtractor",
    "MergedRecord",
    "OpenPhacts",
    "OpenPhactsError",
    "ShapeError",
    "SourceClassifier",
    "SourceTag",
    "Transport",
    "TransportError",
    "__version__",
]
