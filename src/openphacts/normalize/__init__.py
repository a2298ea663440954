"""Provenance-aware normalization of Linked Data API responses."""

from .extract import Extraction, FieldExtractor, FieldRule, SourceRules, rules
from .merge import (
    BatchEntry,
    CollectionMerger,
    EntityMerger,
    MergedRecord,
    group_by_source,
    map_items,
    successful,
)
from .sources import SourceClassifier, SourceTag, classify, default_classifier
from .utils import to_sequence

__all__ = [
    "BatchEntry",
    "CollectionMerger",
    "EntityMerger",
    "Extraction",
    "FieldExtractor",
    "FieldRule",
    "MergedRecord",
    "SourceClassifier",
    "SourceRules",
    "SourceTag",
    "classify",
    "default_classifier",
    "group_by_source",
    "map_items",
    "rules",
    "successful",
    "to_sequence",
]
