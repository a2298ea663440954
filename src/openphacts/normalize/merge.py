"""Merging of multi-source entity blocks into one provenance-aware record.

An entity response holds a primary block and zero or more ``exactMatch``
blocks, each published by a different linked-data source. ``EntityMerger``
folds them into a single flat ``MergedRecord``; ``CollectionMerger`` does
the same across a list of items while isolating malformed ones.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from openphacts.errors import ShapeError

from .extract import Extraction, FieldExtractor
from .sources import SOURCE_PRECEDENCE, SourceTag
from .utils import ABOUT, EXACT_MATCH, last_segment, lookup, mappings, require, to_sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class MergedRecord:
    """Flat record for one entity.

    Attributes:
        uri: Canonical URI, always the primary block's ``_about``.
        id: Trailing segment of ``uri``.
        fields: Output field name -> value, from every contributing source.
        provenance: Source tag value -> (output field name -> link).
    """

    uri: str
    id: str
    fields: dict[str, object] = field(default_factory=dict)
    provenance: dict[str, dict[str, str]] = field(default_factory=dict)

    def get(self, name: str, default: object = None) -> object:
        return self.fields.get(name, default)

    def to_dict(self) -> dict[str, object]:
        record: dict[str, object] = dict(self.fields)
        record["id"] = self.id
        record["URI"] = self.uri
        record["provenance"] = {tag: dict(entry) for tag, entry in self.provenance.items()}
        return record


class EntityMerger:
    """Merge a primary block with its cross-references.

    Each source writes only the fields its rules name. When two blocks share
    a source the later one overwrites the fields they have in common. The
    composed record follows a fixed source order, so cross-references from
    distinct sources give the same record in any order.
    """

    def __init__(self, extractor: FieldExtractor) -> None:
        self.extractor = extractor

    def merge(self, primary: object, cross_refs: object = None) -> MergedRecord:
        """Merge ``primary`` with ``cross_refs``.

        ``cross_refs`` may be None, a single block or a list of blocks.

        Raises:
            ShapeError: If ``primary`` has no ``_about``.
        """
        uri = str(require(primary, ABOUT))

        contributions: dict[SourceTag, Extraction] = {}
        for block in [primary, *mappings(cross_refs)]:
            extraction = self.extractor.extract_block(block)
            if extraction.tag is SourceTag.UNKNOWN or not extraction:
                continue
            existing = contributions.get(extraction.tag)
            if existing is None:
                contributions[extraction.tag] = extraction
            else:
                existing.fields.update(extraction.fields)
                existing.provenance.update(extraction.provenance)

        record = MergedRecord(uri=uri, id=last_segment(uri))
        for tag in SOURCE_PRECEDENCE:
            contribution = contributions.get(tag)
            if contribution is None:
                continue
            record.fields.update(contribution.fields)
            record.provenance[tag.value] = dict(contribution.provenance)
        return record

    def merge_topic(self, topic: object) -> MergedRecord:
        """Merge a block with the ``exactMatch`` blocks it carries."""
        return self.merge(topic, lookup(topic, EXACT_MATCH))


@dataclass
class BatchEntry(Generic[T]):
    """One slot of a batch result: a value, or the reason the item failed."""

    index: int
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, object]:
        value: object = self.value
        if hasattr(value, "to_dict"):
            value = value.to_dict()  # type: ignore[union-attr]
        return {"index": self.index, "ok": self.ok, "value": value, "error": self.error}


def default_primary(item: object) -> object:
    return item


def default_cross_refs(item: object) -> object:
    return lookup(item, EXACT_MATCH)


class CollectionMerger:
    """Apply ``EntityMerger`` across a list of items, one slot per item."""

    def __init__(self, merger: EntityMerger) -> None:
        self.merger = merger

    def merge_all(
        self,
        items: object,
        extract_primary: Callable[[object], object] = default_primary,
        extract_cross_refs: Callable[[object], object] = default_cross_refs,
    ) -> list[BatchEntry[MergedRecord]]:
        """Merge every item, preserving input order and duplicates.

        A malformed item yields a failed ``BatchEntry`` instead of aborting
        the batch.
        """

        def merge_one(item: object) -> MergedRecord:
            return self.merger.merge(extract_primary(item), extract_cross_refs(item))

        return map_items(items, merge_one)


def map_items(items: object, fn: Callable[[object], T]) -> list[BatchEntry[T]]:
    """Apply ``fn`` to each item, recording shape failures per slot."""
    entries: list[BatchEntry[T]] = []
    for index, item in enumerate(to_sequence(items)):
        try:
            entries.append(BatchEntry(index=index, value=fn(item)))
        except ShapeError as e:
            logger.warning("Skipping item %d: missing %s", index, e.path)
            entries.append(BatchEntry(index=index, error=str(e)))
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Skipping item %d: malformed item (%s)", index, e)
            entries.append(BatchEntry(index=index, error=f"Malformed item: {e!r}"))
    return entries


def successful(entries: Iterable[BatchEntry[T]]) -> list[T]:
    """Values of the entries that succeeded, in order."""
    return [entry.value for entry in entries if entry.ok and entry.value is not None]


def group_by_source(
    extractor: FieldExtractor, blocks: object
) -> dict[str, list[Mapping[str, object]]]:
    """Group raw blocks by the source that published them.

    Blocks from unmapped datasets are grouped under ``unknown``.
    """
    grouped: dict[str, list[Mapping[str, object]]] = {}
    for block in mappings(blocks):
        grouped.setdefault(extractor.classify(block).value, []).append(block)
    return grouped
