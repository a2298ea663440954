"""Declarative per-source field extraction.

A resource family describes what it wants from each source as a profile:
for every ``SourceTag`` a list of ``FieldRule`` entries (input path ->
output name) plus an optional link base used to build the provenance link.
Extraction only copies and renames; values are never interpreted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from .sources import SourceClassifier, SourceTag, default_classifier
from .utils import IN_DATASET, about, last_segment, lookup, to_sequence


@dataclass(frozen=True)
class FieldRule:
    """Copy the value at ``path`` in a block to ``target`` in the record.

    ``many`` marks fields the upstream service returns either as a single
    value or a list; the copied value is always a list.
    """

    path: tuple[str, ...]
    target: str
    many: bool = False

    @classmethod
    def of(cls, source: str, target: str | None = None, many: bool = False) -> FieldRule:
        """Build a rule from a dotted source path (``activity_unit.prefLabel``)."""
        path = tuple(source.split("."))
        return cls(path=path, target=target or path[-1], many=many)

    def read(self, block: Mapping[str, object]) -> object:
        value = lookup(block, *self.path)
        if value is None:
            return None
        if self.many:
            return list(to_sequence(value))
        return value


@dataclass(frozen=True)
class SourceRules:
    """Extraction rules for one source within a resource profile.

    Attributes:
        fields: Rules applied in order; later rules overwrite earlier ones
            that share a target name.
        link_base: When set, the provenance link is ``link_base`` plus the
            trailing segment of the block's ``_about`` instead of ``_about``
            itself (ChEMBL inspection pages).
    """

    fields: tuple[FieldRule, ...]
    link_base: Optional[str] = None

    def link_for(self, block: Mapping[str, object], tag: SourceTag) -> str:
        identity = about(block)
        if identity is None:
            return tag.value
        if self.link_base:
            return self.link_base + last_segment(identity)
        return identity


def rules(*specs: str | tuple[str, str] | FieldRule, link_base: str | None = None) -> SourceRules:
    """Shorthand for building ``SourceRules``.

    Each spec is either a field name copied under the same name, a
    ``(source, target)`` pair, or a ready ``FieldRule``.
    """
    built: list[FieldRule] = []
    for spec in specs:
        if isinstance(spec, FieldRule):
            built.append(spec)
        elif isinstance(spec, tuple):
            built.append(FieldRule.of(spec[0], spec[1]))
        else:
            built.append(FieldRule.of(spec))
    return SourceRules(fields=tuple(built), link_base=link_base)


Profile = Mapping[SourceTag, SourceRules]


@dataclass
class Extraction:
    """Fields one block contributed and the provenance link of each."""

    tag: SourceTag
    fields: dict[str, object] = field(default_factory=dict)
    provenance: dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.fields)


class FieldExtractor:
    """Apply a resource profile to source-tagged blocks."""

    def __init__(self, profile: Profile, classifier: SourceClassifier | None = None) -> None:
        self.profile = dict(profile)
        self.classifier = classifier or default_classifier()

    def classify(self, block: object) -> SourceTag:
        return self.classifier.classify(lookup(block, IN_DATASET))

    def extract(self, tag: SourceTag, block: object) -> Extraction:
        """Extract the fields ``tag`` owns from ``block``.

        Unknown tags, tags absent from the profile and non-mapping blocks all
        produce an empty extraction.
        """
        result = Extraction(tag=tag)
        source_rules = self.profile.get(tag)
        if source_rules is None or not isinstance(block, Mapping):
            return result

        link = source_rules.link_for(block, tag)
        for rule in source_rules.fields:
            value = rule.read(block)
            if value is None:
                continue
            result.fields[rule.target] = value
            result.provenance[rule.target] = link
        return result

    def extract_block(self, block: object) -> Extraction:
        """Classify ``block`` by its ``inDataset`` and extract it."""
        return self.extract(self.classify(block), block)
