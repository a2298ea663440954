"""Classification of dataset URIs into logical linked-data sources.

Every block in an API response carries an ``inDataset`` URI. The mapping
from those URIs to a ``SourceTag`` is configuration data kept in
``datasets.yaml``; adding a source means adding table entries here and an
extraction case in the resource profile, never touching the merge logic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DATASETS_PATH = Path(__file__).resolve().parents[1] / "datasets.yaml"


class SourceTag(str, Enum):
    """Logical upstream sources contributing to an entity."""

    CONCEPTWIKI = "conceptwiki"
    CHEMBL = "chembl"
    DRUGBANK = "drugbank"
    CHEMSPIDER = "chemspider"
    UNIPROT = "uniprot"
    UNKNOWN = "unknown"


# Fixed order used when composing a merged record so the output does not
# depend on the order cross-references arrived in.
SOURCE_PRECEDENCE: tuple[SourceTag, ...] = (
    SourceTag.CONCEPTWIKI,
    SourceTag.CHEMBL,
    SourceTag.DRUGBANK,
    SourceTag.CHEMSPIDER,
    SourceTag.UNIPROT,
)


class SourceClassifier:
    """Exact-match lookup from dataset URI to ``SourceTag``."""

    def __init__(self, table: Mapping[str, SourceTag] | None = None) -> None:
        self._table: dict[str, SourceTag] = dict(table or {})

    @classmethod
    def from_yaml(cls, path: str | Path | None = None) -> "SourceClassifier":
        """Load the dataset table from YAML.

        The document must hold a ``sources`` mapping of tag name to a list of
        dataset URIs.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the document is malformed or names an unknown tag.
        """
        datasets_path = Path(path) if path else DEFAULT_DATASETS_PATH
        if not datasets_path.exists():
            raise FileNotFoundError(f"Datasets file not found at {datasets_path}")

        with datasets_path.open() as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError("Datasets file must contain a top-level mapping")

        sources = raw.get("sources", {})
        if not isinstance(sources, dict):
            raise ValueError("Datasets file must contain a mapping under 'sources'")

        classifier = cls()
        for name, uris in sources.items():
            try:
                tag = SourceTag(str(name))
            except ValueError as e:
                raise ValueError(f"Unknown source '{name}' in {datasets_path}") from e
            if tag is SourceTag.UNKNOWN:
                raise ValueError("'unknown' cannot be assigned dataset URIs")
            if not isinstance(uris, list):
                raise ValueError(f"Source '{name}' must list its dataset URIs")
            classifier.register_all((str(uri) for uri in uris), tag)
        return classifier

    def register(self, dataset_uri: str, tag: SourceTag) -> None:
        """Map another dataset URI to ``tag``; later registrations win."""
        self._table[dataset_uri] = tag

    def register_all(self, dataset_uris: Iterable[str], tag: SourceTag) -> None:
        for uri in dataset_uris:
            self.register(uri, tag)

    def classify(self, dataset_uri: object) -> SourceTag:
        """Return the tag for ``dataset_uri``; anything unmapped is UNKNOWN."""
        if not isinstance(dataset_uri, str):
            return SourceTag.UNKNOWN
        tag = self._table.get(dataset_uri)
        if tag is None:
            logger.debug("Unmapped dataset URI: %s", dataset_uri)
            return SourceTag.UNKNOWN
        return tag

    def dataset_uris(self, tag: SourceTag) -> list[str]:
        """All dataset URIs mapped to ``tag``, in registration order."""
        return [uri for uri, mapped in self._table.items() if mapped is tag]

    def __contains__(self, dataset_uri: object) -> bool:
        return isinstance(dataset_uri, str) and dataset_uri in self._table

    def __len__(self) -> int:
        return len(self._table)


_default_classifier: SourceClassifier | None = None


def default_classifier() -> SourceClassifier:
    """The classifier built from the packaged ``datasets.yaml`` (loaded once)."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = SourceClassifier.from_yaml()
    return _default_classifier


def classify(dataset_uri: object) -> SourceTag:
    """Classify with the packaged dataset table."""
    return default_classifier().classify(dataset_uri)
