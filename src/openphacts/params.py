"""Enumerated request options.

Each structure lists the query options an endpoint family recognizes and
maps them to the upstream parameter names. Options left as None are not
sent.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class Paging:
    """Paging and ordering for ``/pages`` endpoints."""

    page: Optional[int] = None
    page_size: Optional[int] = None
    order_by: Optional[str] = None

    def to_params(self) -> dict[str, object]:
        return _drop_none(
            {"_page": self.page, "_pageSize": self.page_size, "_orderBy": self.order_by}
        )


# Attribute name -> upstream parameter name
_ACTIVITY_PARAMS = {
    "assay_organism": "assay_organism",
    "target_organism": "target_organism",
    "activity_type": "activity_type",
    "activity_value": "activity_value",
    "min_activity_value": "min-activity_value",
    "min_ex_activity_value": "minEx-activity_value",
    "max_activity_value": "max-activity_value",
    "max_ex_activity_value": "maxEx-activity_value",
    "activity_unit": "activity_unit",
    "activity_relation": "activity_relation",
    "pchembl": "pChembl",
    "min_pchembl": "min-pChembl",
    "min_ex_pchembl": "minEx-pChembl",
    "max_pchembl": "max-pChembl",
    "max_ex_pchembl": "maxEx-pChembl",
    "target_type": "target_type",
}


@dataclass
class ActivityFilters:
    """Filters accepted by the pharmacology count and page endpoints.

    ``min_*``/``max_*`` bounds are inclusive, ``min_ex_*``/``max_ex_*``
    exclusive.
    """

    assay_organism: Optional[str] = None
    target_organism: Optional[str] = None
    activity_type: Optional[str] = None
    activity_value: Optional[float] = None
    min_activity_value: Optional[float] = None
    min_ex_activity_value: Optional[float] = None
    max_activity_value: Optional[float] = None
    max_ex_activity_value: Optional[float] = None
    activity_unit: Optional[str] = None
    activity_relation: Optional[str] = None
    pchembl: Optional[float] = None
    min_pchembl: Optional[float] = None
    min_ex_pchembl: Optional[float] = None
    max_pchembl: Optional[float] = None
    max_ex_pchembl: Optional[float] = None
    target_type: Optional[str] = None

    def to_params(self) -> dict[str, object]:
        return _drop_none(
            {_ACTIVITY_PARAMS[f.name]: getattr(self, f.name) for f in fields(self)}
        )


@dataclass
class StructureOptions:
    """Options for similarity and substructure searches."""

    similarity_type: int = 0
    threshold: float = 0.99
    alpha: Optional[float] = None
    beta: Optional[float] = None
    start: Optional[int] = None
    count: Optional[int] = None

    def to_params(self) -> dict[str, object]:
        return _drop_none(
            {
                "searchOptions.SimilarityType": self.similarity_type,
                "searchOptions.Threshold": self.threshold,
                "searchOptions.Alpha": self.alpha,
                "searchOptions.Beta": self.beta,
                "resultOptions.Start": self.start,
                "resultOptions.Count": self.count,
            }
        )


def merge_params(*groups: object) -> dict[str, object]:
    """Combine option structures and plain dicts into one parameter mapping."""
    params: dict[str, object] = {}
    for group in groups:
        if group is None:
            continue
        if hasattr(group, "to_params"):
            params.update(group.to_params())  # type: ignore[union-attr]
        elif isinstance(group, dict):
            params.update(_drop_none(group))
        else:
            raise TypeError(f"Unsupported parameter group: {type(group).__name__}")
    return params


def _drop_none(params: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in params.items() if value is not None}
