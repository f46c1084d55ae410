"""Canonical survey record and grouping primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Union

GroupingMode = Literal["cluster", "model"]
GroupKey = Union[int, str]


@dataclass(frozen=True)
class SurveyRecord:
    """One respondent, validated and coerced."""

    model: str
    emb_x: float
    emb_y: float
    cluster: int
    # The full raw row; survey fields are looked up here by name
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


# An ordered, immutable record subset
Scope = tuple[SurveyRecord, ...]


def group_key(record: SurveyRecord, mode: GroupingMode) -> GroupKey:
    return record.cluster if mode == "cluster" else record.model


def sorted_group_keys(keys, mode: GroupingMode) -> list[GroupKey]:
    """Numeric ascending for clusters, lexicographic for model names."""
    unique = set(keys)
    if mode == "cluster":
        return sorted(k for k in unique if isinstance(k, int))
    return sorted(str(k) for k in unique)
