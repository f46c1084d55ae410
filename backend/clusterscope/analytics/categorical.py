"""Categorical Summarizer: percentage distributions per field over a scope."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from clusterscope.analytics.codes import CodeTable, resolve_code
from clusterscope.analytics.records import Scope
from clusterscope.utils.coerce import is_blank

UNKNOWN_LABEL = "Unknown"

# Residual drift above this is folded into the last bucket
ROUNDING_TOLERANCE = 0.1


@dataclass(frozen=True)
class CategoryItem:
    label: str
    count: int
    pct: float


@dataclass(frozen=True)
class CategoricalSection:
    field: str
    items: tuple[CategoryItem, ...]
    total: int
    valid: int
    missing: int

    kind = "categorical"

    @property
    def top_pct(self) -> float:
        return self.items[0].pct if self.items else 0.0


def summarize_values(
    field: str,
    values: Iterable[Any],
    codes: Mapping[Any, str] | None = None,
    tolerance: float = ROUNDING_TOLERANCE,
) -> CategoricalSection | None:
    counts: Counter[str] = Counter()
    missing = 0
    for raw in values:
        if is_blank(raw):
            missing += 1
            continue
        counts[resolve_code(raw, codes)] += 1

    valid = sum(counts.values())
    total = valid + missing
    if total == 0:
        return None

    # Counter preserves first-seen order, so ties keep it under a stable sort
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    pcts = [[label, count, count / total * 100] for label, count in ranked]
    if missing > 0:
        pcts.append([UNKNOWN_LABEL, missing, missing / total * 100])

    drift = 100 - sum(p for _, _, p in pcts)
    if abs(drift) > tolerance:
        pcts[-1][2] += drift

    return CategoricalSection(
        field=field,
        items=tuple(CategoryItem(label=l, count=c, pct=p) for l, c, p in pcts),
        total=total,
        valid=valid,
        missing=missing,
    )


def summarize_field(
    scope: Scope,
    field: str,
    codes: Mapping[Any, str] | None = None,
    tolerance: float = ROUNDING_TOLERANCE,
) -> CategoricalSection | None:
    return summarize_values(field, (r.get(field) for r in scope), codes, tolerance)


def summarize_categorical(
    scope: Scope,
    code_table: CodeTable,
    fields: Iterable[str] | None = None,
    tolerance: float = ROUNDING_TOLERANCE,
) -> list[CategoricalSection]:
    """Sections for ``fields`` (default: every code table field).

    Sections come back most concentrated first.
    """
    sections = []
    for field in (code_table.fields if fields is None else fields):
        section = summarize_field(scope, field, code_table.codes_for(field), tolerance)
        if section is not None:
            sections.append(section)
    sections.sort(key=lambda s: s.top_pct, reverse=True)
    return sections
