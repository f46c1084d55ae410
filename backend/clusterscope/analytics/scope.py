"""Scope Resolver: cascading filters over normalized records.

Order is fixed: model selection, cluster zoom, secondary filter. The resolver
never repairs a stale selection; the view engine does that after each
recomputation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Collection, Iterable, Literal

from clusterscope.analytics.records import Scope, SurveyRecord

SecondaryKind = Literal["state", "model"]


@dataclass(frozen=True)
class SecondaryFilter:
    kind: SecondaryKind
    value: str


def filter_models(records: Iterable[SurveyRecord], selection: Collection[str] | None) -> Scope:
    """Empty selection means every model."""
    if not selection:
        return tuple(records)
    active = set(selection)
    return tuple(r for r in records if r.model in active)


def filter_cluster(records: Iterable[SurveyRecord], cluster: int | None) -> Scope:
    if cluster is None:
        return tuple(records)
    return tuple(r for r in records if r.cluster == cluster)


def filter_secondary(
    records: Iterable[SurveyRecord],
    secondary: SecondaryFilter | None,
    state_of: Callable[[SurveyRecord], str | None] | None = None,
) -> Scope:
    if secondary is None:
        return tuple(records)
    if secondary.kind == "model":
        return tuple(r for r in records if r.model == secondary.value)
    if state_of is None:
        raise ValueError("A state filter needs a state resolver")
    return tuple(r for r in records if state_of(r) == secondary.value)


def resolve_scope(
    records: Iterable[SurveyRecord],
    model_selection: Collection[str] | None = None,
    cluster_zoom: int | None = None,
    secondary: SecondaryFilter | None = None,
    state_of: Callable[[SurveyRecord], str | None] | None = None,
) -> Scope:
    scope = filter_models(records, model_selection)
    scope = filter_cluster(scope, cluster_zoom)
    return filter_secondary(scope, secondary, state_of)


def available_clusters(scope: Iterable[SurveyRecord]) -> list[int]:
    return sorted({r.cluster for r in scope})


def available_models(scope: Iterable[SurveyRecord]) -> list[str]:
    return sorted({r.model for r in scope})


def scope_title(
    cluster_zoom: int | None,
    model_selection: Collection[str] | None,
    model_count: int,
) -> str:
    if cluster_zoom is not None:
        return f"Cluster C{cluster_zoom}"
    selected = sorted(model_selection or ())
    if not selected or len(selected) == model_count:
        return "Selected Models (All)"
    if len(selected) == 1:
        return f"Model: {selected[0]}"
    return f"Models ({len(selected)})"
