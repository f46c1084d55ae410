"""ViewContext: the state flowing through all derivations.

User parameters → ViewParams (frozen; replaced on change)
Derived entities → ViewContext.* (replaced by the owning derivation, never mutated)
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, get_args

from clusterscope.analytics.agreement import AttitudePoint
from clusterscope.analytics.categorical import CategoricalSection
from clusterscope.analytics.centroids import Centroid, DisplayPoint
from clusterscope.analytics.domain import Domain
from clusterscope.analytics.geo import StateAggregate, record_state
from clusterscope.analytics.numeric import NumericSection
from clusterscope.analytics.prices import PriceSeries
from clusterscope.analytics.records import GroupingMode, GroupKey, Scope, SurveyRecord
from clusterscope.analytics.scope import SecondaryFilter
from clusterscope.corpus import Corpus
from clusterscope.engine.config import EngineConfig

GROUPING_MODES: tuple[str, ...] = get_args(GroupingMode)


@dataclass(frozen=True)
class ViewParams:
    """User-controlled inputs. Empty ``model_selection`` means all models."""

    dataset: str = ""
    model_selection: frozenset[str] = frozenset()
    cluster_zoom: int | None = None
    grouping_mode: GroupingMode = "cluster"
    collapse_t: float = 0.0
    secondary_filter: SecondaryFilter | None = None
    categorical_fields: tuple[str, ...] | None = None
    numeric_fields: tuple[str, ...] | None = None
    attitude_x: str | None = None
    attitude_y: str | None = None

    def __post_init__(self) -> None:
        if self.grouping_mode not in GROUPING_MODES:
            raise ValueError(f"grouping_mode must be one of {GROUPING_MODES}, got {self.grouping_mode!r}")
        object.__setattr__(self, "model_selection", frozenset(self.model_selection))
        object.__setattr__(self, "collapse_t", min(1.0, max(0.0, float(self.collapse_t))))
        if self.cluster_zoom is not None:
            object.__setattr__(self, "cluster_zoom", int(self.cluster_zoom))
        for name in ("categorical_fields", "numeric_fields"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, tuple(value))

    def with_changes(self, **changes: Any) -> ViewParams:
        return replace(self, **changes)

    def changed_fields(self, other: ViewParams) -> set[str]:
        return {f.name for f in fields(self) if getattr(self, f.name) != getattr(other, f.name)}


@dataclass
class ViewContext:
    """Shared state for one view of the corpus."""

    corpus: Corpus
    config: EngineConfig = field(default_factory=EngineConfig)
    params: ViewParams = field(default_factory=ViewParams)

    # --- Layer 0: input ---
    records: tuple[SurveyRecord, ...] = ()
    dropped: int = 0
    all_models: list[str] = field(default_factory=list)
    # Every group key in the dataset, canonical order; drives colors
    all_keys: list[GroupKey] = field(default_factory=list)

    # --- Layer 1: scopes ---
    model_scope: Scope = ()
    available_clusters: list[int] = field(default_factory=list)
    view_scope: Scope = ()
    available_states: list[str] = field(default_factory=list)
    available_focus_models: list[str] = field(default_factory=list)
    scope: Scope = ()
    scope_title: str = ""

    # --- Layer 2: geometry ---
    centroids: dict[GroupKey, Centroid] = field(default_factory=dict)
    points: tuple[DisplayPoint, ...] = ()
    target_x: Domain = (0.0, 1.0)
    target_y: Domain = (0.0, 1.0)
    hotspots: list[tuple[int, Centroid]] = field(default_factory=list)
    legend: list[tuple[GroupKey, str, int]] = field(default_factory=list)

    # --- Layer 3: summaries ---
    categorical: list[CategoricalSection] = field(default_factory=list)
    numeric: list[NumericSection] = field(default_factory=list)
    price_series: list[PriceSeries] = field(default_factory=list)
    attitude_points: list[AttitudePoint] = field(default_factory=list)
    attitude_variables: tuple[str | None, str | None] = (None, None)
    states: StateAggregate | None = None

    # --- Pipeline metadata ---
    completed_derivations: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    def state_of(self, record: SurveyRecord) -> str | None:
        return record_state(record, self.config.state_fields, self.corpus.code_table)

    @property
    def grouping_mode(self) -> GroupingMode:
        return self.params.grouping_mode
