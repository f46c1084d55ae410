"""Snapshot data model: the structured output handed to the renderer."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field


class PointOut(BaseModel):
    key: int | str
    color: str
    model: str
    cluster: int
    x: float
    y: float
    raw_x: float
    raw_y: float


class DomainOut(BaseModel):
    x: tuple[float, float] = (0.0, 1.0)
    y: tuple[float, float] = (0.0, 1.0)
    target_x: tuple[float, float] = (0.0, 1.0)
    target_y: tuple[float, float] = (0.0, 1.0)
    animating: bool = False


class HotspotOut(BaseModel):
    cluster: int
    x: float
    y: float
    n: int
    label: str = ""


class LegendEntry(BaseModel):
    key: int | str
    label: str
    color: str
    count: int = 0


class CategoryItemOut(BaseModel):
    label: str
    count: int
    pct: float


class CategoricalSectionOut(BaseModel):
    kind: Literal["categorical"] = "categorical"
    field: str
    total: int
    items: list[CategoryItemOut] = Field(default_factory=list)


class NumericSectionOut(BaseModel):
    kind: Literal["numeric"] = "numeric"
    field: str
    mean: float | None = None
    display: str = "n/a"
    unit: str = "plain"
    valid: int = 0
    missing: int = 0


SummarySectionOut = Union[CategoricalSectionOut, NumericSectionOut]


class AttitudePointOut(BaseModel):
    key: int | str
    label: str
    color: str
    x: float
    y: float
    n: int


class AttitudeOut(BaseModel):
    x_variable: str | None = None
    y_variable: str | None = None
    points: list[AttitudePointOut] = Field(default_factory=list)


class PriceBinOut(BaseModel):
    label: str
    count: int
    pct: float


class PriceSeriesOut(BaseModel):
    key: int | str
    label: str
    color: str
    valid: int = 0
    missing: int = 0
    bins: list[PriceBinOut] = Field(default_factory=list)


class StateShareOut(BaseModel):
    state: str
    abbreviation: str | None = None
    count: int
    pct: float
    intensity: float
    color: str


class StateMapOut(BaseModel):
    states: list[StateShareOut] = Field(default_factory=list)
    pct_by_state: dict[str, float] = Field(default_factory=dict)
    max_pct: float = 0.0
    total_resolved: int = 0
    unresolved: int = 0


class ViewSnapshot(BaseModel):
    """Everything the renderer needs for one recomputation."""

    dataset: str
    grouping_mode: Literal["cluster", "model"] = "cluster"
    scope_title: str = ""
    record_count: int = 0
    dropped_count: int = 0
    scope_count: int = 0

    all_models: list[str] = Field(default_factory=list)
    selected_models: list[str] = Field(default_factory=list)
    available_clusters: list[int] = Field(default_factory=list)
    cluster_zoom: int | None = None
    collapse_t: float = 0.0

    points: list[PointOut] = Field(default_factory=list)
    domain: DomainOut = Field(default_factory=DomainOut)
    hotspots: list[HotspotOut] = Field(default_factory=list)
    legend: list[LegendEntry] = Field(default_factory=list)

    sections: list[SummarySectionOut] = Field(default_factory=list)
    attitudes: AttitudeOut = Field(default_factory=AttitudeOut)
    price_series: list[PriceSeriesOut] = Field(default_factory=list)
    state_map: StateMapOut = Field(default_factory=StateMapOut)

    errors: dict[str, str] = Field(default_factory=dict)
