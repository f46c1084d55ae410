"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SecondaryFilterIn(BaseModel):
    kind: Literal["state", "model"]
    value: str = Field(..., min_length=1)


class ViewParamsIn(BaseModel):
    """Partial parameter set; omitted fields keep their current value."""

    model_config = ConfigDict(protected_namespaces=())

    dataset: str | None = Field(default=None, description="Dataset name, e.g. SUV or Pickup")
    model_selection: list[str] | None = Field(default=None, description="Selected models; empty = all")
    cluster_zoom: int | None = None
    grouping_mode: Literal["cluster", "model"] | None = None
    collapse_t: float | None = Field(default=None, ge=0.0, le=1.0)
    secondary_filter: SecondaryFilterIn | None = None
    categorical_fields: list[str] | None = None
    numeric_fields: list[str] | None = None
    attitude_x: str | None = None
    attitude_y: str | None = None


class SessionCreateRequest(BaseModel):
    params: ViewParamsIn = Field(default_factory=ViewParamsIn)


class ToggleModelRequest(BaseModel):
    model: str = Field(..., min_length=1)
