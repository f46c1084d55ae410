"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from clusterscope.models.view import ViewSnapshot


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    derivations_registered: int = 0
    datasets: list[str] = Field(default_factory=list)


class DatasetInfo(BaseModel):
    name: str
    record_count: int = 0
    dropped_count: int = 0
    models: list[str] = Field(default_factory=list)
    clusters: list[int] = Field(default_factory=list)


class DatasetsResponse(BaseModel):
    datasets: list[DatasetInfo] = Field(default_factory=list)
    code_table_fields: list[str] = Field(default_factory=list)


class ViewResponse(BaseModel):
    snapshot: ViewSnapshot
    processing_time_ms: float = 0.0
    derivations_failed: int = 0


class SessionResponse(BaseModel):
    session_id: str
    snapshot: ViewSnapshot
    processing_time_ms: float = 0.0
