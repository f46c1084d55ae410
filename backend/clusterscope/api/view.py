"""POST /api/view: stateless snapshot for one parameter set."""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Depends

from clusterscope.analytics.scope import SecondaryFilter
from clusterscope.corpus import Corpus
from clusterscope.dependencies import get_corpus
from clusterscope.engine.context import ViewParams
from clusterscope.engine.snapshot import context_to_snapshot
from clusterscope.engine.view import ViewEngine
from clusterscope.models.requests import ViewParamsIn
from clusterscope.models.responses import ViewResponse

router = APIRouter()

# Fields where an explicit null means "no value" rather than "leave unchanged"
_NULLABLE = {"cluster_zoom", "secondary_filter", "categorical_fields", "numeric_fields", "attitude_x", "attitude_y"}


def params_changes(req: ViewParamsIn) -> dict[str, Any]:
    """Explicitly sent request fields → ViewParams keyword changes."""
    changes: dict[str, Any] = {}
    for name, value in req.model_dump(exclude_unset=True).items():
        if value is None and name not in _NULLABLE:
            continue
        if name == "model_selection":
            value = frozenset(value)
        elif name == "secondary_filter" and value is not None:
            value = SecondaryFilter(kind=value["kind"], value=value["value"])
        elif name in ("categorical_fields", "numeric_fields") and value is not None:
            value = tuple(value)
        changes[name] = value
    return changes


@router.post("/view", response_model=ViewResponse)
async def view(req: ViewParamsIn, corpus: Corpus = Depends(get_corpus)) -> ViewResponse:
    start = time.perf_counter()

    changes = params_changes(req)
    engine = ViewEngine(corpus, params=ViewParams(**changes))

    elapsed = (time.perf_counter() - start) * 1000
    return ViewResponse(
        snapshot=context_to_snapshot(engine.ctx),
        processing_time_ms=round(elapsed, 1),
        derivations_failed=len(engine.ctx.errors),
    )
