"""D1.01: Model Scope. First filter stage: the model selection."""

from __future__ import annotations

from clusterscope.analytics.scope import available_clusters, filter_models
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D1.01",
    layer=Layer.SCOPE,
    inputs={"model_selection"},
    dependencies=["D0.01"],
    description="Filter records by the selected models",
)
def model_scope(ctx: ViewContext) -> None:
    ctx.model_scope = filter_models(ctx.records, ctx.params.model_selection)
    ctx.available_clusters = available_clusters(ctx.model_scope)
