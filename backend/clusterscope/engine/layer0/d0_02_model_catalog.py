"""D0.02: Model Catalog. Every model name in the dataset, sorted."""

from __future__ import annotations

from clusterscope.analytics.scope import available_models
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D0.02",
    layer=Layer.INPUT,
    dependencies=["D0.01"],
    description="List all models of the dataset",
)
def model_catalog(ctx: ViewContext) -> None:
    ctx.all_models = available_models(ctx.records)
