"""D2.01: Group Centroids over the final scope."""

from __future__ import annotations

from clusterscope.analytics.centroids import compute_centroids
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D2.01",
    layer=Layer.GEOMETRY,
    inputs={"grouping_mode"},
    dependencies=["D1.03"],
    description="Mean embedding per group key",
)
def centroids(ctx: ViewContext) -> None:
    ctx.centroids = compute_centroids(ctx.scope, ctx.grouping_mode)
