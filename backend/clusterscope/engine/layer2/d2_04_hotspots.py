"""D2.04: Cluster Hotspots.

Cluster centroids of the model scope; only shown while nothing is zoomed.
"""

from __future__ import annotations

from clusterscope.analytics.centroids import cluster_hotspots
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D2.04",
    layer=Layer.GEOMETRY,
    inputs={"cluster_zoom"},
    dependencies=["D1.01"],
    description="Cluster centroid click targets for the unzoomed view",
)
def hotspots(ctx: ViewContext) -> None:
    if ctx.params.cluster_zoom is not None:
        ctx.hotspots = []
        return
    ctx.hotspots = cluster_hotspots(ctx.model_scope)
