"""D2.02: Collapse. Displayed coordinates pulled toward group centroids by t.

Recomputed in full on every t change.
"""

from __future__ import annotations

from clusterscope.analytics.centroids import collapse
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D2.02",
    layer=Layer.GEOMETRY,
    inputs={"collapse_t"},
    dependencies=["D2.01"],
    description="Interpolate points toward their centroids",
)
def collapse_points(ctx: ViewContext) -> None:
    ctx.points = collapse(ctx.scope, ctx.centroids, ctx.params.collapse_t, ctx.grouping_mode)
