"""D2.05: Legend. Groups present in the scope with their colors and sizes."""

from __future__ import annotations

from collections import Counter

from clusterscope.analytics.colors import color_for_key
from clusterscope.analytics.records import sorted_group_keys
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D2.05",
    layer=Layer.GEOMETRY,
    dependencies=["D0.03", "D2.01"],
    description="Order and color the groups in view",
)
def legend(ctx: ViewContext) -> None:
    sizes = Counter({k: c.n for k, c in ctx.centroids.items()})
    ctx.legend = [
        (key, color_for_key(key, ctx.all_keys), sizes[key])
        for key in sorted_group_keys(sizes, ctx.grouping_mode)
    ]
