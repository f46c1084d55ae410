"""D0.03: Group Keys.

Canonical key order over the whole dataset, not the current scope, so a key
keeps its color while filters change.
"""

from __future__ import annotations

from clusterscope.analytics.records import group_key, sorted_group_keys
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D0.03",
    layer=Layer.INPUT,
    inputs={"grouping_mode"},
    dependencies=["D0.01"],
    description="Order every group key of the dataset",
)
def group_keys(ctx: ViewContext) -> None:
    mode = ctx.grouping_mode
    ctx.all_keys = sorted_group_keys((group_key(r, mode) for r in ctx.records), mode)
