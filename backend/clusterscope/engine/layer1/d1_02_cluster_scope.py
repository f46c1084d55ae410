"""D1.02: Cluster Scope. Second filter stage: cluster zoom.

Also lists the states and models left in view, which the secondary filter
must reference to stay valid.
"""

from __future__ import annotations

from clusterscope.analytics.scope import available_models, filter_cluster
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D1.02",
    layer=Layer.SCOPE,
    inputs={"cluster_zoom"},
    dependencies=["D1.01"],
    description="Filter the model scope by the zoomed cluster",
)
def cluster_scope(ctx: ViewContext) -> None:
    ctx.view_scope = filter_cluster(ctx.model_scope, ctx.params.cluster_zoom)
    ctx.available_states = sorted({s for s in map(ctx.state_of, ctx.view_scope) if s is not None})
    ctx.available_focus_models = available_models(ctx.view_scope)
