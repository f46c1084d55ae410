"""D1.04: Scope Title. Short human label for the summary panel header."""

from __future__ import annotations

from clusterscope.analytics.scope import scope_title
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D1.04",
    layer=Layer.SCOPE,
    inputs={"cluster_zoom", "model_selection", "secondary_filter"},
    dependencies=["D0.02"],
    description="Title the current scope",
)
def title(ctx: ViewContext) -> None:
    params = ctx.params
    text = scope_title(params.cluster_zoom, params.model_selection, len(ctx.all_models))
    focus = params.secondary_filter
    if focus is not None:
        text = f"{text} • {focus.value}"
    ctx.scope_title = text
