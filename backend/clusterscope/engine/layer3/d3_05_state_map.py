"""D3.05: State Map. Per-state share of resolved respondents."""

from __future__ import annotations

from clusterscope.analytics.geo import aggregate_states
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D3.05",
    layer=Layer.SUMMARY,
    dependencies=["D1.03"],
    description="Choropleth shares by state",
)
def state_map(ctx: ViewContext) -> None:
    ctx.states = aggregate_states(ctx.scope, ctx.config.state_fields, ctx.corpus.code_table)
