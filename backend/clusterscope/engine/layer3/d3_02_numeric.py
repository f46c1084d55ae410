"""D3.02: Numeric Summaries (means with valid/missing counts)."""

from __future__ import annotations

from clusterscope.analytics.numeric import aggregate_numeric_fields
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D3.02",
    layer=Layer.SUMMARY,
    inputs={"numeric_fields"},
    dependencies=["D1.03"],
    description="Scope means for numeric fields",
)
def numeric(ctx: ViewContext) -> None:
    fields = ctx.params.numeric_fields
    if fields is None:
        fields = ctx.config.numeric_fields
    ctx.numeric = aggregate_numeric_fields(ctx.scope, fields)
