"""D3.01: Categorical Summaries for the configured (or code table) fields."""

from __future__ import annotations

from clusterscope.analytics.categorical import summarize_categorical
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D3.01",
    layer=Layer.SUMMARY,
    inputs={"categorical_fields"},
    dependencies=["D1.03"],
    description="Label distributions per categorical field",
)
def categorical(ctx: ViewContext) -> None:
    fields = ctx.params.categorical_fields
    if fields is None:
        fields = ctx.config.categorical_fields
    ctx.categorical = summarize_categorical(
        ctx.scope,
        ctx.corpus.code_table,
        fields,
        ctx.config.rounding_tolerance,
    )
