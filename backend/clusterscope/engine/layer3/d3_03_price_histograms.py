"""D3.03: Price Histograms per group key."""

from __future__ import annotations

from clusterscope.analytics.prices import price_histograms
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D3.03",
    layer=Layer.SUMMARY,
    inputs={"grouping_mode"},
    dependencies=["D0.03", "D1.03"],
    description="Bucketed price distributions per group",
)
def price_series(ctx: ViewContext) -> None:
    ctx.price_series = price_histograms(
        ctx.scope,
        ctx.config.price_field,
        ctx.grouping_mode,
        ctx.all_keys,
        ctx.config.price_buckets,
    )
