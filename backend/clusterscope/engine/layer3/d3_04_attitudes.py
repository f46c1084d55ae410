"""D3.04: Attitude Comparison.

Percent-agree on two attitude variables per group. Without both variables
chosen there is nothing to plot.
"""

from __future__ import annotations

from clusterscope.analytics.agreement import attitude_points
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D3.04",
    layer=Layer.SUMMARY,
    inputs={"attitude_x", "attitude_y", "grouping_mode"},
    dependencies=["D0.03", "D1.03"],
    description="Percent-agree points per group",
)
def attitudes(ctx: ViewContext) -> None:
    x_var = ctx.params.attitude_x or ctx.config.default_attitude_x
    y_var = ctx.params.attitude_y or ctx.config.default_attitude_y
    ctx.attitude_variables = (x_var, y_var)
    if not x_var or not y_var:
        ctx.attitude_points = []
        return
    ctx.attitude_points = attitude_points(
        ctx.scope,
        x_var,
        y_var,
        ctx.grouping_mode,
        ctx.corpus.code_table,
        ctx.all_keys,
        ctx.config.agreement,
    )
