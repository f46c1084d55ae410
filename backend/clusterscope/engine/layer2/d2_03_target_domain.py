"""D2.03: Target Domain.

Padded axis ranges from the raw coordinates of the final scope. Takes no
parameter input: collapse_t must never move the axes.
"""

from __future__ import annotations

from clusterscope.analytics.domain import padded_domain
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D2.03",
    layer=Layer.GEOMETRY,
    dependencies=["D1.03"],
    description="Padded x/y domains of the scope",
)
def target_domain(ctx: ViewContext) -> None:
    pad = ctx.config.domain_padding
    ctx.target_x = padded_domain((r.emb_x for r in ctx.scope), pad)
    ctx.target_y = padded_domain((r.emb_y for r in ctx.scope), pad)
