"""D1.03: Final Scope. Last filter stage: state or model focus.

Every summary downstream reads ``ctx.scope`` and nothing wider.
"""

from __future__ import annotations

from clusterscope.analytics.scope import filter_secondary
from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D1.03",
    layer=Layer.SCOPE,
    inputs={"secondary_filter"},
    dependencies=["D1.02"],
    description="Apply the secondary state/model focus",
)
def secondary_scope(ctx: ViewContext) -> None:
    ctx.scope = filter_secondary(ctx.view_scope, ctx.params.secondary_filter, ctx.state_of)
