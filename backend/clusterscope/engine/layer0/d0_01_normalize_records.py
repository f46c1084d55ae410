"""D0.01: Normalize Records.

Raw dataset rows → canonical SurveyRecords. Cached per dataset on the corpus.
"""

from __future__ import annotations

from clusterscope.engine.context import ViewContext
from clusterscope.engine.registry import Layer, derived


@derived(
    id="D0.01",
    layer=Layer.INPUT,
    inputs={"dataset"},
    description="Validate and coerce the active dataset's rows",
)
def normalize_records(ctx: ViewContext) -> None:
    result = ctx.corpus.normalized(ctx.params.dataset, ctx.config.model_aliases)
    ctx.records = result.records
    ctx.dropped = result.dropped
