"""ViewEngine: applies user intents to a ViewContext and keeps it consistent.

After every recomputation a stale-selection check runs: a cluster zoom or
secondary focus that no longer exists in scope is reset to None ("all") and
the affected derivations rerun.
"""

from __future__ import annotations

import logging
from typing import Any

from clusterscope.analytics.domain import DomainAnimator
from clusterscope.corpus import Corpus
from clusterscope.engine.config import EngineConfig
from clusterscope.engine.context import ViewContext, ViewParams
from clusterscope.engine.pipeline import Pipeline, create_pipeline

logger = logging.getLogger(__name__)

# Resetting the dataset clears every selection that belonged to the old one
_DATASET_RESETS: dict[str, Any] = {
    "model_selection": frozenset(),
    "cluster_zoom": None,
    "collapse_t": 0.0,
    "secondary_filter": None,
}


def stale_selections(ctx: ViewContext) -> dict[str, Any]:
    """Parameters referencing entities absent from the current scope."""
    params = ctx.params
    stale: dict[str, Any] = {}
    if params.cluster_zoom is not None and params.cluster_zoom not in ctx.available_clusters:
        stale["cluster_zoom"] = None
    focus = params.secondary_filter
    if focus is not None:
        present = ctx.available_states if focus.kind == "state" else ctx.available_focus_models
        if focus.value not in present:
            stale["secondary_filter"] = None
    return stale


class ViewEngine:
    """One reactive view over a corpus."""

    def __init__(
        self,
        corpus: Corpus,
        params: ViewParams | None = None,
        config: EngineConfig | None = None,
        pipeline: Pipeline | None = None,
        animator: DomainAnimator | None = None,
    ) -> None:
        params = params or ViewParams()
        if not params.dataset:
            params = params.with_changes(dataset=corpus.default_dataset)
        corpus.rows(params.dataset)

        self.pipeline = pipeline or create_pipeline()
        self.animator = animator
        self.ctx = ViewContext(corpus=corpus, config=config or EngineConfig(), params=params)
        self.pipeline.run(self.ctx)
        self._repair()
        if self.animator is not None:
            self.animator.duration_ms = self.ctx.config.animation_duration_ms
            self.animator.jump_to(self.ctx.target_x, self.ctx.target_y)

    @property
    def params(self) -> ViewParams:
        return self.ctx.params

    def update(self, **changes: Any) -> ViewContext:
        """Apply parameter changes and recompute only what they invalidate."""
        current = self.ctx.params
        dataset = changes.get("dataset")
        if dataset is not None and dataset != current.dataset:
            self.ctx.corpus.rows(dataset)
            changes = {**_DATASET_RESETS, **changes}

        new_params = current.with_changes(**changes)
        changed = new_params.changed_fields(current)
        if not changed:
            return self.ctx

        self.ctx.params = new_params
        self.pipeline.run(self.ctx, changed)
        self._repair()
        if self.animator is not None:
            self.animator.animate_to(self.ctx.target_x, self.ctx.target_y)
        return self.ctx

    def _repair(self) -> None:
        for _ in range(self.ctx.config.max_repair_passes):
            stale = stale_selections(self.ctx)
            if not stale:
                return
            logger.debug("Resetting stale selection: %s", sorted(stale))
            self.ctx.params = self.ctx.params.with_changes(**stale)
            self.pipeline.run(self.ctx, set(stale))
        logger.warning("Stale selection persisted after %d passes", self.ctx.config.max_repair_passes)

    # --- Model selection intents ---

    def toggle_model(self, model: str) -> ViewContext:
        selected = set(self.ctx.params.model_selection)
        if model in selected:
            selected.remove(model)
        else:
            selected.add(model)
        return self.update(model_selection=frozenset(selected))

    def select_all_models(self) -> ViewContext:
        return self.update(model_selection=frozenset(self.ctx.all_models))

    def clear_models(self) -> ViewContext:
        return self.update(model_selection=frozenset())
