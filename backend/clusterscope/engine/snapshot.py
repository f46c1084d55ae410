"""ViewContext → ViewSnapshot model.

Display formatting (numeric units, group labels) happens here and
nowhere upstream.
"""

from __future__ import annotations

from clusterscope.analytics.colors import color_for_key
from clusterscope.analytics.domain import DomainAnimator
from clusterscope.analytics.numeric import format_numeric, numeric_unit
from clusterscope.analytics.records import GroupingMode, GroupKey
from clusterscope.engine.context import ViewContext
from clusterscope.models.view import (
    AttitudeOut,
    AttitudePointOut,
    CategoricalSectionOut,
    CategoryItemOut,
    DomainOut,
    HotspotOut,
    LegendEntry,
    NumericSectionOut,
    PointOut,
    PriceBinOut,
    PriceSeriesOut,
    StateMapOut,
    StateShareOut,
    ViewSnapshot,
)
from clusterscope.utils.states import ABBREVIATION_FOR_STATE


def group_label(key: GroupKey, mode: GroupingMode) -> str:
    return f"C{key}" if mode == "cluster" else str(key)


def _domain(ctx: ViewContext, animator: DomainAnimator | None) -> DomainOut:
    if animator is None:
        return DomainOut(x=ctx.target_x, y=ctx.target_y, target_x=ctx.target_x, target_y=ctx.target_y)
    return DomainOut(
        x=animator.current_x,
        y=animator.current_y,
        target_x=ctx.target_x,
        target_y=ctx.target_y,
        animating=animator.animating,
    )


def context_to_snapshot(ctx: ViewContext, animator: DomainAnimator | None = None) -> ViewSnapshot:
    mode = ctx.grouping_mode
    params = ctx.params
    colors = {key: color for key, color, _ in ctx.legend}

    points = [
        PointOut(
            key=p.key,
            color=colors.get(p.key) or color_for_key(p.key, ctx.all_keys),
            model=p.record.model,
            cluster=p.record.cluster,
            x=p.x,
            y=p.y,
            raw_x=p.raw_x,
            raw_y=p.raw_y,
        )
        for p in ctx.points
    ]

    sections: list = [
        CategoricalSectionOut(
            field=s.field,
            total=s.total,
            items=[CategoryItemOut(label=i.label, count=i.count, pct=i.pct) for i in s.items],
        )
        for s in ctx.categorical
    ]
    sections.extend(
        NumericSectionOut(
            field=s.field,
            mean=s.mean,
            display=format_numeric(s.field, s.mean),
            unit=numeric_unit(s.field),
            valid=s.valid,
            missing=s.missing,
        )
        for s in ctx.numeric
    )

    x_var, y_var = ctx.attitude_variables
    attitudes = AttitudeOut(
        x_variable=x_var,
        y_variable=y_var,
        points=[
            AttitudePointOut(key=a.key, label=group_label(a.key, mode), color=a.color, x=a.x, y=a.y, n=a.n)
            for a in ctx.attitude_points
        ],
    )

    price_series = [
        PriceSeriesOut(
            key=s.key,
            label=group_label(s.key, mode),
            color=s.color,
            valid=s.valid,
            missing=s.missing,
            bins=[PriceBinOut(label=b.label, count=b.count, pct=b.pct) for b in s.bins],
        )
        for s in ctx.price_series
    ]

    state_map = StateMapOut()
    if ctx.states is not None:
        state_map = StateMapOut(
            states=[
                StateShareOut(
                    state=s.state,
                    abbreviation=ABBREVIATION_FOR_STATE.get(s.state),
                    count=s.count,
                    pct=s.pct,
                    intensity=s.intensity,
                    color=s.color,
                )
                for s in ctx.states.states
            ],
            pct_by_state=ctx.states.pct_map(),
            max_pct=ctx.states.max_pct,
            total_resolved=ctx.states.total_resolved,
            unresolved=ctx.states.unresolved,
        )

    return ViewSnapshot(
        dataset=params.dataset,
        grouping_mode=mode,
        scope_title=ctx.scope_title,
        record_count=len(ctx.records),
        dropped_count=ctx.dropped,
        scope_count=len(ctx.scope),
        all_models=ctx.all_models,
        selected_models=sorted(params.model_selection),
        available_clusters=ctx.available_clusters,
        cluster_zoom=params.cluster_zoom,
        collapse_t=params.collapse_t,
        points=points,
        domain=_domain(ctx, animator),
        hotspots=[
            HotspotOut(cluster=k, x=c.cx, y=c.cy, n=c.n, label=f"C{k}") for k, c in ctx.hotspots
        ],
        legend=[
            LegendEntry(key=key, label=group_label(key, mode), color=color, count=count)
            for key, color, count in ctx.legend
        ],
        sections=sections,
        attitudes=attitudes,
        price_series=price_series,
        state_map=state_map,
        errors=dict(ctx.errors),
    )
