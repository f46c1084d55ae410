"""Centroid & Collapse Engine.

Centroids are per-group means of the embedding over a scope. ``collapse``
pulls each displayed point toward its group centroid by ``t``:

    displayed = raw + (centroid - raw) * t

so t=0 leaves the scope untouched and t=1 stacks every point on its centroid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from clusterscope.analytics.records import GroupingMode, GroupKey, Scope, SurveyRecord, group_key


@dataclass(frozen=True)
class Centroid:
    cx: float
    cy: float
    n: int


@dataclass(frozen=True)
class DisplayPoint:
    """A record with its displayed coordinate; the raw one stays on the record."""

    record: SurveyRecord
    x: float
    y: float
    key: GroupKey

    @property
    def raw_x(self) -> float:
        return self.record.emb_x

    @property
    def raw_y(self) -> float:
        return self.record.emb_y


def compute_centroids(scope: Scope, mode: GroupingMode) -> dict[GroupKey, Centroid]:
    sums: dict[GroupKey, list[float]] = {}
    for rec in scope:
        acc = sums.setdefault(group_key(rec, mode), [0.0, 0.0, 0])
        acc[0] += rec.emb_x
        acc[1] += rec.emb_y
        acc[2] += 1
    return {k: Centroid(cx=sx / n, cy=sy / n, n=n) for k, (sx, sy, n) in sums.items()}


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def collapse(
    scope: Scope,
    centroids: Mapping[GroupKey, Centroid],
    t: float,
    mode: GroupingMode,
) -> tuple[DisplayPoint, ...]:
    t = min(1.0, max(0.0, float(t)))
    out = []
    for rec in scope:
        key = group_key(rec, mode)
        c = centroids.get(key)
        if c is None or t == 0.0:
            out.append(DisplayPoint(record=rec, x=rec.emb_x, y=rec.emb_y, key=key))
        elif t == 1.0:
            out.append(DisplayPoint(record=rec, x=c.cx, y=c.cy, key=key))
        else:
            out.append(
                DisplayPoint(record=rec, x=lerp(rec.emb_x, c.cx, t), y=lerp(rec.emb_y, c.cy, t), key=key)
            )
    return tuple(out)


def cluster_hotspots(scope: Scope) -> list[tuple[int, Centroid]]:
    """Cluster centroids in ascending cluster order (click targets for zooming)."""
    cents = compute_centroids(scope, "cluster")
    return [(k, cents[k]) for k in sorted(cents)]
