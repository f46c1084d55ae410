"""Price Bucketizer: fixed-width price histograms per group.

Buckets: one open "Under" bucket below the floor, ``step``-wide buckets up to
the ceiling, one open "+" bucket at/above the ceiling. Percentages are
normalized within each group so groups of different sizes stay comparable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from clusterscope.analytics.colors import color_for_key
from clusterscope.analytics.records import GroupingMode, GroupKey, Scope, group_key, sorted_group_keys
from clusterscope.utils.coerce import parse_amount


def _k(value: float) -> str:
    thousands = value / 1000
    if float(thousands).is_integer():
        return f"${int(thousands)}k"
    return f"${thousands:.1f}k"


@dataclass(frozen=True)
class PriceBuckets:
    floor: float = 30_000
    step: float = 5_000
    ceiling: float = 110_000

    def __post_init__(self) -> None:
        if self.step <= 0 or self.ceiling <= self.floor:
            raise ValueError(
                f"Invalid price buckets: floor={self.floor} step={self.step} ceiling={self.ceiling}"
            )

    @property
    def inner_count(self) -> int:
        return math.ceil((self.ceiling - self.floor) / self.step)

    @property
    def count(self) -> int:
        return self.inner_count + 2

    @property
    def labels(self) -> list[str]:
        out = [f"Under {_k(self.floor)}"]
        for i in range(self.inner_count):
            lo = self.floor + i * self.step
            hi = min(lo + self.step, self.ceiling) - 100
            out.append(f"{_k(lo)} to {_k(hi)}")
        out.append(f"{_k(self.ceiling)}+")
        return out

    def index(self, price: float) -> int:
        """Bucket index for one finite price."""
        return int(self.indices(np.array([price], dtype=float))[0])

    def indices(self, prices: np.ndarray) -> np.ndarray:
        inner = np.floor((prices - self.floor) / self.step).astype(np.int64) + 1
        idx = np.clip(inner, 1, self.inner_count)
        idx = np.where(prices < self.floor, 0, idx)
        idx = np.where(prices >= self.ceiling, self.count - 1, idx)
        return idx


@dataclass(frozen=True)
class PriceBin:
    label: str
    count: int
    pct: float


@dataclass(frozen=True)
class PriceSeries:
    key: GroupKey
    color: str
    bins: tuple[PriceBin, ...]
    valid: int
    missing: int


def price_histogram(prices: Sequence[float], buckets: PriceBuckets) -> tuple[PriceBin, ...]:
    arr = np.asarray(prices, dtype=float)
    counts = np.bincount(buckets.indices(arr), minlength=buckets.count) if arr.size else np.zeros(buckets.count, dtype=np.int64)
    total = int(counts.sum())
    return tuple(
        PriceBin(label=label, count=int(c), pct=(int(c) / total * 100) if total else 0.0)
        for label, c in zip(buckets.labels, counts)
    )


def price_histograms(
    scope: Scope,
    field: str,
    mode: GroupingMode,
    all_keys: Sequence[GroupKey] | None = None,
    buckets: PriceBuckets | None = None,
) -> list[PriceSeries]:
    """One histogram per group present in ``scope``, in canonical key order."""
    buckets = buckets or PriceBuckets()
    prices: dict[GroupKey, list[float]] = {}
    missing: dict[GroupKey, int] = {}
    for rec in scope:
        key = group_key(rec, mode)
        price = parse_amount(rec.get(field))
        prices.setdefault(key, [])
        if price is None:
            missing[key] = missing.get(key, 0) + 1
        else:
            prices[key].append(price)

    palette_keys = list(all_keys) if all_keys is not None else sorted_group_keys(prices, mode)
    series = []
    for key in sorted_group_keys(prices, mode):
        series.append(
            PriceSeries(
                key=key,
                color=color_for_key(key, palette_keys),
                bins=price_histogram(prices[key], buckets),
                valid=len(prices[key]),
                missing=missing.get(key, 0),
            )
        )
    return series
