"""Tests for price bucketing."""

import pytest

from clusterscope.analytics.colors import PALETTE
from clusterscope.analytics.prices import PriceBuckets, price_histogram, price_histograms


def test_bucket_labels():
    labels = PriceBuckets().labels
    assert labels[0] == "Under $30k"
    assert labels[1] == "$30k to $34.9k"
    assert labels[-2] == "$105k to $109.9k"
    assert labels[-1] == "$110k+"
    assert len(labels) == PriceBuckets().count == 18


def test_bucket_edges():
    buckets = PriceBuckets()
    assert buckets.index(29999) == 0
    assert buckets.index(30000) == 1
    assert buckets.index(34999) == 1
    assert buckets.index(35000) == 2
    assert buckets.index(109999) == 16
    assert buckets.index(110000) == 17
    assert buckets.index(250000) == 17


def test_three_prices_one_per_bucket():
    bins = price_histogram([29000, 31000, 112000], PriceBuckets())
    filled = [(b.label, b.pct) for b in bins if b.count]
    assert [label for label, _ in filled] == ["Under $30k", "$30k to $34.9k", "$110k+"]
    assert all(pct == pytest.approx(100 / 3) for _, pct in filled)


def test_empty_histogram_is_all_zero():
    bins = price_histogram([], PriceBuckets())
    assert all(b.count == 0 and b.pct == 0.0 for b in bins)


def test_uneven_last_bucket():
    buckets = PriceBuckets(floor=0, step=40_000, ceiling=100_000)
    assert buckets.inner_count == 3
    assert buckets.labels[3] == "$80k to $99.9k"


def test_invalid_buckets():
    with pytest.raises(ValueError):
        PriceBuckets(step=0)
    with pytest.raises(ValueError):
        PriceBuckets(floor=50_000, ceiling=40_000)


def test_histograms_normalized_per_group(records):
    series = price_histograms(records, "PRICE_PAID", "cluster", all_keys=[0, 1, 2])
    assert [s.key for s in series] == [0, 1, 2]
    for s in series:
        assert sum(b.pct for b in s.bins) == pytest.approx(100.0)
    c1 = {b.label: b.pct for b in series[1].bins if b.count}
    assert c1 == {"$45k to $49.9k": 50.0, "$110k+": 50.0}
    assert series[2].color == PALETTE[2]


def test_unparseable_prices_are_missing(records):
    series = price_histograms(records, "NO_PRICE", "model")
    assert [s.key for s in series] == ["Explorer", "Highlander", "Tahoe"]
    assert all(s.valid == 0 and s.missing > 0 for s in series)
