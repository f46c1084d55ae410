"""Tests for centroids, collapse and the domain animator."""

import pytest

from clusterscope.analytics.centroids import cluster_hotspots, collapse, compute_centroids
from clusterscope.analytics.domain import DomainAnimator, ease_in_out_quad, padded_domain, tween_domain
from clusterscope.engine.scheduler import ManualFrameScheduler


def test_centroids_by_cluster(records):
    cents = compute_centroids(records, "cluster")
    assert (cents[0].cx, cents[0].cy, cents[0].n) == (1.0, 0.0, 2)
    assert (cents[1].cx, cents[1].cy, cents[1].n) == (11.0, 10.0, 2)
    assert (cents[2].cx, cents[2].cy, cents[2].n) == (20.0, -4.0, 1)


def test_centroids_by_model(records):
    cents = compute_centroids(records, "model")
    assert set(cents) == {"Explorer", "Highlander", "Tahoe"}


def test_collapse_endpoints(records):
    cents = compute_centroids(records, "cluster")

    raw = collapse(records, cents, 0.0, "cluster")
    assert [(p.x, p.y) for p in raw] == [(r.emb_x, r.emb_y) for r in records]

    stacked = collapse(records, cents, 1.0, "cluster")
    assert [(p.x, p.y) for p in stacked] == [(cents[r.cluster].cx, cents[r.cluster].cy) for r in records]
    assert stacked[0].raw_x == 0.0


def test_collapse_midway_and_clamped(records):
    cents = compute_centroids(records, "cluster")
    half = collapse(records, cents, 0.5, "cluster")
    assert (half[0].x, half[0].y) == (0.5, 0.0)
    assert collapse(records, cents, 7, "cluster")[0].x == 1.0


def test_hotspots_in_cluster_order(records):
    assert [k for k, _ in cluster_hotspots(records)] == [0, 1, 2]


def test_padded_domain():
    assert padded_domain([0, 10]) == pytest.approx((-0.5, 10.5))
    assert padded_domain([]) == (0.0, 1.0)
    lo, hi = padded_domain([5, 5])
    assert lo < 5 < hi
    lo, hi = padded_domain([0, 0])
    assert lo < 0 < hi


def test_easing():
    assert ease_in_out_quad(0) == 0
    assert ease_in_out_quad(0.5) == 0.5
    assert ease_in_out_quad(1) == 1
    assert tween_domain((0, 10), (10, 20), 0.5) == (5, 15)


def test_animator_reaches_target():
    scheduler = ManualFrameScheduler()
    animator = DomainAnimator(scheduler, (0.0, 10.0), (0.0, 10.0), duration_ms=400)
    frames = []
    animator.subscribe(lambda x, y, done: frames.append((x, done)))

    assert animator.animate_to((10.0, 20.0), (0.0, 10.0))
    assert animator.animating
    scheduler.run_until_idle()

    assert not animator.animating
    assert animator.current_x == (10.0, 20.0)
    assert frames[-1] == ((10.0, 20.0), True)
    assert all(not done for _, done in frames[:-1])


def test_animator_ignores_unchanged_target():
    scheduler = ManualFrameScheduler()
    animator = DomainAnimator(scheduler, (0.0, 1.0), (0.0, 1.0))
    assert not animator.animate_to((0.0, 1.0), (0.0, 1.0))
    assert scheduler.pending == 0


def test_new_animation_starts_from_rendered_value():
    scheduler = ManualFrameScheduler()
    animator = DomainAnimator(scheduler, (0.0, 10.0), (0.0, 10.0), duration_ms=400)
    animator.animate_to((10.0, 20.0), (0.0, 10.0))
    scheduler.advance(200)
    assert animator.current_x == pytest.approx((5.0, 15.0))

    animator.animate_to((0.0, 10.0), (0.0, 10.0))
    assert scheduler.pending == 1
    scheduler.advance(0)
    assert animator.current_x == pytest.approx((5.0, 15.0))
    scheduler.run_until_idle()
    assert animator.current_x == (0.0, 10.0)


def test_jump_cancels_animation():
    scheduler = ManualFrameScheduler()
    animator = DomainAnimator(scheduler)
    animator.animate_to((5.0, 6.0), (5.0, 6.0))
    animator.jump_to((1.0, 2.0), (3.0, 4.0))
    assert scheduler.pending == 0
    assert animator.current_x == (1.0, 2.0)
    assert animator.target_y == (3.0, 4.0)


def test_unsubscribe():
    scheduler = ManualFrameScheduler()
    animator = DomainAnimator(scheduler)
    calls = []
    unsubscribe = animator.subscribe(lambda *a: calls.append(a))
    unsubscribe()
    animator.animate_to((2.0, 3.0), (2.0, 3.0))
    scheduler.run_until_idle()
    assert calls == []
