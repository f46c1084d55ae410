"""Tests for the snapshot boundary."""

from clusterscope.engine.snapshot import context_to_snapshot, group_label


def test_group_label():
    assert group_label(3, "cluster") == "C3"
    assert group_label("Tahoe", "model") == "Tahoe"


def test_snapshot_contents(engine, animator):
    snap = context_to_snapshot(engine.ctx, animator)
    assert snap.dataset == "SUV"
    assert snap.record_count == 5
    assert snap.dropped_count == 3
    assert snap.scope_count == 5
    assert len(snap.points) == 5
    assert [e.label for e in snap.legend] == ["C0", "C1", "C2"]
    assert [h.label for h in snap.hotspots] == ["C0", "C1", "C2"]
    assert snap.domain.animating is False
    assert snap.errors == {}


def test_sections_categorical_then_numeric(engine):
    snap = context_to_snapshot(engine.ctx)
    kinds = [s.kind for s in snap.sections]
    assert kinds == sorted(kinds)
    apr = next(s for s in snap.sections if s.field == "APR_RATE")
    assert apr.display == "4.5%"
    assert apr.unit == "percent"
    fin = next(s for s in snap.sections if s.field == "FIN_AMT")
    assert fin.display == "$25,000"


def test_state_map_carries_abbreviations(engine):
    snap = context_to_snapshot(engine.ctx)
    assert [(s.state, s.abbreviation) for s in snap.state_map.states] == [
        ("California", "CA"),
        ("Texas", "TX"),
        ("Florida", "FL"),
    ]
    assert snap.state_map.pct_by_state["Florida"] == 20.0


def test_snapshot_serializes(engine):
    engine.update(grouping_mode="model", attitude_x="STATE_SAFETY", attitude_y="LOYALTY")
    data = context_to_snapshot(engine.ctx).model_dump(mode="json")
    assert data["grouping_mode"] == "model"
    assert [p["label"] for p in data["attitudes"]["points"]] == ["Explorer", "Highlander", "Tahoe"]
    assert data["domain"]["x"] == data["domain"]["target_x"]
