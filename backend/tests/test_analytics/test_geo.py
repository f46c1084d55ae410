"""Tests for state resolution and the state map aggregate."""

import pytest

from clusterscope.analytics.colors import MAP_BASE_COLOR, MAP_MAX_COLOR, blend_rgb
from clusterscope.analytics.geo import aggregate_states, record_state, resolve_state, state_intensity
from clusterscope.analytics.records import SurveyRecord


@pytest.mark.parametrize(
    "value,expected",
    [
        ("ca", "California"),
        ("CA", "California"),
        ("California", "California"),
        ("  new   york ", "New York"),
        ("Austin, TX 78701", "Texas"),
        ("DC", "District of Columbia"),
        ("somewhere", None),
        ("Some place, tx", None),
        ("", None),
        (None, None),
    ],
)
def test_resolve_state(value, expected):
    assert resolve_state(value) == expected


def test_coded_state_field(records, code_table):
    tahoe = records[4]
    assert record_state(tahoe) is None
    assert record_state(tahoe, code_table=code_table) == "Florida"


def test_first_non_blank_field_wins(records):
    assert record_state(records[0], fields=("STATE_NAME", "STATE")) == "California"


def test_unresolvable_field_falls_through():
    rec = SurveyRecord("Explorer", 0.0, 0.0, 0, {"STATE": "Unknown", "STATE_NAME": "Texas"})
    assert record_state(rec) == "Texas"

    rec = SurveyRecord("Explorer", 0.0, 0.0, 0, {"STATE": "Unknown", "RES_STATE": "nowhere"})
    assert record_state(rec) is None


def test_aggregate_states(records, code_table):
    agg = aggregate_states(records, code_table=code_table)
    assert [(s.state, s.count) for s in agg.states] == [("California", 2), ("Texas", 2), ("Florida", 1)]
    assert agg.pct_map() == {"California": 40.0, "Texas": 40.0, "Florida": 20.0}
    assert agg.total_resolved == 5
    assert agg.unresolved == 0
    assert agg.max_pct == 40.0

    florida = agg.states[2]
    assert florida.intensity == pytest.approx(0.5)
    assert florida.color == blend_rgb(MAP_BASE_COLOR, MAP_MAX_COLOR, 0.5)
    assert agg.states[0].color == MAP_MAX_COLOR


def test_unresolved_records_are_counted(records):
    agg = aggregate_states(records)
    assert agg.total_resolved == 4
    assert agg.unresolved == 1
    assert sum(agg.pct_map().values()) == pytest.approx(100.0)


def test_empty_scope():
    agg = aggregate_states(())
    assert agg.states == ()
    assert agg.max_pct == 0.0


def test_state_intensity_bounds():
    assert state_intensity(10, 0) == 0.0
    assert state_intensity(50, 40) == 1.0
    assert state_intensity(10, 40) == 0.25
