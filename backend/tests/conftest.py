"""Shared test fixtures."""

from __future__ import annotations

import json

import pytest

from clusterscope.analytics.codes import CodeTable
from clusterscope.analytics.domain import DomainAnimator
from clusterscope.analytics.normalizer import normalize_records
from clusterscope.corpus import Corpus
from clusterscope.engine.context import ViewParams
from clusterscope.engine.scheduler import ManualFrameScheduler
from clusterscope.engine.view import ViewEngine


# Five valid respondents in three clusters, three broken rows

SUV_ROWS = [
    {
        "model": "Explorer", "emb_x": 0, "emb_y": 0, "cluster": 0,
        "STATE": "CA", "GENDER": 1, "PRICE_PAID": 29000, "APR_RATE": 4.0, "FIN_AMT": "30,000",
        "LOYALTY": "Definitely would", "STATE_SAFETY": "Strongly agree", "ATT_TECH": 5,
    },
    {
        "model": "Explorer", "emb_x": 2, "emb_y": 0, "cluster": 0,
        "STATE": "California", "GENDER": 2, "PRICE_PAID": 31000, "APR_RATE": 5.0, "FIN_AMT": "$20,000",
        "LOYALTY": "Probably would", "STATE_SAFETY": "Agree", "ATT_TECH": 4,
    },
    {
        "BLD_DESC_RV_MODEL": "Highlander", "emb_x": "10", "emb_y": "10", "cluster": "1",
        "STATE": "tx", "GENDER": 1, "PRICE_PAID": 112000, "APR_RATE": "",
        "LOYALTY": "Definitely would", "STATE_SAFETY": "Somewhat agree", "ATT_TECH": 3,
    },
    {
        "model": "Highlander", "emb_x": 12, "emb_y": 10, "cluster": 1,
        "STATE": "Austin, TX 78701", "GENDER": None, "PRICE_PAID": 45000, "APR_RATE": 6.0,
        "LOYALTY": "", "STATE_SAFETY": "Neutral", "ATT_TECH": 1,
    },
    {
        "Model": "Tahoe", "emb_x": 20, "emb_y": -4, "cluster": 2,
        "RES_STATE": 12, "GENDER": 2, "PRICE_PAID": 60000, "APR_RATE": 3.0,
    },
    {"model": "", "emb_x": 1, "emb_y": 1, "cluster": 0},
    {"model": "Explorer", "emb_x": "abc", "emb_y": 1, "cluster": 0},
    {"model": "Explorer", "emb_x": 1, "emb_y": 1},
]

PICKUP_ROWS = [
    {"model": "F-150", "emb_x": 0, "emb_y": 0, "cluster": 0, "STATE": "TX", "PRICE_PAID": 50000},
    {"model": "F-150", "emb_x": 4, "emb_y": 2, "cluster": 3, "STATE": "MI", "PRICE_PAID": 58000},
    {"model": "Silverado", "emb_x": 1, "emb_y": 1, "cluster": 3, "STATE": "Ohio", "PRICE_PAID": 41000},
]

CODE_ROWS = [
    {"NAME": "GENDER", "START": 1, "LABEL": "Male"},
    {"NAME": "GENDER", "START": 2, "LABEL": "Female"},
    {"NAME": "ATT_TECH", "START": 1, "LABEL": "Strongly disagree"},
    {"NAME": "ATT_TECH", "START": 2, "LABEL": "Somewhat disagree"},
    {"NAME": "ATT_TECH", "START": 3, "LABEL": "Neutral"},
    {"NAME": "ATT_TECH", "START": 4, "LABEL": "Somewhat agree"},
    {"NAME": "ATT_TECH", "START": 5, "LABEL": "Strongly agree"},
    {"NAME": "RES_STATE", "START": 12, "LABEL": "Florida"},
]


@pytest.fixture
def code_table() -> CodeTable:
    return CodeTable.from_rows(CODE_ROWS)


@pytest.fixture
def records():
    return normalize_records(SUV_ROWS).records


@pytest.fixture
def corpus(code_table) -> Corpus:
    return Corpus({"SUV": SUV_ROWS, "Pickup": PICKUP_ROWS}, code_table)


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def animator(scheduler) -> DomainAnimator:
    return DomainAnimator(scheduler)


@pytest.fixture
def engine(corpus, animator) -> ViewEngine:
    return ViewEngine(corpus, ViewParams(dataset="SUV"), animator=animator)


@pytest.fixture
def data_dir(tmp_path):
    """A corpus directory laid out like backend/data."""
    (tmp_path / "suv_points.json").write_text(json.dumps(SUV_ROWS), encoding="utf-8")
    (tmp_path / "pu_points.json").write_text(json.dumps(PICKUP_ROWS), encoding="utf-8")
    (tmp_path / "demos-mapping.json").write_text(json.dumps(CODE_ROWS), encoding="utf-8")
    return tmp_path
