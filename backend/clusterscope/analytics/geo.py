"""Geo Resolver/Aggregator: loose state identifiers → per-state shares.

Resolution order: two-letter abbreviation, full name (both case-insensitive),
then an uppercase two-letter token embedded in a longer string
(``"Austin, TX 78701"``). Coded fields go through the code table first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Sequence

from clusterscope.analytics.codes import CodeTable
from clusterscope.analytics.colors import MAP_BASE_COLOR, MAP_MAX_COLOR, blend_rgb
from clusterscope.analytics.records import Scope, SurveyRecord
from clusterscope.utils.coerce import is_blank
from clusterscope.utils.states import STATE_ABBREVIATIONS, STATE_NAMES

STATE_FIELDS: tuple[str, ...] = ("STATE", "STATE_NAME", "RES_STATE", "RESPONDENT_STATE")

_TOKEN_RE = re.compile(r"\b([A-Z]{2})\b")


def resolve_state(value: Any) -> str | None:
    """Canonical full state name, or None when nothing matches."""
    if is_blank(value):
        return None
    text = str(value).strip()

    if len(text) == 2:
        name = STATE_ABBREVIATIONS.get(text.upper())
        if name:
            return name

    name = STATE_NAMES.get(re.sub(r"\s+", " ", text).lower())
    if name:
        return name

    for token in _TOKEN_RE.findall(text):
        name = STATE_ABBREVIATIONS.get(token)
        if name:
            return name
    return None


def record_state(
    record: SurveyRecord,
    fields: Sequence[str] = STATE_FIELDS,
    code_table: CodeTable | None = None,
) -> str | None:
    """State of a record from the first candidate field that resolves."""
    for field in fields:
        raw = record.get(field)
        if is_blank(raw):
            continue
        if code_table is not None and code_table.has_field(field):
            raw = code_table.resolve(field, raw)
        state = resolve_state(raw)
        if state is not None:
            return state
    return None


@dataclass(frozen=True)
class StateShare:
    state: str
    count: int
    pct: float
    intensity: float
    color: str


@dataclass(frozen=True)
class StateAggregate:
    states: tuple[StateShare, ...]
    total_resolved: int
    unresolved: int
    max_pct: float

    def pct_map(self) -> dict[str, float]:
        return {s.state: s.pct for s in self.states}


def state_intensity(pct: float, max_pct: float) -> float:
    if max_pct <= 0:
        return 0.0
    return min(1.0, max(0.0, pct / max_pct))


def aggregate_states(
    scope: Scope,
    fields: Sequence[str] = STATE_FIELDS,
    code_table: CodeTable | None = None,
    base_color: str = MAP_BASE_COLOR,
    max_color: str = MAP_MAX_COLOR,
) -> StateAggregate:
    counts: dict[str, int] = {}
    unresolved = 0
    for rec in scope:
        state = record_state(rec, fields, code_table)
        if state is None:
            unresolved += 1
            continue
        counts[state] = counts.get(state, 0) + 1

    total = sum(counts.values())
    pcts = {s: c / total * 100 for s, c in counts.items()} if total else {}
    max_pct = max(pcts.values(), default=0.0)

    shares = []
    for state in sorted(counts, key=lambda s: (-counts[s], s)):
        t = state_intensity(pcts[state], max_pct)
        shares.append(
            StateShare(
                state=state,
                count=counts[state],
                pct=pcts[state],
                intensity=t,
                color=blend_rgb(base_color, max_color, t),
            )
        )
    return StateAggregate(states=tuple(shares), total_resolved=total, unresolved=unresolved, max_pct=max_pct)
