"""Numeric Aggregator: scope means for numeric survey fields.

Aggregation is plain arithmetic; ``format_numeric`` is the display policy
applied at the snapshot boundary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from clusterscope.analytics.records import Scope
from clusterscope.utils.coerce import is_blank, parse_amount

_PERCENT_RE = re.compile(r"PCT|PERCENT|RATE|APR", re.IGNORECASE)
_CURRENCY_RE = re.compile(r"AMT|AMOUNT|PRICE|PAYMENT|COST|MSRP|DOWN", re.IGNORECASE)
_LENGTH_RE = re.compile(r"TERM|LENGTH|MONTHS|DURATION", re.IGNORECASE)


@dataclass(frozen=True)
class NumericSection:
    field: str
    mean: float | None
    valid: int
    missing: int

    kind = "numeric"

    @property
    def total(self) -> int:
        return self.valid + self.missing


def aggregate_numeric(scope: Scope, field: str) -> NumericSection:
    values: list[float] = []
    missing = 0
    for rec in scope:
        raw = rec.get(field)
        num = None if is_blank(raw) else parse_amount(raw)
        if num is None:
            missing += 1
            continue
        values.append(num)

    mean = float(np.mean(values)) if values else None
    return NumericSection(field=field, mean=mean, valid=len(values), missing=missing)


def aggregate_numeric_fields(scope: Scope, fields: Iterable[str]) -> list[NumericSection]:
    """One section per field; a field never observed in the scope is skipped."""
    sections = []
    for field in fields:
        section = aggregate_numeric(scope, field)
        if section.total > 0 and any(field in r.fields for r in scope):
            sections.append(section)
    return sections


def numeric_unit(field: str) -> str:
    """Display unit implied by the field name: percent, currency, months or plain."""
    if _PERCENT_RE.search(field):
        return "percent"
    if _CURRENCY_RE.search(field):
        return "currency"
    if _LENGTH_RE.search(field):
        return "months"
    return "plain"


def format_numeric(field: str, value: float | None) -> str:
    if value is None:
        return "n/a"
    unit = numeric_unit(field)
    if unit == "percent":
        return f"{value:.1f}%"
    if unit == "currency":
        return f"${value:,.0f}"
    if unit == "months":
        return f"{value:.0f} months"
    return f"{value:,.2f}"
