"""Agreement Scorer: percent-agree per attitude variable.

Policy table (authoritative, no inferred synonyms):

  exact   the loyalty variable; agree iff the label equals one of the
          configured loyalty labels
  top-2   variables matching a configured pattern (``^STATE_``); the two
          highest Likert labels
  top-3   everything else; the three highest Likert labels

Labels are resolved through the code table first. A value with no label keeps
its string form, and a bare number never counts as agree.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from clusterscope.analytics.codes import CodeTable, resolve_code
from clusterscope.analytics.colors import color_for_key
from clusterscope.analytics.records import GroupingMode, GroupKey, Scope, group_key, sorted_group_keys
from clusterscope.utils.coerce import is_blank

# Highest Likert labels first
LIKERT_TOP_LABELS: tuple[str, ...] = ("strongly agree", "agree", "somewhat agree")

_WS_RE = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    return _WS_RE.sub(" ", str(label).strip().lower())


@dataclass(frozen=True)
class AgreementPolicy:
    kind: str  # "exact" | "top"
    labels: frozenset[str]

    def agrees(self, label: str) -> bool:
        return normalize_label(label) in self.labels


@dataclass(frozen=True)
class AgreementRules:
    loyalty_variable: str = "LOYALTY"
    loyalty_labels: tuple[str, ...] = ("Definitely would",)
    top2_patterns: tuple[str, ...] = (r"^STATE_",)
    include_missing: bool = True
    _compiled: tuple[re.Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", tuple(re.compile(p) for p in self.top2_patterns))

    def policy_for(self, variable: str) -> AgreementPolicy:
        if variable == self.loyalty_variable:
            return AgreementPolicy("exact", frozenset(normalize_label(l) for l in self.loyalty_labels))
        n = 2 if any(p.search(variable) for p in self._compiled) else 3
        return AgreementPolicy("top", frozenset(LIKERT_TOP_LABELS[:n]))


def is_agree(variable: str, label: str, rules: AgreementRules | None = None) -> bool:
    rules = rules or AgreementRules()
    return rules.policy_for(variable).agrees(label)


def percent_agree(
    scope: Scope,
    variable: str,
    codes: Mapping[Any, str] | None = None,
    rules: AgreementRules | None = None,
    include_missing: bool | None = None,
) -> float | None:
    """agree / denominator * 100, or None when the denominator is empty."""
    rules = rules or AgreementRules()
    if include_missing is None:
        include_missing = rules.include_missing
    policy = rules.policy_for(variable)

    agree = valid = missing = 0
    for rec in scope:
        raw = rec.get(variable)
        if is_blank(raw):
            missing += 1
            continue
        valid += 1
        if policy.agrees(resolve_code(raw, codes)):
            agree += 1

    denominator = valid + missing if include_missing else valid
    if denominator == 0:
        return None
    return agree / denominator * 100


@dataclass(frozen=True)
class AttitudePoint:
    key: GroupKey
    x: float
    y: float
    n: int
    color: str


def attitude_points(
    scope: Scope,
    x_variable: str,
    y_variable: str,
    mode: GroupingMode,
    code_table: CodeTable | None = None,
    all_keys: Sequence[GroupKey] | None = None,
    rules: AgreementRules | None = None,
) -> list[AttitudePoint]:
    """Percent-agree on both variables per group; non-finite groups are dropped."""
    groups: dict[GroupKey, list] = {}
    for rec in scope:
        groups.setdefault(group_key(rec, mode), []).append(rec)

    x_codes = code_table.codes_for(x_variable) if code_table else None
    y_codes = code_table.codes_for(y_variable) if code_table else None
    palette_keys = list(all_keys) if all_keys is not None else sorted_group_keys(groups, mode)

    points = []
    for key in sorted_group_keys(groups, mode):
        members = tuple(groups[key])
        x = percent_agree(members, x_variable, x_codes, rules)
        y = percent_agree(members, y_variable, y_codes, rules)
        if x is None or y is None or not (math.isfinite(x) and math.isfinite(y)):
            continue
        points.append(
            AttitudePoint(key=key, x=x, y=y, n=len(members), color=color_for_key(key, palette_keys))
        )
    return points
