"""Record Normalizer: raw heterogeneous rows → canonical SurveyRecords.

Invalid rows (no model, non-finite embedding or cluster) are dropped
silently. The drop count is returned for telemetry only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from clusterscope.analytics.records import SurveyRecord
from clusterscope.utils.coerce import is_blank, to_number

logger = logging.getLogger(__name__)

# Exports disagree on the model column name; first non-null wins
MODEL_FIELD_ALIASES: tuple[str, ...] = ("model", "BLD_DESC_RV_MODEL", "Model", "model_name", "MODEL")


@dataclass(frozen=True)
class NormalizeResult:
    records: tuple[SurveyRecord, ...]
    dropped: int = 0


def resolve_model(row: Mapping[str, Any], aliases: Sequence[str] = MODEL_FIELD_ALIASES) -> str | None:
    for name in aliases:
        value = row.get(name)
        if value is not None:
            # NaN is truthy, so check blanks first
            if is_blank(value) or not value:
                return None
            return str(value)
    return None


def normalize_row(
    row: Mapping[str, Any],
    aliases: Sequence[str] = MODEL_FIELD_ALIASES,
) -> SurveyRecord | None:
    """Return the canonical record, or None when any required field is unusable."""
    if not isinstance(row, Mapping):
        return None

    model = resolve_model(row, aliases)
    x = to_number(row.get("emb_x"))
    y = to_number(row.get("emb_y"))
    cluster = to_number(row.get("cluster"))
    if not model or x is None or y is None or cluster is None:
        return None

    fields = dict(row)
    fields.update(model=model, emb_x=x, emb_y=y, cluster=int(cluster))
    return SurveyRecord(
        model=model,
        emb_x=x,
        emb_y=y,
        cluster=int(cluster),
        fields=MappingProxyType(fields),
    )


def normalize_records(
    rows: Iterable[Mapping[str, Any]] | None,
    aliases: Sequence[str] = MODEL_FIELD_ALIASES,
) -> NormalizeResult:
    records: list[SurveyRecord] = []
    dropped = 0
    for row in rows or ():
        rec = normalize_row(row, aliases)
        if rec is None:
            dropped += 1
            continue
        records.append(rec)

    if dropped:
        logger.info("Normalizer: kept %d records, dropped %d invalid rows", len(records), dropped)
    return NormalizeResult(records=tuple(records), dropped=dropped)
