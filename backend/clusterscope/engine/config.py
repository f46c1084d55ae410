"""Engine configuration: aggregation constants and field policies."""

from __future__ import annotations

from dataclasses import dataclass, field

from clusterscope.analytics.agreement import AgreementRules
from clusterscope.analytics.geo import STATE_FIELDS
from clusterscope.analytics.normalizer import MODEL_FIELD_ALIASES
from clusterscope.analytics.prices import PriceBuckets


@dataclass
class EngineConfig:
    """Controls how derived entities are computed."""

    # Normalizer
    model_aliases: tuple[str, ...] = MODEL_FIELD_ALIASES

    # Axis domains
    domain_padding: float = 0.05  # 5% of span per side
    animation_duration_ms: float = 400.0

    # Categorical summaries
    rounding_tolerance: float = 0.1  # percentage points
    # None = every code table field
    categorical_fields: tuple[str, ...] | None = None

    # Numeric summaries
    numeric_fields: tuple[str, ...] = ("FIN_AMT", "DOWN_PAYMENT", "APR_RATE", "LOAN_TERM")

    # Price histograms
    price_field: str = "PRICE_PAID"
    price_buckets: PriceBuckets = field(default_factory=PriceBuckets)

    # Geo
    state_fields: tuple[str, ...] = STATE_FIELDS

    # Attitudes
    agreement: AgreementRules = field(default_factory=AgreementRules)
    default_attitude_x: str | None = None
    default_attitude_y: str | None = None

    # Stale-selection repair passes before giving up
    max_repair_passes: int = 3
