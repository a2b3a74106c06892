"""Probability tables — hourly arrivals and trip-distance demand.

Both tables are injected into the engine as immutable data so that
alternative site profiles can be simulated and unit-tested in isolation.
The defaults reproduce the reference workplace/retail profile.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

HOURS_PER_DAY = 24

DEMAND_PROBABILITY_TOLERANCE = 1e-3
"""Allowed deviation of the demand bucket probabilities from a sum of 1.0.
Published tables are rounded to four decimals (the default sums to 0.9997)."""

DEFAULT_HOURLY_ARRIVAL_PROBABILITIES: tuple[float, ...] = (
    0.0094, 0.0094, 0.0094, 0.0094, 0.0094, 0.0094,   # 00–06
    0.0094, 0.0094, 0.0283, 0.0283, 0.0566, 0.0566,   # 06–12
    0.0566, 0.0755, 0.0755, 0.0755, 0.1038, 0.1038,   # 12–18
    0.1038, 0.0472, 0.0472, 0.0472, 0.0094, 0.0094,   # 18–24
)
"""Per-tick probability that a vehicle arrives at an idle bay, by hour of day."""


# ═══════════════════════════════════════════════════════════════════════════
# Arrivals
# ═══════════════════════════════════════════════════════════════════════════

class ArrivalProfile(BaseModel):
    """24 arrival probabilities, one per hour of day, reused every day."""

    model_config = ConfigDict(frozen=True)

    hourly_probabilities: tuple[float, ...] = Field(
        default=DEFAULT_HOURLY_ARRIVAL_PROBABILITIES,
        min_length=HOURS_PER_DAY,
        max_length=HOURS_PER_DAY,
        description="Per-tick arrival probability at an idle bay for hours 0..23",
    )

    @field_validator("hourly_probabilities")
    @classmethod
    def _probabilities_in_unit_interval(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        for hour, p in enumerate(v):
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"hour {hour}: probability {p} outside [0, 1]")
        return v

    def __getitem__(self, hour: int) -> float:
        return self.hourly_probabilities[hour]


# ═══════════════════════════════════════════════════════════════════════════
# Demand
# ═══════════════════════════════════════════════════════════════════════════

class DemandBucket(BaseModel):
    """One trip-distance bucket.  ``distance_km == 0`` means no charge needed."""

    model_config = ConfigDict(frozen=True)

    probability: float = Field(ge=0, le=1, description="Probability of this bucket")
    distance_km: float = Field(ge=0, description="Distance to recharge for (km)")


DEFAULT_DEMAND_BUCKETS: tuple[DemandBucket, ...] = (
    DemandBucket(probability=0.3431, distance_km=0),
    DemandBucket(probability=0.0490, distance_km=5),
    DemandBucket(probability=0.0980, distance_km=10),
    DemandBucket(probability=0.1176, distance_km=20),
    DemandBucket(probability=0.0882, distance_km=30),
    DemandBucket(probability=0.1176, distance_km=50),
    DemandBucket(probability=0.1078, distance_km=100),
    DemandBucket(probability=0.0490, distance_km=200),
    DemandBucket(probability=0.0294, distance_km=300),
)


class DemandProfile(BaseModel):
    """Ordered distance buckets whose probabilities sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    buckets: tuple[DemandBucket, ...] = Field(
        default=DEFAULT_DEMAND_BUCKETS,
        min_length=1,
        description="Distance buckets scanned in this order when sampling",
    )

    @field_validator("buckets")
    @classmethod
    def _probabilities_sum_to_one(cls, v: tuple[DemandBucket, ...]) -> tuple[DemandBucket, ...]:
        total = math.fsum(b.probability for b in v)
        if abs(total - 1.0) > DEMAND_PROBABILITY_TOLERANCE:
            raise ValueError(f"bucket probabilities sum to {total}, expected 1.0")
        return v

    @property
    def cumulative_boundaries(self) -> tuple[float, ...]:
        """Running sum of bucket probabilities, in bucket order."""
        boundaries = []
        cumulative = 0.0
        for b in self.buckets:
            cumulative += b.probability
            boundaries.append(cumulative)
        return tuple(boundaries)

    @property
    def distances_km(self) -> tuple[float, ...]:
        return tuple(b.distance_km for b in self.buckets)
