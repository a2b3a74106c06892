"""Result types — the contract between engine, API and dashboard.

``SimulationResult`` dumps (``by_alias=True``) to exactly the response shape
the chart front-end consumes::

    totalEnergyKWh, theoreticalMaxPowerDemandKW, actualMaxPowerDemandKW,
    concurrencyFactor, kWhPerTick, kWhPerChargepoint

Engine-side diagnostics (session count, peak bay count) are excluded from
the dump.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════
# Single run
# ═══════════════════════════════════════════════════════════════════════════

class SimulationResult(BaseModel):
    """Output of one yearly run."""

    model_config = ConfigDict(populate_by_name=True)

    total_energy_kwh: float = Field(serialization_alias="totalEnergyKWh")
    """Σ kwh_per_tick."""

    theoretical_max_power_kw: float = Field(serialization_alias="theoreticalMaxPowerDemandKW")
    """chargepoint_count × charging_power_kw."""

    actual_max_power_kw: float = Field(serialization_alias="actualMaxPowerDemandKW")
    """Highest (charging bays × charging_power_kw) over all ticks."""

    concurrency_factor: float = Field(serialization_alias="concurrencyFactor")
    """actual / theoretical; 0 when there are no chargepoints."""

    kwh_per_tick: list[float] = Field(serialization_alias="kWhPerTick")
    """Energy delivered in each 15-minute tick (35,040 values)."""

    kwh_per_chargepoint: list[float] = Field(serialization_alias="kWhPerChargepoint")
    """Energy delivered by each bay over the year."""

    sessions_started: int = Field(default=0, exclude=True)
    """Charging sessions started over the year."""

    peak_concurrent_chargepoints: int = Field(default=0, exclude=True)
    """Most bays charging in the same tick."""

    def to_response(self) -> dict[str, Any]:
        """JSON-ready dict with the external field names."""
        return self.model_dump(by_alias=True)


# ═══════════════════════════════════════════════════════════════════════════
# Monte-Carlo
# ═══════════════════════════════════════════════════════════════════════════

class MonteCarloSummary(BaseModel):
    """Distribution of headline metrics across N independently seeded runs."""

    num_runs: int
    base_seed: int

    energy_p10_kwh: float
    energy_p50_kwh: float
    energy_p90_kwh: float

    peak_power_p10_kw: float
    peak_power_p50_kw: float
    peak_power_p90_kw: float
    max_peak_power_kw: float
    """Worst observed peak — the conservative sizing figure."""

    concurrency_p10: float
    concurrency_p50: float
    concurrency_p90: float

    representative_seed: int
    """Seed of the run whose total energy is closest to the P50."""


class MonteCarloResult(BaseModel):
    """Summary plus the full representative run."""

    summary: MonteCarloSummary
    representative: SimulationResult


# ═══════════════════════════════════════════════════════════════════════════
# Chart data
# ═══════════════════════════════════════════════════════════════════════════

class ChartPoint(BaseModel):
    """One labelled bar / area point."""

    name: str
    value: float
