"""Per-run simulation inputs — the four knobs of one yearly run."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chargepoint_simulator.errors import InvalidConfiguration


class SimulationConfig(BaseModel):
    """Fleet and hardware settings for one run.  Immutable once built.

    Field names are snake_case; the external request names
    (``chargepoints``, ``arrivalProbabilityMultiplierPercentage``, ...) are
    accepted as aliases and used when dumping with ``by_alias=True``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chargepoint_count: int = Field(
        default=20,
        ge=0,
        alias="chargepoints",
        description="Number of charging bays. 0 is valid and yields an all-zero result.",
    )
    arrival_multiplier_pct: float = Field(
        default=100.0,
        ge=0,
        alias="arrivalProbabilityMultiplierPercentage",
        description="Scales every hourly arrival probability. "
                    "100 = base profile; intended range ~20–200 (not enforced). "
                    "Values pushing a probability above 1 mean 'arrive every tick'.",
    )
    ev_consumption_kwh_per_100km: float = Field(
        default=18.0,
        ge=0,
        alias="evConsumptionPer100kmKWh",
        description="Vehicle energy consumption (kWh per 100 km)",
    )
    charging_power_kw: float = Field(
        default=11.0,
        gt=0,
        alias="chargingPowerPerChargepointKW",
        description="Rated power of each chargepoint (kW)",
    )

    @property
    def theoretical_max_power_kw(self) -> float:
        """Demand if every bay charged at once at full power."""
        return self.chargepoint_count * self.charging_power_kw


def build_config(**fields: Any) -> SimulationConfig:
    """Build a :class:`SimulationConfig`, raising ``InvalidConfiguration`` on bad input."""
    try:
        return SimulationConfig(**fields)
    except ValidationError as exc:
        raise InvalidConfiguration.from_validation_error(exc) from exc
