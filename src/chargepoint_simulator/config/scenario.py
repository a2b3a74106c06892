"""Top-level scenario — bundles the run inputs, probability tables and RNG settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from chargepoint_simulator.config.profiles import ArrivalProfile, DemandProfile
from chargepoint_simulator.config.simulation import SimulationConfig
from chargepoint_simulator.errors import InvalidConfiguration

MAX_MONTE_CARLO_RUNS = 1_000
"""Upper bound on runs per Monte-Carlo batch, shared with the HTTP API."""


class Scenario(BaseModel):
    """Complete input bundle for one simulation (or one Monte-Carlo batch)."""

    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    arrival: ArrivalProfile = Field(default_factory=ArrivalProfile)
    demand: DemandProfile = Field(default_factory=DemandProfile)
    random_seed: int | None = Field(
        default=None,
        description="Optional RNG seed for reproducible runs. "
                    "None = the orchestrator's fixed default seed (42).",
    )
    monte_carlo_runs: int = Field(
        default=1,
        ge=1,
        le=MAX_MONTE_CARLO_RUNS,
        description="Independent runs for the Monte-Carlo summary. "
                    "1 = single run; 100+ for sizing under uncertainty.",
    )


def build_scenario(data: dict[str, Any]) -> Scenario:
    """Validate a (possibly partial) scenario dict into a :class:`Scenario`."""
    try:
        return Scenario(**data)
    except ValidationError as exc:
        raise InvalidConfiguration.from_validation_error(exc) from exc


def load_scenario(path: str | Path) -> Scenario:
    """Load a scenario from a YAML file.  Missing sections use defaults."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{path}: expected a mapping at the top level")
    return build_scenario(data)
