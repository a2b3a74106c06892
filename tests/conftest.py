"""Shared test fixtures — reference configs, profiles and seeded runs."""

from __future__ import annotations

import numpy as np
import pytest

from chargepoint_simulator.config import (
    ArrivalProfile,
    DemandBucket,
    DemandProfile,
    Scenario,
    SimulationConfig,
)
from chargepoint_simulator.engine.orchestrator import run_simulation
from chargepoint_simulator.models.results import SimulationResult


@pytest.fixture
def base_config() -> SimulationConfig:
    return SimulationConfig(
        chargepoint_count=20,
        arrival_multiplier_pct=100,
        ev_consumption_kwh_per_100km=18,
        charging_power_kw=11,
    )


@pytest.fixture
def small_config() -> SimulationConfig:
    return SimulationConfig(
        chargepoint_count=3,
        arrival_multiplier_pct=100,
        ev_consumption_kwh_per_100km=18,
        charging_power_kw=11,
    )


@pytest.fixture
def always_arrive() -> ArrivalProfile:
    """Probability 1 in every hour."""
    return ArrivalProfile(hourly_probabilities=tuple([1.0] * 24))


@pytest.fixture
def always_50km() -> DemandProfile:
    """Every arrival needs 50 km → 4 ticks at 18 kWh/100km and 11 kW."""
    return DemandProfile(buckets=(DemandBucket(probability=1.0, distance_km=50),))


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def scenario(small_config: SimulationConfig) -> Scenario:
    return Scenario(simulation=small_config, random_seed=7)


@pytest.fixture(scope="session")
def reference_result() -> SimulationResult:
    """One full default run (20 × 11 kW, seed 42), shared across tests."""
    return run_simulation(SimulationConfig(), seed=42)
