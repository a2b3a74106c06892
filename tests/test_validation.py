"""Validation tests — invalid inputs are rejected before any tick runs.

Covers pydantic field constraints on every config model and the
``InvalidConfiguration`` boundary used by the engine, API and YAML loader.
"""

from __future__ import annotations

import numpy as np
import pytest
from pydantic import ValidationError

from chargepoint_simulator.config import (
    ArrivalProfile,
    DemandBucket,
    DemandProfile,
    Scenario,
    SimulationConfig,
    build_config,
    build_scenario,
)
from chargepoint_simulator.config.scenario import MAX_MONTE_CARLO_RUNS
from chargepoint_simulator.engine.arrival import ArrivalModel
from chargepoint_simulator.engine.demand import DemandModel
from chargepoint_simulator.engine.simulation import SimulationEngine, validate_config
from chargepoint_simulator.errors import InvalidConfiguration


# ═══════════════════════════════════════════════════════════════════════════
# SimulationConfig
# ═══════════════════════════════════════════════════════════════════════════

class TestSimulationConfig:

    def test_defaults(self):
        c = SimulationConfig()
        assert c.chargepoint_count == 20
        assert c.arrival_multiplier_pct == 100
        assert c.ev_consumption_kwh_per_100km == 18
        assert c.charging_power_kw == 11
        assert c.theoretical_max_power_kw == 220

    def test_external_names_accepted(self):
        c = SimulationConfig(
            chargepoints=4,
            arrivalProbabilityMultiplierPercentage=50.5,
            evConsumptionPer100kmKWh=16.5,
            chargingPowerPerChargepointKW=22,
        )
        assert c.chargepoint_count == 4
        assert c.arrival_multiplier_pct == 50.5
        assert c.ev_consumption_kwh_per_100km == 16.5
        assert c.charging_power_kw == 22

    def test_fractions_not_truncated(self):
        c = build_config(arrivalProbabilityMultiplierPercentage=33.3, evConsumptionPer100kmKWh=17.8)
        assert c.arrival_multiplier_pct == pytest.approx(33.3)
        assert c.ev_consumption_kwh_per_100km == pytest.approx(17.8)

    def test_zero_chargepoints_valid(self):
        assert build_config(chargepoints=0).chargepoint_count == 0

    def test_multiplier_above_range_tolerated(self):
        assert build_config(arrivalProbabilityMultiplierPercentage=5_000).arrival_multiplier_pct == 5_000

    def test_frozen(self):
        c = SimulationConfig()
        with pytest.raises(ValidationError):
            c.chargepoint_count = 3

    @pytest.mark.parametrize("fields", [
        {"chargepoints": -1},
        {"chargingPowerPerChargepointKW": 0},
        {"chargingPowerPerChargepointKW": -11},
        {"evConsumptionPer100kmKWh": -1},
        {"arrivalProbabilityMultiplierPercentage": -10},
    ])
    def test_invalid_rejected(self, fields: dict):
        with pytest.raises(InvalidConfiguration):
            build_config(**fields)

    def test_error_is_value_error_and_chained(self):
        with pytest.raises(ValueError) as info:
            build_config(chargepoints=-1)
        assert isinstance(info.value.__cause__, ValidationError)
        assert "chargepoints" in str(info.value)


class TestEngineBoundary:
    """``model_construct`` skips pydantic; the engine re-checks."""

    def _engine(self, config: SimulationConfig) -> SimulationEngine:
        return SimulationEngine(
            config,
            ArrivalModel(ArrivalProfile(), 100),
            DemandModel(DemandProfile()),
            rng=np.random.default_rng(0),
        )

    @pytest.mark.parametrize("fields", [
        {"chargepoint_count": -2},
        {"charging_power_kw": 0.0},
        {"charging_power_kw": float("nan")},
        {"ev_consumption_kwh_per_100km": -5.0},
        {"arrival_multiplier_pct": -1.0},
    ])
    def test_rejected_before_run(self, fields: dict):
        config = SimulationConfig.model_construct(**fields)
        with pytest.raises(InvalidConfiguration):
            self._engine(config)

    def test_valid_config_passes(self):
        validate_config(SimulationConfig())

    @pytest.mark.parametrize("fields", [
        {"charging_power_kw": 1e-320},
        {"ev_consumption_kwh_per_100km": 1e20},
    ])
    def test_extreme_finite_values_accepted(self, fields: dict):
        # Session length is capped at one year, so these run to completion.
        engine = self._engine(SimulationConfig(chargepoint_count=1, **fields))
        assert len(engine.run().kwh_per_tick) == 35_040


# ═══════════════════════════════════════════════════════════════════════════
# Profiles
# ═══════════════════════════════════════════════════════════════════════════

class TestArrivalProfile:

    def test_default_has_24_hours(self):
        assert len(ArrivalProfile().hourly_probabilities) == 24

    def test_wrong_length_rejected(self):
        with pytest.raises(ValidationError):
            ArrivalProfile(hourly_probabilities=tuple([0.1] * 23))

    def test_probability_above_one_rejected(self):
        with pytest.raises(ValidationError):
            ArrivalProfile(hourly_probabilities=tuple([0.1] * 23 + [1.5]))

    def test_negative_probability_rejected(self):
        with pytest.raises(ValidationError):
            ArrivalProfile(hourly_probabilities=tuple([-0.1] + [0.1] * 23))


class TestDemandProfile:

    def test_default_is_valid(self):
        profile = DemandProfile()
        assert len(profile.buckets) == 9
        assert profile.cumulative_boundaries[-1] == pytest.approx(0.9997)

    def test_boundaries_are_monotonic(self):
        b = DemandProfile().cumulative_boundaries
        assert all(x <= y for x, y in zip(b, b[1:]))

    def test_sum_far_from_one_rejected(self):
        with pytest.raises(ValidationError):
            DemandProfile(buckets=(
                DemandBucket(probability=0.5, distance_km=0),
                DemandBucket(probability=0.4, distance_km=10),
            ))

    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            DemandProfile(buckets=())

    def test_negative_distance_rejected(self):
        with pytest.raises(ValidationError):
            DemandBucket(probability=1.0, distance_km=-5)


class TestScenario:

    def test_defaults(self):
        s = Scenario()
        assert s.random_seed is None
        assert s.monte_carlo_runs == 1

    def test_partial_dict(self):
        s = build_scenario({"simulation": {"chargepoints": 7}, "random_seed": 3})
        assert s.simulation.chargepoint_count == 7
        assert s.simulation.charging_power_kw == 11
        assert s.random_seed == 3

    def test_bad_profile_raises_invalid_configuration(self):
        with pytest.raises(InvalidConfiguration):
            build_scenario({"arrival": {"hourly_probabilities": [0.5] * 10}})

    def test_too_many_runs_rejected(self):
        with pytest.raises(InvalidConfiguration):
            build_scenario({"monte_carlo_runs": 50_000})
        with pytest.raises(InvalidConfiguration):
            build_scenario({"monte_carlo_runs": MAX_MONTE_CARLO_RUNS + 1})
        assert build_scenario({"monte_carlo_runs": MAX_MONTE_CARLO_RUNS}).monte_carlo_runs == MAX_MONTE_CARLO_RUNS
