"""Tests for config/scenario.py — YAML scenario loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from chargepoint_simulator.config import ArrivalProfile, DemandProfile, load_scenario
from chargepoint_simulator.errors import InvalidConfiguration

BASE_CASE = Path(__file__).parent.parent / "scenarios" / "base_case.yaml"


def test_base_case_loads():
    s = load_scenario(BASE_CASE)
    assert s.simulation.chargepoint_count == 20
    assert s.simulation.charging_power_kw == 11
    assert s.random_seed == 42
    assert s.arrival == ArrivalProfile()
    assert s.demand == DemandProfile()


def test_partial_yaml_uses_defaults(tmp_path: Path):
    path = tmp_path / "small.yaml"
    path.write_text("simulation:\n  chargepoints: 4\n")
    s = load_scenario(path)
    assert s.simulation.chargepoint_count == 4
    assert s.simulation.ev_consumption_kwh_per_100km == 18


def test_empty_yaml_is_default(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_scenario(path).simulation.chargepoint_count == 20


def test_invalid_values_rejected(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("simulation:\n  chargingPowerPerChargepointKW: 0\n")
    with pytest.raises(InvalidConfiguration):
        load_scenario(path)


def test_non_mapping_rejected(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(InvalidConfiguration):
        load_scenario(path)
