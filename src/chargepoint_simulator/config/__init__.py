"""Configuration models — run inputs, probability tables, scenario bundle."""

from chargepoint_simulator.config.simulation import SimulationConfig, build_config
from chargepoint_simulator.config.profiles import (
    ArrivalProfile,
    DemandBucket,
    DemandProfile,
)
from chargepoint_simulator.config.scenario import Scenario, build_scenario, load_scenario

__all__ = [
    "SimulationConfig",
    "build_config",
    "ArrivalProfile",
    "DemandBucket",
    "DemandProfile",
    "Scenario",
    "build_scenario",
    "load_scenario",
]
