"""Engine — time grid, arrival/demand models, charger pool and the tick loop."""

from chargepoint_simulator.engine.arrival import ArrivalModel
from chargepoint_simulator.engine.demand import DemandModel
from chargepoint_simulator.engine.pool import ChargerPool
from chargepoint_simulator.engine.aggregator import ResultAggregator
from chargepoint_simulator.engine.observer import (
    LoggingObserver,
    RecordingObserver,
    SimulationObserver,
)
from chargepoint_simulator.engine.simulation import SimulationEngine, session_ticks, validate_config
from chargepoint_simulator.engine.orchestrator import (
    build_engine,
    run_engine,
    run_monte_carlo,
    run_simulation,
)

__all__ = [
    "ArrivalModel",
    "DemandModel",
    "ChargerPool",
    "ResultAggregator",
    "SimulationObserver",
    "LoggingObserver",
    "RecordingObserver",
    "SimulationEngine",
    "session_ticks",
    "validate_config",
    "build_engine",
    "run_engine",
    "run_simulation",
    "run_monte_carlo",
]
