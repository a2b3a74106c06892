"""Result models — simulation output contracts."""

from chargepoint_simulator.models.results import (
    ChartPoint,
    MonteCarloResult,
    MonteCarloSummary,
    SimulationResult,
)

__all__ = [
    "ChartPoint",
    "MonteCarloResult",
    "MonteCarloSummary",
    "SimulationResult",
]
