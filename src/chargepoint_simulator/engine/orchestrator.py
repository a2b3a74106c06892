"""Orchestrator — builds engines from a Scenario, single run or Monte-Carlo.

Entry points:
  - ``run_simulation(config, seed=...)``  one run from bare inputs
  - ``run_engine(scenario)``              one run from a Scenario
  - ``run_monte_carlo(scenario)``         N runs with seeds base_seed + i,
                                          aggregated into P10/P50/P90

Every run gets its own Generator, pool and accumulators, so runs can execute
concurrently without sharing mutable state.
"""

from __future__ import annotations

import logging

import numpy as np

from chargepoint_simulator.config.profiles import ArrivalProfile, DemandProfile
from chargepoint_simulator.config.scenario import Scenario
from chargepoint_simulator.config.simulation import SimulationConfig
from chargepoint_simulator.engine.arrival import ArrivalModel
from chargepoint_simulator.engine.demand import DemandModel
from chargepoint_simulator.engine.observer import SimulationObserver
from chargepoint_simulator.engine.simulation import SimulationEngine
from chargepoint_simulator.models.results import (
    MonteCarloResult,
    MonteCarloSummary,
    SimulationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_SEED = 42


def build_engine(
    config: SimulationConfig,
    seed: int,
    arrival: ArrivalProfile | None = None,
    demand: DemandProfile | None = None,
    observer: SimulationObserver | None = None,
) -> SimulationEngine:
    """Wire models and a freshly seeded Generator into an engine."""
    return SimulationEngine(
        config,
        ArrivalModel(arrival or ArrivalProfile(), config.arrival_multiplier_pct),
        DemandModel(demand or DemandProfile()),
        rng=np.random.default_rng(seed),
        observer=observer,
    )


def run_simulation(
    config: SimulationConfig,
    seed: int | None = None,
    arrival: ArrivalProfile | None = None,
    demand: DemandProfile | None = None,
    observer: SimulationObserver | None = None,
) -> SimulationResult:
    """One yearly run.  ``seed=None`` uses ``DEFAULT_SEED``."""
    seed = DEFAULT_SEED if seed is None else seed
    return build_engine(config, seed, arrival, demand, observer).run()


def run_engine(scenario: Scenario, observer: SimulationObserver | None = None) -> SimulationResult:
    """One yearly run for ``scenario`` (``monte_carlo_runs`` is ignored)."""
    return run_simulation(
        scenario.simulation,
        seed=scenario.random_seed,
        arrival=scenario.arrival,
        demand=scenario.demand,
        observer=observer,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Monte-Carlo aggregation
# ═══════════════════════════════════════════════════════════════════════════

def run_monte_carlo(scenario: Scenario) -> MonteCarloResult:
    """Run ``scenario.monte_carlo_runs`` simulations and summarise them.

    Strategy:
      1. Run N simulations with sequential seeds (base_seed + i), keeping
         only their headline numbers
      2. Percentiles of total energy, peak power and concurrency factor
      3. Re-run the seed whose total energy is closest to the P50 as the
         representative full result
    """
    base_seed = scenario.random_seed if scenario.random_seed is not None else DEFAULT_SEED
    num_runs = scenario.monte_carlo_runs
    logger.info("Monte-Carlo: %d runs from seed %d", num_runs, base_seed)

    energy = np.empty(num_runs)
    peaks = np.empty(num_runs)
    concurrency = np.empty(num_runs)
    for i in range(num_runs):
        r = _run_seed(scenario, base_seed + i)
        energy[i] = r.total_energy_kwh
        peaks[i] = r.actual_max_power_kw
        concurrency[i] = r.concurrency_factor

    energy_p50 = float(np.percentile(energy, 50))
    median_idx = int(np.argmin(np.abs(energy - energy_p50)))
    representative_seed = base_seed + median_idx

    summary = MonteCarloSummary(
        num_runs=num_runs,
        base_seed=base_seed,
        energy_p10_kwh=float(np.percentile(energy, 10)),
        energy_p50_kwh=energy_p50,
        energy_p90_kwh=float(np.percentile(energy, 90)),
        peak_power_p10_kw=float(np.percentile(peaks, 10)),
        peak_power_p50_kw=float(np.percentile(peaks, 50)),
        peak_power_p90_kw=float(np.percentile(peaks, 90)),
        max_peak_power_kw=float(peaks.max()),
        concurrency_p10=float(np.percentile(concurrency, 10)),
        concurrency_p50=float(np.percentile(concurrency, 50)),
        concurrency_p90=float(np.percentile(concurrency, 90)),
        representative_seed=representative_seed,
    )
    return MonteCarloResult(summary=summary, representative=_run_seed(scenario, representative_seed))


def _run_seed(scenario: Scenario, seed: int) -> SimulationResult:
    return run_simulation(
        scenario.simulation,
        seed=seed,
        arrival=scenario.arrival,
        demand=scenario.demand,
    )
