"""Simulation engine — the yearly tick loop.

Each tick runs four phases in a fixed order:

  1. Snapshot  — indices of bays idle at the start of the tick.
  2. Arrival   — one Bernoulli trial per snapshotted bay (ascending index).
                 On success a distance is sampled; 0 km means no session,
                 otherwise the bay starts charging for
                 ceil(hours_needed × 4) ticks.
  3. Accrual   — every charging bay, including those started this tick,
                 delivers power/4 kWh and counts down; at zero it is idle.
  4. Peak      — charging bays × power is the tick's demand; keep the max.

Arrivals use the pre-tick snapshot, yet a session started in phase 2 already
accrues in phase 3.  Aggregate totals depend on this ordering.

Randomness comes from a single ``numpy.random.Generator`` passed in by the
caller: per tick, one vector of uniform draws for the arrival trials, then
one draw per successful arrival for its distance.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from chargepoint_simulator.config.simulation import SimulationConfig
from chargepoint_simulator.engine.aggregator import ResultAggregator
from chargepoint_simulator.engine.arrival import ArrivalModel
from chargepoint_simulator.engine.demand import DemandModel
from chargepoint_simulator.engine.observer import SimulationObserver
from chargepoint_simulator.engine.pool import ChargerPool
from chargepoint_simulator.engine.timegrid import TICKS_PER_YEAR, ticks_for_hours
from chargepoint_simulator.errors import InvalidConfiguration
from chargepoint_simulator.models.results import SimulationResult

logger = logging.getLogger(__name__)


def validate_config(config: SimulationConfig) -> None:
    """Reject configurations that cannot produce a finite run.

    Pydantic already enforces these bounds on construction; this re-check
    covers models built with ``model_construct`` or mutated copies.
    """
    if config.chargepoint_count < 0:
        raise InvalidConfiguration(
            f"chargepoint_count must be >= 0, got {config.chargepoint_count}"
        )
    if not config.charging_power_kw > 0 or not math.isfinite(config.charging_power_kw):
        raise InvalidConfiguration(
            f"charging_power_kw must be a positive number, got {config.charging_power_kw}"
        )
    if not config.ev_consumption_kwh_per_100km >= 0 or not math.isfinite(config.ev_consumption_kwh_per_100km):
        raise InvalidConfiguration(
            f"ev_consumption_kwh_per_100km must be >= 0, got {config.ev_consumption_kwh_per_100km}"
        )
    if not config.arrival_multiplier_pct >= 0 or not math.isfinite(config.arrival_multiplier_pct):
        raise InvalidConfiguration(
            f"arrival_multiplier_pct must be >= 0, got {config.arrival_multiplier_pct}"
        )


def session_ticks(distance_km: float, consumption_kwh_per_100km: float, charging_power_kw: float) -> int:
    """Ticks needed to recharge ``distance_km``.

    hours_needed = (consumption / 100 × distance) / power
    ticks        = ceil(hours_needed × 60 / 15)

    Capped at one year of ticks: a longer session charges until the run
    ends either way, and the cap keeps the count finite and in int64 range.

    >>> session_ticks(50, 18, 11)
    4
    """
    hours_needed = (consumption_kwh_per_100km / 100 * distance_km) / charging_power_kw
    ticks = ticks_for_hours(hours_needed)
    if ticks >= TICKS_PER_YEAR:
        # Also catches inf from a vanishing charger power.
        return TICKS_PER_YEAR
    return math.ceil(ticks)


class SimulationEngine:
    """Runs one year of charging for a fixed set of bays.

    Usage::

        engine = SimulationEngine(
            config,
            ArrivalModel(ArrivalProfile(), config.arrival_multiplier_pct),
            DemandModel(DemandProfile()),
            rng=np.random.default_rng(42),
        )
        result = engine.run()

    Parameters
    ----------
    config : SimulationConfig
        Bay count, consumption and charger power.  Validated here.
    arrival : ArrivalModel
        Per-tick arrival probability.
    demand : DemandModel
        Distance sampler.
    rng : numpy.random.Generator
        The run's only source of randomness.
    observer : SimulationObserver, optional
        Trace hook; called only when given.
    """

    def __init__(
        self,
        config: SimulationConfig,
        arrival: ArrivalModel,
        demand: DemandModel,
        rng: np.random.Generator,
        observer: SimulationObserver | None = None,
    ) -> None:
        validate_config(config)
        self._config = config
        self._arrival = arrival
        self._demand = demand
        self._rng = rng
        self._observer = observer

    def run(self) -> SimulationResult:
        """Simulate one year.  Pool and accumulators are created fresh per call."""
        cfg = self._config
        pool = ChargerPool(cfg.chargepoint_count)
        acc = ResultAggregator(cfg.chargepoint_count, cfg.charging_power_kw, TICKS_PER_YEAR)

        logger.info(
            "Simulating %d chargepoints × %d ticks (multiplier %.1f%%, %.1f kWh/100km, %.1f kW)",
            cfg.chargepoint_count, TICKS_PER_YEAR, cfg.arrival_multiplier_pct,
            cfg.ev_consumption_kwh_per_100km, cfg.charging_power_kw,
        )

        for tick in range(TICKS_PER_YEAR):
            self._arrival_phase(tick, pool, acc)
            self._accrual_phase(tick, pool, acc)

        result = acc.finalize()
        logger.info(
            "Run finished: %.1f kWh, peak %.1f / %.1f kW (concurrency %.3f), %d sessions",
            result.total_energy_kwh, result.actual_max_power_kw,
            result.theoretical_max_power_kw, result.concurrency_factor,
            result.sessions_started,
        )
        return result

    # ── Phases ──────────────────────────────────────────────────────────

    def _arrival_phase(self, tick: int, pool: ChargerPool, acc: ResultAggregator) -> None:
        idle = pool.idle_indices()
        if idle.size == 0:
            return

        p = self._arrival.probability(tick)
        arrived = self._rng.random(idle.size) < p

        if self._observer is not None:
            for chargepoint, hit in zip(idle.tolist(), arrived.tolist()):
                self._observer.on_arrival_decided(tick, chargepoint, p, hit)

        cfg = self._config
        for chargepoint in idle[arrived].tolist():
            distance_km = self._demand.sample(self._rng)
            if distance_km == 0:
                continue
            ticks = session_ticks(distance_km, cfg.ev_consumption_kwh_per_100km, cfg.charging_power_kw)
            if ticks <= 0:
                # Zero consumption: nothing to recharge.
                continue
            pool.start_session(chargepoint, ticks)
            acc.record_session_start()
            if self._observer is not None:
                self._observer.on_session_started(tick, chargepoint, distance_km, ticks)

    def _accrual_phase(self, tick: int, pool: ChargerPool, acc: ResultAggregator) -> None:
        charging, ended = pool.advance()
        acc.accrue(tick, charging)
        if self._observer is not None:
            for chargepoint in ended.tolist():
                self._observer.on_session_ended(tick, chargepoint)
