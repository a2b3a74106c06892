"""Result aggregator — per-run accumulators and the final summary.

The engine feeds one ``accrue`` call per tick; ``finalize`` reduces the
accumulators into a :class:`SimulationResult`:

  total_energy        = Σ kwh_per_tick
  theoretical_max_kw  = chargepoint_count × charging_power_kw
  actual_max_kw       = max over ticks of (charging bays × charging_power_kw)
  concurrency_factor  = actual / theoretical  (0 when there are no bays)
"""

from __future__ import annotations

import numpy as np

from chargepoint_simulator.engine.timegrid import TICKS_PER_HOUR
from chargepoint_simulator.models.results import SimulationResult


class ResultAggregator:
    """Energy and peak-power accumulators for one run."""

    def __init__(self, chargepoint_count: int, charging_power_kw: float, num_ticks: int) -> None:
        self._chargepoint_count = chargepoint_count
        self._power_kw = charging_power_kw
        self._kwh_per_charging_tick = charging_power_kw / TICKS_PER_HOUR
        self._kwh_per_tick = np.zeros(num_ticks, dtype=np.float64)
        self._kwh_per_chargepoint = np.zeros(chargepoint_count, dtype=np.float64)
        self._actual_max_kw = 0.0
        self._peak_concurrent = 0
        self._sessions_started = 0

    @property
    def actual_max_power_kw(self) -> float:
        return self._actual_max_kw

    def record_session_start(self) -> None:
        self._sessions_started += 1

    def accrue(self, tick: int, charging: np.ndarray) -> None:
        """Credit one tick of energy to every bay in ``charging``.

        Also records the tick's instantaneous demand and updates the
        running peak.
        """
        n = len(charging)
        if n == 0:
            return
        self._kwh_per_tick[tick] += n * self._kwh_per_charging_tick
        self._kwh_per_chargepoint[charging] += self._kwh_per_charging_tick
        demand_kw = n * self._power_kw
        if demand_kw > self._actual_max_kw:
            self._actual_max_kw = demand_kw
            self._peak_concurrent = n

    def finalize(self) -> SimulationResult:
        theoretical = self._chargepoint_count * self._power_kw
        concurrency = self._actual_max_kw / theoretical if self._chargepoint_count > 0 else 0.0
        return SimulationResult(
            total_energy_kwh=float(self._kwh_per_tick.sum()),
            theoretical_max_power_kw=theoretical,
            actual_max_power_kw=self._actual_max_kw,
            concurrency_factor=concurrency,
            kwh_per_tick=self._kwh_per_tick.tolist(),
            kwh_per_chargepoint=self._kwh_per_chargepoint.tolist(),
            sessions_started=self._sessions_started,
            peak_concurrent_chargepoints=self._peak_concurrent,
        )
