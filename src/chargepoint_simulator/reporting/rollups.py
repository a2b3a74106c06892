"""Chart roll-ups over ``kWhPerTick`` / ``kWhPerChargepoint``.

The engine never aggregates; these helpers shape its series for the four
dashboard charts:

  - weekly_energy              52 × 672-tick sums (day 365 is left out)
  - cumulative_monthly_energy  12 × 2,976-tick sums as a running total;
                               month 12 stops at the end of the year
  - first_day_hourly_energy    24 × 4-tick sums for day 1
  - chargepoint_energy         one bar per bay
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from chargepoint_simulator.engine.timegrid import (
    HOURS_PER_DAY,
    TICKS_PER_HOUR,
    TICKS_PER_MONTH,
    TICKS_PER_WEEK,
)
from chargepoint_simulator.models.results import ChartPoint, SimulationResult

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12


def _slice_sums(series: np.ndarray, width: int, count: int) -> np.ndarray:
    return np.array([series[i * width:(i + 1) * width].sum() for i in range(count)])


def weekly_energy(kwh_per_tick: Sequence[float]) -> list[ChartPoint]:
    series = np.asarray(kwh_per_tick, dtype=np.float64)
    sums = _slice_sums(series, TICKS_PER_WEEK, WEEKS_PER_YEAR)
    return [ChartPoint(name=f"Week {i + 1}", value=float(v)) for i, v in enumerate(sums)]


def cumulative_monthly_energy(kwh_per_tick: Sequence[float]) -> list[ChartPoint]:
    """Running total of energy at the end of each chart month."""
    series = np.asarray(kwh_per_tick, dtype=np.float64)
    running = np.cumsum(_slice_sums(series, TICKS_PER_MONTH, MONTHS_PER_YEAR))
    return [ChartPoint(name=f"Month {i + 1}", value=float(v)) for i, v in enumerate(running)]


def first_day_hourly_energy(kwh_per_tick: Sequence[float]) -> list[ChartPoint]:
    series = np.asarray(kwh_per_tick, dtype=np.float64)
    sums = _slice_sums(series, TICKS_PER_HOUR, HOURS_PER_DAY)
    return [ChartPoint(name=f"{h}:00 - {h + 1}:00", value=float(v)) for h, v in enumerate(sums)]


def chargepoint_energy(kwh_per_chargepoint: Sequence[float]) -> list[ChartPoint]:
    return [
        ChartPoint(name=f"Chargepoint {i + 1}", value=float(v))
        for i, v in enumerate(kwh_per_chargepoint)
    ]


def build_charts(result: SimulationResult) -> dict[str, list[ChartPoint]]:
    """All four chart series for one run, keyed by chart id."""
    return {
        "weekly": weekly_energy(result.kwh_per_tick),
        "monthly_cumulative": cumulative_monthly_energy(result.kwh_per_tick),
        "chargepoints": chargepoint_energy(result.kwh_per_chargepoint),
        "first_day": first_day_hourly_energy(result.kwh_per_tick),
    }
