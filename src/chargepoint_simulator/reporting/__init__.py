"""Reporting — chart roll-ups computed from a run's tick series."""

from chargepoint_simulator.reporting.rollups import (
    build_charts,
    chargepoint_energy,
    cumulative_monthly_energy,
    first_day_hourly_energy,
    weekly_energy,
)

__all__ = [
    "build_charts",
    "chargepoint_energy",
    "cumulative_monthly_energy",
    "first_day_hourly_energy",
    "weekly_energy",
]
