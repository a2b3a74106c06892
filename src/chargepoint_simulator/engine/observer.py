"""Trace hook — injectable callbacks fired at well-defined points of a run.

The engine calls an observer when an arrival trial is decided, when a
session starts and when a session ends.  The base class does nothing;
``LoggingObserver`` writes DEBUG records, ``RecordingObserver`` keeps the
events in memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class SimulationObserver:
    """No-op base.  Override only the callbacks you need."""

    def on_arrival_decided(self, tick: int, chargepoint: int, probability: float, arrived: bool) -> None:
        pass

    def on_session_started(self, tick: int, chargepoint: int, distance_km: float, ticks: int) -> None:
        pass

    def on_session_ended(self, tick: int, chargepoint: int) -> None:
        pass


class LoggingObserver(SimulationObserver):
    """Emits one DEBUG record per session event (arrival trials too when ``trace_arrivals``)."""

    def __init__(self, log: logging.Logger | None = None, trace_arrivals: bool = False) -> None:
        self._log = log or logger
        self._trace_arrivals = trace_arrivals

    def on_arrival_decided(self, tick, chargepoint, probability, arrived):
        if self._trace_arrivals and self._log.isEnabledFor(logging.DEBUG):
            self._log.debug(
                "tick %d | chargepoint %d | p=%.4f arrived=%s", tick, chargepoint, probability, arrived,
            )

    def on_session_started(self, tick, chargepoint, distance_km, ticks):
        self._log.debug(
            "tick %d | chargepoint %d | EV needs %.0f km, charging for %d ticks",
            tick, chargepoint, distance_km, ticks,
        )

    def on_session_ended(self, tick, chargepoint):
        self._log.debug("tick %d | chargepoint %d | EV disconnected", tick, chargepoint)


@dataclass
class RecordingObserver(SimulationObserver):
    """Collects events as tuples — handy in tests and notebooks."""

    arrivals: list[tuple[int, int, bool]] = field(default_factory=list)
    started: list[tuple[int, int, float, int]] = field(default_factory=list)
    ended: list[tuple[int, int]] = field(default_factory=list)

    def on_arrival_decided(self, tick, chargepoint, probability, arrived):
        self.arrivals.append((tick, chargepoint, arrived))

    def on_session_started(self, tick, chargepoint, distance_km, ticks):
        self.started.append((tick, chargepoint, distance_km, ticks))

    def on_session_ended(self, tick, chargepoint):
        self.ended.append((tick, chargepoint))
