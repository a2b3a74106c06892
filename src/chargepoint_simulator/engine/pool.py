"""Charger pool — per-bay session state for one run.

Each bay is either Idle or Charging(n) with ``n > 0`` ticks left.  State is
held as a single int array where ``0`` encodes Idle, so a countdown reaching
zero is the Charging → Idle transition.  The pool belongs to one engine run
and is never shared.
"""

from __future__ import annotations

import numpy as np


class ChargerPool:
    """Fixed-size array of bays, all Idle at construction."""

    def __init__(self, size: int) -> None:
        self._remaining = np.zeros(size, dtype=np.int64)

    def __len__(self) -> int:
        return len(self._remaining)

    def idle_indices(self) -> np.ndarray:
        """Ascending indices of Idle bays."""
        return np.flatnonzero(self._remaining == 0)

    def start_session(self, chargepoint: int, ticks: int) -> None:
        """Idle → Charging(ticks)."""
        if ticks <= 0:
            raise ValueError(f"session length must be positive, got {ticks}")
        if self._remaining[chargepoint] != 0:
            raise RuntimeError(f"chargepoint {chargepoint} is already charging")
        self._remaining[chargepoint] = ticks

    def advance(self) -> tuple[np.ndarray, np.ndarray]:
        """Count down every charging bay by one tick.

        Returns
        -------
        (charging, ended)
            Ascending indices of bays that charged during this tick, and the
            subset whose session finished (now Idle again).
        """
        charging = np.flatnonzero(self._remaining)
        self._remaining[charging] -= 1
        ended = charging[self._remaining[charging] == 0]
        return charging, ended
