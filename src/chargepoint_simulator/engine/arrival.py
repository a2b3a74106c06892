"""Arrival model — hourly arrival probability scaled by a site multiplier."""

from __future__ import annotations

from chargepoint_simulator.config.profiles import ArrivalProfile
from chargepoint_simulator.engine.timegrid import HOURS_PER_DAY, hour_of_day


class ArrivalModel:
    """Per-tick probability that a vehicle arrives at an idle bay.

    The multiplier is applied unclamped.  A probability above 1 is a request
    to over-weight arrivals; since a trial succeeds when ``u < p`` with
    ``u ∈ [0, 1)``, it behaves exactly like a probability of 1.

    The comparison is strict, so a probability of 0 never succeeds, even
    for a draw of exactly 0.0.  A ``u <= p`` rule would let that single
    draw through; otherwise the two rules agree.

    Parameters
    ----------
    profile : ArrivalProfile
        24 base probabilities, one per hour of day.
    multiplier_pct : float
        Percentage applied to every base probability (100 = unchanged).
    """

    def __init__(self, profile: ArrivalProfile, multiplier_pct: float) -> None:
        factor = multiplier_pct / 100
        self._hourly = tuple(profile[h] * factor for h in range(HOURS_PER_DAY))

    def probability(self, tick: int) -> float:
        return self._hourly[hour_of_day(tick)]
