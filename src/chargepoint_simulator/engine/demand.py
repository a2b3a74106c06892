"""Demand model — discrete trip-distance distribution sampled per arrival.

Sampling is inverse-CDF over the profile's cumulative boundaries, scanned in
bucket order: the first boundary ``>= r`` wins.

Published tables are rounded, so the final boundary can sit slightly below
1.0 (the default table ends at 0.9997).  A draw above the last boundary is
redrawn, which renormalises the table exactly.  Redraws are bounded; after
``MAX_REDRAWS`` the last bucket is returned.
"""

from __future__ import annotations

import numpy as np

from chargepoint_simulator.config.profiles import DemandProfile

MAX_REDRAWS = 8
"""Redraws allowed before falling back to the last bucket."""


class DemandModel:
    """Samples the distance (km) an arriving vehicle needs to recharge for."""

    def __init__(self, profile: DemandProfile) -> None:
        self._boundaries = np.asarray(profile.cumulative_boundaries, dtype=np.float64)
        self._distances = np.asarray(profile.distances_km, dtype=np.float64)

    def bucket_index(self, r: float) -> int | None:
        """Index of the first boundary ``>= r``, or None when ``r`` overshoots."""
        idx = int(np.searchsorted(self._boundaries, r, side="left"))
        if idx >= len(self._boundaries):
            return None
        return idx

    def sample(self, rng: np.random.Generator) -> float:
        """Draw one distance in km.  ``0.0`` means no charge is needed."""
        for _ in range(MAX_REDRAWS + 1):
            idx = self.bucket_index(rng.random())
            if idx is not None:
                return float(self._distances[idx])
        return float(self._distances[-1])
