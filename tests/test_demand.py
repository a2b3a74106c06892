"""Tests for engine/demand.py — trip-distance sampler.

Covers:
  - First-boundary-≥-r bucket selection
  - Overshoot above the last (rounded) boundary is redrawn, then falls back
  - Frequency fidelity over 100,000 draws
  - Seed reproducibility
"""

from __future__ import annotations

import numpy as np
import pytest

from chargepoint_simulator.config.profiles import DemandBucket, DemandProfile
from chargepoint_simulator.engine.demand import MAX_REDRAWS, DemandModel


class _ScriptedRng:
    """Stand-in Generator returning a fixed sequence from ``random()``."""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self._values.pop(0)


# ═══════════════════════════════════════════════════════════════════════════
# Bucket selection
# ═══════════════════════════════════════════════════════════════════════════

class TestBucketIndex:

    def test_zero_maps_to_first_bucket(self):
        model = DemandModel(DemandProfile())
        assert model.bucket_index(0.0) == 0

    def test_boundary_is_inclusive(self):
        model = DemandModel(DemandProfile())
        first = DemandProfile().cumulative_boundaries[0]
        assert model.bucket_index(first) == 0
        assert model.bucket_index(np.nextafter(first, 1.0)) == 1

    def test_overshoot_returns_none(self):
        # default table sums to 0.9997
        model = DemandModel(DemandProfile())
        assert model.bucket_index(0.99985) is None

    def test_sample_returns_bucket_distance(self):
        model = DemandModel(DemandProfile())
        assert model.sample(_ScriptedRng([0.1])) == 0.0
        assert model.sample(_ScriptedRng([0.75])) == 50.0
        assert model.sample(_ScriptedRng([0.9996])) == 300.0


class TestOvershoot:

    def test_overshoot_is_redrawn(self):
        model = DemandModel(DemandProfile())
        rng = _ScriptedRng([0.99990, 0.4])
        assert model.sample(rng) == 5.0
        assert rng.calls == 2

    def test_redraws_are_bounded(self):
        model = DemandModel(DemandProfile())
        rng = _ScriptedRng([0.99999] * (MAX_REDRAWS + 1))
        assert model.sample(rng) == 300.0
        assert rng.calls == MAX_REDRAWS + 1


# ═══════════════════════════════════════════════════════════════════════════
# Distribution fidelity
# ═══════════════════════════════════════════════════════════════════════════

class TestFidelity:
    """Observed bucket frequencies match configured probabilities (±1%)."""

    N = 100_000

    def _draws(self, profile: DemandProfile, seed: int) -> np.ndarray:
        model = DemandModel(profile)
        rng = np.random.default_rng(seed)
        return np.array([model.sample(rng) for _ in range(self.N)])

    def _expected(self, profile: DemandProfile) -> dict[float, float]:
        total = sum(b.probability for b in profile.buckets)
        return {b.distance_km: b.probability / total for b in profile.buckets}

    def test_default_profile(self):
        profile = DemandProfile()
        draws = self._draws(profile, 123)
        assert set(np.unique(draws)) <= set(profile.distances_km)
        for km, p in self._expected(profile).items():
            assert np.mean(draws == km) == pytest.approx(p, abs=0.01)

    def test_custom_profile(self):
        profile = DemandProfile(buckets=(
            DemandBucket(probability=0.5, distance_km=0),
            DemandBucket(probability=0.25, distance_km=40),
            DemandBucket(probability=0.25, distance_km=80),
        ))
        draws = self._draws(profile, 9)
        assert np.mean(draws == 0) == pytest.approx(0.5, abs=0.01)
        assert np.mean(draws == 40) == pytest.approx(0.25, abs=0.01)
        assert np.mean(draws == 80) == pytest.approx(0.25, abs=0.01)
        assert draws.mean() == pytest.approx(30.0, rel=0.03)


class TestReproducibility:

    def test_same_seed_same_draws(self):
        model = DemandModel(DemandProfile())
        rng1, rng2 = np.random.default_rng(42), np.random.default_rng(42)
        seq1 = [model.sample(rng1) for _ in range(500)]
        seq2 = [model.sample(rng2) for _ in range(500)]
        assert seq1 == seq2
