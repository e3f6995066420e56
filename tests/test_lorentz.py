"""
tests/test_lorentz.py - Tests for diamond/lorentz.py

Validates:
- Boost matrix preserves the Minkowski metric
- Boosted diamond keeps proper time, rederives gamma and extents
- Superluminal and unknown-id boosts are refused without mutation
- Named coherence drift penalty
"""

import math

import numpy as np
import pytest

from diamond import CONFIG_DRIFT_FREE, SpacetimeDiamondEngine, SpacetimePoint
from diamond.geometry import spacetime_interval
from diamond.lorentz import boost_matrix, boost_point
from receipts import ledger_of_type

ETA = np.diag([1.0, -1.0, -1.0, -1.0])


class TestBoostMatrix:
    """Tests for boost_matrix and boost_point."""

    @pytest.mark.parametrize("velocity", [
        (0.6, 0.0, 0.0),
        (0.0, -0.3, 0.4),
        (0.5, 0.5, 0.5),
    ])
    def test_preserves_metric(self, velocity):
        """L^T eta L == eta for every sub-luminal boost."""
        L = boost_matrix(velocity)
        assert np.allclose(L.T @ ETA @ L, ETA)

    def test_zero_velocity_is_identity(self):
        assert np.allclose(boost_matrix((0.0, 0.0, 0.0)), np.eye(4))
        p = SpacetimePoint(3.0, 1.0, 2.0, 3.0)
        assert boost_point(p, (0.0, 0.0, 0.0)) is p

    def test_boost_along_x(self):
        """t' = g(t - vx), x' = g(x - vt) with g = 1.25 at v = 0.6."""
        p = boost_point(SpacetimePoint(10.0, 0.0, 0.0, 0.0), (0.6, 0.0, 0.0))
        assert p.t == pytest.approx(12.5)
        assert p.x == pytest.approx(-7.5)
        assert p.y == pytest.approx(0.0)

    def test_interval_is_invariant(self):
        p1 = SpacetimePoint(1.0, 2.0, -3.0, 0.5)
        p2 = SpacetimePoint(9.0, -1.0, 4.0, 2.0)
        v = (0.2, -0.4, 0.7)
        before = spacetime_interval(p1, p2)
        after = spacetime_interval(boost_point(p1, v), boost_point(p2, v))
        assert after == pytest.approx(before)


class TestLorentzBoost:
    """Tests for lorentz_boost on engine diamonds."""

    def test_rest_diamond_picks_up_boost_gamma(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(apex=(10, 0, 0, 0), base=(0, 0, 0, 0))
        coherence = d.coherence

        assert engine.lorentz_boost(d.id, (0.6, 0.0, 0.0)) is True

        assert d.proper_time == pytest.approx(10.0)
        assert d.gamma == pytest.approx(1.25)
        assert d.height == pytest.approx(12.5)
        assert d.width == pytest.approx(7.5)
        assert d.coherence == pytest.approx(coherence * 0.9999)
        assert engine.validate() is True

    def test_gamma_stays_consistent_with_extents(self):
        """Stored gamma always equals height / proper_time."""
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(apex=(10, 3, 1, 0), base=(0, 0, 0, 0))
        for v in [(0.1, 0.2, 0.0), (-0.5, 0.0, 0.3), (0.0, 0.0, -0.8)]:
            assert engine.lorentz_boost(d.id, v)
            assert d.gamma == pytest.approx(d.height / d.proper_time)
            assert d.proper_time == pytest.approx(np.sqrt(90.0))

    @pytest.mark.parametrize("velocity", [
        (1.0, 0.0, 0.0),
        (0.8, 0.6, 0.0),
        (0.9, 0.9, 0.0),
    ])
    def test_superluminal_boost_refused(self, velocity):
        """|v| >= 1 leaves geometry and gamma unchanged."""
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(apex=(10, 6, 0, 0), base=(0, 0, 0, 0))
        apex, base, gamma, coherence = d.apex, d.base, d.gamma, d.coherence

        assert engine.lorentz_boost(d.id, velocity) is False

        assert d.apex == apex
        assert d.base == base
        assert d.gamma == gamma
        assert d.coherence == coherence
        assert ledger_of_type(engine.receipts, "anomaly")[-1]["classification"] == "superluminal"

    @pytest.mark.parametrize("velocity, classification", [
        ((math.nan, 0.0, 0.0), "invalid_velocity"),
        ((math.nan, math.nan, math.nan), "invalid_velocity"),
        ((0.0, math.inf, 0.0), "superluminal"),
        ((-math.inf, 0.0, 0.0), "superluminal"),
    ])
    def test_non_finite_velocity_refused(self, velocity, classification):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(apex=(10, 6, 0, 0), base=(0, 0, 0, 0))
        apex, gamma, proper_time = d.apex, d.gamma, d.proper_time

        assert engine.lorentz_boost(d.id, velocity) is False

        assert d.apex == apex
        assert d.gamma == gamma
        assert d.proper_time == proper_time
        assert engine.get_state().total_proper_time == pytest.approx(8.0)
        assert ledger_of_type(engine.receipts, "anomaly")[-1]["classification"] == classification
        assert engine.validate() is True

    def test_unknown_id_refused(self):
        engine = SpacetimeDiamondEngine()
        assert engine.lorentz_boost("sd_000042", (0.1, 0.0, 0.0)) is False

    def test_drift_free_config_preserves_coherence(self):
        engine = SpacetimeDiamondEngine(CONFIG_DRIFT_FREE)
        d = engine.create_diamond(apex=(10, 0, 0, 0), base=(0, 0, 0, 0))
        coherence = d.coherence

        engine.lorentz_boost(d.id, (0.3, 0.3, 0.3))
        assert d.coherence == coherence

    def test_boost_updates_global_metrics(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(apex=(10, 0, 0, 0), base=(0, 0, 0, 0))
        engine.lorentz_boost(d.id, (0.6, 0.0, 0.0))
        assert engine.get_state().global_coherence == pytest.approx(d.coherence)
        assert len(ledger_of_type(engine.receipts, "lorentz_boost")) == 1
