"""
tests/test_geometry.py - Tests for diamond/geometry.py

Validates:
- Interval formula and symmetry
- FUTURE/PAST antisymmetry for timelike pairs
- Spacelike and lightlike classification
- Time-oriented precedence
"""

import math

import pytest

from diamond import CausalRelation, SpacetimePoint
from diamond.geometry import causal_relation, precedes, proper_separation, spacetime_interval, spatial_distance


ORIGIN = SpacetimePoint(0.0, 0.0, 0.0, 0.0)


class TestSpacetimeInterval:
    """Tests for spacetime_interval function."""

    def test_interval_signature(self):
        """dt^2 - dx^2 - dy^2 - dz^2 with c = 1."""
        p = SpacetimePoint(10.0, 3.0, 4.0, 0.0)
        assert spacetime_interval(ORIGIN, p) == pytest.approx(75.0)

    def test_interval_is_symmetric(self):
        """interval(p1, p2) == interval(p2, p1)."""
        pairs = [
            (SpacetimePoint(1.0, 2.0, 3.0, 4.0), SpacetimePoint(-5.0, 0.5, 7.0, 1.0)),
            (ORIGIN, SpacetimePoint(3.0, 1.0, 1.0, 1.0)),
            (SpacetimePoint(2.0, 50.0, 0.0, 0.0), SpacetimePoint(4.0, -50.0, 0.0, 0.0)),
        ]
        for p1, p2 in pairs:
            assert spacetime_interval(p1, p2) == spacetime_interval(p2, p1)

    def test_spatial_distance(self):
        assert spatial_distance(ORIGIN, SpacetimePoint(99.0, 3.0, 4.0, 12.0)) == pytest.approx(13.0)

    def test_proper_separation_uses_magnitude(self):
        """Proper time for timelike, proper distance for spacelike."""
        assert proper_separation(ORIGIN, SpacetimePoint(5.0, 3.0, 0.0, 0.0)) == pytest.approx(4.0)
        assert proper_separation(ORIGIN, SpacetimePoint(3.0, 5.0, 0.0, 0.0)) == pytest.approx(4.0)


class TestCausalRelation:
    """Tests for causal_relation function."""

    def test_future_and_past_are_antisymmetric(self):
        """relation(p1, p2) is FUTURE iff relation(p2, p1) is PAST."""
        pairs = [
            (ORIGIN, SpacetimePoint(10.0, 1.0, 2.0, 3.0)),
            (SpacetimePoint(-4.0, 0.0, 0.0, 0.0), SpacetimePoint(-1.0, 1.0, 0.0, 0.0)),
            (SpacetimePoint(7.0, 2.0, 2.0, 2.0), SpacetimePoint(100.0, 20.0, -30.0, 5.0)),
        ]
        for p1, p2 in pairs:
            assert causal_relation(p1, p2) is CausalRelation.FUTURE
            assert causal_relation(p2, p1) is CausalRelation.PAST

    def test_spacelike(self):
        assert causal_relation(ORIGIN, SpacetimePoint(1.0, 5.0, 0.0, 0.0)) is CausalRelation.SPACELIKE
        assert causal_relation(SpacetimePoint(1.0, 5.0, 0.0, 0.0), ORIGIN) is CausalRelation.SPACELIKE

    def test_lightlike_on_the_cone(self):
        """Zero interval within epsilon is lightlike in both directions."""
        p = SpacetimePoint(5.0, 3.0, 4.0, 0.0)
        assert causal_relation(ORIGIN, p) is CausalRelation.LIGHTLIKE
        assert causal_relation(p, ORIGIN) is CausalRelation.LIGHTLIKE

    def test_identical_events_are_lightlike(self):
        assert causal_relation(ORIGIN, ORIGIN) is CausalRelation.LIGHTLIKE

    def test_epsilon_widens_lightlike_band(self):
        p = SpacetimePoint(1.0, math.sqrt(1.0 - 1e-6), 0.0, 0.0)
        assert causal_relation(ORIGIN, p) is CausalRelation.FUTURE
        assert causal_relation(ORIGIN, p, epsilon=1e-3) is CausalRelation.LIGHTLIKE


class TestPrecedes:
    """Tests for time-oriented precedence."""

    def test_timelike_precedence(self):
        later = SpacetimePoint(10.0, 1.0, 0.0, 0.0)
        assert precedes(ORIGIN, later)
        assert not precedes(later, ORIGIN)

    def test_lightlike_precedence_is_time_oriented(self):
        """Lightlike pairs precede only forward in time."""
        on_cone = SpacetimePoint(5.0, 3.0, 4.0, 0.0)
        assert precedes(ORIGIN, on_cone)
        assert not precedes(on_cone, ORIGIN)

    def test_spacelike_never_precedes(self):
        far = SpacetimePoint(1.0, 100.0, 0.0, 0.0)
        assert not precedes(ORIGIN, far)
        assert not precedes(far, ORIGIN)
