"""
tests/test_healing.py - Tests for diamond/healing.py and diamond/dynamics.py

Validates:
- Phase-conjugate healing of under-threshold diamonds only
- Coherence cap and causality ceiling
- Gravitating mass recomputes curvature and coherence from scratch
- Time evolution with dilation and exponential decoherence
"""

import math

import pytest

from diamond import CONFIG_FLAT, SpacetimeDiamondEngine, SpacetimePoint, schwarzschild_radius
from diamond.metrics import diamond_xi
from receipts import ledger_of_type


def P(t, x=0.0, y=0.0, z=0.0):
    return SpacetimePoint(float(t), float(x), float(y), float(z))


class TestHeal:
    """Tests for heal."""

    def test_healthy_diamonds_untouched(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        coherence, causality = d.coherence, d.causality

        assert engine.heal() == 0
        assert d.coherence == coherence
        assert d.causality == causality

    def test_heals_low_coherence_and_causality(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        d.coherence = 0.1
        d.causality = 0.5

        assert engine.heal() == 1
        assert d.coherence == pytest.approx(0.1 / 0.131)
        assert d.coherence == pytest.approx(0.763, abs=1e-3)
        assert d.causality == pytest.approx(0.71725)

    def test_coherence_capped(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        d.coherence = 0.79

        engine.heal()
        assert d.coherence == pytest.approx(0.98)
        assert d.causality == 1.0

    def test_causality_never_exceeds_one(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        d.causality = 0.89

        engine.heal()
        assert d.causality == 1.0

    def test_heal_strictly_improves(self):
        """Repeated heals lift a collapsed diamond monotonically."""
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        d.coherence = 1e-12
        previous = d.coherence
        for _ in range(5):
            engine.heal()
            assert d.coherence > previous
            previous = d.coherence

    def test_heal_refreshes_globals_and_xi(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        d.coherence = 0.1
        engine.heal()

        assert engine.get_state().global_coherence == pytest.approx(d.coherence)
        assert d.xi == pytest.approx(d.coherence * d.causality / 0.092, rel=1e-6)
        receipt = ledger_of_type(engine.receipts, "heal")[-1]
        assert receipt["healed_ids"] == [d.id]


class TestGravitatingMass:
    """Tests for set_gravitating_mass."""

    def test_schwarzschild_radius(self):
        assert schwarzschild_radius(1.0) == pytest.approx(1.4852e-27, rel=1e-4)
        assert schwarzschild_radius(0.0) == 0.0

    def test_curvature_reduces_coherence(self):
        engine = SpacetimeDiamondEngine(CONFIG_FLAT)
        d = engine.create_diamond(P(10, 100), P(0, 100))
        assert d.coherence == pytest.approx(0.95)

        assert engine.set_gravitating_mass(1.0) is True

        rs = schwarzschild_radius(1.0)
        assert d.curvature == pytest.approx(rs / 100 ** 3)
        assert d.coherence == pytest.approx(0.95 * (1 - rs / 100 ** 3 * 1e30))
        assert engine.get_state().schwarzschild_radius == pytest.approx(rs)

    def test_origin_apex_has_no_gravitational_term(self):
        engine = SpacetimeDiamondEngine(CONFIG_FLAT)
        d = engine.create_diamond(P(10), P(0))
        engine.set_gravitating_mass(1.0)
        assert d.curvature == 0.0
        assert d.coherence == pytest.approx(0.95)

    def test_recomputes_from_scratch(self):
        engine = SpacetimeDiamondEngine(CONFIG_FLAT)
        d = engine.create_diamond(P(10), P(0))
        d.coherence = 0.3
        engine.set_gravitating_mass(0.0)
        assert d.coherence == pytest.approx(0.95)

    def test_negative_mass_refused(self):
        engine = SpacetimeDiamondEngine()
        engine.create_diamond(P(10, 100), P(0, 100))
        before = engine.get_state()

        assert engine.set_gravitating_mass(-1.0) is False
        assert engine.get_state() == before

    @pytest.mark.parametrize("mass", [math.nan, math.inf])
    def test_non_finite_mass_refused(self, mass):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10, 100), P(0, 100))
        before = engine.get_state()

        assert engine.set_gravitating_mass(mass) is False
        assert engine.get_state() == before
        assert math.isfinite(d.coherence)
        assert ledger_of_type(engine.receipts, "anomaly")[-1]["classification"] == "invalid_mass"


class TestTick:
    """Tests for tick."""

    def test_rest_diamond_ages_fully(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        coherence = d.coherence

        assert engine.tick(2.0) is True

        assert d.proper_time == pytest.approx(12.0)
        assert d.coherence == pytest.approx(coherence * math.exp(-0.184))
        state = engine.get_state()
        assert state.coordinate_time == pytest.approx(2.0)
        assert state.total_proper_time == pytest.approx(12.0)

    def test_moving_diamond_is_dilated(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10, 6), P(0))
        engine.tick(2.0)
        assert d.proper_time == pytest.approx(8.0 + 1.6)

    def test_negative_delta_refused(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        assert engine.tick(-1.0) is False
        assert d.proper_time == 10.0
        assert engine.get_state().coordinate_time == 0.0

    @pytest.mark.parametrize("delta_t", [math.nan, math.inf])
    def test_non_finite_delta_refused(self, delta_t):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        before = engine.get_state()

        assert engine.tick(delta_t) is False
        assert d.proper_time == 10.0
        assert engine.get_state() == before
        assert ledger_of_type(engine.receipts, "anomaly")[-1]["classification"] == "invalid_delta_t"

    def test_tick_refreshes_xi(self):
        engine = SpacetimeDiamondEngine()
        d = engine.create_diamond(P(10), P(0))
        engine.tick(3.0)
        assert d.xi == pytest.approx(diamond_xi(engine.config, d))
        assert d.xi == pytest.approx(d.coherence / 0.092, rel=1e-6)

    def test_invariants_hold_after_ticks(self):
        engine = SpacetimeDiamondEngine()
        engine.create_diamond(P(10), P(0))
        engine.create_diamond(P(10, 6), P(0))
        for _ in range(10):
            engine.tick(0.5)
        assert engine.validate() is True
