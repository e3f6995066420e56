"""
diamond/constants.py - Physical and Model Constants

All constants for the spacetime diamond engine. Centralized for tuning.
Pure data, no behavior. The model constants are illustrative numeric
factors; EngineConfig carries the tunable copies.
"""

from enum import Enum

# =============================================================================
# PHYSICAL CONSTANTS (SI)
# =============================================================================

SPEED_OF_LIGHT = 299792458          # m/s
GRAVITATIONAL_CONSTANT = 6.67430e-11  # m^3 / kg / s^2
HBAR = 1.054571817e-34              # J s
PLANCK_LENGTH = 1.616255e-35        # m
PLANCK_TIME = 5.391247e-44          # s
PLANCK_MASS = 2.176434e-8           # kg
COSMOLOGICAL_CONSTANT = 1.089e-52   # m^-2, observed value

# =============================================================================
# GEOMETRY
# =============================================================================

RELATION_EPSILON = 1e-10  # |interval| below this is lightlike
BOOST_VELOCITY_FLOOR = 1e-10  # Boosts slower than this are the identity

# =============================================================================
# COHERENCE MODEL
# =============================================================================

COHERENCE_BASELINE = 0.95    # Initial coherence in flat spacetime
CAUSALITY_BASELINE = 1.0     # Initial causality of every diamond
COHERENCE_FLOOR = 1e-12      # Coherence never collapses to exactly zero
CURVATURE_SCALE = 1e30       # Curvature -> decoherence loss factor
LATENCY_SCALE = 1e6          # Channel latency at which fidelity drops by 1/e
DECOHERENCE_RATE = 0.092     # Baseline decoherence per unit proper time
XI_FLOOR = 0.01              # Minimum xi denominator

# =============================================================================
# OPERATION COSTS
# =============================================================================

BOOST_COHERENCE_DRIFT = 0.9999   # Multiplicative coherence penalty per boost
SWITCH_CAUSALITY_COST = 0.95     # Multiplicative causality cost per switch

# =============================================================================
# HEALING
# =============================================================================

HEALING_CHI = 0.869                  # Phase-conjugate healing constant
HEAL_COHERENCE_THRESHOLD = 0.8       # Heal below this coherence
HEAL_CAUSALITY_THRESHOLD = 0.9       # Heal below this causality
HEAL_COHERENCE_CAP = 0.98            # Healing never lifts coherence above this

# =============================================================================
# CAPACITY
# =============================================================================

DEFAULT_MAX_DIAMONDS = 100
RECEIPT_LEDGER_MAX = 10000     # Oldest receipts are dropped past this length
TENANT_ID = "spacetime-qip"


# =============================================================================
# CAUSAL RELATION ENUM
# =============================================================================

class CausalRelation(Enum):
    """Causal classification of one event relative to another."""
    PAST = "PAST"
    FUTURE = "FUTURE"
    SPACELIKE = "SPACELIKE"
    LIGHTLIKE = "LIGHTLIKE"
    INDEFINITE = "INDEFINITE"  # Spacelike pair registered for indefinite order
