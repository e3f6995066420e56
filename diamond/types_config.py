"""
diamond/types_config.py - EngineConfig Dataclass and Presets

Immutable configuration for spacetime diamond engines.
Frozen dataclass, no behavior.
"""

from dataclasses import dataclass

from .constants import (
    BOOST_COHERENCE_DRIFT,
    CAUSALITY_BASELINE,
    COHERENCE_BASELINE,
    COSMOLOGICAL_CONSTANT,
    CURVATURE_SCALE,
    DECOHERENCE_RATE,
    DEFAULT_MAX_DIAMONDS,
    RECEIPT_LEDGER_MAX,
    HEAL_CAUSALITY_THRESHOLD,
    HEAL_COHERENCE_CAP,
    HEAL_COHERENCE_THRESHOLD,
    HEALING_CHI,
    LATENCY_SCALE,
    RELATION_EPSILON,
    SWITCH_CAUSALITY_COST,
    TENANT_ID,
    XI_FLOOR,
)


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration (immutable)."""
    max_diamonds: int = DEFAULT_MAX_DIAMONDS
    receipt_ledger_max: int = RECEIPT_LEDGER_MAX
    cosmological_constant: float = COSMOLOGICAL_CONSTANT
    coherence_baseline: float = COHERENCE_BASELINE
    causality_baseline: float = CAUSALITY_BASELINE
    # Invented scale factors, not physics: see DESIGN.md
    curvature_scale: float = CURVATURE_SCALE
    latency_scale: float = LATENCY_SCALE
    decoherence_rate: float = DECOHERENCE_RATE
    xi_floor: float = XI_FLOOR
    relation_epsilon: float = RELATION_EPSILON
    # Operation costs
    boost_coherence_drift: float = BOOST_COHERENCE_DRIFT  # 1.0 disables the penalty
    switch_causality_cost: float = SWITCH_CAUSALITY_COST
    # Phase-conjugate healing
    healing_chi: float = HEALING_CHI
    heal_coherence_threshold: float = HEAL_COHERENCE_THRESHOLD
    heal_causality_threshold: float = HEAL_CAUSALITY_THRESHOLD
    heal_coherence_cap: float = HEAL_COHERENCE_CAP
    tenant_id: str = TENANT_ID
    config_name: str = "DEFAULT"


# =============================================================================
# PRESETS
# =============================================================================

CONFIG_DEFAULT = EngineConfig()

# Boosts are perfectly information-preserving
CONFIG_DRIFT_FREE = EngineConfig(
    boost_coherence_drift=1.0,
    config_name="DRIFT_FREE"
)

# No dark-energy background; curvature comes only from a gravitating mass
CONFIG_FLAT = EngineConfig(
    cosmological_constant=0.0,
    config_name="FLAT"
)

PRESETS = {
    "DEFAULT": CONFIG_DEFAULT,
    "DRIFT_FREE": CONFIG_DRIFT_FREE,
    "FLAT": CONFIG_FLAT,
}
