"""
diamond/healing.py - Phase-Conjugate Healing

Lift under-threshold diamonds back toward health:
    coherence <- min(cap, coherence / (1 - chi))
    causality <- min(1, causality * (1 + chi / 2))
Healthy diamonds are untouched.
"""

from receipts import emit_receipt

from .metrics import diamond_xi, update_global_metrics
from .types_config import EngineConfig
from .types_state import EngineState, SpacetimeDiamond

# Module exports for receipt types
RECEIPT_SCHEMA = ["heal"]


def needs_healing(config: EngineConfig, diamond: SpacetimeDiamond) -> bool:
    return (diamond.coherence < config.heal_coherence_threshold
            or diamond.causality < config.heal_causality_threshold)


def heal_diamond(config: EngineConfig, diamond: SpacetimeDiamond) -> None:
    """Apply one phase-conjugate correction and refresh the diamond's xi."""
    chi = config.healing_chi
    diamond.coherence = min(config.heal_coherence_cap, diamond.coherence / (1 - chi))
    diamond.causality = min(1.0, diamond.causality * (1 + chi * 0.5))
    diamond.xi = diamond_xi(config, diamond)


def heal(state: EngineState, config: EngineConfig) -> int:
    """
    Heal every diamond below the coherence or causality threshold.

    Returns:
        Number of diamonds healed.
    """
    healed = []
    for diamond in state.diamonds.values():
        if needs_healing(config, diamond):
            heal_diamond(config, diamond)
            healed.append(diamond.id)

    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("heal", {
        "tenant_id": config.tenant_id,
        "healed_count": len(healed),
        "healed_ids": healed,
        "global_coherence": state.global_coherence,
        "global_causality": state.global_causality,
    }))
    return len(healed)
