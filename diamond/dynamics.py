"""
diamond/dynamics.py - Background and Time Evolution

Global recomputations driven by the background (gravitating mass) and by
coordinate time (dilation plus exponential decoherence).
"""

import math

from receipts import emit_receipt

from .constants import GRAVITATIONAL_CONSTANT, SPEED_OF_LIGHT
from .metrics import clamp_coherence, curvature_coherence, diamond_xi, local_curvature, update_global_metrics
from .types_config import EngineConfig
from .types_state import EngineState
from .validation import emit_refusal

# Module exports for receipt types
RECEIPT_SCHEMA = ["gravitating_mass", "tick"]


def schwarzschild_radius(mass_kg: float) -> float:
    """rs = 2 G M / c^2."""
    return 2 * GRAVITATIONAL_CONSTANT * mass_kg / (SPEED_OF_LIGHT ** 2)


def set_gravitating_mass(state: EngineState, config: EngineConfig, mass_kg: float) -> bool:
    """
    Set the gravitating mass and recompute curvature, coherence and xi of
    every diamond from scratch (not incrementally).

    Returns:
        False with no mutation for a negative or non-finite mass.
    """
    if not (math.isfinite(mass_kg) and mass_kg >= 0):
        emit_refusal(state, config, "set_gravitating_mass", "invalid_mass", mass_kg=mass_kg)
        return False

    state.schwarzschild_radius = schwarzschild_radius(mass_kg)

    for diamond in state.diamonds.values():
        diamond.curvature = local_curvature(state, diamond.apex)
        diamond.coherence = curvature_coherence(config, diamond.curvature)
        diamond.xi = diamond_xi(config, diamond)

    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("gravitating_mass", {
        "tenant_id": config.tenant_id,
        "mass_kg": mass_kg,
        "schwarzschild_radius": state.schwarzschild_radius,
        "global_coherence": state.global_coherence,
    }))
    return True


def tick(state: EngineState, config: EngineConfig, delta_t: float) -> bool:
    """
    Advance coordinate time by delta_t.

    Each diamond ages by its dilated interval delta_t / gamma and decoheres
    as exp(-decoherence_rate * dilated).

    Returns:
        False with no mutation for a negative or non-finite delta_t.
    """
    if not (math.isfinite(delta_t) and delta_t >= 0):
        emit_refusal(state, config, "tick", "invalid_delta_t", delta_t=delta_t)
        return False

    state.coordinate_time += delta_t

    for diamond in state.diamonds.values():
        dilated = delta_t / diamond.gamma
        diamond.proper_time += dilated
        state.total_proper_time += dilated
        diamond.coherence = clamp_coherence(
            diamond.coherence * math.exp(-config.decoherence_rate * dilated)
        )
        diamond.xi = diamond_xi(config, diamond)

    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("tick", {
        "tenant_id": config.tenant_id,
        "delta_t": delta_t,
        "coordinate_time": state.coordinate_time,
        "global_coherence": state.global_coherence,
    }))
    return True
