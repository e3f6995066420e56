"""
diamond/metrics.py - Local and Global Diamond Metrics

Curvature, coherence, xi and the engine-wide aggregates. The curvature and
decoherence formulas are invented numeric models; their scale factors come
from EngineConfig and must not be "corrected" toward general relativity.
"""

import math
from typing import Optional

from .constants import COHERENCE_FLOOR, HBAR, PLANCK_TIME, SPEED_OF_LIGHT
from .geometry import spacetime_interval, spatial_distance
from .types_config import EngineConfig
from .types_state import EngineState, SpacetimeDiamond, SpacetimePoint


# =============================================================================
# LOCAL METRICS
# =============================================================================

def local_curvature(state: EngineState, point: SpacetimePoint) -> float:
    """
    Background curvature at a point.

    R = 4 * Lambda (de Sitter) plus rs / r^3 outside the horizon of the
    gravitating mass, if one is set.
    """
    cosmo_curvature = 4 * state.cosmological_constant

    grav_curvature = 0.0
    if state.schwarzschild_radius > 0:
        r = math.sqrt(point.x ** 2 + point.y ** 2 + point.z ** 2)
        if r > state.schwarzschild_radius:
            grav_curvature = state.schwarzschild_radius / (r ** 3)

    return cosmo_curvature + grav_curvature


def clamp_coherence(value: float) -> float:
    """Clamp into [COHERENCE_FLOOR, 1.0]."""
    return max(COHERENCE_FLOOR, min(1.0, value))


def curvature_coherence(config: EngineConfig, curvature: float) -> float:
    """Baseline coherence degraded by curvature-induced decoherence."""
    return clamp_coherence(config.coherence_baseline * (1 - curvature * config.curvature_scale))


def diamond_xi(config: EngineConfig, diamond: SpacetimeDiamond) -> float:
    """xi = coherence * causality / max(floor, curvature loss + decoherence rate)."""
    loss = diamond.curvature * config.curvature_scale + config.decoherence_rate
    return (diamond.coherence * diamond.causality) / max(config.xi_floor, loss)


def invariant_mass(proper_time: float) -> float:
    """Mass-equivalent of the information held for one proper time."""
    return HBAR / (proper_time * PLANCK_TIME * SPEED_OF_LIGHT ** 2)


def derive_geometry(apex: SpacetimePoint, base: SpacetimePoint) -> Optional[dict]:
    """
    Derived extents for an apex/base pair.

    Returns:
        dict with width, height, proper_time, gamma, invariant_mass, or None
        if apex is not strictly in the timelike future of base or the
        interval is not finite.
    """
    interval = spacetime_interval(base, apex)
    height = apex.t - base.t
    # NaN and infinite intervals are refused
    if not (math.isfinite(interval) and interval > 0 and height > 0):
        return None

    proper_time = math.sqrt(interval)
    return {
        "width": spatial_distance(base, apex),
        "height": height,
        "proper_time": proper_time,
        "gamma": height / proper_time,
        "invariant_mass": invariant_mass(proper_time),
    }


# =============================================================================
# GLOBAL METRICS
# =============================================================================

def update_xi(state: EngineState, config: EngineConfig) -> None:
    """Engine-wide negentropic efficiency from the global aggregates."""
    gamma = 1 - state.global_causality + config.decoherence_rate
    if gamma > 0:
        state.xi = (state.global_coherence * state.global_causality) / gamma


def update_global_metrics(state: EngineState, config: EngineConfig) -> None:
    """Recompute global coherence/causality means and xi. Run after every mutation."""
    if not state.diamonds:
        state.global_coherence = config.coherence_baseline
        state.global_causality = config.causality_baseline
        update_xi(state, config)
        return

    n = len(state.diamonds)
    state.global_coherence = sum(d.coherence for d in state.diamonds.values()) / n
    state.global_causality = sum(d.causality for d in state.diamonds.values()) / n
    update_xi(state, config)
