"""
diamond/lorentz.py - Lorentz Transform

Boost a diamond's defining events into another inertial frame and rederive
its scalars from the transformed pair.
"""

import math
from typing import Sequence

import numpy as np

from receipts import emit_receipt

from .constants import BOOST_VELOCITY_FLOOR
from .metrics import derive_geometry, diamond_xi, local_curvature, update_global_metrics
from .types_config import EngineConfig
from .types_state import EngineState, SpacetimePoint
from .validation import emit_refusal

# Module exports for receipt types
RECEIPT_SCHEMA = ["lorentz_boost"]


def boost_matrix(velocity: Sequence[float]) -> np.ndarray:
    """
    4x4 boost for a frame moving with `velocity` (|v| < 1).

    Splits each event into components parallel and perpendicular to the boost
    direction n:  t' = g (t - v n.x),  x' = x + (g - 1) n (n.x) - g v t.
    """
    v = np.asarray(velocity, dtype=float)
    speed = float(np.linalg.norm(v))
    if speed < BOOST_VELOCITY_FLOOR:
        return np.eye(4)

    gamma = 1.0 / math.sqrt(1.0 - speed ** 2)
    n = v / speed

    L = np.empty((4, 4))
    L[0, 0] = gamma
    L[0, 1:] = -gamma * v
    L[1:, 0] = -gamma * v
    L[1:, 1:] = np.eye(3) + (gamma - 1.0) * np.outer(n, n)
    return L


def boost_point(point: SpacetimePoint, velocity: Sequence[float]) -> SpacetimePoint:
    """Apply the boost for `velocity` to one event."""
    if float(np.linalg.norm(velocity)) < BOOST_VELOCITY_FLOOR:
        return point
    t, x, y, z = boost_matrix(velocity) @ np.array([point.t, point.x, point.y, point.z])
    return SpacetimePoint(float(t), float(x), float(y), float(z))


def lorentz_boost(state: EngineState, config: EngineConfig, diamond_id: str,
                  velocity: Sequence[float]) -> bool:
    """
    Boost one diamond.

    Args:
        state: EngineState (mutated in place)
        config: EngineConfig (boost_coherence_drift is applied to coherence)
        diamond_id: Diamond to transform
        velocity: (vx, vy, vz) in units of c

    Returns:
        False with no mutation for an unknown id or |v| >= 1, True otherwise.
    """
    diamond = state.diamonds.get(diamond_id)
    if diamond is None:
        emit_refusal(state, config, "lorentz_boost", "unknown_id", diamond_id=diamond_id)
        return False

    vx, vy, vz = (float(c) for c in velocity)
    v2 = vx ** 2 + vy ** 2 + vz ** 2
    if not v2 < 1:
        classification = "superluminal" if v2 >= 1 else "invalid_velocity"
        emit_refusal(state, config, "lorentz_boost", classification,
                     diamond_id=diamond_id, speed=math.sqrt(v2))
        return False

    apex = boost_point(diamond.apex, (vx, vy, vz))
    base = boost_point(diamond.base, (vx, vy, vz))
    geometry = derive_geometry(apex, base)
    if geometry is None:
        # Timelike future-pointing pairs stay so under |v| < 1; guards rounding only
        emit_refusal(state, config, "lorentz_boost", "degenerate_transform", diamond_id=diamond_id)
        return False

    previous_proper_time = diamond.proper_time
    diamond.apex = apex
    diamond.base = base
    diamond.width = geometry["width"]
    diamond.height = geometry["height"]
    diamond.proper_time = geometry["proper_time"]
    diamond.gamma = geometry["gamma"]
    diamond.invariant_mass = geometry["invariant_mass"]
    diamond.curvature = local_curvature(state, apex)
    diamond.coherence *= config.boost_coherence_drift
    diamond.xi = diamond_xi(config, diamond)

    state.total_proper_time += diamond.proper_time - previous_proper_time
    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("lorentz_boost", {
        "tenant_id": config.tenant_id,
        "diamond_id": diamond_id,
        "velocity": [vx, vy, vz],
        "boost_gamma": 1.0 / math.sqrt(1.0 - v2),
        "gamma": diamond.gamma,
        "proper_time": diamond.proper_time,
        "coherence": diamond.coherence,
    }))
    return True
