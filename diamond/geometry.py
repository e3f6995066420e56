"""
diamond/geometry.py - Minkowski Geometry

Spacetime interval and causal classification between events.
Pure functions, signature (+,-,-,-), c = 1.
"""

import math

from .constants import CausalRelation, RELATION_EPSILON
from .types_state import SpacetimePoint


def spacetime_interval(p1: SpacetimePoint, p2: SpacetimePoint) -> float:
    """s^2 = dt^2 - dx^2 - dy^2 - dz^2. Positive is timelike."""
    dt = p2.t - p1.t
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    dz = p2.z - p1.z
    return dt ** 2 - dx ** 2 - dy ** 2 - dz ** 2


def spatial_distance(p1: SpacetimePoint, p2: SpacetimePoint) -> float:
    """Euclidean distance between the spatial parts of two events."""
    return math.sqrt((p2.x - p1.x) ** 2 + (p2.y - p1.y) ** 2 + (p2.z - p1.z) ** 2)


def causal_relation(p1: SpacetimePoint, p2: SpacetimePoint,
                    epsilon: float = RELATION_EPSILON) -> CausalRelation:
    """
    Classify p2 relative to p1.

    Returns:
        FUTURE or PAST for timelike separation (by sign of p2.t - p1.t),
        SPACELIKE below -epsilon, LIGHTLIKE within +-epsilon.
    """
    interval = spacetime_interval(p1, p2)
    if interval > epsilon:
        return CausalRelation.FUTURE if p2.t > p1.t else CausalRelation.PAST
    if interval < -epsilon:
        return CausalRelation.SPACELIKE
    return CausalRelation.LIGHTLIKE


def precedes(earlier: SpacetimePoint, later: SpacetimePoint,
             epsilon: float = RELATION_EPSILON) -> bool:
    """True if `earlier` lies in the causal past of `later` or on its past light cone."""
    relation = causal_relation(later, earlier, epsilon)
    if relation is CausalRelation.PAST:
        return True
    return relation is CausalRelation.LIGHTLIKE and earlier.t <= later.t


def proper_separation(p1: SpacetimePoint, p2: SpacetimePoint) -> float:
    """Proper time for timelike pairs, proper distance for spacelike pairs."""
    return math.sqrt(abs(spacetime_interval(p1, p2)))
