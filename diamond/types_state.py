"""
diamond/types_state.py - Spacetime and Engine State Dataclasses

SpacetimePoint is an immutable event; SpacetimeDiamond and EngineState are
mutable and owned by exactly one engine. Cross references between diamonds
are ids, never object references.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Set

from .constants import CAUSALITY_BASELINE, COHERENCE_BASELINE, COSMOLOGICAL_CONSTANT, RECEIPT_LEDGER_MAX


@dataclass(frozen=True)
class SpacetimePoint:
    """Event in Planck-scaled coordinates, c = 1."""
    t: float
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"t": self.t, "x": self.x, "y": self.y, "z": self.z}


@dataclass
class QuantumState:
    """Two-level system carried by a diamond.

    Amplitudes are not renormalized; callers may set them directly.
    """
    amplitude0: complex = 1 + 0j
    amplitude1: complex = 0j

    def copy(self) -> "QuantumState":
        return QuantumState(self.amplitude0, self.amplitude1)

    def norm(self) -> float:
        return (abs(self.amplitude0) ** 2 + abs(self.amplitude1) ** 2) ** 0.5


@dataclass
class SpacetimeDiamond:
    """Causal diamond between a past apex (base) and a future apex (apex).

    Derived scalars (width, height, proper_time, gamma, invariant_mass,
    curvature, xi) are recomputed whenever apex or base move. The three
    relation sets are mutually maintained by the repository:
    a in b.causal_past <=> b in a.causal_future, spacelike is symmetric.
    """
    id: str
    apex: SpacetimePoint
    base: SpacetimePoint
    width: float
    height: float
    proper_time: float
    gamma: float
    invariant_mass: float
    curvature: float
    coherence: float = COHERENCE_BASELINE
    causality: float = CAUSALITY_BASELINE
    xi: float = 0.0
    quantum_state: QuantumState = field(default_factory=QuantumState)
    causal_past: Set[str] = field(default_factory=set)
    causal_future: Set[str] = field(default_factory=set)
    spacelike_separated: Set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        """Serialize to JSON-ready dictionary."""
        return {
            "id": self.id,
            "apex": self.apex.to_dict(),
            "base": self.base.to_dict(),
            "width": self.width,
            "height": self.height,
            "proper_time": self.proper_time,
            "gamma": self.gamma,
            "invariant_mass": self.invariant_mass,
            "curvature": self.curvature,
            "coherence": self.coherence,
            "causality": self.causality,
            "xi": self.xi,
            "quantum_state": {
                "amplitude0": [self.quantum_state.amplitude0.real, self.quantum_state.amplitude0.imag],
                "amplitude1": [self.quantum_state.amplitude1.real, self.quantum_state.amplitude1.imag],
            },
            "causal_past": sorted(self.causal_past),
            "causal_future": sorted(self.causal_future),
            "spacelike_separated": sorted(self.spacelike_separated),
        }


@dataclass
class EngineState:
    """Mutable engine state."""
    diamonds: Dict[str, SpacetimeDiamond] = field(default_factory=dict)
    # Redundant index of causal_future, kept in sync on insert/remove
    causal_graph: Dict[str, List[str]] = field(default_factory=dict)
    global_coherence: float = COHERENCE_BASELINE
    global_causality: float = CAUSALITY_BASELINE
    total_proper_time: float = 0.0
    schwarzschild_radius: float = 0.0
    cosmological_constant: float = COSMOLOGICAL_CONSTANT
    xi: float = 0.0
    coordinate_time: float = 0.0
    next_sequence: int = 1
    # Bounded: the oldest receipts fall off once maxlen is reached
    receipt_ledger: Deque[dict] = field(default_factory=lambda: deque(maxlen=RECEIPT_LEDGER_MAX))
