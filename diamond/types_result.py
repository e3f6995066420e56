"""
diamond/types_result.py - Operation Result Dataclasses

Immutable result containers returned by engine operations. A refused
operation returns success=False with every numeric field zeroed.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple

from .constants import CausalRelation


@dataclass(frozen=True)
class CausalOrderResult:
    """Causal relation between two diamonds' apexes."""
    diamond1_id: str
    diamond2_id: str
    relation: CausalRelation
    interval: float
    proper_separation: float  # proper time if timelike, proper distance if spacelike

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["relation"] = self.relation.value
        return d


@dataclass(frozen=True)
class QuantumChannelResult:
    """Outcome of sending a quantum state between two diamonds."""
    success: bool
    source_id: str
    target_id: str
    fidelity: float = 0.0
    latency: float = 0.0
    causally_ordered: bool = False
    indefinite_causal_order: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SwitchBranch:
    """One causal ordering of the switch targets with its amplitude."""
    order: Tuple[str, str]
    amplitude: complex

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order": list(self.order),
            "amplitude": {"real": self.amplitude.real, "imag": self.amplitude.imag},
        }


@dataclass(frozen=True)
class QuantumSwitchResult:
    """Superposition of operation orders built by a quantum switch."""
    success: bool
    superposition: bool = False
    orders: Tuple[SwitchBranch, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "superposition": self.superposition,
            "orders": [b.to_dict() for b in self.orders],
        }


@dataclass(frozen=True)
class ProcessMatrixResult:
    """Causal-order analysis over a set of diamonds.

    witness_value < 0 signals genuinely indefinite causal order.
    causal_order is empty unless the set is causally orderable.
    """
    dimensions: int
    trace: float
    causally_orderable: bool
    witness_value: float
    causal_order: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["causal_order"] = list(self.causal_order)
        return d


@dataclass(frozen=True)
class EngineSnapshot:
    """Engine-wide summary polled by the dashboard layer."""
    diamond_count: int
    causal_edges: int
    spacelike_pairs: int
    global_coherence: float
    global_causality: float
    total_proper_time: float
    xi: float
    indefinite_order_possible: bool
    schwarzschild_radius: float
    cosmological_constant: float
    coordinate_time: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
