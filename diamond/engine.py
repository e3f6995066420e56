"""
diamond/engine.py - SpacetimeDiamondEngine Facade

One engine instance owns every diamond it creates for its lifetime. There is
no module-level singleton: the host application constructs the engine it
needs, tests construct one per case. State is volatile, never persisted.

Single-threaded: each public method is one complete state transition. A
threaded host must serialize the mutating methods (create, remove, boost,
send, switch, heal, set_gravitating_mass, tick) behind one lock.
"""

from collections import deque
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .channel import send_quantum_info
from .constants import CausalRelation
from .dynamics import set_gravitating_mass, tick
from .geometry import causal_relation, proper_separation, spacetime_interval
from .healing import heal
from .lorentz import lorentz_boost
from .metrics import update_xi
from .process_matrix import compute_process_matrix
from .repository import (
    are_spacelike,
    causal_dag,
    count_causal_edges,
    count_spacelike_pairs,
    create_diamond,
    get_diamond,
    remove_diamond,
)
from .switch import quantum_switch
from .types_config import CONFIG_DEFAULT, EngineConfig
from .types_result import (
    CausalOrderResult,
    EngineSnapshot,
    ProcessMatrixResult,
    QuantumChannelResult,
    QuantumSwitchResult,
)
from .types_state import EngineState, SpacetimeDiamond, SpacetimePoint
from .validation import validate_engine_state

PointLike = Union[SpacetimePoint, Mapping[str, float], Sequence[float]]


def as_point(value: PointLike) -> SpacetimePoint:
    """Accept a SpacetimePoint, a {t, x, y, z} mapping or a (t, x, y, z) sequence."""
    if isinstance(value, SpacetimePoint):
        return value
    if isinstance(value, Mapping):
        return SpacetimePoint(
            float(value["t"]), float(value.get("x", 0.0)),
            float(value.get("y", 0.0)), float(value.get("z", 0.0)),
        )
    return SpacetimePoint(*(float(c) for c in value))


class SpacetimeDiamondEngine:
    """Relativistic quantum-information engine over spacetime diamonds."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or CONFIG_DEFAULT
        self.state = EngineState(cosmological_constant=self.config.cosmological_constant,
                                 global_coherence=self.config.coherence_baseline,
                                 global_causality=self.config.causality_baseline,
                                 receipt_ledger=deque(maxlen=self.config.receipt_ledger_max))
        update_xi(self.state, self.config)

    # -------------------------------------------------------------------------
    # Repository
    # -------------------------------------------------------------------------

    def create_diamond(self, apex: PointLike, base: PointLike,
                       initial_amplitude: Optional[complex] = None) -> Optional[SpacetimeDiamond]:
        """Returns None when the pair is not timelike or the engine is full."""
        return create_diamond(self.state, self.config, as_point(apex), as_point(base), initial_amplitude)

    def remove_diamond(self, diamond_id: str) -> bool:
        return remove_diamond(self.state, self.config, diamond_id)

    def get_diamond(self, diamond_id: str) -> Optional[SpacetimeDiamond]:
        return get_diamond(self.state, diamond_id)

    @property
    def diamonds(self) -> List[SpacetimeDiamond]:
        return list(self.state.diamonds.values())

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def spacetime_interval(self, p1: PointLike, p2: PointLike) -> float:
        return spacetime_interval(as_point(p1), as_point(p2))

    def get_causal_relation(self, p1: PointLike, p2: PointLike) -> CausalRelation:
        return causal_relation(as_point(p1), as_point(p2), self.config.relation_epsilon)

    def causal_order(self, diamond1_id: str, diamond2_id: str) -> Optional[CausalOrderResult]:
        """
        Relation of diamond2's apex relative to diamond1's apex.

        INDEFINITE when the pair is registered spacelike, None for unknown ids.
        """
        d1 = self.state.diamonds.get(diamond1_id)
        d2 = self.state.diamonds.get(diamond2_id)
        if d1 is None or d2 is None:
            return None

        if are_spacelike(self.state, diamond1_id, diamond2_id):
            relation = CausalRelation.INDEFINITE
        else:
            relation = causal_relation(d1.apex, d2.apex, self.config.relation_epsilon)

        return CausalOrderResult(
            diamond1_id=diamond1_id,
            diamond2_id=diamond2_id,
            relation=relation,
            interval=spacetime_interval(d1.apex, d2.apex),
            proper_separation=proper_separation(d1.apex, d2.apex),
        )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def send_quantum_info(self, source_id: str, target_id: str) -> QuantumChannelResult:
        return send_quantum_info(self.state, self.config, source_id, target_id)

    def quantum_switch(self, control_id: str, target1_id: str, target2_id: str) -> QuantumSwitchResult:
        return quantum_switch(self.state, self.config, control_id, target1_id, target2_id)

    def compute_process_matrix(self, diamond_ids: Iterable[str]) -> ProcessMatrixResult:
        return compute_process_matrix(self.state, self.config, diamond_ids)

    def lorentz_boost(self, diamond_id: str, velocity: Sequence[float]) -> bool:
        return lorentz_boost(self.state, self.config, diamond_id, velocity)

    def heal(self) -> int:
        return heal(self.state, self.config)

    def set_gravitating_mass(self, mass_kg: float) -> bool:
        return set_gravitating_mass(self.state, self.config, mass_kg)

    def tick(self, delta_t: float) -> bool:
        return tick(self.state, self.config, delta_t)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def get_state(self) -> EngineSnapshot:
        spacelike_pairs = count_spacelike_pairs(self.state)
        return EngineSnapshot(
            diamond_count=len(self.state.diamonds),
            causal_edges=count_causal_edges(self.state),
            spacelike_pairs=spacelike_pairs,
            global_coherence=self.state.global_coherence,
            global_causality=self.state.global_causality,
            total_proper_time=self.state.total_proper_time,
            xi=self.state.xi,
            indefinite_order_possible=spacelike_pairs > 0,
            schwarzschild_radius=self.state.schwarzschild_radius,
            cosmological_constant=self.state.cosmological_constant,
            coordinate_time=self.state.coordinate_time,
        )

    def causal_dag(self):
        """networkx.DiGraph view of the causal adjacency index."""
        return causal_dag(self.state)

    def validate(self) -> bool:
        """Check every state invariant; raises StopRule on a breach."""
        return validate_engine_state(self.state, self.config)

    @property
    def receipts(self) -> List[dict]:
        return list(self.state.receipt_ledger)
