"""
diamond - Spacetime Diamond Relativistic Quantum-Information Engine

Public API. Flat, focused files. One file = one responsibility.
"""

# =============================================================================
# TYPES (Dataclasses)
# =============================================================================
from .types_config import (
    EngineConfig,
    CONFIG_DEFAULT,
    CONFIG_DRIFT_FREE,
    CONFIG_FLAT,
    PRESETS,
)
from .types_state import SpacetimePoint, QuantumState, SpacetimeDiamond, EngineState
from .types_result import (
    CausalOrderResult,
    QuantumChannelResult,
    SwitchBranch,
    QuantumSwitchResult,
    ProcessMatrixResult,
    EngineSnapshot,
)

# =============================================================================
# CONSTANTS
# =============================================================================
from .constants import (
    CausalRelation,
    COSMOLOGICAL_CONSTANT,
    DECOHERENCE_RATE,
    HEALING_CHI,
    BOOST_COHERENCE_DRIFT,
    SWITCH_CAUSALITY_COST,
    RELATION_EPSILON,
)

# =============================================================================
# GEOMETRY
# =============================================================================
from .geometry import (
    spacetime_interval,
    causal_relation,
    precedes,
    spatial_distance,
    proper_separation,
)

# =============================================================================
# REPOSITORY
# =============================================================================
from .repository import (
    create_diamond,
    remove_diamond,
    get_diamond,
    causal_dag,
)

# =============================================================================
# OPERATIONS
# =============================================================================
from .lorentz import boost_matrix, boost_point, lorentz_boost
from .channel import send_quantum_info
from .switch import quantum_switch
from .process_matrix import compute_process_matrix
from .healing import heal
from .dynamics import set_gravitating_mass, tick, schwarzschild_radius

# =============================================================================
# VALIDATION
# =============================================================================
from .validation import (
    validate_engine_state,
    stoprule_causal_asymmetry,
    stoprule_graph_divergence,
    stoprule_aggregate_drift,
)

# =============================================================================
# ENGINE
# =============================================================================
from .engine import SpacetimeDiamondEngine, as_point

# =============================================================================
# PUBLIC API
# =============================================================================
__all__ = [
    # Types
    "EngineConfig",
    "EngineState",
    "SpacetimePoint",
    "QuantumState",
    "SpacetimeDiamond",
    "CausalOrderResult",
    "QuantumChannelResult",
    "SwitchBranch",
    "QuantumSwitchResult",
    "ProcessMatrixResult",
    "EngineSnapshot",
    # Presets
    "CONFIG_DEFAULT",
    "CONFIG_DRIFT_FREE",
    "CONFIG_FLAT",
    "PRESETS",
    # Constants
    "CausalRelation",
    "COSMOLOGICAL_CONSTANT",
    "DECOHERENCE_RATE",
    "HEALING_CHI",
    "BOOST_COHERENCE_DRIFT",
    "SWITCH_CAUSALITY_COST",
    "RELATION_EPSILON",
    # Geometry
    "spacetime_interval",
    "causal_relation",
    "precedes",
    "spatial_distance",
    "proper_separation",
    # Repository
    "create_diamond",
    "remove_diamond",
    "get_diamond",
    "causal_dag",
    # Operations
    "boost_matrix",
    "boost_point",
    "lorentz_boost",
    "send_quantum_info",
    "quantum_switch",
    "compute_process_matrix",
    "heal",
    "set_gravitating_mass",
    "tick",
    "schwarzschild_radius",
    # Validation
    "validate_engine_state",
    "stoprule_causal_asymmetry",
    "stoprule_graph_divergence",
    "stoprule_aggregate_drift",
    # Engine
    "SpacetimeDiamondEngine",
    "as_point",
]
