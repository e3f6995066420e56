"""
diamond/repository.py - Diamond Repository and Causal Graph

Owns diamond creation/removal and the mutual causal relation sets.
Every insertion classifies the new diamond against all live diamonds, so
insertion is O(n) in the live count; bounded by EngineConfig.max_diamonds.

The causal_graph dict is an explicit redundant index of causal_future.
It is updated here and nowhere else; validation.stoprule_graph_divergence
checks that the two never drift apart.
"""

from typing import Optional

import networkx as nx

from receipts import emit_receipt

from .geometry import precedes, spacetime_interval
from .metrics import curvature_coherence, derive_geometry, diamond_xi, local_curvature, update_global_metrics
from .types_config import EngineConfig
from .types_state import EngineState, QuantumState, SpacetimeDiamond, SpacetimePoint
from .validation import emit_refusal

# Module exports for receipt types
RECEIPT_SCHEMA = ["diamond_created", "diamond_removed"]


# =============================================================================
# IDS
# =============================================================================

def next_diamond_id(state: EngineState) -> str:
    """Monotonic per-engine id. Ids of removed diamonds are never reused."""
    did = f"sd_{state.next_sequence:06d}"
    state.next_sequence += 1
    return did


# =============================================================================
# CAUSAL RELATIONS
# =============================================================================

def link_causal_relations(state: EngineState, config: EngineConfig,
                          new: SpacetimeDiamond) -> None:
    """
    Classify `new` against every live diamond and link both directions.

    existing.apex precedes new.base  -> existing is in new's causal past
    new.apex precedes existing.base  -> existing is in new's causal future
    otherwise                        -> mutually spacelike
    """
    eps = config.relation_epsilon
    for did, existing in state.diamonds.items():
        if precedes(existing.apex, new.base, eps):
            new.causal_past.add(did)
            existing.causal_future.add(new.id)
            state.causal_graph[did].append(new.id)
        elif precedes(new.apex, existing.base, eps):
            new.causal_future.add(did)
            existing.causal_past.add(new.id)
        else:
            new.spacelike_separated.add(did)
            existing.spacelike_separated.add(new.id)


def unlink_causal_relations(state: EngineState, target: SpacetimeDiamond) -> None:
    """Retract every back-reference to `target` from the other live diamonds."""
    tid = target.id
    for pid in target.causal_past:
        past = state.diamonds.get(pid)
        if past is not None:
            past.causal_future.discard(tid)
            state.causal_graph[pid] = [fid for fid in state.causal_graph.get(pid, []) if fid != tid]
    for fid in target.causal_future:
        future = state.diamonds.get(fid)
        if future is not None:
            future.causal_past.discard(tid)
    for sid in target.spacelike_separated:
        spacelike = state.diamonds.get(sid)
        if spacelike is not None:
            spacelike.spacelike_separated.discard(tid)


def are_spacelike(state: EngineState, id1: str, id2: str) -> bool:
    """True if the pair is registered as mutually spacelike."""
    d1 = state.diamonds.get(id1)
    return d1 is not None and id2 in d1.spacelike_separated


# =============================================================================
# CORE FUNCTION 1: create_diamond
# =============================================================================

def create_diamond(state: EngineState, config: EngineConfig, apex: SpacetimePoint,
                   base: SpacetimePoint,
                   initial_amplitude: Optional[complex] = None) -> Optional[SpacetimeDiamond]:
    """
    Create a diamond from its base (past apex) and apex (future apex).

    Args:
        state: EngineState (mutated in place)
        config: EngineConfig
        apex: Future event
        base: Past event
        initial_amplitude: amplitude0 of the carried qubit, default 1+0j

    Returns:
        The new SpacetimeDiamond, or None if the pair is not timelike and
        future-pointing or the repository is at capacity. A refusal leaves
        state untouched apart from the anomaly receipt.
    """
    if len(state.diamonds) >= config.max_diamonds:
        emit_refusal(state, config, "create_diamond", "capacity_reached",
                     diamond_count=len(state.diamonds), max_diamonds=config.max_diamonds)
        return None

    geometry = derive_geometry(apex, base)
    if geometry is None:
        emit_refusal(state, config, "create_diamond", "not_timelike",
                     interval=spacetime_interval(base, apex), apex=apex.to_dict(), base=base.to_dict())
        return None

    curvature = local_curvature(state, apex)
    diamond = SpacetimeDiamond(
        id=next_diamond_id(state),
        apex=apex,
        base=base,
        curvature=curvature,
        coherence=curvature_coherence(config, curvature),
        causality=config.causality_baseline,
        quantum_state=QuantumState(
            amplitude0=complex(initial_amplitude) if initial_amplitude is not None else 1 + 0j,
            amplitude1=0j,
        ),
        **geometry
    )

    link_causal_relations(state, config, diamond)
    diamond.xi = diamond_xi(config, diamond)

    state.diamonds[diamond.id] = diamond
    state.causal_graph[diamond.id] = sorted(diamond.causal_future)
    state.total_proper_time += diamond.proper_time
    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("diamond_created", {
        "tenant_id": config.tenant_id,
        "diamond_id": diamond.id,
        "proper_time": diamond.proper_time,
        "gamma": diamond.gamma,
        "curvature": diamond.curvature,
        "coherence": diamond.coherence,
        "causal_past": len(diamond.causal_past),
        "causal_future": len(diamond.causal_future),
        "spacelike_separated": len(diamond.spacelike_separated),
    }))
    return diamond


# =============================================================================
# CORE FUNCTION 2: remove_diamond
# =============================================================================

def remove_diamond(state: EngineState, config: EngineConfig, diamond_id: str) -> bool:
    """
    Remove a diamond and retract it from every relation set and the index.

    Returns:
        False if the id is unknown, True otherwise.
    """
    diamond = state.diamonds.get(diamond_id)
    if diamond is None:
        emit_refusal(state, config, "remove_diamond", "unknown_id", diamond_id=diamond_id)
        return False

    unlink_causal_relations(state, diamond)

    state.total_proper_time -= diamond.proper_time
    del state.diamonds[diamond_id]
    state.causal_graph.pop(diamond_id, None)
    if not state.diamonds:
        # Clear float residue of the running sum
        state.total_proper_time = 0.0
    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("diamond_removed", {
        "tenant_id": config.tenant_id,
        "diamond_id": diamond_id,
        "proper_time": diamond.proper_time,
        "remaining": len(state.diamonds),
    }))
    return True


def get_diamond(state: EngineState, diamond_id: str) -> Optional[SpacetimeDiamond]:
    return state.diamonds.get(diamond_id)


# =============================================================================
# GRAPH VIEWS
# =============================================================================

def count_causal_edges(state: EngineState) -> int:
    return sum(len(d.causal_future) for d in state.diamonds.values())


def count_spacelike_pairs(state: EngineState) -> int:
    # Each pair is registered on both sides
    return sum(len(d.spacelike_separated) for d in state.diamonds.values()) // 2


def causal_dag(state: EngineState) -> nx.DiGraph:
    """
    networkx view of the adjacency index.

    Nodes carry coherence/causality; edges run past -> future. Spacelike
    pairs are kept on the graph as graph["spacelike_pairs"].
    """
    G = nx.DiGraph()
    for did, d in state.diamonds.items():
        G.add_node(did, coherence=d.coherence, causality=d.causality, proper_time=d.proper_time)
    for did, futures in state.causal_graph.items():
        for fid in futures:
            G.add_edge(did, fid)
    G.graph["spacelike_pairs"] = sorted(
        (a, b) for a, d in state.diamonds.items() for b in d.spacelike_separated if a < b
    )
    return G
