"""
diamond/validation.py - Refusal Receipts and Invariant Stoprules

Expected bad input (non-timelike pair, superluminal boost, ...) is refused
softly: the operation records an anomaly receipt with action "refuse" and
returns a failure value. Broken internal invariants are not expected input:
the stoprules below record an anomaly receipt with action "halt" and raise
StopRule.
"""

from typing import List

from receipts import emit_receipt, StopRule

from .types_config import EngineConfig
from .types_state import EngineState

AGGREGATE_TOLERANCE = 1e-9

# Module exports for receipt types
RECEIPT_SCHEMA = ["anomaly"]


# =============================================================================
# SOFT REFUSALS
# =============================================================================

def emit_refusal(state: EngineState, config: EngineConfig, operation: str,
                 classification: str, **fields) -> dict:
    """Record a refused operation on the ledger. Never raises."""
    receipt = emit_receipt("anomaly", {
        "tenant_id": config.tenant_id,
        "operation": operation,
        "classification": classification,
        "action": "refuse",
        **fields
    })
    state.receipt_ledger.append(receipt)
    return receipt


def _halt(state: EngineState, config: EngineConfig, metric: str,
          classification: str, violations: List[str]) -> None:
    state.receipt_ledger.append(emit_receipt("anomaly", {
        "tenant_id": config.tenant_id,
        "metric": metric,
        "classification": classification,
        "action": "halt",
        "violations": violations[:10],
        "violation_count": len(violations)
    }))
    raise StopRule(f"{classification}: {len(violations)} violation(s), first: {violations[0]}")


# =============================================================================
# STOPRULES
# =============================================================================

def stoprule_causal_asymmetry(state: EngineState, config: EngineConfig) -> None:
    """
    Stoprule for the mutual relation sets.

    Triggers if a past/future link lacks its back-reference, a spacelike link
    is one-sided, or any set references a dead id.
    """
    violations = []
    for did, d in state.diamonds.items():
        for pid in d.causal_past:
            other = state.diamonds.get(pid)
            if other is None or did not in other.causal_future:
                violations.append(f"{pid} in past of {did} without matching future link")
        for fid in d.causal_future:
            other = state.diamonds.get(fid)
            if other is None or did not in other.causal_past:
                violations.append(f"{fid} in future of {did} without matching past link")
        for sid in d.spacelike_separated:
            other = state.diamonds.get(sid)
            if other is None or did not in other.spacelike_separated:
                violations.append(f"{sid} spacelike to {did} one-sided")
    if violations:
        _halt(state, config, "causal_symmetry", "causal_asymmetry", violations)


def stoprule_graph_divergence(state: EngineState, config: EngineConfig) -> None:
    """Stoprule for the causal_graph index drifting away from causal_future."""
    violations = []
    if set(state.causal_graph) != set(state.diamonds):
        violations.append("causal_graph keys differ from live diamond ids")
    for did, d in state.diamonds.items():
        indexed = state.causal_graph.get(did, [])
        if len(indexed) != len(set(indexed)) or set(indexed) != d.causal_future:
            violations.append(f"causal_graph[{did}] != causal_future")
    if violations:
        _halt(state, config, "causal_graph", "graph_divergence", violations)


def stoprule_aggregate_drift(state: EngineState, config: EngineConfig) -> None:
    """Stoprule for global aggregates that no longer match the live diamonds."""
    violations = []
    if state.diamonds:
        n = len(state.diamonds)
        coherence = sum(d.coherence for d in state.diamonds.values()) / n
        causality = sum(d.causality for d in state.diamonds.values()) / n
    else:
        coherence = config.coherence_baseline
        causality = config.causality_baseline
    if abs(state.global_coherence - coherence) > AGGREGATE_TOLERANCE:
        violations.append(f"global_coherence {state.global_coherence} != mean {coherence}")
    if abs(state.global_causality - causality) > AGGREGATE_TOLERANCE:
        violations.append(f"global_causality {state.global_causality} != mean {causality}")

    proper_time = sum(d.proper_time for d in state.diamonds.values())
    if abs(state.total_proper_time - proper_time) > AGGREGATE_TOLERANCE * max(1.0, proper_time):
        violations.append(f"total_proper_time {state.total_proper_time} != sum {proper_time}")
    if violations:
        _halt(state, config, "global_aggregates", "aggregate_drift", violations)


def validate_engine_state(state: EngineState, config: EngineConfig) -> bool:
    """Run every stoprule. Returns True or raises StopRule."""
    stoprule_causal_asymmetry(state, config)
    stoprule_graph_divergence(state, config)
    stoprule_aggregate_drift(state, config)
    return True
