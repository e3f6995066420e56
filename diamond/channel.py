"""
diamond/channel.py - Quantum Channel

Transmit a diamond's two-level state to another diamond. Ordinary sends need
the source apex in the causal past (or on the past light cone) of the target
base; spacelike-registered pairs may use the indefinite-order path.
"""

import math

from receipts import emit_receipt

from .geometry import precedes, spacetime_interval
from .metrics import clamp_coherence, diamond_xi, update_global_metrics
from .repository import are_spacelike
from .types_config import EngineConfig
from .types_result import QuantumChannelResult
from .types_state import EngineState
from .validation import emit_refusal

# Module exports for receipt types
RECEIPT_SCHEMA = ["quantum_channel"]


def channel_fidelity(config: EngineConfig, source_coherence: float, target_coherence: float,
                     source_curvature: float, target_curvature: float, latency: float) -> float:
    """Fidelity degrades with both endpoints' curvature and with latency."""
    curvature_effect = math.exp(-(source_curvature + target_curvature) * config.curvature_scale)
    distance_effect = math.exp(-latency / config.latency_scale)
    return source_coherence * target_coherence * curvature_effect * distance_effect


def send_quantum_info(state: EngineState, config: EngineConfig, source_id: str,
                      target_id: str) -> QuantumChannelResult:
    """
    Send the source diamond's quantum state to the target diamond.

    Returns:
        QuantumChannelResult. On refusal success=False, fidelity and latency
        are zero and the target is untouched.
    """
    source = state.diamonds.get(source_id)
    target = state.diamonds.get(target_id)
    if source is None or target is None:
        emit_refusal(state, config, "send_quantum_info", "unknown_id",
                     source_id=source_id, target_id=target_id)
        return QuantumChannelResult(success=False, source_id=source_id, target_id=target_id)

    causally_ordered = precedes(source.apex, target.base, config.relation_epsilon)
    indefinite_causal_order = are_spacelike(state, source_id, target_id)

    if not causally_ordered and not indefinite_causal_order:
        emit_refusal(state, config, "send_quantum_info", "causality_violation",
                     source_id=source_id, target_id=target_id)
        return QuantumChannelResult(success=False, source_id=source_id, target_id=target_id)

    latency = math.sqrt(abs(spacetime_interval(source.apex, target.base)))
    fidelity = channel_fidelity(config, source.coherence, target.coherence,
                                source.curvature, target.curvature, latency)

    target.quantum_state = source.quantum_state.copy()
    target.coherence = clamp_coherence(min(target.coherence, source.coherence * fidelity))
    target.xi = diamond_xi(config, target)
    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("quantum_channel", {
        "tenant_id": config.tenant_id,
        "source_id": source_id,
        "target_id": target_id,
        "fidelity": fidelity,
        "latency": latency,
        "causally_ordered": causally_ordered,
        "indefinite_causal_order": indefinite_causal_order,
    }))

    return QuantumChannelResult(
        success=True,
        source_id=source_id,
        target_id=target_id,
        fidelity=fidelity,
        latency=latency,
        causally_ordered=causally_ordered,
        indefinite_causal_order=indefinite_causal_order,
    )
