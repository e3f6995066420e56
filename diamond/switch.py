"""
diamond/switch.py - Quantum Switch

Superpose the two operation orders of a pair of spacelike-separated targets,
controlled by a third diamond's qubit. Indefinite ordering costs causality.
"""

import math

from receipts import emit_receipt

from .metrics import diamond_xi, update_global_metrics
from .repository import are_spacelike
from .types_config import EngineConfig
from .types_result import QuantumSwitchResult, SwitchBranch
from .types_state import EngineState
from .validation import emit_refusal

# Module exports for receipt types
RECEIPT_SCHEMA = ["quantum_switch"]

INV_SQRT2 = 1 / math.sqrt(2)


def quantum_switch(state: EngineState, config: EngineConfig, control_id: str,
                   target1_id: str, target2_id: str) -> QuantumSwitchResult:
    """
    Build the superposition [t1, t2] (amplitude0) + [t2, t1] (amplitude1).

    Returns:
        QuantumSwitchResult with exactly two branches, or success=False and
        no branches if an id is unknown or the targets are not spacelike.
    """
    control = state.diamonds.get(control_id)
    if control is None or target1_id not in state.diamonds or target2_id not in state.diamonds:
        emit_refusal(state, config, "quantum_switch", "unknown_id", control_id=control_id,
                     target1_id=target1_id, target2_id=target2_id)
        return QuantumSwitchResult(success=False)

    if not are_spacelike(state, target1_id, target2_id):
        emit_refusal(state, config, "quantum_switch", "targets_not_spacelike",
                     target1_id=target1_id, target2_id=target2_id)
        return QuantumSwitchResult(success=False)

    orders = (
        SwitchBranch(order=(target1_id, target2_id),
                     amplitude=control.quantum_state.amplitude0 * INV_SQRT2),
        SwitchBranch(order=(target2_id, target1_id),
                     amplitude=control.quantum_state.amplitude1 * INV_SQRT2),
    )

    # A control that is also a target pays once
    for did in {control_id, target1_id, target2_id}:
        diamond = state.diamonds[did]
        diamond.causality *= config.switch_causality_cost
        diamond.xi = diamond_xi(config, diamond)
    update_global_metrics(state, config)

    state.receipt_ledger.append(emit_receipt("quantum_switch", {
        "tenant_id": config.tenant_id,
        "control_id": control_id,
        "target1_id": target1_id,
        "target2_id": target2_id,
        "branch_weights": [abs(b.amplitude) ** 2 for b in orders],
    }))

    return QuantumSwitchResult(success=True, superposition=True, orders=orders)
