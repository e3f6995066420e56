"""
diamond/process_matrix.py - Process-Matrix Analyzer

Decide whether a set of diamonds admits a definite causal order and report
a causal witness. Dimensions are reported, never materialized.
"""

from itertools import combinations
from typing import Iterable

import networkx as nx

from receipts import emit_receipt

from .repository import are_spacelike, causal_dag
from .types_config import EngineConfig
from .types_result import ProcessMatrixResult
from .types_state import EngineState

# Module exports for receipt types
RECEIPT_SCHEMA = ["process_matrix"]


def compute_process_matrix(state: EngineState, config: EngineConfig,
                           diamond_ids: Iterable[str]) -> ProcessMatrixResult:
    """
    Analyze the causal structure of a set of diamonds.

    Unknown ids are ignored. Fewer than two known diamonds is trivially
    orderable with zero witness.

    witness_value = mean(causality - 0.5); negative means indefinite order.
    """
    ids = []
    for did in diamond_ids:
        if did in state.diamonds and did not in ids:
            ids.append(did)

    if len(ids) < 2:
        return ProcessMatrixResult(dimensions=0, trace=0.0, causally_orderable=True, witness_value=0.0)

    n = len(ids)
    causally_orderable = not any(are_spacelike(state, a, b) for a, b in combinations(ids, 2))

    causal_order = ()
    if causally_orderable:
        sub = causal_dag(state).subgraph(ids)
        if nx.is_directed_acyclic_graph(sub):
            causal_order = tuple(nx.lexicographical_topological_sort(sub))
        else:
            causally_orderable = False

    witness_value = sum(state.diamonds[did].causality - 0.5 for did in ids) / n

    result = ProcessMatrixResult(
        dimensions=2 ** n,
        trace=1.0,
        causally_orderable=causally_orderable,
        witness_value=witness_value,
        causal_order=causal_order,
    )
    state.receipt_ledger.append(emit_receipt("process_matrix", {
        "tenant_id": config.tenant_id,
        **result.to_dict()
    }))
    return result
