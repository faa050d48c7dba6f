"""Data models for Solvechain.

Graph snapshot (owned by the caller, read-only to the engine):
    - GraphNode, NodeType
    - GraphEdge, RelationType

Engine state and results:
    - LogicState: True / False / Unknown / Conflict
    - NodeState: Per-node state with provenance
    - NodeStateOverride: Partial seed for a run
    - PropagationEvent: Audit record of one accepted change
    - ConflictRecord: Detected logical conflict
    - PropagationResult: Result envelope of a run
"""

from .graph import GraphEdge, GraphNode, NodeType, RelationType
from .state import (
    NODE_TYPE_ALLOWED_STATES,
    ConflictRecord,
    LogicState,
    NodeState,
    NodeStateOverride,
    PropagationEvent,
    PropagationResult,
    is_state_allowed,
)

__all__ = [
    # Graph
    "GraphEdge",
    "GraphNode",
    "NodeType",
    "RelationType",
    # State
    "LogicState",
    "NODE_TYPE_ALLOWED_STATES",
    "NodeState",
    "NodeStateOverride",
    "is_state_allowed",
    # Results
    "ConflictRecord",
    "PropagationEvent",
    "PropagationResult",
]
