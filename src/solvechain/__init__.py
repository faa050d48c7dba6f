"""Solvechain: logic-state propagation for decision graphs.

Users model a decision as a graph of reasoning nodes (goals, actions,
facts, assumptions, constraints, conclusions) joined by typed relations
(depends, supports, achieves, hinders, causes, conflicts). Solvechain
infers which nodes are true, false, unknown or contradictory, and
explains why.

Quick Start:
    from solvechain import GraphEdge, GraphNode, NodeType, PropagationEngine

    nodes = [
        GraphNode(id="a", type=NodeType.FACT, title="Budget approved", confidence=90),
        GraphNode(id="b", type=NodeType.GOAL, title="Launch in Q3", confidence=50),
    ]
    edges = [GraphEdge(id="e1", source_id="a", target_id="b", type="causes")]

    engine = PropagationEngine()
    result = engine.run(nodes, edges)
    print(result.explain("b"))

Relation types:
    - depends: B depends on A; A false makes B false
    - supports: A shifts B's confidence
    - achieves: A satisfies goal/constraint B
    - hinders: A weakens or falsifies B
    - causes: A implies B (with contrapositive)
    - conflicts: A and B exclude each other
"""

__version__ = "0.1.0"

# Configuration
from .config import Settings, settings

# Exceptions
from .exceptions import (
    ConfigurationError,
    RuleRegistrationError,
    SolvechainError,
    ValidationError,
)

# Logging
from .logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    logger,
    unbind_context,
)

# Models
from .models import (
    ConflictRecord,
    GraphEdge,
    GraphNode,
    LogicState,
    NodeState,
    NodeStateOverride,
    NodeType,
    PropagationEvent,
    PropagationResult,
    RelationType,
)

# Propagation
from .propagation import (
    PropagationEngine,
    PropagationEngineConfig,
    PropagationRule,
    RuleRegistry,
    register_rule,
    run_propagation,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    "settings",
    # Exceptions
    "SolvechainError",
    "ValidationError",
    "ConfigurationError",
    "RuleRegistrationError",
    # Logging
    "configure_logging",
    "get_logger",
    "logger",
    "bind_context",
    "clear_context",
    "unbind_context",
    # Models
    "GraphNode",
    "GraphEdge",
    "NodeType",
    "RelationType",
    "LogicState",
    "NodeState",
    "NodeStateOverride",
    "PropagationEvent",
    "ConflictRecord",
    "PropagationResult",
    # Propagation
    "PropagationEngine",
    "PropagationEngineConfig",
    "PropagationRule",
    "RuleRegistry",
    "register_rule",
    "run_propagation",
]
