"""Logic-state propagation over reasoning graphs.

Infers which nodes of a decision graph are true, false, unknown or in
conflict, by applying one inference rule per relation type until the
graph reaches a fixpoint.

Design principles:
- Rules are pure and pluggable (one per relation type, via RuleRegistry)
- The engine is the only writer of NodeState
- Every accepted change is recorded with a reason, for explanation
- Conflicts are results, not errors
- The iteration cap bounds every run

Example:
    ```python
    from solvechain.models import GraphEdge, GraphNode, NodeType
    from solvechain.propagation import PropagationEngine

    nodes = [
        GraphNode(id="a", type=NodeType.FACT, confidence=90),
        GraphNode(id="b", type=NodeType.GOAL, confidence=50),
    ]
    edges = [GraphEdge(id="e1", source_id="a", target_id="b", type="causes", strength=1.0)]

    result = PropagationEngine().run(nodes, edges)
    print(result.states["b"].explain())  # true (90.0): derived from a
    ```
"""

from .cycles import IMPLICATION_RELATIONS, detect_cycles, topological_order
from .engine import MIN_ACCEPTED_CONFIDENCE_DELTA, PropagationEngine, run_propagation
from .helpers import get_logic_state_color, get_logic_state_label, infer_logic_state
from .registry import (
    RuleRegistry,
    default_registry,
    get_all_rules,
    get_rule,
    has_rule,
    register_rule,
)
from .rules import (
    BUILTIN_RULES,
    AchievesRule,
    CausesRule,
    ConflictsRule,
    DependsRule,
    HindersRule,
    PropagationRule,
    SupportsRule,
)
from .strength import (
    LEGACY_STRENGTH_FALLBACK,
    LEGACY_STRENGTH_THRESHOLD,
    is_legacy_strength,
    normalize_strength,
    strength_fraction,
)
from .types import (
    DEFAULT_CONFIDENCE_DECAY,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MIN_CONFIDENCE,
    PropagationEngineConfig,
    PropagationInput,
    PropagationOutput,
)

__all__ = [
    # Engine
    "PropagationEngine",
    "PropagationEngineConfig",
    "run_propagation",
    # Rule contracts
    "PropagationInput",
    "PropagationOutput",
    "PropagationRule",
    # Rules
    "BUILTIN_RULES",
    "AchievesRule",
    "CausesRule",
    "ConflictsRule",
    "DependsRule",
    "HindersRule",
    "SupportsRule",
    # Registry
    "RuleRegistry",
    "default_registry",
    "get_all_rules",
    "get_rule",
    "has_rule",
    "register_rule",
    # Strength
    "is_legacy_strength",
    "normalize_strength",
    "strength_fraction",
    # Graph utilities
    "detect_cycles",
    "topological_order",
    # Helpers
    "get_logic_state_color",
    "get_logic_state_label",
    "infer_logic_state",
    # Constants
    "DEFAULT_CONFIDENCE_DECAY",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_MIN_CONFIDENCE",
    "IMPLICATION_RELATIONS",
    "LEGACY_STRENGTH_FALLBACK",
    "LEGACY_STRENGTH_THRESHOLD",
    "MIN_ACCEPTED_CONFIDENCE_DELTA",
]
