"""Rule contracts and engine configuration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from solvechain.exceptions import ConfigurationError
from solvechain.models import GraphEdge, GraphNode, LogicState, NodeState

if TYPE_CHECKING:
    from solvechain.config import Settings


# Default configuration
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_CONFIDENCE_DECAY = 1.0  # no decay
DEFAULT_MIN_CONFIDENCE = 0.0  # no floor


@dataclass
class PropagationEngineConfig:
    """Configuration for a PropagationEngine.

    Attributes:
        max_iterations: Maximum full passes per run (and per incremental update).
        confidence_decay: Multiplier applied to every confidence carried from
            source to target (0 < decay <= 1).
        min_confidence: Sources below this confidence propagate nothing.
        enable_conflict_detection: Accept and record Conflict outcomes.
        enable_cycle_detection: Report cycles over Depends/Causes edges on run.
        enforce_node_type_states: Reject explicit assignments the node type disallows.

    Raises:
        ConfigurationError: If any value is out of range.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    confidence_decay: float = DEFAULT_CONFIDENCE_DECAY
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    enable_conflict_detection: bool = True
    enable_cycle_detection: bool = True
    enforce_node_type_states: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
            raise ConfigurationError(
                f"max_iterations must be an integer, got {self.max_iterations!r}"
            )
        if self.max_iterations <= 0:
            raise ConfigurationError(f"max_iterations must be positive, got {self.max_iterations}")
        if not 0.0 < self.confidence_decay <= 1.0:
            raise ConfigurationError(
                f"confidence_decay must be in (0, 1], got {self.confidence_decay}"
            )
        if not 0.0 <= self.min_confidence <= 100.0:
            raise ConfigurationError(
                f"min_confidence must be in [0, 100], got {self.min_confidence}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> PropagationEngineConfig:
        """Build a config from the propagation_* fields of Settings."""
        return cls(
            max_iterations=settings.propagation_max_iterations,
            confidence_decay=settings.propagation_confidence_decay,
            min_confidence=settings.propagation_min_confidence,
            enable_conflict_detection=settings.propagation_enable_conflict_detection,
            enable_cycle_detection=settings.propagation_enable_cycle_detection,
            enforce_node_type_states=settings.propagation_enforce_node_type_states,
        )


@dataclass(frozen=True)
class PropagationInput:
    """Everything a rule sees when evaluating one edge.

    When the engine traverses a bidirectional edge in reverse, source and
    target are swapped (source is the edge's target node) and reversed is
    True; edge is always the original edge.

    The all_* collections are read-only views over the whole snapshot so
    rules can look beyond the single edge (e.g. other achievers of a target).
    """

    source_node: GraphNode
    source_state: NodeState
    target_node: GraphNode
    target_state: NodeState
    edge: GraphEdge
    all_nodes: Mapping[str, GraphNode]
    all_edges: Sequence[GraphEdge]
    all_states: Mapping[str, NodeState]
    incoming_edges: Mapping[str, Sequence[GraphEdge]] = field(default_factory=dict)
    config: PropagationEngineConfig = field(default_factory=PropagationEngineConfig)
    reversed: bool = False

    def edges_into(self, node_id: str) -> Sequence[GraphEdge]:
        """Edges whose target is node_id."""
        if self.incoming_edges:
            return self.incoming_edges.get(node_id, ())
        return tuple(e for e in self.all_edges if e.target_id == node_id)


@dataclass(frozen=True)
class PropagationOutput:
    """State update a rule proposes for the (possibly swapped) target.

    Attributes:
        new_state: Proposed logic state.
        new_confidence: Proposed confidence (clamped to 0-100 by the engine).
        derived_from: Proposed provenance list.
        conflicts_with: Conflict partners when new_state is CONFLICT.
        should_propagate: Whether traversal should continue past the target.
        reason: Human-readable reason recorded on the event.
    """

    new_state: LogicState
    new_confidence: float
    derived_from: list[str]
    conflicts_with: list[str] | None = None
    should_propagate: bool = True
    reason: str = ""


__all__ = [
    "DEFAULT_CONFIDENCE_DECAY",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_MIN_CONFIDENCE",
    "PropagationEngineConfig",
    "PropagationInput",
    "PropagationOutput",
]
