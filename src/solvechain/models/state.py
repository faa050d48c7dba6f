"""Per-node logic state and the records a propagation run produces."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .graph import NodeType


class LogicState(str, Enum):
    """Logic state the engine assigns to a node."""

    TRUE = "true"
    FALSE = "false"
    UNKNOWN = "unknown"
    CONFLICT = "conflict"  # contradiction detected


# Which states an explicit assignment may give each node type.
# Facts are either true or false; only conclusions may be asserted as conflicting.
NODE_TYPE_ALLOWED_STATES: dict[NodeType, frozenset[LogicState]] = {
    NodeType.GOAL: frozenset({LogicState.TRUE, LogicState.FALSE, LogicState.UNKNOWN}),
    NodeType.ACTION: frozenset({LogicState.TRUE, LogicState.FALSE, LogicState.UNKNOWN}),
    NodeType.FACT: frozenset({LogicState.TRUE, LogicState.FALSE}),
    NodeType.ASSUMPTION: frozenset({LogicState.TRUE, LogicState.FALSE, LogicState.UNKNOWN}),
    NodeType.CONSTRAINT: frozenset({LogicState.TRUE, LogicState.FALSE, LogicState.UNKNOWN}),
    NodeType.CONCLUSION: frozenset(LogicState),
}


def is_state_allowed(node_type: NodeType, state: LogicState) -> bool:
    """Check whether a node of this type may be explicitly set to state."""
    return state in NODE_TYPE_ALLOWED_STATES.get(node_type, frozenset(LogicState))


def _now() -> datetime:
    return datetime.now(UTC)


class NodeState(BaseModel):
    """Engine-owned state of one node.

    Instances are immutable; the engine replaces a node's entry on every
    accepted change, so rules can hold references without seeing writes.

    Attributes:
        node_id: Node this state belongs to.
        logic_state: Current logic state.
        confidence: 0-100, independent of the node's static confidence after seeding.
        derived_from: Ids of the nodes whose state produced this one.
            Empty when the state was set by an explicit override.
        conflicts_with: Conflict partners when logic_state is CONFLICT.
        last_updated: When the state was last written.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    node_id: str = Field(description="Node id")
    logic_state: LogicState = Field(default=LogicState.UNKNOWN, description="Logic state")
    confidence: float = Field(default=50.0, ge=0.0, le=100.0, description="Confidence 0-100")
    derived_from: list[str] = Field(
        default_factory=list,
        description="Provenance: node ids this state was inferred from",
    )
    conflicts_with: list[str] | None = Field(
        default=None,
        description="Conflict partners (only when logic_state is CONFLICT)",
    )
    last_updated: datetime = Field(default_factory=_now, description="Last write time")

    @property
    def is_asserted(self) -> bool:
        """True when the state was not inferred from other nodes."""
        return not self.derived_from

    def explain(self) -> str:
        """Generate a one-line explanation of this state.

        Example: "false (72.0): derived from n_1, n_2"
        """
        head = f"{self.logic_state.value} ({self.confidence:.1f})"
        if self.is_asserted:
            body = "asserted"
        else:
            body = "derived from " + ", ".join(self.derived_from)
        if self.conflicts_with:
            body += "; conflicts with " + ", ".join(self.conflicts_with)
        return f"{head}: {body}"


class NodeStateOverride(BaseModel):
    """Partial state used to seed a node at the start of a run.

    Unset fields fall back to values derived from the node itself. A
    NodeState from an earlier result (or its model_dump()) is accepted as
    is; fields other than the three below are ignored.
    """

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    logic_state: LogicState | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=100.0)
    derived_from: list[str] | None = None


class PropagationEvent(BaseModel):
    """Audit record of one accepted state change.

    Attributes:
        from_node_id: Node whose state drove the change.
        to_node_id: Node whose state changed.
        edge_id: Edge traversed.
        relation_type: Relation type of that edge.
        old_state: Logic state before the change.
        new_state: Logic state after the change.
        old_confidence: Confidence before the change.
        new_confidence: Confidence after the change.
        reason: Human-readable reason from the rule.
        reversed: True when the edge was traversed target -> source.
        timestamp: When the change was applied.
    """

    model_config = ConfigDict(extra="forbid")

    from_node_id: str
    to_node_id: str
    edge_id: str
    relation_type: str
    old_state: LogicState
    new_state: LogicState
    old_confidence: float = 0.0
    new_confidence: float = 0.0
    reason: str = ""
    reversed: bool = False
    timestamp: datetime = Field(default_factory=_now)


class ConflictRecord(BaseModel):
    """A detected logical conflict.

    Overlapping records are expected; they are not deduplicated.
    """

    model_config = ConfigDict(extra="forbid")

    node_ids: list[str] = Field(description="Nodes involved, the conflicted node first")
    reason: str = Field(description="Why the conflict was reported")


class PropagationResult(BaseModel):
    """Result envelope of a run or incremental update.

    A result with converged=False is still meaningful: the state map is the
    best approximation reached within the iteration cap.

    Attributes:
        states: Final state per node id.
        events: Accepted state changes, in order.
        conflicts: Detected conflicts, in order.
        converged: Whether a pass produced no change.
        iterations: Number of passes executed.
        execution_time: Wall time in milliseconds.
        cycles: Cycles over implication edges (empty when detection is off).
    """

    model_config = ConfigDict(extra="forbid")

    states: dict[str, NodeState] = Field(default_factory=dict)
    events: list[PropagationEvent] = Field(default_factory=list)
    conflicts: list[ConflictRecord] = Field(default_factory=list)
    converged: bool = Field(default=False)
    iterations: int = Field(default=0, ge=0)
    execution_time: float = Field(default=0.0, ge=0.0)
    cycles: list[list[str]] = Field(default_factory=list)

    def events_for(self, node_id: str) -> list[PropagationEvent]:
        """Return the events that changed node_id, oldest first."""
        return [event for event in self.events if event.to_node_id == node_id]

    def explain(self, node_id: str) -> str:
        """Explain how node_id reached its final state.

        Returns the state summary followed by the reasons of every event
        that wrote the node.
        """
        state = self.states.get(node_id)
        if state is None:
            return f"{node_id}: no state"
        lines = [f"{node_id}: {state.explain()}"]
        for event in self.events_for(node_id):
            arrow = "<-" if event.reversed else "->"
            lines.append(
                f"  {event.from_node_id} {arrow} {node_id} [{event.relation_type}] "
                f"{event.old_state.value} => {event.new_state.value}: {event.reason}"
            )
        return "\n".join(lines)


__all__ = [
    "ConflictRecord",
    "LogicState",
    "NODE_TYPE_ALLOWED_STATES",
    "NodeState",
    "NodeStateOverride",
    "PropagationEvent",
    "PropagationResult",
    "is_state_allowed",
]
