"""Propagation rule for CONFLICTS relations.

A and B exclude each other (symmetric):
- A true and B true: both are in conflict, each naming the other
- A true: B must be false
- A false: says nothing about B

The engine evaluates the edge from both endpoints. The forward pass marks
the target; the reverse pass sees a conflicted source naming its partner
and marks the partner too.
"""

from __future__ import annotations

from solvechain.models import LogicState, RelationType
from solvechain.propagation.types import PropagationInput, PropagationOutput

from .base import PropagationRule

EXCLUSION_CONFIDENCE_FACTOR = 0.95


class ConflictsRule(PropagationRule):
    """Mutual exclusion between two nodes."""

    relation_type = RelationType.CONFLICTS
    name = "mutual conflict"
    description = "A true makes B false; A and B cannot both be true"
    supports_bidirectional = True

    def infer(self, data: PropagationInput) -> PropagationOutput | None:
        source, target = data.source_state, data.target_state
        source_id = data.source_node.id

        if target.logic_state == LogicState.CONFLICT:
            return None

        if target.logic_state == LogicState.TRUE and (
            source.logic_state == LogicState.TRUE
            or (
                source.logic_state == LogicState.CONFLICT
                and data.target_node.id in (source.conflicts_with or [])
            )
        ):
            return PropagationOutput(
                new_state=LogicState.CONFLICT,
                new_confidence=min(source.confidence, target.confidence),
                derived_from=self.provenance(target.derived_from, source_id),
                conflicts_with=[source_id],
                reason=(
                    f'Conflict: "{data.source_node.label}" and "{data.target_node.label}" '
                    "cannot both be true"
                ),
            )

        if source.logic_state == LogicState.TRUE and target.logic_state != LogicState.FALSE:
            return PropagationOutput(
                new_state=LogicState.FALSE,
                new_confidence=self.carry(data, source.confidence * EXCLUSION_CONFIDENCE_FACTOR),
                derived_from=self.provenance(target.derived_from, source_id),
                reason=(
                    f'"{data.source_node.label}" is true, so the conflicting '
                    f'"{data.target_node.label}" is false'
                ),
            )

        return None
