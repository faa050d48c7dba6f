"""Propagation rule for DEPENDS relations.

Edge A -> B means "B depends on A":
- A false: B cannot hold, B becomes false
- A in conflict: B inherits the conflict
- A true: one of B's preconditions is met, nothing follows on its own
"""

from __future__ import annotations

from solvechain.models import LogicState, RelationType
from solvechain.propagation.types import PropagationInput, PropagationOutput

from .base import PropagationRule

# Dependents are slightly less certain than what they depend on
DEPENDENCY_CONFIDENCE_FACTOR = 0.9


class DependsRule(PropagationRule):
    """A false dependency makes its dependent false."""

    relation_type = RelationType.DEPENDS
    name = "dependency"
    description = "If the node depended on is false, the dependent cannot be true"
    supports_bidirectional = False

    def infer(self, data: PropagationInput) -> PropagationOutput | None:
        source, target = data.source_state, data.target_state
        if target.logic_state == LogicState.CONFLICT:
            return None

        if source.logic_state == LogicState.CONFLICT:
            return PropagationOutput(
                new_state=LogicState.CONFLICT,
                new_confidence=source.confidence,
                derived_from=self.provenance(target.derived_from, data.source_node.id),
                conflicts_with=list(source.conflicts_with or [data.source_node.id]),
                reason=(
                    f'"{data.target_node.label}" depends on "{data.source_node.label}", '
                    "which is in conflict"
                ),
            )

        if source.logic_state == LogicState.FALSE and target.logic_state != LogicState.FALSE:
            return PropagationOutput(
                new_state=LogicState.FALSE,
                new_confidence=self.carry(data, source.confidence * DEPENDENCY_CONFIDENCE_FACTOR),
                derived_from=self.provenance(target.derived_from, data.source_node.id),
                reason=(
                    f'"{data.target_node.label}" depends on "{data.source_node.label}", '
                    "which is false"
                ),
            )

        return None
