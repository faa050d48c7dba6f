"""Propagation rule for ACHIEVES relations.

A (usually an action) satisfies B (usually a goal or constraint):
- A true: B becomes true
- A false: B regresses to unknown, but only when B's truth came from A
  and no other achiever of B is currently true
"""

from __future__ import annotations

from solvechain.models import LogicState, RelationType
from solvechain.propagation.strength import normalize_strength
from solvechain.propagation.types import PropagationInput, PropagationOutput

from .base import PropagationRule

REGRESSION_PENALTY = 30.0


class AchievesRule(PropagationRule):
    """An executed action satisfies its target."""

    relation_type = RelationType.ACHIEVES
    name = "achievement"
    description = "If the action holds, its goal or constraint is satisfied"
    supports_bidirectional = False

    def infer(self, data: PropagationInput) -> PropagationOutput | None:
        source, target = data.source_state, data.target_state
        if target.logic_state == LogicState.CONFLICT:
            return None

        if source.logic_state == LogicState.TRUE:
            carried = self.carry(data, source.confidence * normalize_strength(data.edge.strength))
            if target.logic_state != LogicState.TRUE or target.confidence < carried:
                return PropagationOutput(
                    new_state=LogicState.TRUE,
                    new_confidence=max(target.confidence, carried),
                    derived_from=self.provenance(target.derived_from, data.source_node.id),
                    reason=f'"{data.source_node.label}" achieves "{data.target_node.label}"',
                )

        elif source.logic_state == LogicState.FALSE:
            if data.source_node.id in target.derived_from and not self._has_other_achiever(data):
                return PropagationOutput(
                    new_state=LogicState.UNKNOWN,
                    new_confidence=max(0.0, target.confidence - REGRESSION_PENALTY),
                    derived_from=[i for i in target.derived_from if i != data.source_node.id],
                    reason=(
                        f'"{data.source_node.label}" does not hold, '
                        f'"{data.target_node.label}" may not be achieved'
                    ),
                )

        return None

    @staticmethod
    def _has_other_achiever(data: PropagationInput) -> bool:
        for edge in data.edges_into(data.target_node.id):
            if edge.id == data.edge.id or edge.type != RelationType.ACHIEVES:
                continue
            state = data.all_states.get(edge.source_id)
            if state is not None and state.logic_state == LogicState.TRUE:
                return True
        return False
