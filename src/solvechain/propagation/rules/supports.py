"""Propagation rule for SUPPORTS relations.

A soft positive influence: A being true raises B's confidence, A being
false lowers it slightly. Only an Unknown target changes logic state.
"""

from __future__ import annotations

from solvechain.models import LogicState, RelationType
from solvechain.propagation.strength import strength_fraction
from solvechain.propagation.types import PropagationInput, PropagationOutput

from .base import PropagationRule

BOOST_FACTOR = 0.3
DROP_FACTOR = 0.1
MIN_CONFIDENCE_CHANGE = 5.0  # smaller changes are not emitted


class SupportsRule(PropagationRule):
    """Shift the target's confidence toward the supporter's state."""

    relation_type = RelationType.SUPPORTS
    name = "support"
    description = "A true raises B's confidence; A false lowers it"
    supports_bidirectional = False

    def infer(self, data: PropagationInput) -> PropagationOutput | None:
        source, target = data.source_state, data.target_state
        if target.logic_state == LogicState.CONFLICT:
            return None

        fraction = strength_fraction(data.edge.strength)

        if source.logic_state == LogicState.TRUE:
            boost = self.carry(data, source.confidence * fraction * BOOST_FACTOR)
            new_confidence = min(100.0, target.confidence + boost)
            if new_confidence - target.confidence > MIN_CONFIDENCE_CHANGE:
                new_state = (
                    LogicState.TRUE
                    if target.logic_state == LogicState.UNKNOWN
                    else target.logic_state
                )
                return PropagationOutput(
                    new_state=new_state,
                    new_confidence=new_confidence,
                    derived_from=self.provenance(target.derived_from, data.source_node.id),
                    reason=(
                        f'"{data.source_node.label}" supports "{data.target_node.label}", '
                        "confidence raised"
                    ),
                )

        elif source.logic_state == LogicState.FALSE:
            drop = self.carry(data, source.confidence * fraction * DROP_FACTOR)
            new_confidence = max(0.0, target.confidence - drop)
            if target.confidence - new_confidence > MIN_CONFIDENCE_CHANGE:
                return PropagationOutput(
                    new_state=target.logic_state,
                    new_confidence=new_confidence,
                    derived_from=self.provenance(target.derived_from, data.source_node.id),
                    reason=(
                        f'"{data.source_node.label}" does not hold, '
                        f'"{data.target_node.label}" confidence lowered'
                    ),
                )

        return None
