"""Propagation rule for HINDERS relations.

A true hinderer lowers the target's confidence; a strong one (strength
above 80% and a hinderer more than 70 confident) forces it false. A false
hinderer simply stops hindering: nothing is retracted.

Current-encoded strengths are already fractions, so the default strength
of 1.0 counts as a strong hinder.
"""

from __future__ import annotations

from solvechain.models import LogicState, RelationType
from solvechain.propagation.strength import strength_fraction
from solvechain.propagation.types import PropagationInput, PropagationOutput

from .base import PropagationRule

STRONG_HINDER_FRACTION = 0.8
STRONG_HINDER_MIN_CONFIDENCE = 70.0
DROP_FACTOR = 0.5
FALSE_BELOW = 20.0
MIN_CONFIDENCE_CHANGE = 5.0


class HindersRule(PropagationRule):
    """A true hinderer weakens or falsifies its target."""

    relation_type = RelationType.HINDERS
    name = "hindrance"
    description = "A true lowers B's confidence, or makes B false when strong"
    supports_bidirectional = False

    def infer(self, data: PropagationInput) -> PropagationOutput | None:
        source, target = data.source_state, data.target_state
        if source.logic_state != LogicState.TRUE or target.logic_state == LogicState.CONFLICT:
            return None

        fraction = strength_fraction(data.edge.strength)
        derived_from = self.provenance(target.derived_from, data.source_node.id)

        if fraction > STRONG_HINDER_FRACTION and source.confidence > STRONG_HINDER_MIN_CONFIDENCE:
            return PropagationOutput(
                new_state=LogicState.FALSE,
                new_confidence=self.carry(data, source.confidence * fraction),
                derived_from=derived_from,
                reason=f'"{data.source_node.label}" strongly hinders "{data.target_node.label}"',
            )

        drop = self.carry(data, source.confidence * fraction * DROP_FACTOR)
        new_confidence = max(0.0, target.confidence - drop)
        if target.confidence - new_confidence > MIN_CONFIDENCE_CHANGE:
            return PropagationOutput(
                new_state=LogicState.FALSE if new_confidence < FALSE_BELOW else target.logic_state,
                new_confidence=new_confidence,
                derived_from=derived_from,
                reason=(
                    f'"{data.source_node.label}" hinders "{data.target_node.label}", '
                    "confidence lowered"
                ),
            )

        return None
