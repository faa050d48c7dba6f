"""Propagation rule for CAUSES relations.

A causes B (A => B), the strongest relation:
- A true: B becomes true
- A true but B false: contradiction, B is marked as conflicting with A
- contrapositive, evaluated when the engine walks the edge in reverse:
  B false makes A false
"""

from __future__ import annotations

from solvechain.models import LogicState, RelationType
from solvechain.propagation.strength import normalize_strength
from solvechain.propagation.types import PropagationInput, PropagationOutput

from .base import PropagationRule


class CausesRule(PropagationRule):
    """Strong implication with contrapositive inference."""

    relation_type = RelationType.CAUSES
    name = "causation"
    description = "A true makes B true; B false makes A false"
    supports_bidirectional = True

    def infer(self, data: PropagationInput) -> PropagationOutput | None:
        if data.target_state.logic_state == LogicState.CONFLICT:
            return None
        if data.reversed:
            return self._contrapositive(data)
        return self._forward(data)

    def _forward(self, data: PropagationInput) -> PropagationOutput | None:
        cause, effect = data.source_state, data.target_state
        if cause.logic_state != LogicState.TRUE:
            return None

        if effect.logic_state == LogicState.FALSE:
            return PropagationOutput(
                new_state=LogicState.CONFLICT,
                new_confidence=min(cause.confidence, effect.confidence),
                derived_from=self.provenance(effect.derived_from, data.source_node.id),
                conflicts_with=[data.source_node.id],
                reason=(
                    f'Contradiction: "{data.source_node.label}" is true '
                    f'but its effect "{data.target_node.label}" is false'
                ),
            )

        carried = self.carry(data, cause.confidence * normalize_strength(data.edge.strength))
        if effect.logic_state != LogicState.TRUE or effect.confidence < carried:
            return PropagationOutput(
                new_state=LogicState.TRUE,
                new_confidence=max(effect.confidence, carried),
                derived_from=self.provenance(effect.derived_from, data.source_node.id),
                reason=f'"{data.source_node.label}" causes "{data.target_node.label}"',
            )

        return None

    def _contrapositive(self, data: PropagationInput) -> PropagationOutput | None:
        # Swapped: source is the effect, target is the cause
        effect, cause = data.source_state, data.target_state
        if effect.logic_state != LogicState.FALSE:
            return None

        if cause.logic_state == LogicState.TRUE:
            return PropagationOutput(
                new_state=LogicState.CONFLICT,
                new_confidence=min(cause.confidence, effect.confidence),
                derived_from=self.provenance(cause.derived_from, data.source_node.id),
                conflicts_with=[data.source_node.id],
                reason=(
                    f'Contradiction: "{data.target_node.label}" is true '
                    f'but its effect "{data.source_node.label}" is false'
                ),
            )

        if cause.logic_state != LogicState.FALSE:
            return PropagationOutput(
                new_state=LogicState.FALSE,
                new_confidence=self.carry(
                    data, effect.confidence * normalize_strength(data.edge.strength)
                ),
                derived_from=self.provenance(cause.derived_from, data.source_node.id),
                reason=(
                    f'"{data.source_node.label}" is false, so its cause '
                    f'"{data.target_node.label}" is false'
                ),
            )

        return None
