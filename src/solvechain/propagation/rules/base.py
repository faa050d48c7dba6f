"""Abstract propagation rule.

A rule is a pure function of one PropagationInput. It never mutates the
states it is given; it returns a new PropagationOutput (or None for "no
change") and the engine decides whether to apply it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from solvechain.propagation.types import PropagationInput, PropagationOutput


class PropagationRule(ABC):
    """Inference rule for one relation type.

    Subclasses set the class attributes and implement infer(). propagate()
    applies the configured confidence floor before delegating.

    Attributes:
        relation_type: Edge type tag this rule handles.
        name: Short display name.
        description: What the rule infers.
        supports_bidirectional: Whether the engine should also evaluate the
            edge target -> source (with PropagationInput.reversed set).
    """

    relation_type: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str] = ""
    supports_bidirectional: ClassVar[bool] = False

    def propagate(self, data: PropagationInput) -> PropagationOutput | None:
        """Compute the update this edge implies, or None."""
        if data.source_state.confidence < data.config.min_confidence:
            return None
        return self.infer(data)

    @abstractmethod
    def infer(self, data: PropagationInput) -> PropagationOutput | None:
        """Rule-specific inference."""

    @staticmethod
    def carry(data: PropagationInput, confidence: float) -> float:
        """Apply the configured decay to a confidence carried across the edge."""
        return confidence * data.config.confidence_decay

    @staticmethod
    def provenance(existing: list[str], node_id: str) -> list[str]:
        """Return existing provenance with node_id appended once."""
        if node_id in existing:
            return list(existing)
        return [*existing, node_id]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(relation_type={self.relation_type!r})"
