"""Graph snapshot models: the nodes and edges handed to the engine.

Nodes and edges are owned by the caller (editor, API or storage layer)
and are read-only to the engine. A run works on one in-memory snapshot.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeType(str, Enum):
    """Kind of reasoning node in a decision graph."""

    GOAL = "goal"
    ACTION = "action"
    FACT = "fact"
    ASSUMPTION = "assumption"
    CONSTRAINT = "constraint"
    CONCLUSION = "conclusion"


class RelationType(str, Enum):
    """Built-in edge relation types.

    Edges carry a plain string tag, so relation types beyond these six can
    be introduced by registering a rule for them.
    """

    DEPENDS = "depends"  # B depends on A (edge A -> B)
    SUPPORTS = "supports"  # soft positive influence
    ACHIEVES = "achieves"  # action/mechanism satisfies a goal or constraint
    HINDERS = "hinders"  # negative influence
    CAUSES = "causes"  # strong implication A => B
    CONFLICTS = "conflicts"  # mutual exclusion


class GraphNode(BaseModel):
    """A reasoning node.

    Attributes:
        id: Unique node identifier.
        type: Node kind.
        title: Display title, used in propagation reasons.
        confidence: Static confidence 0-100, used only to seed a run.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1, description="Unique node identifier")
    type: NodeType = Field(description="Node kind")
    title: str = Field(default="", description="Display title")
    confidence: float = Field(default=50.0, ge=0.0, le=100.0, description="Seed confidence 0-100")

    @property
    def label(self) -> str:
        """Title if set, otherwise the id."""
        return self.title or self.id


class GraphEdge(BaseModel):
    """A typed relation between two nodes.

    Strength has two historical encodings: a 0-100 percentage (legacy) and a
    0.1-2.0 multiplier (current). Both are accepted here unchanged; each rule
    interprets strength through solvechain.propagation.strength.

    Attributes:
        id: Unique edge identifier.
        source_id: Source node id.
        target_id: Target node id.
        type: Relation type tag (a RelationType value or a custom tag).
        strength: Edge weight in either encoding.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1, description="Unique edge identifier")
    source_id: str = Field(description="Source node id")
    target_id: str = Field(description="Target node id")
    type: str = Field(description="Relation type tag")
    strength: float = Field(default=1.0, ge=0.0, description="Edge weight (percentage or multiplier)")

    @field_validator("type", mode="before")
    @classmethod
    def _relation_tag(cls, value: object) -> object:
        if isinstance(value, Enum):
            return value.value
        return value


__all__ = [
    "GraphEdge",
    "GraphNode",
    "NodeType",
    "RelationType",
]
