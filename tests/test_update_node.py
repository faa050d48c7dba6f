"""Tests for incremental propagation via PropagationEngine.update_node."""

from __future__ import annotations

import pytest
from graph_factories import make_edge, make_node

from solvechain.exceptions import ValidationError
from solvechain.models import LogicState, NodeType
from solvechain.propagation import PropagationEngine

T, F, U, C = LogicState.TRUE, LogicState.FALSE, LogicState.UNKNOWN, LogicState.CONFLICT


class TestUpdateNode:
    """Tests for explicit user edits."""

    def test_asserted_state_clears_provenance(self, engine: PropagationEngine) -> None:
        """An edited node no longer claims to be derived."""
        nodes = [make_node("a", confidence=50), make_node("b", confidence=50)]
        edges = [make_edge("a", "b", "depends")]
        engine.run(nodes, edges, initial_states={"a": {"logic_state": "false"}})
        assert engine.get_node_state("b").derived_from == ["a"]

        result = engine.update_node("b", T, nodes, edges)

        assert result.states["b"].logic_state == T
        assert result.states["b"].derived_from == []
        assert result.states["b"].is_asserted

    def test_changes_propagate_downstream(self, engine: PropagationEngine) -> None:
        """Setting a cause true makes its effect chain true."""
        nodes = [make_node("a"), make_node("b"), make_node("c")]
        edges = [make_edge("a", "b", "causes"), make_edge("b", "c", "achieves")]
        engine.run(nodes, edges)

        result = engine.update_node("a", T, nodes, edges)

        assert result.states["b"].logic_state == T
        assert result.states["c"].logic_state == T
        assert result.states["c"].derived_from == ["b"]
        assert result.converged is True

    def test_action_withdrawn_regresses_goal(self, engine: PropagationEngine) -> None:
        """An action marked not executed un-achieves the goal it achieved."""
        nodes = [make_node("act", NodeType.ACTION, 80), make_node("goal", NodeType.GOAL, 30)]
        edges = [make_edge("act", "goal", "achieves")]
        run = engine.run(nodes, edges)
        assert run.states["goal"].logic_state == T
        assert run.states["goal"].confidence == pytest.approx(80.0)

        result = engine.update_node("act", F, nodes, edges)

        goal = result.states["goal"]
        assert goal.logic_state == U
        assert goal.confidence == pytest.approx(50.0)
        assert goal.derived_from == []
        assert result.iterations == 2

    def test_contrapositive_walks_edge_backwards(self, engine: PropagationEngine) -> None:
        """Marking an effect false makes its cause false."""
        nodes = [make_node("a"), make_node("b")]
        edges = [make_edge("a", "b", "causes")]
        engine.run(nodes, edges)

        result = engine.update_node("b", F, nodes, edges)

        assert result.states["a"].logic_state == F
        assert result.states["a"].derived_from == ["b"]
        reverse_events = [e for e in result.events if e.reversed]
        assert len(reverse_events) == 1
        assert reverse_events[0].to_node_id == "a"

    def test_false_effect_of_true_cause_conflicts_the_cause(self, engine: PropagationEngine) -> None:
        """Denying the effect of a true cause puts the cause in conflict."""
        nodes = [make_node("a", NodeType.FACT, 90), make_node("b", NodeType.GOAL, 50)]
        edges = [make_edge("a", "b", "causes")]
        engine.run(nodes, edges)

        result = engine.update_node("b", F, nodes, edges)

        assert result.states["b"].logic_state == F
        assert result.states["b"].derived_from == []
        assert result.states["a"].logic_state == C
        assert result.states["a"].conflicts_with == ["b"]
        assert result.conflicts[-1].node_ids == ["a", "b"]

    def test_conflict_marks_both_sides(self, engine: PropagationEngine) -> None:
        """Asserting the excluded node true conflicts both endpoints."""
        nodes = [make_node("a", confidence=90), make_node("b", confidence=50)]
        edges = [make_edge("a", "b", "conflicts")]
        run = engine.run(nodes, edges)
        assert run.states["b"].logic_state == F

        result = engine.update_node("b", T, nodes, edges)

        assert result.states["a"].logic_state == C
        assert result.states["b"].logic_state == C
        assert result.states["a"].conflicts_with == ["b"]
        assert result.states["b"].conflicts_with == ["a"]

    def test_explicit_edit_can_leave_conflict(self, engine: PropagationEngine) -> None:
        """Only an explicit assignment moves a node out of Conflict."""
        nodes = [make_node("a", confidence=90), make_node("b", confidence=90)]
        edges = [make_edge("a", "b", "conflicts")]
        engine.run(nodes, edges)

        result = engine.update_node("a", F, nodes, edges)

        assert result.states["a"].logic_state == F
        assert result.states["a"].conflicts_with is None
        assert result.states["b"].logic_state == C

    def test_cyclic_graph_terminates(self, engine: PropagationEngine) -> None:
        """A dependency loop does not make the update run forever."""
        nodes = [make_node("a"), make_node("b"), make_node("c")]
        edges = [
            make_edge("a", "b", "depends"),
            make_edge("b", "c", "depends"),
            make_edge("c", "a", "depends"),
        ]
        engine.run(nodes, edges)

        result = engine.update_node("a", F, nodes, edges)

        assert result.converged is True
        assert result.iterations <= engine.config.max_iterations
        assert result.states["b"].logic_state == F
        assert result.states["c"].logic_state == F
        assert result.states["a"].logic_state == F

    def test_first_call_seeds_states(self, engine: PropagationEngine) -> None:
        """update_node works without a prior run."""
        nodes = [make_node("a"), make_node("b")]
        edges = [make_edge("a", "b", "causes")]

        result = engine.update_node("a", T, nodes, edges)

        assert result.states["b"].logic_state == T
        assert result.states["b"].confidence == pytest.approx(50.0)

    def test_new_nodes_seeded(self, engine: PropagationEngine) -> None:
        """Nodes added after the last run get a seeded state."""
        engine.run([make_node("a")], [])
        nodes = [make_node("a"), make_node("b", confidence=10)]

        result = engine.update_node("a", T, nodes, [])

        assert result.states["b"].logic_state == F

    def test_unknown_node_is_a_no_op(self, engine: PropagationEngine) -> None:
        """An unknown id changes nothing and reports convergence."""
        nodes = [make_node("a")]
        engine.run(nodes, [])

        result = engine.update_node("ghost", T, nodes, [])

        assert result.converged is True
        assert result.iterations == 0
        assert result.states["a"].logic_state == U
        assert result.events == []

    def test_disallowed_state_raises(self, engine: PropagationEngine) -> None:
        """A Fact cannot be set to Unknown."""
        nodes = [make_node("a", NodeType.FACT, 90)]
        engine.run(nodes, [])

        with pytest.raises(ValidationError) as exc_info:
            engine.update_node("a", U, nodes, [])
        assert exc_info.value.field == "new_state"
        assert engine.get_node_state("a").logic_state == T

    def test_string_state_accepted(self, engine: PropagationEngine) -> None:
        """Plain string values are coerced to LogicState."""
        nodes = [make_node("a")]
        result = engine.update_node("a", "false", nodes, [])
        assert result.states["a"].logic_state == F

    def test_invalid_state_string_raises(self, engine: PropagationEngine) -> None:
        """Strings that are not logic states raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            engine.update_node("a", "maybe", [make_node("a")], [])
        assert exc_info.value.field == "new_state"

    def test_events_accumulate_until_next_run(self, engine: PropagationEngine) -> None:
        """Incremental updates append to the events of the last run.

        Falsifying c's dependent b also denies the effect of the true cause a,
        so the contrapositive puts a in conflict with b.
        """
        nodes = [make_node("a", confidence=90), make_node("b"), make_node("c")]
        edges = [make_edge("a", "b", "causes"), make_edge("c", "b", "depends")]
        run = engine.run(nodes, edges)
        assert len(run.events) == 1

        result = engine.update_node("c", F, nodes, edges)

        assert len(result.events) == 3
        assert result.events[0] == run.events[0]
        assert result.events[1].from_node_id == "c"
        assert result.events[1].new_state == F
        assert result.events[2].reversed is True
        assert result.events[2].to_node_id == "a"
        assert result.states["a"].logic_state == C
        assert result.states["a"].conflicts_with == ["b"]
        assert [record.node_ids for record in result.conflicts] == [["a", "b"]]

        # A new run starts a fresh log
        assert len(engine.run(nodes, edges).events) == 1
        assert engine.conflicts == []
