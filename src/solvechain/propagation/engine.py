"""State-propagation engine.

Takes a node/edge snapshot, seeds a logic state per node and applies the
registered rule of every edge until a full pass changes nothing (a
fixpoint) or the iteration cap is reached. Every accepted change is
recorded as a PropagationEvent; every Conflict outcome as a ConflictRecord.

Run lifecycle:
    Initializing -> Converging -> Converged (converged=True)
                              \\-> Exhausted (converged=False, iterations=max_iterations)

Neither run() nor update_node() raises for graph content: dangling edges
and relation types without a rule are skipped, and non-convergence is
reported on the result. An engine instance is single-owner: its state
table, event log and conflict list are unsynchronized. Use one engine per
graph snapshot when running concurrently.

Example:
    ```python
    from solvechain.propagation import PropagationEngine

    engine = PropagationEngine()
    result = engine.run(nodes, edges)
    if not result.converged:
        ...  # warn that states may be approximate
    print(result.explain("goal_1"))

    # User marks an action as not executed
    result = engine.update_node("action_3", LogicState.FALSE, nodes, edges)
    ```
"""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from types import MappingProxyType

from pydantic import ValidationError as PydanticValidationError

from solvechain.config import settings
from solvechain.exceptions import ValidationError
from solvechain.logging import get_logger
from solvechain.models import (
    ConflictRecord,
    GraphEdge,
    GraphNode,
    LogicState,
    NodeState,
    NodeStateOverride,
    PropagationEvent,
    PropagationResult,
    is_state_allowed,
)

from .cycles import detect_cycles
from .helpers import infer_logic_state
from .registry import RuleRegistry, default_registry
from .rules import PropagationRule
from .types import PropagationEngineConfig, PropagationInput, PropagationOutput

logger = get_logger(__name__)

# Confidence changes smaller than this are float noise, not a change
MIN_ACCEPTED_CONFIDENCE_DELTA = 1.0

# NodeState values from an earlier result are accepted as overrides
StateOverrides = Mapping[str, NodeStateOverride | NodeState | Mapping[str, object]]


@dataclass(frozen=True)
class _GraphView:
    """Read-only indexes over one snapshot."""

    nodes: Mapping[str, GraphNode]
    edges: tuple[GraphEdge, ...]
    outgoing: Mapping[str, tuple[GraphEdge, ...]]
    incoming: Mapping[str, tuple[GraphEdge, ...]]
    dangling: tuple[str, ...]

    @classmethod
    def build(cls, nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]) -> _GraphView:
        node_map = {node.id: node for node in nodes}
        edge_list = tuple(edges)
        outgoing: dict[str, list[GraphEdge]] = {}
        incoming: dict[str, list[GraphEdge]] = {}
        dangling: list[str] = []

        for edge in edge_list:
            outgoing.setdefault(edge.source_id, []).append(edge)
            incoming.setdefault(edge.target_id, []).append(edge)
            if edge.source_id not in node_map or edge.target_id not in node_map:
                dangling.append(edge.id)

        return cls(
            nodes=MappingProxyType(node_map),
            edges=edge_list,
            outgoing=MappingProxyType({k: tuple(v) for k, v in outgoing.items()}),
            incoming=MappingProxyType({k: tuple(v) for k, v in incoming.items()}),
            dangling=tuple(dangling),
        )


def _clamp(confidence: float) -> float:
    return min(100.0, max(0.0, confidence))


def _parse_override(node_id: str, value: object) -> NodeStateOverride:
    try:
        return NodeStateOverride.model_validate(value)
    except PydanticValidationError as exc:
        raise ValidationError(f"initial_states[{node_id}]", str(exc)) from exc


class PropagationEngine:
    """Computes converged logic states over a reasoning graph.

    Attributes:
        config: Engine configuration.
        registry: Rules used to interpret edges.
    """

    def __init__(
        self,
        config: PropagationEngineConfig | None = None,
        registry: RuleRegistry | None = None,
    ) -> None:
        self.config = config if config is not None else PropagationEngineConfig.from_settings(settings)
        self.registry = registry if registry is not None else default_registry
        self._states: dict[str, NodeState] = {}
        self._events: list[PropagationEvent] = []
        self._conflicts: list[ConflictRecord] = []
        self._cycles: list[list[str]] = []

    # ------------------------------------------------------------------
    # Full runs
    # ------------------------------------------------------------------

    def run(
        self,
        nodes: Iterable[GraphNode],
        edges: Iterable[GraphEdge],
        initial_states: StateOverrides | None = None,
    ) -> PropagationResult:
        """Propagate states over the whole graph until a fixpoint.

        Args:
            nodes: Node snapshot.
            edges: Edge snapshot.
            initial_states: Optional per-node overrides (NodeStateOverride,
                mapping, or a NodeState from an earlier result). Nodes without
                one are seeded from their static confidence.

        Returns:
            PropagationResult. Check converged: an exhausted run still
            carries the best state map reached.

        Raises:
            ValidationError: If an override is malformed, or assigns a state
                the node's type does not allow (when enforce_node_type_states is on).
        """
        start = time.perf_counter()
        graph = _GraphView.build(nodes, edges)

        self._initialize_states(graph.nodes, initial_states)
        self._log_skipped_edges(graph)

        if self.config.enable_cycle_detection:
            self._cycles = detect_cycles(list(graph.nodes), graph.edges)
            if self._cycles:
                logger.warning(
                    "Cycles detected in implication edges",
                    cycle_count=len(self._cycles),
                    cycles=self._cycles,
                )

        converged = False
        iterations = 0
        while not converged and iterations < self.config.max_iterations:
            iterations += 1
            converged = not self._propagate_once(graph)

        return self._finish("run", converged, iterations, start)

    def initialize(
        self,
        nodes: Iterable[GraphNode],
        initial_states: StateOverrides | None = None,
    ) -> dict[str, NodeState]:
        """Seed states without propagating, discarding previous state.

        Returns:
            Snapshot of the seeded states.
        """
        self._initialize_states({node.id: node for node in nodes}, initial_states)
        return self.get_states()

    # ------------------------------------------------------------------
    # Incremental updates
    # ------------------------------------------------------------------

    def update_node(
        self,
        node_id: str,
        new_state: LogicState,
        nodes: Iterable[GraphNode],
        edges: Iterable[GraphEdge],
    ) -> PropagationResult:
        """Apply an explicit user edit to one node and propagate outward.

        The node's provenance is cleared, since the new value is asserted
        rather than derived. Propagation walks outgoing edges forward and
        bidirectional incoming edges in reverse, continuing from every node
        that changed.

        The visited set is per pass, not per call: a pass expands each
        reachable node at most once, and passes repeat until one accepts no
        change or max_iterations passes have run. A node can therefore be
        expanded up to max_iterations times in one call, which lets
        changes that arrive back at it through other paths settle.

        Nodes without a state yet (first call, or nodes added since the
        last run) are seeded from their static confidence first. An unknown
        node_id changes nothing.

        Raises:
            ValidationError: If new_state is not a LogicState, or the node's
                type does not allow it (when enforce_node_type_states is on).
        """
        start = time.perf_counter()
        try:
            new_state = LogicState(new_state)
        except ValueError as exc:
            raise ValidationError("new_state", f"not a logic state: {new_state!r}") from exc
        graph = _GraphView.build(nodes, edges)
        self._seed_missing(graph.nodes)

        node = graph.nodes.get(node_id)
        current = self._states.get(node_id)
        if node is None or current is None:
            logger.warning("update_node called for unknown node", node_id=node_id)
            return self._finish("update_node", True, 0, start)

        self._check_allowed(node, new_state, "new_state")
        self._states[node_id] = current.model_copy(
            update={
                "logic_state": new_state,
                "derived_from": [],
                "conflicts_with": None,
                "last_updated": datetime.now(UTC),
            }
        )

        converged = False
        iterations = 0
        while not converged and iterations < self.config.max_iterations:
            iterations += 1
            converged = not self._propagate_from(node_id, graph)

        return self._finish("update_node", converged, iterations, start, node_id=node_id)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_states(self) -> dict[str, NodeState]:
        """Snapshot of all node states."""
        return dict(self._states)

    def get_node_state(self, node_id: str) -> NodeState | None:
        """State of one node, or None."""
        return self._states.get(node_id)

    @property
    def events(self) -> list[PropagationEvent]:
        """Events accepted since the last run or clear()."""
        return list(self._events)

    @property
    def conflicts(self) -> list[ConflictRecord]:
        """Conflicts detected since the last run or clear()."""
        return list(self._conflicts)

    @property
    def cycles(self) -> list[list[str]]:
        """Cycles found by the last run."""
        return [list(cycle) for cycle in self._cycles]

    def clear(self) -> None:
        """Reset all internal state."""
        self._states.clear()
        self._events = []
        self._conflicts = []
        self._cycles = []

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _initialize_states(
        self,
        nodes: Mapping[str, GraphNode],
        initial_states: StateOverrides | None,
    ) -> None:
        self.clear()
        now = datetime.now(UTC)
        for node in nodes.values():
            override = None
            if initial_states is not None and node.id in initial_states:
                override = _parse_override(node.id, initial_states[node.id])
            self._states[node.id] = self._seed_state(node, override, now)

    def _seed_missing(self, nodes: Mapping[str, GraphNode]) -> None:
        now = datetime.now(UTC)
        for node in nodes.values():
            if node.id not in self._states:
                self._states[node.id] = self._seed_state(node, None, now)

    def _seed_state(
        self,
        node: GraphNode,
        override: NodeStateOverride | None,
        now: datetime,
    ) -> NodeState:
        if override is None:
            override = NodeStateOverride()

        if override.logic_state is not None:
            self._check_allowed(node, override.logic_state, f"initial_states[{node.id}]")
            logic_state = override.logic_state
        else:
            logic_state = infer_logic_state(node.confidence)

        return NodeState(
            node_id=node.id,
            logic_state=logic_state,
            confidence=override.confidence if override.confidence is not None else node.confidence,
            derived_from=list(override.derived_from or []),
            last_updated=now,
        )

    def _check_allowed(self, node: GraphNode, state: LogicState, field: str) -> None:
        if self.config.enforce_node_type_states and not is_state_allowed(node.type, state):
            raise ValidationError(
                field,
                f"{node.type.value} node {node.id!r} cannot be set to {state.value}",
            )

    def _propagate_once(self, graph: _GraphView) -> bool:
        """One full pass over every edge. Returns whether anything changed."""
        changed = False
        for edge in graph.edges:
            rule = self.registry.get(edge.type)
            if rule is None:
                continue
            if self._apply_edge(edge, rule, graph) is not None:
                changed = True
            if rule.supports_bidirectional:
                if self._apply_edge(edge, rule, graph, reversed=True) is not None:
                    changed = True
        return changed

    def _propagate_from(self, start_id: str, graph: _GraphView) -> bool:
        """One worklist pass outward from start_id. Returns whether anything changed."""
        changed = False
        visited: set[str] = set()
        queue: deque[str] = deque([start_id])

        while queue:
            node_id = queue.popleft()
            if node_id in visited:
                continue
            visited.add(node_id)

            for edge in graph.outgoing.get(node_id, ()):
                rule = self.registry.get(edge.type)
                if rule is None:
                    continue
                output = self._apply_edge(edge, rule, graph)
                if output is not None:
                    changed = True
                    if output.should_propagate:
                        queue.append(edge.target_id)

            for edge in graph.incoming.get(node_id, ()):
                rule = self.registry.get(edge.type)
                if rule is None or not rule.supports_bidirectional:
                    continue
                output = self._apply_edge(edge, rule, graph, reversed=True)
                if output is not None:
                    changed = True
                    if output.should_propagate:
                        queue.append(edge.source_id)

        return changed

    def _apply_edge(
        self,
        edge: GraphEdge,
        rule: PropagationRule,
        graph: _GraphView,
        reversed: bool = False,
    ) -> PropagationOutput | None:
        """Evaluate one edge and write the result if it is a real change.

        Returns:
            The accepted output, or None if nothing was written.
        """
        if reversed:
            source_id, target_id = edge.target_id, edge.source_id
        else:
            source_id, target_id = edge.source_id, edge.target_id

        source_node = graph.nodes.get(source_id)
        target_node = graph.nodes.get(target_id)
        source_state = self._states.get(source_id)
        target_state = self._states.get(target_id)
        if source_node is None or target_node is None or source_state is None or target_state is None:
            return None

        output = rule.propagate(
            PropagationInput(
                source_node=source_node,
                source_state=source_state,
                target_node=target_node,
                target_state=target_state,
                edge=edge,
                all_nodes=graph.nodes,
                all_edges=graph.edges,
                all_states=MappingProxyType(self._states),
                incoming_edges=graph.incoming,
                config=self.config,
                reversed=reversed,
            )
        )
        if output is None:
            return None
        if output.new_state == LogicState.CONFLICT and not self.config.enable_conflict_detection:
            return None

        new_confidence = _clamp(output.new_confidence)
        if (
            target_state.logic_state == output.new_state
            and abs(target_state.confidence - new_confidence) < MIN_ACCEPTED_CONFIDENCE_DELTA
        ):
            return None

        now = datetime.now(UTC)
        reason = output.reason
        if reversed:
            reason = f"[reverse] {reason}"

        self._events.append(
            PropagationEvent(
                from_node_id=source_id,
                to_node_id=target_id,
                edge_id=edge.id,
                relation_type=str(edge.type),
                old_state=target_state.logic_state,
                new_state=output.new_state,
                old_confidence=target_state.confidence,
                new_confidence=new_confidence,
                reason=reason,
                reversed=reversed,
                timestamp=now,
            )
        )

        is_conflict = output.new_state == LogicState.CONFLICT
        self._states[target_id] = target_state.model_copy(
            update={
                "logic_state": output.new_state,
                "confidence": new_confidence,
                "derived_from": list(output.derived_from),
                "conflicts_with": list(output.conflicts_with or []) if is_conflict else None,
                "last_updated": now,
            }
        )

        if is_conflict:
            self._conflicts.append(
                ConflictRecord(
                    node_ids=[target_id, *(output.conflicts_with or [])],
                    reason=reason or "Logical conflict detected",
                )
            )

        return output

    def _log_skipped_edges(self, graph: _GraphView) -> None:
        if graph.dangling:
            logger.debug("Skipping edges with missing endpoints", edge_ids=list(graph.dangling))
        unknown = sorted({str(e.type) for e in graph.edges if not self.registry.has(e.type)})
        if unknown:
            logger.debug("Skipping edges without a registered rule", relation_types=unknown)

    def _finish(
        self,
        operation: str,
        converged: bool,
        iterations: int,
        start: float,
        **log_fields: object,
    ) -> PropagationResult:
        result = PropagationResult(
            states=self.get_states(),
            events=self.events,
            conflicts=self.conflicts,
            converged=converged,
            iterations=iterations,
            execution_time=(time.perf_counter() - start) * 1000.0,
            cycles=self.cycles,
        )

        if not converged:
            logger.warning(
                "Propagation did not converge",
                operation=operation,
                max_iterations=self.config.max_iterations,
                **log_fields,
            )
        logger.info(
            "Propagation complete",
            operation=operation,
            iterations=iterations,
            converged=converged,
            events=len(result.events),
            conflicts=len(result.conflicts),
            execution_ms=round(result.execution_time, 3),
            **log_fields,
        )
        return result


def run_propagation(
    nodes: Iterable[GraphNode],
    edges: Iterable[GraphEdge],
    initial_states: StateOverrides | None = None,
    config: PropagationEngineConfig | None = None,
) -> PropagationResult:
    """Run a full propagation on a fresh engine.

    Convenience for one-shot callers that do not need incremental updates.
    """
    return PropagationEngine(config=config).run(nodes, edges, initial_states)


__all__ = [
    "MIN_ACCEPTED_CONFIDENCE_DELTA",
    "PropagationEngine",
    "run_propagation",
]
