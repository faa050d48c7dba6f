#!/usr/bin/env python3
"""Logic-state propagation demo.

Builds a small launch decision and shows how Solvechain infers states:

- Facts and actions seed true/false from their confidence
- Causes, achieves and depends edges carry truth through the graph
- A user edit (an action that did not happen) propagates incrementally
- Conflicting conclusions are surfaced, not raised

No external dependencies required - runs entirely locally.
"""

from solvechain import (
    GraphEdge,
    GraphNode,
    LogicState,
    NodeType,
    PropagationEngine,
    PropagationEngineConfig,
    RuleRegistry,
    configure_logging,
)
from solvechain.propagation import get_logic_state_label


def build_graph() -> tuple[list[GraphNode], list[GraphEdge]]:
    nodes = [
        GraphNode(id="budget", type=NodeType.FACT, title="Budget approved", confidence=90),
        GraphNode(id="hire", type=NodeType.ACTION, title="Hire two engineers", confidence=85),
        GraphNode(id="vendor", type=NodeType.ASSUMPTION, title="Vendor delivers on time", confidence=60),
        GraphNode(id="launch", type=NodeType.GOAL, title="Launch in Q3", confidence=40),
        GraphNode(id="delay", type=NodeType.CONCLUSION, title="Launch slips to Q4", confidence=50),
    ]
    edges = [
        GraphEdge(id="e1", source_id="budget", target_id="hire", type="causes", strength=1.0),
        GraphEdge(id="e2", source_id="hire", target_id="launch", type="achieves", strength=1.0),
        GraphEdge(id="e3", source_id="vendor", target_id="launch", type="supports", strength=60),
        GraphEdge(id="e4", source_id="launch", target_id="delay", type="conflicts", strength=1.0),
    ]
    return nodes, edges


def print_states(engine: PropagationEngine, nodes: list[GraphNode]) -> None:
    for node in nodes:
        state = engine.get_node_state(node.id)
        if state is None:
            continue
        label = get_logic_state_label(state.logic_state)
        print(f"  {node.label:<28} {label:<8} {state.confidence:6.1f}  {state.explain()}")


def main() -> None:
    configure_logging()  # SOLVECHAIN_LOG_LEVEL / SOLVECHAIN_LOG_FORMAT

    print("=" * 70)
    print("Solvechain Propagation Demo")
    print("=" * 70)

    nodes, edges = build_graph()
    engine = PropagationEngine(
        config=PropagationEngineConfig(),
        registry=RuleRegistry.with_builtin_rules(),
    )

    # =========================================================================
    # Part 1: Full run
    # =========================================================================
    print("\n1. FULL RUN")
    print("-" * 70)
    result = engine.run(nodes, edges)
    print(f"  converged={result.converged} iterations={result.iterations}\n")
    print_states(engine, nodes)

    print("\n  Why is the launch on track?")
    for line in result.explain("launch").splitlines():
        print(f"  {line}")

    # =========================================================================
    # Part 2: Incremental update
    # =========================================================================
    print("\n2. THE HIRING DID NOT HAPPEN")
    print("-" * 70)
    result = engine.update_node("hire", LogicState.FALSE, nodes, edges)
    print(f"  converged={result.converged} iterations={result.iterations}\n")
    print_states(engine, nodes)

    # =========================================================================
    # Part 3: Contradiction
    # =========================================================================
    print("\n3. THE TEAM DECLARES A Q4 SLIP WHILE THE LAUNCH IS ON TRACK")
    print("-" * 70)
    engine.run(nodes, edges)
    result = engine.update_node("delay", LogicState.TRUE, nodes, edges)
    print_states(engine, nodes)
    for record in result.conflicts:
        print(f"\n  Conflict between {', '.join(record.node_ids)}: {record.reason}")


if __name__ == "__main__":
    main()
