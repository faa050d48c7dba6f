"""Cycle detection and topological ordering over implication edges.

Only Depends and Causes edges form logical chains by default; supports,
hindrances and conflicts may loop freely without making a graph circular.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Collection, Iterable, Iterator, Sequence

from solvechain.models import GraphEdge, RelationType

IMPLICATION_RELATIONS: frozenset[str] = frozenset(
    {RelationType.DEPENDS.value, RelationType.CAUSES.value}
)


def _successors(
    node_ids: Collection[str],
    edges: Iterable[GraphEdge],
    relation_types: Collection[str],
) -> dict[str, list[str]]:
    successors: dict[str, list[str]] = {node_id: [] for node_id in node_ids}
    for edge in edges:
        if edge.type not in relation_types:
            continue
        if edge.source_id in successors and edge.target_id in successors:
            successors[edge.source_id].append(edge.target_id)
    return successors


def detect_cycles(
    node_ids: Sequence[str],
    edges: Iterable[GraphEdge],
    relation_types: Collection[str] = IMPLICATION_RELATIONS,
) -> list[list[str]]:
    """Detect cycles in the graph using DFS.

    Edges with dangling endpoints are ignored.

    Args:
        node_ids: All node ids, in a stable order.
        edges: Graph edges.
        relation_types: Relation types that count as links.

    Returns:
        List of cycles, where each cycle is a list of node ids in
        traversal order. Self-loops are reported as one-node cycles.
    """
    successors = _successors(node_ids, edges, relation_types)
    visited: set[str] = set()
    rec_stack: set[str] = set()
    cycles: list[list[str]] = []

    # Iterative DFS: path mirrors rec_stack, pending holds each path node's unexplored successors
    for root in node_ids:
        if root in visited:
            continue

        visited.add(root)
        rec_stack.add(root)
        path: list[str] = [root]
        pending: list[Iterator[str]] = [iter(successors[root])]

        while pending:
            next_id = next(pending[-1], None)
            if next_id is None:
                pending.pop()
                rec_stack.remove(path.pop())
                continue

            if next_id in rec_stack:
                cycles.append(path[path.index(next_id) :])
                continue

            if next_id in visited:
                continue

            visited.add(next_id)
            rec_stack.add(next_id)
            path.append(next_id)
            pending.append(iter(successors[next_id]))

    return cycles


def topological_order(
    node_ids: Sequence[str],
    edges: Iterable[GraphEdge],
    relation_types: Collection[str] | None = None,
) -> list[str]:
    """Order nodes sources-to-sinks (Kahn's algorithm).

    Nodes left over because they sit on or behind a cycle are appended in
    their input order, so every node appears exactly once.

    Args:
        node_ids: All node ids, in a stable order.
        edges: Graph edges.
        relation_types: Relation types to order by. None means all edges.
    """
    edge_list = list(edges)
    if relation_types is None:
        relation_types = {edge.type for edge in edge_list}
    successors = _successors(node_ids, edge_list, relation_types)

    in_degree = {node_id: 0 for node_id in node_ids}
    for targets in successors.values():
        for target_id in targets:
            in_degree[target_id] += 1

    queue = deque(node_id for node_id in node_ids if in_degree[node_id] == 0)
    ordered: list[str] = []
    while queue:
        node_id = queue.popleft()
        ordered.append(node_id)
        for target_id in successors[node_id]:
            in_degree[target_id] -= 1
            if in_degree[target_id] == 0:
                queue.append(target_id)

    if len(ordered) < len(in_degree):
        placed = set(ordered)
        ordered.extend(node_id for node_id in node_ids if node_id not in placed)

    return ordered


__all__ = [
    "IMPLICATION_RELATIONS",
    "detect_cycles",
    "topological_order",
]
