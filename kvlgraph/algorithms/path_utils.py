from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, Set, Tuple

from kvlgraph.config import CYCLE_CONFIG
from kvlgraph.errors import SpanningTreeInconsistencyError
from kvlgraph.types.base import EdgeID, NodeID
from kvlgraph.types.dto import GridEdge, PathStep


def tree_path(
    incidence: Mapping[NodeID, Sequence[GridEdge]],
    src_node: NodeID,
    dst_node: NodeID,
    max_steps: Optional[int] = None,
) -> Optional[Tuple[PathStep, ...]]:
    """
    Find the path from src_node to dst_node through a spanning forest.

    Lines are directed but walked in either direction; each step records
    whether it went 'fwd' (from_node -> to_node) or 'rev'. The search is an
    iterative depth-first walk that never reuses a line already on the
    current path, so it terminates on any forest without recursion.

    Args:
        incidence: Tree lines incident with each node.
        src_node: Start of the path.
        dst_node: End of the path.
        max_steps: Cap on edge expansions. Defaults to the configured cap for
            the size of `incidence`.

    Returns:
        The ordered path steps (empty when src_node == dst_node), or None if
        dst_node is unreachable.

    Raises:
        SpanningTreeInconsistencyError: If the search exceeds max_steps.
    """
    if max_steps is None:
        incidence_size = sum(len(edges) for edges in incidence.values())
        max_steps = CYCLE_CONFIG.path_step_cap(incidence_size)

    path: List[PathStep] = []
    on_path: Set[EdgeID] = set()
    # Each stack entry: [node, index of next incident edge to try]
    stack: List[List[object]] = [[src_node, 0]]
    steps = 0

    while stack:
        node, idx = stack[-1]
        if node == dst_node:
            return tuple(path)

        incident = incidence.get(node, ())
        if idx < len(incident):
            stack[-1][1] = idx + 1
            edge = incident[idx]
            if edge.edge_id in on_path:
                continue
            steps += 1
            if steps > max_steps:
                raise SpanningTreeInconsistencyError(
                    f"Path search from '{src_node}' to '{dst_node}' exceeded "
                    f"{max_steps} steps; the tree incidence map is corrupt."
                )
            path.append(PathStep(edge, edge.direction_from(node)))
            on_path.add(edge.edge_id)
            stack.append([edge.other_end(node), 0])
        else:
            # backtrack
            stack.pop()
            if path:
                on_path.discard(path.pop().edge.edge_id)

    return None
