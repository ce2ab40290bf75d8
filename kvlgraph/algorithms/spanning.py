"""Split KVL-enforced lines into spanning-forest edges and cycle-closing edges.

The forest need not be minimal, so lines are taken in input order without
sorting by length or reactance. A single pass keeps the classification
reproducible across solver runs for an unchanged edge list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from networkx.utils import UnionFind

from kvlgraph.logging import get_logger
from kvlgraph.types.base import EdgeID, NodeID
from kvlgraph.types.dto import GridEdge

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class SpanningForest:
    """Spanning forest over the KVL-enforced lines.

    Attributes:
        tree_edges: Lines forming the forest, in input order.
        closing_edges: Lines whose endpoints were already connected when they
            were reached; each closes exactly one fundamental cycle.
        incidence: Tree lines incident with each node. Closing lines are not
            recorded here, so a path search cannot shortcut through them.
    """

    tree_edges: Tuple[GridEdge, ...] = ()
    closing_edges: Tuple[GridEdge, ...] = ()
    incidence: Mapping[NodeID, Tuple[GridEdge, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def nodes(self) -> List[NodeID]:
        """Nodes touched by the forest, in first-seen order."""
        return list(self.incidence)

    @property
    def component_count(self) -> int:
        """Number of trees in the forest."""
        return len(self.incidence) - len(self.tree_edges)

    @property
    def incidence_size(self) -> int:
        """Total number of (node, edge) entries in `incidence`."""
        return sum(len(edges) for edges in self.incidence.values())

    def is_tree_edge(self, edge_id: EdgeID) -> bool:
        return any(e.edge_id == edge_id for e in self.tree_edges)


def build_spanning_forest(edges: Iterable[GridEdge]) -> SpanningForest:
    """Classify KVL-enforced lines as tree or closing edges.

    Lines whose grid does not enforce KVL are ignored. A line becomes a
    closing edge when both endpoints already belong to the same tree; any
    other line joins the forest, possibly merging two trees. Disconnected
    sub-networks therefore each get their own tree.

    Args:
        edges: Accepted lines in input order.

    Returns:
        SpanningForest with read-only incidence over tree lines only.
    """
    components = UnionFind()
    tree_edges: List[GridEdge] = []
    closing_edges: List[GridEdge] = []
    incidence: Dict[NodeID, List[GridEdge]] = {}

    for edge in edges:
        if not edge.enforce_kvl:
            continue
        u, v = edge.from_node, edge.to_node
        if u in incidence and v in incidence and components[u] == components[v]:
            closing_edges.append(edge)
            continue
        tree_edges.append(edge)
        components.union(u, v)
        incidence.setdefault(u, []).append(edge)
        incidence.setdefault(v, []).append(edge)

    LOGGER.debug(
        "Spanning forest: %d tree edges, %d closing edges over %d nodes",
        len(tree_edges),
        len(closing_edges),
        len(incidence),
    )
    return SpanningForest(
        tree_edges=tuple(tree_edges),
        closing_edges=tuple(closing_edges),
        incidence=MappingProxyType({n: tuple(es) for n, es in incidence.items()}),
    )
