"""Strict multi-directed graph of grid buses and lines.

`GridGraph` extends `networkx.MultiDiGraph` to enforce explicit node
management and unique, caller-supplied edge identifiers. Every edge carries
its `GridEdge` record, and edges are reported in insertion order so that
algorithms downstream see a deterministic sequence.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List

import networkx as nx

from kvlgraph.types.base import EdgeID, NodeID
from kvlgraph.types.dto import GridEdge


class GridGraph(nx.MultiDiGraph):
    """A multi-directed graph with strict rules and unique edge IDs.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes (raises ValueError on duplicates).
      - No duplicate edge ids (raises ValueError on duplicates).

    Parallel lines between the same pair of buses are allowed; they are
    distinguished by edge id.

    Inherits from:
        networkx.MultiDiGraph
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize a GridGraph.

        Attributes:
            _grid_edges: Map edge id to its `GridEdge`, in insertion order.
        """
        super().__init__(*args, **kwargs)
        self._grid_edges: Dict[EdgeID, GridEdge] = {}

    #
    # Node management
    #
    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """Add a single bus, disallowing duplicates.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if node_for_adding in self:
            raise ValueError(f"Node '{node_for_adding}' already exists in this graph.")
        super().add_node(node_for_adding, **attr)

    #
    # Edge management
    #
    def add_grid_edge(self, edge: GridEdge) -> EdgeID:
        """Add a line between two existing buses.

        The edge id becomes the networkx edge key, and the line's attributes
        are mirrored onto the networkx edge data.

        Returns:
            The edge id.

        Raises:
            ValueError: If either endpoint is missing or the id is in use.
        """
        if edge.from_node not in self:
            raise ValueError(f"Source node '{edge.from_node}' does not exist.")
        if edge.to_node not in self:
            raise ValueError(f"Target node '{edge.to_node}' does not exist.")
        if edge.edge_id in self._grid_edges:
            raise ValueError(f"Edge with id '{edge.edge_id}' already exists.")

        super().add_edge(
            edge.from_node,
            edge.to_node,
            key=edge.edge_id,
            length_km=edge.length_km,
            reactance_per_km=edge.reactance_per_km,
            enforce_kvl=edge.enforce_kvl,
        )
        self._grid_edges[edge.edge_id] = edge
        return edge.edge_id

    #
    # Convenience methods
    #
    def get_edges(self) -> Dict[EdgeID, GridEdge]:
        """Return all lines keyed by edge id, in insertion order."""
        return dict(self._grid_edges)

    def get_edge(self, key: EdgeID) -> GridEdge:
        """Return the line with id `key`.

        Raises:
            ValueError: If no edge with this id is found.
        """
        if key not in self._grid_edges:
            raise ValueError(f"Edge with id='{key}' not found.")
        return self._grid_edges[key]

    def iter_grid_edges(self) -> Iterator[GridEdge]:
        """Iterate over lines in insertion order."""
        return iter(self._grid_edges.values())

    def kvl_edges(self) -> List[GridEdge]:
        """Lines whose grid enforces Kirchhoff's voltage law, in insertion order."""
        return [e for e in self._grid_edges.values() if e.enforce_kvl]

    def reactance_by_id(self) -> Dict[EdgeID, float]:
        """Map every line to its total reactance."""
        return {e_id: e.reactance for e_id, e in self._grid_edges.items()}

    def to_undirected_kvl_graph(self) -> nx.MultiGraph:
        """Return an undirected multigraph of the KVL-enforced lines only.

        Nodes touched by no such line are left out.
        """
        graph = nx.MultiGraph()
        for edge in self.kvl_edges():
            graph.add_edge(edge.from_node, edge.to_node, key=edge.edge_id)
        return graph
