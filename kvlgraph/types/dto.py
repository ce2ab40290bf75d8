"""Immutable edge records used across the pipeline.

`EdgeSpec` is what the host supplies, `GridEdge` is what the graph builder
accepts, and `PathStep` is one hop of a spanning-tree path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from kvlgraph.types.base import EdgeDir, EdgeID, NodeID

#: An endpoint as supplied by the host: a single node id, None when nothing
#: resolves, or a list of candidate node ids. Lists are unhashable and can
#: never be mistaken for a node id.
Endpoint = Union[NodeID, List[NodeID], None]


@dataclass(frozen=True)
class EdgeSpec:
    """Edge descriptor supplied by the host model.

    Attributes:
        edge_id: Stable, unique identifier of the grid line.
        from_node: Endpoint at the line's reference start.
        to_node: Endpoint at the line's reference end.
        length_km: Line length; must be finite and non-negative.
        reactance_per_km: Reactance per kilometre of the owning grid.
        enforce_kvl: Whether the owning grid enforces Kirchhoff's voltage law.
        has_link_delay: Whether the host link carries a flow delay that the
            power flow will ignore.
    """

    edge_id: EdgeID
    from_node: Endpoint
    to_node: Endpoint
    length_km: float = 0.0
    reactance_per_km: float = 0.0
    enforce_kvl: bool = True
    has_link_delay: bool = False


@dataclass(frozen=True)
class GridEdge:
    """A validated grid line with exactly one from node and one to node."""

    edge_id: EdgeID
    from_node: NodeID
    to_node: NodeID
    length_km: float = 0.0
    reactance_per_km: float = 0.0
    enforce_kvl: bool = True

    @property
    def reactance(self) -> float:
        """Total reactance of the line (length times reactance per km)."""
        return self.length_km * self.reactance_per_km

    def other_end(self, node: NodeID) -> NodeID:
        """Return the endpoint opposite to `node`.

        Raises:
            ValueError: If `node` is not an endpoint of this edge.
        """
        if node == self.from_node:
            return self.to_node
        if node == self.to_node:
            return self.from_node
        raise ValueError(f"Node '{node}' is not an endpoint of edge '{self.edge_id}'.")

    def direction_from(self, node: NodeID) -> EdgeDir:
        """Return the traversal direction when leaving `node` along this edge."""
        if node == self.from_node:
            return "fwd"
        if node == self.to_node:
            return "rev"
        raise ValueError(f"Node '{node}' is not an endpoint of edge '{self.edge_id}'.")


@dataclass(frozen=True)
class PathStep:
    """One edge of a spanning-tree path and the direction it was walked in."""

    edge: GridEdge
    direction: EdgeDir

    @property
    def start_node(self) -> NodeID:
        return self.edge.from_node if self.direction == "fwd" else self.edge.to_node

    @property
    def end_node(self) -> NodeID:
        return self.edge.to_node if self.direction == "fwd" else self.edge.from_node


def resolve_endpoint(endpoint: Endpoint) -> Tuple[Optional[NodeID], int]:
    """Resolve a host endpoint to a node id.

    Returns:
        ``(node, candidate_count)``. `node` is None unless exactly one
        candidate was supplied. None entries in a candidate list are dropped.
    """
    if endpoint is None:
        return None, 0
    if isinstance(endpoint, list):
        candidates = [node for node in endpoint if node is not None]
        if len(candidates) == 1:
            return candidates[0], 1
        return None, len(candidates)
    return endpoint, 1
