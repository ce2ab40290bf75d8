"""Fundamental cycle basis of a spanning forest.

Each closing edge together with the unique tree path between its endpoints
forms one fundamental cycle. The closing edge fixes the cycle's direction:
along the closing edge from its from_node to its to_node, then back through
the tree. Every line in the cycle carries the sign of its own direction
relative to that walk, which is the coefficient the solver needs for the
cycle's KVL constraint ``sum(sign * x * P) == 0``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import (
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

import numpy as np

from kvlgraph.algorithms.path_utils import tree_path
from kvlgraph.algorithms.spanning import SpanningForest
from kvlgraph.config import CYCLE_CONFIG
from kvlgraph.errors import SpanningTreeInconsistencyError
from kvlgraph.logging import get_logger
from kvlgraph.types.base import EdgeID, Orientation
from kvlgraph.types.dto import GridEdge, PathStep

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CycleEdge:
    """A line within a cycle and its orientation sign."""

    edge_id: EdgeID
    orientation: Orientation


@dataclass(frozen=True)
class Cycle:
    """One fundamental cycle. The first edge is the closing edge, always +1."""

    edges: Tuple[CycleEdge, ...]

    def __iter__(self) -> Iterator[CycleEdge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def __getitem__(self, idx: int) -> CycleEdge:
        return self.edges[idx]

    @property
    def closing_edge(self) -> EdgeID:
        return self.edges[0].edge_id

    @property
    def edge_ids(self) -> Tuple[EdgeID, ...]:
        return tuple(ce.edge_id for ce in self.edges)

    def orientation_of(self, edge_id: EdgeID) -> Optional[Orientation]:
        for ce in self.edges:
            if ce.edge_id == edge_id:
                return ce.orientation
        return None


@dataclass(frozen=True)
class CycleBasis:
    """The set of fundamental cycles, one per closing edge, in closing order.

    Beyond sequence access this is the query surface the solver uses while
    emitting KVL constraints.
    """

    cycles: Tuple[Cycle, ...] = ()

    def __iter__(self) -> Iterator[Cycle]:
        return iter(self.cycles)

    def __len__(self) -> int:
        return len(self.cycles)

    def __getitem__(self, idx: int) -> Cycle:
        return self.cycles[idx]

    def orientation_of(
        self, cycle_index: int, edge_id: EdgeID
    ) -> Optional[Orientation]:
        """Return the sign of `edge_id` in cycle `cycle_index`, or None if absent.

        Raises:
            IndexError: If `cycle_index` is out of range.
        """
        return self.cycles[cycle_index].orientation_of(edge_id)

    def cycles_containing(self, edge_id: EdgeID) -> List[int]:
        """Return indices of all cycles that `edge_id` takes part in.

        A closing edge is in exactly one cycle; a tree edge may be in none,
        one or several.
        """
        return [
            i
            for i, cycle in enumerate(self.cycles)
            if cycle.orientation_of(edge_id) is not None
        ]

    def in_cycle(self, edge_id: EdgeID) -> Optional[Orientation]:
        """Return the sign of `edge_id` in the first cycle containing it."""
        for cycle in self.cycles:
            orientation = cycle.orientation_of(edge_id)
            if orientation is not None:
                return orientation
        return None

    def verify(
        self,
        cycle_index: int,
        edge_flow_by_id: Mapping[EdgeID, float],
        reactance_by_id: Mapping[EdgeID, float],
    ) -> float:
        """Return ``sum(orientation * reactance * flow)`` over cycle `cycle_index`.

        This is the quantity the solver's KVL constraint forces to zero; it is
        offered for debugging and tests.

        Raises:
            IndexError: If `cycle_index` is out of range.
            KeyError: If a cycle edge has no flow or reactance entry.
        """
        cycle = self.cycles[cycle_index]
        return math.fsum(
            int(ce.orientation)
            * reactance_by_id[ce.edge_id]
            * edge_flow_by_id[ce.edge_id]
            for ce in cycle
        )

    def is_balanced(
        self,
        cycle_index: int,
        edge_flow_by_id: Mapping[EdgeID, float],
        reactance_by_id: Mapping[EdgeID, float],
        tolerance: Optional[float] = None,
    ) -> bool:
        """Return True if the cycle's KVL sum is zero within `tolerance`."""
        if tolerance is None:
            tolerance = CYCLE_CONFIG.verify_tolerance
        residual = self.verify(cycle_index, edge_flow_by_id, reactance_by_id)
        return abs(residual) <= tolerance

    def orientation_matrix(
        self, edge_ids: Optional[Sequence[EdgeID]] = None
    ) -> Tuple[np.ndarray, Tuple[EdgeID, ...]]:
        """Return the cycles x edges matrix of orientation signs.

        Args:
            edge_ids: Column order. Defaults to edges in order of first
                appearance across the cycles. Edges in no cycle get a zero
                column.

        Returns:
            ``(matrix, columns)`` with ``matrix[i, j]`` the sign of
            ``columns[j]`` in cycle ``i`` (0 when absent).
        """
        if edge_ids is None:
            seen: Dict[EdgeID, None] = {}
            for cycle in self.cycles:
                for ce in cycle:
                    seen.setdefault(ce.edge_id, None)
            columns: Tuple[EdgeID, ...] = tuple(seen)
        else:
            columns = tuple(edge_ids)

        column_of = {e_id: j for j, e_id in enumerate(columns)}
        matrix = np.zeros((len(self.cycles), len(columns)), dtype=np.int8)
        for i, cycle in enumerate(self.cycles):
            for ce in cycle:
                j = column_of.get(ce.edge_id)
                if j is not None:
                    matrix[i, j] = int(ce.orientation)
        return matrix, columns

    def to_string(self, names: Optional[Mapping[EdgeID, str]] = None) -> str:
        """Describe the basis, one numbered line per cycle.

        Args:
            names: Optional display names per edge id; ids are used otherwise.
        """
        count = len(self.cycles)
        noun = "fundamental cycle" if count == 1 else "fundamental cycles"
        lines = [f"{count} {noun}:"]
        for i, cycle in enumerate(self.cycles, start=1):
            parts = []
            for ce in cycle:
                label = names.get(ce.edge_id, ce.edge_id) if names else ce.edge_id
                parts.append(f"{label} [{ce.orientation.symbol}]")
            lines.append(f"({i}) " + ", ".join(parts))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_string()


def _assemble_cycle(closing: GridEdge, path: Sequence[PathStep]) -> Cycle:
    # Walk the tree path backwards, from closing.to_node to closing.from_node.
    # A step walked 'fwd' on the way out is walked against its direction on
    # the way back.
    edges = [CycleEdge(closing.edge_id, Orientation.FORWARD)]
    for step in reversed(path):
        sign = Orientation.REVERSE if step.direction == "fwd" else Orientation.FORWARD
        edges.append(CycleEdge(step.edge.edge_id, sign))
    return Cycle(tuple(edges))


def compute_cycle_basis(
    forest: SpanningForest, max_steps: Optional[int] = None
) -> CycleBasis:
    """Build one fundamental cycle per closing edge of `forest`.

    Args:
        forest: Result of `build_spanning_forest`.
        max_steps: Optional cap per path search, see `tree_path`.

    Returns:
        CycleBasis in closing-edge order.

    Raises:
        SpanningTreeInconsistencyError: If a closing edge's endpoints are not
            connected through the forest.
    """
    cycles: List[Cycle] = []
    for closing in forest.closing_edges:
        path = tree_path(
            forest.incidence, closing.from_node, closing.to_node, max_steps=max_steps
        )
        if path is None:
            raise SpanningTreeInconsistencyError(
                f"No tree path between '{closing.from_node}' and "
                f"'{closing.to_node}' for closing edge '{closing.edge_id}'."
            )
        cycles.append(_assemble_cycle(closing, path))

    LOGGER.debug("Cycle basis: %d fundamental cycles", len(cycles))
    return CycleBasis(tuple(cycles))
