"""One-call pipeline from edge descriptors to a fundamental cycle basis.

`analyze_grid()` runs graph construction, spanning forest, path search and
cycle assembly, and returns every intermediate result. The call holds no
state: caching the last analysis (e.g. keyed by a topology version) is up to
the caller.

Example:
    from kvlgraph import EdgeSpec, analyze_grid

    grid = analyze_grid([
        EdgeSpec("A", "n1", "n2", length_km=10, reactance_per_km=0.3),
        EdgeSpec("B", "n2", "n3", length_km=5, reactance_per_km=0.3),
        EdgeSpec("C", "n3", "n1", length_km=8, reactance_per_km=0.3),
    ])
    for coefficients in grid.kvl_constraints():
        ...  # add sum(coef * flow[edge_id]) == 0 to the model
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from kvlgraph.algorithms.builder import GraphBuildResult, build_graph
from kvlgraph.algorithms.cycles import CycleBasis, compute_cycle_basis
from kvlgraph.algorithms.spanning import SpanningForest, build_spanning_forest
from kvlgraph.logging import get_logger
from kvlgraph.types.base import EdgeID
from kvlgraph.types.dto import EdgeSpec

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class GridAnalysis:
    """Results of one pipeline run.

    Attributes:
        build: Graph, warnings and statistics from graph construction.
        forest: Tree/closing split of the KVL-enforced lines.
        basis: One fundamental cycle per closing edge.
    """

    build: GraphBuildResult
    forest: SpanningForest
    basis: CycleBasis

    @property
    def diagnostics(self) -> Tuple[str, ...]:
        return self.build.diagnostics

    def reactance_by_id(self) -> Dict[EdgeID, float]:
        """Total reactance of every accepted line."""
        return self.build.graph.reactance_by_id()

    def kvl_constraints(self) -> List[List[Tuple[EdgeID, float]]]:
        """Per cycle, the ``(edge_id, orientation * reactance)`` coefficients.

        The solver adds one equality ``sum(coef * flow[edge_id]) == 0`` per
        returned list.
        """
        reactance = self.reactance_by_id()
        return [
            [(ce.edge_id, int(ce.orientation) * reactance[ce.edge_id]) for ce in cycle]
            for cycle in self.basis
        ]


def analyze_grid(
    specs: Iterable[EdgeSpec], max_path_steps: Optional[int] = None
) -> GridAnalysis:
    """Compute the fundamental cycle basis for a list of edge descriptors.

    Args:
        specs: Edge descriptors in host order.
        max_path_steps: Optional cap per tree path search.

    Returns:
        GridAnalysis with the build result, spanning forest and cycle basis.

    Raises:
        InputContractError: If an edge has an invalid length or duplicate id.
        SpanningTreeInconsistencyError: If a tree path search fails.
    """
    build = build_graph(specs)
    forest = build_spanning_forest(build.graph.iter_grid_edges())
    basis = compute_cycle_basis(forest, max_steps=max_path_steps)
    LOGGER.info(
        "Cycle basis: %d cycles over %d KVL edges (%d warnings)",
        len(basis),
        len(forest.tree_edges) + len(forest.closing_edges),
        len(build.warnings),
    )
    return GridAnalysis(build=build, forest=forest, basis=basis)
