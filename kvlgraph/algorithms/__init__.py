"""Cycle basis algorithms.

The modules form a pipeline, each depending on the previous one:
`builder` (edge descriptors -> grid graph), `spanning` (grid graph -> spanning
forest), `path_utils` (paths through the forest) and `cycles` (forest ->
fundamental cycle basis).
"""

from kvlgraph.algorithms.builder import GraphBuildResult, GraphStats, build_graph
from kvlgraph.algorithms.cycles import (
    Cycle,
    CycleBasis,
    CycleEdge,
    compute_cycle_basis,
)
from kvlgraph.algorithms.path_utils import tree_path
from kvlgraph.algorithms.spanning import SpanningForest, build_spanning_forest

__all__ = [
    "GraphBuildResult",
    "GraphStats",
    "build_graph",
    "SpanningForest",
    "build_spanning_forest",
    "tree_path",
    "Cycle",
    "CycleBasis",
    "CycleEdge",
    "compute_cycle_basis",
]
