"""kvlgraph: Fundamental cycle bases for power grids under Kirchhoff's voltage law.

Before a solver can add linear KVL constraints for a power grid, the grid
topology must be reduced to a fundamental cycle basis: one independent cycle
per line that closes a loop, each line signed by its direction relative to
the cycle.

Primary API:
    analyze_grid() - Run the full pipeline on a list of edge descriptors
    EdgeSpec - Edge descriptor supplied by the host model
    build_graph(), build_spanning_forest(), tree_path(), compute_cycle_basis()
        - The individual pipeline stages
    CycleBasis - Cycles plus the query surface used by the solver

Example:
    from kvlgraph import EdgeSpec, analyze_grid

    grid = analyze_grid([
        EdgeSpec("A", "n1", "n2", length_km=10.0),
        EdgeSpec("B", "n2", "n3", length_km=5.0),
        EdgeSpec("C", "n3", "n1", length_km=8.0),
    ])
    print(grid.basis)
    # 1 fundamental cycle:
    # (1) C [+], A [+], B [+]
"""

from __future__ import annotations

from kvlgraph import logging
from kvlgraph._version import __version__
from kvlgraph.algorithms.builder import GraphBuildResult, GraphStats, build_graph
from kvlgraph.algorithms.cycles import (
    Cycle,
    CycleBasis,
    CycleEdge,
    compute_cycle_basis,
)
from kvlgraph.algorithms.path_utils import tree_path
from kvlgraph.algorithms.spanning import SpanningForest, build_spanning_forest
from kvlgraph.analysis import GridAnalysis, analyze_grid
from kvlgraph.config import CYCLE_CONFIG, CycleBasisConfig
from kvlgraph.errors import InputContractError, SpanningTreeInconsistencyError
from kvlgraph.graph.grid_graph import GridGraph
from kvlgraph.model.process import (
    GridLink,
    GridProcess,
    LinkMultiplier,
    PowerGrid,
    edge_specs_from_processes,
)
from kvlgraph.types.base import EdgeDir, Orientation
from kvlgraph.types.dto import EdgeSpec, GridEdge, PathStep

__all__ = [
    # Version
    "__version__",
    # Pipeline (primary API)
    "analyze_grid",
    "GridAnalysis",
    # Stages
    "build_graph",
    "build_spanning_forest",
    "tree_path",
    "compute_cycle_basis",
    # Results
    "GraphBuildResult",
    "GraphStats",
    "SpanningForest",
    "Cycle",
    "CycleBasis",
    "CycleEdge",
    # Types
    "EdgeSpec",
    "GridEdge",
    "PathStep",
    "EdgeDir",
    "Orientation",
    "GridGraph",
    # Host model
    "PowerGrid",
    "GridLink",
    "GridProcess",
    "LinkMultiplier",
    "edge_specs_from_processes",
    # Errors
    "InputContractError",
    "SpanningTreeInconsistencyError",
    # Configuration and utilities
    "CycleBasisConfig",
    "CYCLE_CONFIG",
    "logging",
]
