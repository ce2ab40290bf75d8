"""Graph primitives.

This package provides `GridGraph`, the strict multi-directed graph that holds
the accepted buses and lines of a power grid.
"""

from kvlgraph.graph.grid_graph import GridGraph

__all__ = ["GridGraph"]
