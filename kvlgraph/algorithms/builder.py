"""Build a validated grid graph from host edge descriptors.

Malformed descriptors (missing, ambiguous or self-looping endpoints) are
skipped with a warning and the build continues. Lengths are physical inputs
to reactance, so a negative or non-finite length aborts the whole build.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple

from kvlgraph.errors import InputContractError
from kvlgraph.graph.grid_graph import GridGraph
from kvlgraph.logging import get_logger
from kvlgraph.types.base import EdgeID, NodeID
from kvlgraph.types.dto import EdgeSpec, GridEdge, resolve_endpoint

LOGGER = get_logger(__name__)

WARNING_PREFIX = "WARNING:"


@dataclass(frozen=True)
class GraphStats:
    """Size and length statistics over accepted edges.

    Only edges with a positive length contribute to the minimum and maximum;
    both are 0 when no edge does.
    """

    node_count: int = 0
    edge_count: int = 0
    total_length_km: float = 0.0
    min_length_km: float = 0.0
    max_length_km: float = 0.0


@dataclass(frozen=True)
class GraphBuildResult:
    """Outcome of `build_graph`.

    Attributes:
        graph: Accepted buses and lines.
        warnings: One message per rejected edge, then the link-delay notice.
        stats: Statistics over accepted edges.
        summary: One-line description of the accepted network.
        input_count: Number of descriptors supplied, accepted or not.
    """

    graph: GridGraph
    warnings: Tuple[str, ...] = ()
    stats: GraphStats = field(default_factory=GraphStats)
    summary: str = ""
    input_count: int = 0

    @property
    def nodes(self) -> List[NodeID]:
        return list(self.graph.nodes)

    @property
    def edges(self) -> Dict[EdgeID, GridEdge]:
        return self.graph.get_edges()

    @property
    def diagnostics(self) -> Tuple[str, ...]:
        """Warnings followed by the summary line; empty for empty input."""
        if not self.input_count:
            return ()
        return self.warnings + (self.summary,)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _format_km(value: float) -> str:
    return format(value, ".10g")


def _check_length(spec: EdgeSpec) -> float:
    """Return the length of `spec` in km as a float.

    Any real number type is accepted (int, float, Decimal, Fraction, numpy
    scalars); bool, strings and complex numbers are not.
    """
    length = spec.length_km
    value = math.nan
    if isinstance(length, numbers.Number) and not isinstance(length, bool):
        try:
            value = float(length)
        except (TypeError, ValueError, OverflowError):
            value = math.nan
    if not math.isfinite(value):
        raise InputContractError(
            f"Edge '{spec.edge_id}' has invalid length {length!r}; "
            "expected a finite number of kilometres."
        )
    if value < 0:
        raise InputContractError(
            f"Edge '{spec.edge_id}' has negative length {length} km."
        )
    return value


def _endpoint_problems(from_count: int, to_count: int) -> List[str]:
    problems: List[str] = []
    if from_count == 0:
        problems.append("no inputs")
    elif from_count > 1:
        problems.append("more than 1 input")
    if to_count == 0:
        problems.append("no outputs")
    elif to_count > 1:
        problems.append("more than 1 output")
    return problems


def compute_stats(graph: GridGraph) -> GraphStats:
    """Return node/edge counts and length statistics for `graph`."""
    lengths = [e.length_km for e in graph.iter_grid_edges()]
    positive = [length for length in lengths if length > 0]
    return GraphStats(
        node_count=graph.number_of_nodes(),
        edge_count=len(lengths),
        total_length_km=math.fsum(lengths),
        min_length_km=min(positive) if positive else 0.0,
        max_length_km=max(positive) if positive else 0.0,
    )


def format_summary(stats: GraphStats) -> str:
    """Describe the network in one line, e.g. for display by the host."""
    parts = [
        _plural(stats.node_count, "node"),
        _plural(stats.edge_count, "edge"),
        f"total length: {_format_km(stats.total_length_km)} km",
    ]
    if stats.edge_count > 1:
        parts.append(
            f"range: {_format_km(stats.min_length_km)} - "
            f"{_format_km(stats.max_length_km)} km"
        )
    return "Overall power grid comprises " + ", ".join(parts)


def build_graph(specs: Iterable[EdgeSpec]) -> GraphBuildResult:
    """Validate edge descriptors and assemble the grid graph.

    Nodes are created the first time an accepted edge references them, so
    endpoints of rejected edges do not appear unless another edge uses them.

    Args:
        specs: Edge descriptors in host order. Order is preserved in the graph.

    Returns:
        GraphBuildResult with the graph, warnings, statistics and summary.

    Raises:
        InputContractError: On a negative or non-finite length, or when two
            descriptors share an edge id.
    """
    graph = GridGraph()
    warnings: List[str] = []
    seen_ids: Set[EdgeID] = set()
    link_delays = 0
    input_count = 0

    for spec in specs:
        input_count += 1
        length_km = _check_length(spec)
        if spec.edge_id in seen_ids:
            raise InputContractError(f"Duplicate edge id '{spec.edge_id}'.")
        seen_ids.add(spec.edge_id)

        from_node, from_count = resolve_endpoint(spec.from_node)
        to_node, to_count = resolve_endpoint(spec.to_node)
        problems = _endpoint_problems(from_count, to_count)
        if problems:
            message = f'Grid edge "{spec.edge_id}" has ' + " and ".join(problems)
        elif from_node == to_node:
            message = (
                f'Grid edge "{spec.edge_id}" connects node "{from_node}" to itself'
            )
        else:
            message = ""
        if message:
            LOGGER.warning(message)
            warnings.append(f"{WARNING_PREFIX} {message}")
            continue

        for node in (from_node, to_node):
            if node not in graph:
                graph.add_node(node)
        graph.add_grid_edge(
            GridEdge(
                edge_id=spec.edge_id,
                from_node=from_node,
                to_node=to_node,
                length_km=length_km,
                reactance_per_km=float(spec.reactance_per_km),
                enforce_kvl=bool(spec.enforce_kvl),
            )
        )
        if spec.has_link_delay:
            link_delays += 1

    if link_delays:
        message = f"{_plural(link_delays, 'link delay')} will be ignored"
        LOGGER.warning(message)
        warnings.append(f"{WARNING_PREFIX} {message}")

    stats = compute_stats(graph)
    summary = format_summary(stats)
    LOGGER.debug(summary)
    return GraphBuildResult(
        graph=graph,
        warnings=tuple(warnings),
        stats=stats,
        summary=summary,
        input_count=input_count,
    )
