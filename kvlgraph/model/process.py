"""Grid processes, power grids and links as seen by the host model.

A grid process stands for one line of a power grid. It is connected to
buses by links; only links with the LEVEL multiplier carry the line's power
flow. This module turns processes into `EdgeSpec` descriptors without judging
them: ambiguous or missing connections are passed on as candidate lists so
that `build_graph` can report them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional

from kvlgraph.types.base import NodeID
from kvlgraph.types.dto import EdgeSpec


class LinkMultiplier(IntEnum):
    """What a link transfers from its source to its target."""

    LEVEL = 1
    THROUGHPUT = 2
    INCREASE = 3
    SUM = 4
    MEAN = 5
    STARTUP = 6
    POSITIVE = 7
    ZERO = 8


@dataclass
class PowerGrid:
    """A power grid that owns grid processes.

    Attributes:
        name: Grid name.
        reactance_per_km: Line reactance per kilometre for this grid.
        kirchhoff: Whether Kirchhoff's voltage law must be enforced.
    """

    name: str
    reactance_per_km: float = 0.0
    kirchhoff: bool = True


@dataclass
class GridLink:
    """A link between a bus and a grid process.

    Attributes:
        from_node: Bus the link starts at (for input links).
        to_node: Bus the link ends at (for output links).
        multiplier: Link multiplier; only LEVEL links carry line flow.
        flow_delay: Delay in time steps; power flow ignores it.
        ignored: Whether the host excludes this link from the run.
    """

    from_node: Optional[NodeID] = None
    to_node: Optional[NodeID] = None
    multiplier: LinkMultiplier = LinkMultiplier.LEVEL
    flow_delay: float = 0.0
    ignored: bool = False

    @property
    def carries_level(self) -> bool:
        return self.multiplier == LinkMultiplier.LEVEL and not self.ignored


@dataclass
class GridProcess:
    """A process that models one line of a power grid."""

    name: str
    grid: Optional[PowerGrid]
    length_km: float = 0.0
    inputs: List[GridLink] = field(default_factory=list)
    outputs: List[GridLink] = field(default_factory=list)
    ignored: bool = False


def edge_spec_from_process(process: GridProcess) -> EdgeSpec:
    """Describe `process` as an edge.

    Endpoints are the candidate lists of LEVEL input and output links, so a
    process with zero or several of them yields an unresolvable endpoint.

    Raises:
        ValueError: If the process does not belong to a grid.
    """
    if process.grid is None:
        raise ValueError(f"Process '{process.name}' is not a grid process.")

    from_nodes = [link.from_node for link in process.inputs if link.carries_level]
    to_nodes = [link.to_node for link in process.outputs if link.carries_level]
    has_delay = bool(process.outputs) and process.outputs[0].flow_delay != 0

    return EdgeSpec(
        edge_id=process.name,
        from_node=from_nodes,
        to_node=to_nodes,
        length_km=process.length_km,
        reactance_per_km=process.grid.reactance_per_km,
        enforce_kvl=process.grid.kirchhoff,
        has_link_delay=has_delay,
    )


def edge_specs_from_processes(processes: Iterable[GridProcess]) -> List[EdgeSpec]:
    """Describe every non-ignored grid process as an edge, preserving order.

    Processes without a grid are not grid lines and are skipped.
    """
    return [
        edge_spec_from_process(p)
        for p in processes
        if p.grid is not None and not p.ignored
    ]
