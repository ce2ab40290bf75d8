"""Base aliases and enums shared by the cycle basis algorithms."""

from __future__ import annotations

from enum import IntEnum
from typing import Hashable, Literal

#: Identifier of an electrical bus (graph node).
NodeID = Hashable

#: Identifier of a grid line (graph edge). Unique across the edge list.
EdgeID = Hashable

#: Traversal direction of an edge along a path: 'fwd' from its from_node to its
#: to_node, 'rev' the other way.
EdgeDir = Literal["fwd", "rev"]


class Orientation(IntEnum):
    """Sign of an edge within a cycle relative to the cycle's direction.

    Members behave as the integers +1 and -1 so they can be used directly as
    coefficients.
    """

    FORWARD = 1
    REVERSE = -1

    @property
    def symbol(self) -> str:
        """Return '+' or '-'."""
        return "+" if self is Orientation.FORWARD else "-"
