"""Exception types raised by kvlgraph.

Malformed edges are not exceptions: they are reported as warnings by
`kvlgraph.algorithms.builder.build_graph` and the build continues.
"""

from __future__ import annotations


class InputContractError(ValueError):
    """Edge input that no partial build can recover from.

    Raised for negative or non-finite line lengths and for duplicate edge ids.
    The caller must fix the input before retrying.
    """


class SpanningTreeInconsistencyError(RuntimeError):
    """Path search through the spanning forest failed.

    Closing edges always join two nodes of the same tree, so a missing path (or
    a search that runs past its step cap) means the forest or its incidence map
    is corrupt. This is a programming error, not a property of the grid.
    """
