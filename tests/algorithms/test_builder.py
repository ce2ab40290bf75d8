import logging
import math
from decimal import Decimal
from fractions import Fraction

import pytest

from kvlgraph.algorithms.builder import (
    GraphStats,
    build_graph,
    format_summary,
)
from kvlgraph.errors import InputContractError
from kvlgraph.types.dto import EdgeSpec


def test_triangle_build(triangle):
    result = build_graph(triangle)

    assert result.nodes == ["n1", "n2", "n3"]
    assert list(result.edges) == ["A", "B", "C"]
    assert result.warnings == ()
    assert result.stats == GraphStats(
        node_count=3,
        edge_count=3,
        total_length_km=23.0,
        min_length_km=5.0,
        max_length_km=10.0,
    )
    assert result.diagnostics == (
        "Overall power grid comprises 3 nodes, 3 edges, "
        "total length: 23 km, range: 5 - 10 km",
    )


def test_empty_input():
    result = build_graph([])

    assert result.nodes == []
    assert result.edges == {}
    assert result.warnings == ()
    assert result.diagnostics == ()
    assert result.stats.min_length_km == 0
    assert result.summary == (
        "Overall power grid comprises 0 nodes, 0 edges, total length: 0 km"
    )


def test_single_edge_summary_has_no_range():
    result = build_graph([EdgeSpec("A", "n1", "n2", length_km=2.5)])
    assert result.summary == (
        "Overall power grid comprises 2 nodes, 1 edge, total length: 2.5 km"
    )


def test_zero_lengths_do_not_count_for_range():
    result = build_graph(
        [
            EdgeSpec("A", "n1", "n2", length_km=0),
            EdgeSpec("B", "n2", "n3", length_km=4),
            EdgeSpec("C", "n3", "n4", length_km=6),
        ]
    )
    assert result.stats.min_length_km == 4
    assert result.stats.max_length_km == 6
    assert result.stats.total_length_km == 10


def test_all_zero_lengths_report_zero_min():
    result = build_graph(
        [EdgeSpec("A", "n1", "n2"), EdgeSpec("B", "n2", "n3")]
    )
    assert result.stats.min_length_km == 0
    assert result.stats.max_length_km == 0


@pytest.mark.parametrize(
    "from_node,to_node,problem",
    [
        (None, "n2", "no inputs"),
        ([], "n2", "no inputs"),
        (["n0", "n1"], "n2", "more than 1 input"),
        ("n1", None, "no outputs"),
        ("n1", ["n2", "n3"], "more than 1 output"),
        (None, ["n2", "n3"], "no inputs and more than 1 output"),
    ],
)
def test_malformed_edge_is_skipped(from_node, to_node, problem):
    result = build_graph(
        [
            EdgeSpec("ok", "n1", "n2", length_km=1),
            EdgeSpec("bad", from_node, to_node, length_km=1),
        ]
    )

    assert list(result.edges) == ["ok"]
    assert result.warnings == (f'WARNING: Grid edge "bad" has {problem}',)
    assert result.stats.edge_count == 1


def test_single_candidate_list_resolves():
    result = build_graph([EdgeSpec("A", ["n1"], ["n2", None])])
    assert result.graph.get_edge("A").from_node == "n1"
    assert result.graph.get_edge("A").to_node == "n2"
    assert result.warnings == ()


def test_rejected_endpoints_create_no_nodes():
    result = build_graph([EdgeSpec("bad", "lonely", ["x", "y"])])
    assert result.nodes == []
    assert len(result.diagnostics) == 2


def test_self_loop_is_rejected():
    result = build_graph([EdgeSpec("loop", "n1", "n1", length_km=3)])
    assert result.edges == {}
    assert result.warnings == ('WARNING: Grid edge "loop" connects node "n1" to itself',)


def test_link_delays_are_counted():
    result = build_graph(
        [
            EdgeSpec("A", "n1", "n2", has_link_delay=True),
            EdgeSpec("B", "n2", "n3", has_link_delay=True),
            EdgeSpec("C", None, "n3", has_link_delay=True),
        ]
    )
    assert result.warnings[-1] == "WARNING: 2 link delays will be ignored"


@pytest.mark.parametrize(
    "length", [-0.1, math.nan, math.inf, "10", True, False, 1 + 2j, Decimal("NaN")]
)
def test_invalid_length_aborts_build(length):
    specs = [
        EdgeSpec("A", "n1", "n2", length_km=1),
        EdgeSpec("B", "n2", "n3", length_km=length),
    ]
    with pytest.raises(InputContractError, match="'B'"):
        build_graph(specs)


def test_negative_length_on_malformed_edge_still_aborts():
    with pytest.raises(InputContractError, match="negative length"):
        build_graph([EdgeSpec("B", None, None, length_km=-1)])


def test_duplicate_edge_id_aborts_build():
    with pytest.raises(InputContractError, match="Duplicate edge id 'A'"):
        build_graph([EdgeSpec("A", "n1", "n2"), EdgeSpec("A", "n2", "n3")])


def test_input_contract_error_is_value_error():
    assert issubclass(InputContractError, ValueError)


def test_non_kvl_edges_stay_in_graph():
    result = build_graph([EdgeSpec("A", "n1", "n2", enforce_kvl=False)])
    assert result.graph.get_edge("A").enforce_kvl is False
    assert result.graph.kvl_edges() == []


def test_format_summary_fractional_lengths():
    stats = GraphStats(
        node_count=1,
        edge_count=2,
        total_length_km=0.75,
        min_length_km=0.25,
        max_length_km=0.5,
    )
    assert format_summary(stats) == (
        "Overall power grid comprises 1 node, 2 edges, "
        "total length: 0.75 km, range: 0.25 - 0.5 km"
    )


@pytest.mark.parametrize(
    "length, expected",
    [(Decimal("1.5"), 1.5), (Fraction(3, 4), 0.75), (7, 7.0)],
)
def test_real_length_types_are_accepted(length, expected):
    result = build_graph([EdgeSpec("A", "n1", "n2", length_km=length)])

    edge = result.edges["A"]
    assert type(edge.length_km) is float
    assert edge.length_km == expected
    assert result.stats.total_length_km == expected


def test_logged_warnings_omit_diagnostic_prefix(caplog):
    """The log level already marks a warning; only diagnostics carry the prefix."""
    with caplog.at_level(logging.WARNING, logger="kvlgraph"):
        result = build_graph(
            [
                EdgeSpec("bad", None, "n2"),
                EdgeSpec("A", "n1", "n2", has_link_delay=True),
            ]
        )

    assert result.warnings == (
        'WARNING: Grid edge "bad" has no inputs',
        "WARNING: 1 link delay will be ignored",
    )
    messages = [
        r.getMessage()
        for r in caplog.records
        if r.name == "kvlgraph.algorithms.builder"
    ]
    assert messages == [
        'Grid edge "bad" has no inputs',
        "1 link delay will be ignored",
    ]
