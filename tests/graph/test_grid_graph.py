import networkx as nx
import pytest

from kvlgraph.graph.grid_graph import GridGraph
from kvlgraph.types.dto import GridEdge


@pytest.fixture
def abc_graph():
    g = GridGraph()
    for node in ("A", "B", "C"):
        g.add_node(node)
    g.add_grid_edge(GridEdge("ab", "A", "B", length_km=2.0, reactance_per_km=0.5))
    g.add_grid_edge(GridEdge("bc", "B", "C", length_km=4.0, enforce_kvl=False))
    return g


def test_init_empty_graph():
    """A newly initialized graph has no nodes or edges."""
    g = GridGraph()
    assert len(g) == 0
    assert g.get_edges() == {}


def test_add_node_duplicate():
    """Adding a node that already exists raises ValueError."""
    g = GridGraph()
    g.add_node("A")
    with pytest.raises(ValueError, match="already exists"):
        g.add_node("A")


def test_add_grid_edge_requires_nodes():
    """Edges are never allowed to create their endpoints."""
    g = GridGraph()
    g.add_node("A")
    with pytest.raises(ValueError, match="Target node 'B' does not exist"):
        g.add_grid_edge(GridEdge("ab", "A", "B"))
    with pytest.raises(ValueError, match="Source node 'X' does not exist"):
        g.add_grid_edge(GridEdge("xa", "X", "A"))


def test_add_grid_edge_duplicate_id(abc_graph):
    with pytest.raises(ValueError, match="already exists"):
        abc_graph.add_grid_edge(GridEdge("ab", "B", "C"))


def test_edge_attributes_mirrored_to_networkx(abc_graph):
    data = abc_graph["A"]["B"]["ab"]
    assert data == {"length_km": 2.0, "reactance_per_km": 0.5, "enforce_kvl": True}


def test_parallel_edges_keep_insertion_order(abc_graph):
    abc_graph.add_grid_edge(GridEdge("ab2", "A", "B"))
    assert list(abc_graph["A"]["B"]) == ["ab", "ab2"]
    assert list(abc_graph.get_edges()) == ["ab", "bc", "ab2"]
    assert [e.edge_id for e in abc_graph.iter_grid_edges()] == ["ab", "bc", "ab2"]


def test_kvl_edges_and_reactance(abc_graph):
    assert [e.edge_id for e in abc_graph.kvl_edges()] == ["ab"]
    assert abc_graph.reactance_by_id() == {"ab": 1.0, "bc": 0.0}


def test_get_edge(abc_graph):
    expected = GridEdge("bc", "B", "C", length_km=4.0, enforce_kvl=False)
    assert abc_graph.get_edge("bc") == expected
    with pytest.raises(ValueError, match="not found"):
        abc_graph.get_edge("ca")


def test_undirected_kvl_graph(abc_graph):
    undirected = abc_graph.to_undirected_kvl_graph()
    assert isinstance(undirected, nx.MultiGraph)
    assert set(undirected.nodes) == {"A", "B"}
    assert nx.number_connected_components(undirected) == 1
