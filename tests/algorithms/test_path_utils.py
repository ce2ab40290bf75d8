import pytest

from kvlgraph.algorithms.path_utils import tree_path
from kvlgraph.config import CYCLE_CONFIG
from kvlgraph.errors import SpanningTreeInconsistencyError
from kvlgraph.types.dto import GridEdge, PathStep


def _incidence(edges):
    incidence = {}
    for e in edges:
        incidence.setdefault(e.from_node, []).append(e)
        incidence.setdefault(e.to_node, []).append(e)
    return incidence


@pytest.fixture
def star():
    #        B
    #        ▲
    #     e1 │
    #        │    e2
    #   D ◄──A ◄────── C
    #    e3
    e1 = GridEdge("e1", "A", "B")
    e2 = GridEdge("e2", "C", "A")
    e3 = GridEdge("e3", "A", "D")
    return _incidence([e1, e2, e3]), e1, e2, e3


def test_path_directions(star):
    incidence, e1, e2, _ = star

    assert tree_path(incidence, "B", "C") == (
        PathStep(e1, "rev"),
        PathStep(e2, "rev"),
    )
    assert tree_path(incidence, "C", "B") == (
        PathStep(e2, "fwd"),
        PathStep(e1, "fwd"),
    )


def test_path_steps_chain(star):
    incidence = star[0]
    path = tree_path(incidence, "D", "C")

    assert path[0].start_node == "D"
    assert path[-1].end_node == "C"
    for prev, nxt in zip(path, path[1:]):
        assert prev.end_node == nxt.start_node


def test_same_node_gives_empty_path(star):
    assert tree_path(star[0], "A", "A") == ()


def test_unreachable_returns_none(star):
    incidence = dict(star[0])
    island = GridEdge("far", "X", "Y")
    incidence.update(_incidence([island]))

    assert tree_path(incidence, "B", "Y") is None
    assert tree_path(incidence, "missing", "B") is None


def test_deep_chain_does_not_recurse():
    """A long radial feeder must not hit the interpreter recursion limit."""
    edges = [GridEdge(i, i, i + 1) for i in range(5000)]
    path = tree_path(_incidence(edges), 0, 5000)

    assert len(path) == 5000
    assert all(step.direction == "fwd" for step in path)


def test_step_cap_reports_corrupt_incidence():
    # A cycle in the incidence map lets the search wander; a small cap turns
    # this into an error instead of a long walk.
    edges = [
        GridEdge("a", 0, 1),
        GridEdge("b", 1, 2),
        GridEdge("c", 2, 0),
        GridEdge("d", 2, 3),
    ]
    with pytest.raises(SpanningTreeInconsistencyError, match="exceeded 2 steps"):
        tree_path(_incidence(edges), 0, 3, max_steps=2)


def test_default_cap_from_config(star, monkeypatch):
    monkeypatch.setattr(CYCLE_CONFIG, "max_path_steps", 1)
    with pytest.raises(SpanningTreeInconsistencyError):
        tree_path(star[0], "B", "C")
