from __future__ import annotations

import numpy as np
import pytest

from adjgraph import AdjacencyMatrixGraph

NAMES = ["Yael", "Beto", "Yair", "Juan", "Nate", "Saul", "Xime", "Mary", "Sara"]


@pytest.fixture
def people() -> AdjacencyMatrixGraph:
    graph = AdjacencyMatrixGraph(9)
    for name in NAMES:
        assert graph.add_vertex(name)

    graph.add_arc("Xime", "Yael")
    graph.add_arc("Nate", "Yael")
    for src, dest in [
        ("Juan", "Nate"),
        ("Juan", "Xime"),
        ("Beto", "Juan"),
        ("Beto", "Xime"),
        ("Beto", "Yael"),
        ("Beto", "Saul"),
        ("Beto", "Nate"),
        ("Xime", "Nate"),
        ("Juan", "Saul"),
        ("Juan", "Yael"),
        ("Saul", "Yair"),
        ("Mary", "Sara"),
        ("Beto", "Sara"),
        ("Xime", "Sara"),
        ("Xime", "Mary"),
    ]:
        assert graph.add_edge(src, dest)
    return graph


@pytest.fixture
def diamond() -> AdjacencyMatrixGraph:
    graph = AdjacencyMatrixGraph(5)
    for key in "ABCDE":
        graph.add_vertex(key)
    graph.add_arc("A", "B")
    graph.add_arc("A", "C")
    graph.add_arc("B", "D")
    graph.add_arc("C", "D")
    graph.add_arc("C", "E")
    return graph


def test_capacity_is_enforced():
    graph = AdjacencyMatrixGraph(2)
    assert graph.capacity == 2
    assert graph.add_vertex("a")
    assert graph.add_vertex("b")
    assert graph.is_full
    assert not graph.add_vertex("c")
    assert graph.vertex_count() == 2


@pytest.mark.parametrize("capacity", [0, -3])
def test_capacity_must_be_positive(capacity: int):
    with pytest.raises(ValueError):
        AdjacencyMatrixGraph(capacity)


def test_diagonal_is_not_a_self_loop():
    for weighted in (False, True):
        graph = AdjacencyMatrixGraph(3, weighted=weighted)
        graph.add_vertex("a")
        assert graph.arc_count() == 0
        assert not graph.has_arc("a", "a")
        assert graph.neighbours("a") == []
        assert list(graph.dfs("a")) == ["a"]


def test_dfs_expands_last_neighbour_first(diamond: AdjacencyMatrixGraph):
    assert list(diamond.dfs("A")) == ["A", "C", "E", "D", "B"]


def test_bfs_is_level_order(diamond: AdjacencyMatrixGraph):
    assert list(diamond.bfs("A")) == ["A", "B", "C", "D", "E"]


def test_weighted_scenario_orders(build_weighted_scenario):
    graph = build_weighted_scenario(AdjacencyMatrixGraph(5, weighted=True))
    assert list(graph.dfs(4)) == [4, 3, 5, 1, 2]
    assert list(graph.bfs(4)) == [4, 1, 3, 2, 5]


def test_failed_remove_arc_leaves_matrix_untouched(people: AdjacencyMatrixGraph):
    before = people.to_string()
    assert not people.remove_arc("Yair", "Mary")
    assert people.to_string() == before

    assert people.remove_arc("Yair", "Saul")
    assert people.to_string() != before
    assert people.has_arc("Saul", "Yair")


def test_removal_compacts_and_frees_one_slot():
    graph = AdjacencyMatrixGraph(4)
    for key in "ABCD":
        graph.add_vertex(key)
    graph.add_arc("A", "C")
    graph.add_arc("C", "D")
    graph.add_arc("D", "A")
    graph.add_edge("B", "D")
    assert graph.is_full

    assert graph.remove_vertex("B")
    assert graph.vertices() == ["A", "C", "D"]
    assert sorted(graph.arcs()) == [("A", "C", None), ("C", "D", None), ("D", "A", None)]

    # positions moved: C is now row/column 1, D row/column 2
    expected = np.array(
        [
            [True, True, False],
            [False, True, True],
            [True, False, True],
        ]
    )
    np.testing.assert_array_equal(graph._adjacency[:3, :3], expected)

    assert graph.add_vertex("E")
    assert not graph.add_vertex("F")
    assert graph.neighbours("E") == []
    assert not graph.has_arc("D", "E")
    assert list(graph.dfs("A")) == ["A", "C", "D"]


def test_weighted_removal_compacts():
    graph = AdjacencyMatrixGraph(3, weighted=True)
    for key in (1, 2, 3):
        graph.add_vertex(key)
    graph.add_arc(1, 2, 0.5)
    graph.add_arc(2, 3, 0.7)
    graph.add_edge(1, 3, 0.9)

    assert graph.remove_vertex(1)
    assert graph.vertices() == [2, 3]
    assert graph.get_arc_weight(2, 3) == 0.7
    assert graph.get_arc_weight(3, 2) is None
    assert graph.arc_count() == 1
    assert np.isnan(graph._weights[2, :2]).all()
    assert np.isnan(graph._weights[:2, 2]).all()
    assert graph._weights[2, 2] == 0.0

    assert graph.add_vertex(4)
    assert graph.get_arc_weight(4, 2) is None
    assert graph.add_edge(4, 2, 1.1)
    assert graph.get_edge_weight(2, 4) == 1.1


def test_removing_last_vertex():
    graph = AdjacencyMatrixGraph(2)
    graph.add_vertex("a")
    graph.add_vertex("b")
    graph.add_edge("a", "b")
    assert graph.remove_vertex("b")
    assert graph.neighbours("a") == []
    assert graph.add_vertex("c")
    assert not graph.has_edge("a", "c")


def test_to_string_unweighted():
    graph = AdjacencyMatrixGraph(3)
    graph.add_vertex("A")
    graph.add_vertex("B")
    graph.add_arc("A", "B")
    assert graph.to_string() == "  A B\nA T T\nB F T\n"


def test_to_string_weighted_uses_absent_marker():
    graph = AdjacencyMatrixGraph(2, weighted=True)
    graph.add_vertex("A")
    graph.add_vertex("B")
    graph.add_arc("A", "B", 1.5)
    lines = graph.to_string().splitlines()
    assert lines[0].split() == ["A", "B"]
    assert lines[1].split() == ["A", "0.0", "1.5"]
    assert lines[2].split() == ["B", "null", "0.0"]
