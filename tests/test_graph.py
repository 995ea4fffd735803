"""Tests for the graph abstraction."""

from __future__ import annotations

import pytest

from graph_blocks import (
    DuplicateVertexError,
    Edge,
    FilteredGraph,
    FrozenGraphError,
    Graph,
    GraphTypeError,
    InvalidEdgeError,
    InvalidVertexError,
    ParanoidGraph,
)


class TestEdge:
    """Tests for the Edge record."""

    def test_endpoints(self):
        edge = Edge("a", "b")
        assert edge.source == "a"
        assert edge.target == "b"
        assert not edge.is_loop

    def test_loop(self):
        assert Edge(1, 1).is_loop

    def test_identity_equality(self):
        """Parallel edges are distinct."""
        assert Edge(1, 2) != Edge(1, 2)

    def test_repr(self):
        assert repr(Edge(1, 2)) == "Edge(1, 2)"


class TestGraph:
    """Tests for the mutable Graph."""

    def test_add_vertex(self):
        g = Graph()
        assert g.add_vertex(1) is True
        assert g.add_vertex(1) is False
        assert 1 in g
        assert len(g) == 1

    def test_add_edge_adds_endpoints(self):
        g = Graph()
        edge = g.add_edge("a", "b")
        assert edge is not None
        assert g.vertex_set() == frozenset({"a", "b"})
        assert g.edge_count == 1
        assert g.contains_edge(edge)

    def test_simple_graph_rejects_parallel_edges(self):
        """A second edge between the same pair is not added, either way round."""
        g = Graph()
        g.add_edge(1, 2)
        assert g.add_edge(1, 2) is None
        assert g.add_edge(2, 1) is None
        assert g.edge_count == 1

    def test_multigraph_keeps_parallel_edges(self):
        g = Graph(multigraph=True)
        e1 = g.add_edge(1, 2)
        e2 = g.add_edge(2, 1)
        assert e1 is not None and e2 is not None
        assert g.edge_count == 2
        assert g.get_all_edges(1, 2) == [e1, e2]
        assert g.degree(1) == 2
        assert g.neighbors(1) == [2]

    def test_loops_rejected_by_default(self):
        g = Graph()
        with pytest.raises(GraphTypeError, match="Loops not allowed"):
            g.add_edge(1, 1)

    def test_loops_allowed(self):
        """A self-loop is listed once but contributes 2 to the degree."""
        g = Graph(allow_loops=True)
        loop = g.add_edge(1, 1)
        g.add_edge(1, 2)
        assert g.edges_of(1).count(loop) == 1
        assert g.degree(1) == 3
        assert g.opposite(loop, 1) == 1

    def test_incidence_order(self):
        """Incident edges come back in insertion order."""
        g = Graph()
        e1 = g.add_edge(0, 1)
        e2 = g.add_edge(0, 2)
        e3 = g.add_edge(3, 0)
        assert g.edges_of(0) == [e1, e2, e3]
        assert g.neighbors(0) == [1, 2, 3]
        assert list(g.vertices()) == [0, 1, 2, 3]

    def test_opposite(self):
        g = Graph()
        edge = g.add_edge("x", "y")
        assert g.opposite(edge, "x") == "y"
        assert g.opposite(edge, "y") == "x"

    def test_opposite_not_incident(self):
        g = Graph()
        edge = g.add_edge("x", "y")
        with pytest.raises(InvalidEdgeError):
            g.opposite(edge, "z")

    def test_get_edge(self):
        g = Graph.from_edges([(1, 2), (2, 3)])
        assert g.get_edge(2, 1) is not None
        assert g.get_edge(1, 3) is None

    def test_directed(self):
        g = Graph(directed=True)
        edge = g.add_edge(1, 2)
        assert g.is_directed
        assert g.out_edges_of(1) == [edge]
        assert g.in_edges_of(1) == []
        assert g.in_edges_of(2) == [edge]
        assert g.edges_of(2) == [edge]
        assert g.out_degree(1) == 1
        assert g.in_degree(2) == 1
        assert g.degree(2) == 1
        assert g.get_edge(1, 2) is edge
        assert g.get_edge(2, 1) is None

    def test_directed_allows_reverse_edge(self):
        g = Graph(directed=True)
        g.add_edge(1, 2)
        assert g.add_edge(2, 1) is not None
        assert g.edge_count == 2

    def test_remove_edge(self):
        g = Graph()
        edge = g.add_edge(1, 2)
        assert g.remove_edge(edge) is True
        assert g.remove_edge(edge) is False
        assert g.edges_of(1) == []
        assert g.edges_of(2) == []
        assert g.vertex_count == 2

    def test_remove_vertex(self):
        """Removing a vertex removes its edges."""
        g = Graph.from_edges([(1, 2), (2, 3), (3, 1)])
        assert g.remove_vertex(2) is True
        assert g.remove_vertex(2) is False
        assert g.vertex_set() == frozenset({1, 3})
        assert g.edge_count == 1
        assert g.neighbors(1) == [3]

    def test_remove_vertex_directed(self):
        g = Graph.from_edges([(1, 2), (2, 3)], directed=True)
        g.remove_vertex(2)
        assert g.edge_count == 0
        assert g.out_edges_of(1) == []
        assert g.in_edges_of(3) == []

    def test_unknown_vertex_queries(self):
        g = Graph.from_edges([(1, 2)])
        with pytest.raises(InvalidVertexError, match="No such vertex"):
            g.edges_of(9)
        with pytest.raises(InvalidVertexError):
            g.degree(9)
        with pytest.raises(InvalidVertexError):
            g.get_edge(1, 9)
        assert 9 not in g

    def test_from_edges_with_isolated_vertices(self):
        g = Graph.from_edges([(1, 2)], vertices=[0, 5])
        assert list(g.vertices()) == [0, 5, 1, 2]
        assert g.degree(5) == 0

    def test_repr(self):
        g = Graph.from_edges([(1, 2)])
        assert repr(g) == "Graph(vertices=2, edges=1)"


class TestCopy:
    """Tests for Graph.copy()."""

    def test_copy_is_independent(self):
        g1 = Graph()
        one, two, three = "1", "2", "3"
        g1.add_vertex(one)
        g1.add_vertex(two)
        g1.add_vertex(three)
        g1.add_edge(one, two)
        g1.add_edge(two, three)

        g2 = g1.copy()
        assert g2.edge_count == 2
        assert g2.get_edge(one, two) is not None
        assert g2.remove_edge(g2.get_edge(one, two))
        assert g2.remove_edge(g2.get_edge("2", "3"))
        assert g2.edge_count == 0
        assert g1.edge_count == 2

    def test_copy_keeps_flags(self):
        g = Graph(directed=True, multigraph=True, allow_loops=True)
        g.add_edge(1, 1)
        g.add_edge(1, 2)
        g.add_edge(1, 2)
        clone = g.copy()
        assert clone.is_directed
        assert clone.is_multigraph
        assert clone.allows_loops
        assert clone.edge_count == 3

    def test_copy_of_frozen_is_mutable(self):
        g = Graph.from_edges([(1, 2)]).freeze()
        clone = g.copy()
        assert not clone.is_frozen
        clone.add_edge(2, 3)
        assert clone.edge_count == 2


class TestFreeze:
    """Tests for frozen graphs."""

    def test_freeze_returns_self(self):
        g = Graph()
        assert g.freeze() is g
        assert g.is_frozen

    def test_mutators_raise(self):
        g = Graph.from_edges([(1, 2)]).freeze()
        edge = g.get_edge(1, 2)
        with pytest.raises(FrozenGraphError):
            g.add_vertex(3)
        with pytest.raises(FrozenGraphError):
            g.add_edge(2, 3)
        with pytest.raises(FrozenGraphError):
            g.remove_edge(edge)
        with pytest.raises(FrozenGraphError):
            g.remove_vertex(1)
        assert g.edge_count == 1

    def test_frozen_error_is_type_error(self):
        g = Graph().freeze()
        with pytest.raises(TypeError):
            g.add_vertex(1)


class TestFilteredGraph:
    """Tests for filtered graph views."""

    def _make_square(self) -> Graph:
        return Graph.from_edges([(1, 2), (2, 3), (3, 4), (4, 1), (1, 3)])

    def test_vertex_filter(self):
        g = self._make_square()
        view = FilteredGraph(g, vertex_filter=frozenset({1, 2, 3}).__contains__)
        assert list(view.vertices()) == [1, 2, 3]
        assert view.vertex_count == 3
        # Edges touching vertex 4 are hidden
        assert view.edge_count == 3
        assert view.neighbors(1) == [2, 3]
        assert 4 not in view

    def test_edge_filter(self):
        g = self._make_square()
        chord = g.get_edge(1, 3)
        view = FilteredGraph(g, edge_filter=lambda e: e is not chord)
        assert view.vertex_count == 4
        assert view.edge_count == 4
        assert not view.contains_edge(chord)
        assert view.degree(1) == 2

    def test_explicit_vertices(self):
        """An explicit vertex collection limits the view like a vertex filter."""
        g = self._make_square()
        view = FilteredGraph(g, vertices=[3, 1, 2, 99])
        # Given order, candidates missing from the base are skipped
        assert list(view.vertices()) == [3, 1, 2]
        assert view.edge_count == 3
        assert view.edge_set() == {g.get_edge(1, 2), g.get_edge(2, 3), g.get_edge(1, 3)}
        assert 4 not in view
        assert 99 not in view
        with pytest.raises(InvalidVertexError):
            view.edges_of(4)

    def test_explicit_vertices_with_filters(self):
        g = self._make_square()
        chord = g.get_edge(1, 3)
        view = FilteredGraph(
            g,
            vertex_filter=lambda v: v != 2,
            edge_filter=lambda e: e is not chord,
            vertices=[1, 2, 3, 4],
        )
        assert view.vertex_set() == frozenset({1, 3, 4})
        assert view.edge_set() == {g.get_edge(3, 4), g.get_edge(4, 1)}

    def test_explicit_vertices_directed(self):
        g = Graph.from_edges([(1, 2), (2, 3), (3, 1)], directed=True)
        view = FilteredGraph(g, vertices=[1, 2])
        assert view.edge_count == 1
        assert view.out_degree(1) == 1
        assert view.in_degree(1) == 0

    def test_no_filters(self):
        g = self._make_square()
        view = FilteredGraph(g)
        assert view.vertex_set() == g.vertex_set()
        assert view.edge_set() == g.edge_set()

    def test_hidden_vertex_queries_raise(self):
        g = self._make_square()
        view = FilteredGraph(g, vertex_filter=lambda v: v != 4)
        with pytest.raises(InvalidVertexError):
            view.edges_of(4)

    def test_lazy(self):
        """Changes to the base graph show through the view."""
        g = self._make_square()
        view = FilteredGraph(g, vertex_filter=lambda v: v < 10)
        g.add_edge(4, 5)
        g.add_edge(5, 11)
        assert 5 in view
        assert 11 not in view
        assert view.degree(5) == 1

    def test_view_does_not_write_through(self):
        g = self._make_square()
        view = FilteredGraph(g)
        assert not hasattr(view, "add_vertex")
        assert not hasattr(view, "remove_edge")
        assert view.base is g

    def test_identity_hash(self):
        """Views over the same vertices are distinct keys."""
        g = self._make_square()
        keep = frozenset({1, 2}).__contains__
        a = FilteredGraph(g, vertex_filter=keep)
        b = FilteredGraph(g, vertex_filter=keep)
        assert a != b
        assert len({a: 1, b: 2}) == 2

    def test_views_as_vertices(self):
        g = self._make_square()
        a = FilteredGraph(g, vertex_filter=lambda v: v in (1, 2))
        b = FilteredGraph(g, vertex_filter=lambda v: v in (3, 4))
        tree = Graph()
        tree.add_edge(a, b)
        assert tree.neighbors(a) == [b]

    def test_directed_view(self):
        g = Graph.from_edges([(1, 2), (2, 3), (3, 1)], directed=True)
        view = FilteredGraph(g, vertex_filter=lambda v: v != 3)
        assert view.is_directed
        assert view.out_degree(1) == 1
        assert view.in_degree(1) == 0


class BrokenVertex:
    """Vertex whose __eq__ disagrees with its identity-based __hash__."""

    def __init__(self, x):
        self.x = x

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BrokenVertex) and self.x == other.x

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"BrokenVertex({self.x})"


class TestParanoidGraph:
    """Tests for ParanoidGraph duplicate detection."""

    def test_rejects_equal_vertex_with_different_hash(self):
        v1 = BrokenVertex(1)
        v2 = BrokenVertex(2)
        v3 = BrokenVertex(1)

        pg = ParanoidGraph(Graph())
        pg.add_vertex(v1)
        pg.add_vertex(v2)
        with pytest.raises(DuplicateVertexError, match="hashes differently"):
            pg.add_vertex(v3)
        assert pg.vertex_count == 2

    def test_plain_graph_stores_both(self):
        """Without the wrapper, the broken type silently duplicates."""
        g = Graph()
        g.add_vertex(BrokenVertex(1))
        g.add_vertex(BrokenVertex(1))
        assert g.vertex_count == 2

    def test_same_object_is_not_duplicate(self):
        v1 = BrokenVertex(1)
        pg = ParanoidGraph(Graph())
        assert pg.add_vertex(v1) is True
        assert pg.add_vertex(v1) is False

    def test_well_behaved_equal_values(self):
        """Equal values with equal hashes are ordinary duplicates."""
        pg = ParanoidGraph(Graph())
        pg.add_vertex(("a", 1000))
        assert pg.add_vertex(("a", int("1000"))) is False
        assert pg.vertex_count == 1

    def test_add_edge_checks_endpoints(self):
        v1, v2 = BrokenVertex(1), BrokenVertex(2)
        pg = ParanoidGraph(Graph())
        pg.add_edge(v1, v2)
        with pytest.raises(DuplicateVertexError):
            pg.add_edge(v1, BrokenVertex(2))
        assert pg.edge_count == 1

    def test_delegates(self):
        g = Graph()
        pg = ParanoidGraph(g)
        edge = pg.add_edge(1, 2)
        assert pg.graph is g
        assert g.contains_edge(edge)
        assert pg.edges_of(1) == [edge]
        assert pg.remove_edge(edge)
        assert pg.remove_vertex(2)
        assert g.vertex_set() == frozenset({1})
