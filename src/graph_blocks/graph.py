"""
Graph abstraction used by the connectivity algorithms.

This module provides the graph types the algorithms operate on:

- Edge: Edge record, compared by identity so parallel edges stay distinct
- GraphView: Abstract read-only interface (vertices, incidence, opposite)
- Graph: Mutable adjacency-list graph, directed or undirected, simple or multi
- FilteredGraph: Lazy read-only view masking vertices/edges of a base graph
- ParanoidGraph: Wrapper rejecting vertices that clash on equality
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable, Iterator, Optional

if TYPE_CHECKING:
    from typing_extensions import Self

from .validation import (
    DuplicateVertexError,
    FrozenGraphError,
    GraphTypeError,
    InvalidEdgeError,
    validate_vertex,
)


class Edge:
    """
    Edge between two vertices.

    Edges use identity equality, so two parallel edges between the same pair
    of vertices are different edges.

    Attributes:
        source: First endpoint (tail in a directed graph)
        target: Second endpoint (head in a directed graph)
    """

    __slots__ = ("source", "target")

    def __init__(self, source: Any, target: Any) -> None:
        self.source = source
        self.target = target

    @property
    def is_loop(self) -> bool:
        """Whether both endpoints are the same vertex."""
        return bool(self.source == self.target)

    def __repr__(self) -> str:
        return f"Edge({self.source!r}, {self.target!r})"


class GraphView(ABC):
    """
    Abstract read-only graph.

    Subclasses provide vertex/edge storage; this base derives the remaining
    queries (degrees, neighbors, opposite endpoint, edge lookup) from the
    abstract incidence methods. All per-vertex queries raise
    InvalidVertexError for vertices outside the graph.

    Views compare and hash by identity, so any view can be used as a
    dictionary key or as a vertex of another graph.
    """

    # -------------------------------------------------------------------------
    # Abstract interface
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def is_directed(self) -> bool:
        """Whether edges have a direction."""

    @abstractmethod
    def vertices(self) -> Iterator[Any]:
        """Iterate over vertices in insertion order."""

    @abstractmethod
    def edges(self) -> Iterator[Edge]:
        """Iterate over edges in insertion order."""

    @abstractmethod
    def contains_vertex(self, vertex: Hashable) -> bool:
        """Check if a vertex belongs to the graph."""

    @abstractmethod
    def contains_edge(self, edge: Edge) -> bool:
        """Check if an edge belongs to the graph."""

    @abstractmethod
    def out_edges_of(self, vertex: Hashable) -> list[Edge]:
        """
        Edges leaving a vertex.

        For undirected graphs this is every incident edge, with self-loops
        listed once.
        """

    @abstractmethod
    def in_edges_of(self, vertex: Hashable) -> list[Edge]:
        """
        Edges entering a vertex.

        For undirected graphs this is the same as out_edges_of().
        """

    # -------------------------------------------------------------------------
    # Derived queries
    # -------------------------------------------------------------------------

    def edges_of(self, vertex: Hashable) -> list[Edge]:
        """All edges touching a vertex, self-loops listed once."""
        out_edges = self.out_edges_of(vertex)
        if not self.is_directed:
            return out_edges
        return out_edges + [e for e in self.in_edges_of(vertex) if not e.is_loop]

    def opposite(self, edge: Edge, vertex: Hashable) -> Any:
        """
        Return the endpoint of an edge that is not the given vertex.

        For a self-loop the vertex itself is returned.

        Raises:
            InvalidEdgeError: If the vertex is not an endpoint of the edge
        """
        if edge.source == vertex:
            return edge.target
        if edge.target == vertex:
            return edge.source
        raise InvalidEdgeError(f"{edge!r} is not incident to vertex {vertex!r}")

    def neighbors(self, vertex: Hashable) -> list[Any]:
        """Distinct vertices sharing an edge with a vertex, in incidence order."""
        return list(dict.fromkeys(self.opposite(e, vertex) for e in self.edges_of(vertex)))

    def degree(self, vertex: Hashable) -> int:
        """
        Number of edge ends at a vertex.

        An undirected self-loop contributes 2.
        """
        if self.is_directed:
            return self.out_degree(vertex) + self.in_degree(vertex)
        return sum(2 if e.is_loop else 1 for e in self.out_edges_of(vertex))

    def out_degree(self, vertex: Hashable) -> int:
        """Number of edges leaving a vertex."""
        return len(self.out_edges_of(vertex))

    def in_degree(self, vertex: Hashable) -> int:
        """Number of edges entering a vertex."""
        return len(self.in_edges_of(vertex))

    def get_all_edges(self, source: Hashable, target: Hashable) -> list[Edge]:
        """All edges connecting source to target (either way if undirected)."""
        validate_vertex(self, target)
        if self.is_directed:
            return [e for e in self.out_edges_of(source) if e.target == target]
        return [e for e in self.out_edges_of(source) if self.opposite(e, source) == target]

    def get_edge(self, source: Hashable, target: Hashable) -> Optional[Edge]:
        """An edge connecting source to target, or None."""
        found = self.get_all_edges(source, target)
        return found[0] if found else None

    def vertex_set(self) -> frozenset[Any]:
        """Snapshot of the vertices."""
        return frozenset(self.vertices())

    def edge_set(self) -> frozenset[Edge]:
        """Snapshot of the edges."""
        return frozenset(self.edges())

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        return sum(1 for _ in self.vertices())

    @property
    def edge_count(self) -> int:
        """Number of edges."""
        return sum(1 for _ in self.edges())

    def __contains__(self, vertex: object) -> bool:
        return self.contains_vertex(vertex)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Any]:
        return self.vertices()

    def __len__(self) -> int:
        return self.vertex_count

    def __repr__(self) -> str:
        return f"{type(self).__name__}(vertices={self.vertex_count}, edges={self.edge_count})"


class Graph(GraphView):
    """
    Mutable adjacency-list graph.

    Vertices are any hashable objects; edges are Edge records created by
    add_edge(). Vertex and edge iteration follow insertion order, which
    makes every algorithm over a Graph deterministic.

    Example:
        g = Graph()
        g.add_edge(1, 2)
        g.add_edge(2, 3)
        g.neighbors(2)  # [1, 3]
    """

    def __init__(
        self,
        *,
        directed: bool = False,
        multigraph: bool = False,
        allow_loops: bool = False,
    ) -> None:
        """
        Initialize an empty graph.

        Args:
            directed: If True, edges go from source to target
            multigraph: If True, several edges may join the same pair
            allow_loops: If True, edges may join a vertex to itself
        """
        self._directed = directed
        self._multigraph = multigraph
        self._allow_loops = allow_loops
        self._frozen = False

        # Undirected graphs keep every incident edge in _out
        self._out: dict[Any, list[Edge]] = {}
        self._in: dict[Any, list[Edge]] = {}
        self._edges: dict[Edge, None] = {}

    @classmethod
    def from_edges(
        cls,
        pairs: Iterable[tuple[Any, Any]],
        *,
        vertices: Iterable[Any] = (),
        directed: bool = False,
        multigraph: bool = False,
        allow_loops: bool = False,
    ) -> Self:
        """
        Build a graph from (source, target) pairs.

        Args:
            pairs: Edge endpoints; missing vertices are added
            vertices: Extra vertices added first (e.g. isolated ones)
            directed: See __init__
            multigraph: See __init__
            allow_loops: See __init__
        """
        graph = cls(directed=directed, multigraph=multigraph, allow_loops=allow_loops)
        for vertex in vertices:
            graph.add_vertex(vertex)
        for source, target in pairs:
            graph.add_edge(source, target)
        return graph

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def is_directed(self) -> bool:
        return self._directed

    @property
    def is_multigraph(self) -> bool:
        return self._multigraph

    @property
    def allows_loops(self) -> bool:
        return self._allow_loops

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def vertex_count(self) -> int:
        return len(self._out)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def vertices(self) -> Iterator[Any]:
        return iter(self._out)

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def contains_vertex(self, vertex: Hashable) -> bool:
        return vertex in self._out

    def contains_edge(self, edge: Edge) -> bool:
        return edge in self._edges

    def out_edges_of(self, vertex: Hashable) -> list[Edge]:
        validate_vertex(self, vertex)
        return list(self._out[vertex])

    def in_edges_of(self, vertex: Hashable) -> list[Edge]:
        validate_vertex(self, vertex)
        if not self._directed:
            return list(self._out[vertex])
        return list(self._in[vertex])

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_vertex(self, vertex: Hashable) -> bool:
        """
        Add a vertex.

        Returns:
            True if the vertex was added, False if it was already present
        """
        self._require_mutable()
        if vertex in self._out:
            return False
        self._out[vertex] = []
        if self._directed:
            self._in[vertex] = []
        return True

    def add_edge(self, source: Hashable, target: Hashable) -> Optional[Edge]:
        """
        Add an edge, adding missing endpoints first.

        Returns:
            The new edge, or None if the graph is not a multigraph and the
            two vertices are already joined

        Raises:
            GraphTypeError: If source equals target and loops are not allowed
        """
        self._require_mutable()
        if source == target and not self._allow_loops:
            raise GraphTypeError(f"Loops not allowed in this graph: {source!r}")
        if (
            not self._multigraph
            and source in self._out
            and target in self._out
            and self.get_edge(source, target) is not None
        ):
            return None

        self.add_vertex(source)
        self.add_vertex(target)
        edge = Edge(source, target)
        self._edges[edge] = None
        self._out[source].append(edge)
        if self._directed:
            self._in[target].append(edge)
        elif not edge.is_loop:
            self._out[target].append(edge)
        return edge

    def remove_edge(self, edge: Edge) -> bool:
        """
        Remove an edge.

        Returns:
            True if the edge was removed, False if it was not in the graph
        """
        self._require_mutable()
        if edge not in self._edges:
            return False
        del self._edges[edge]
        self._out[edge.source].remove(edge)
        if self._directed:
            self._in[edge.target].remove(edge)
        elif not edge.is_loop:
            self._out[edge.target].remove(edge)
        return True

    def remove_vertex(self, vertex: Hashable) -> bool:
        """
        Remove a vertex and all edges touching it.

        Returns:
            True if the vertex was removed, False if it was not in the graph
        """
        self._require_mutable()
        if vertex not in self._out:
            return False
        for edge in self.edges_of(vertex):
            self.remove_edge(edge)
        del self._out[vertex]
        if self._directed:
            del self._in[vertex]
        return True

    def freeze(self) -> Self:
        """Reject all further mutation. Returns self for chaining."""
        self._frozen = True
        return self

    def copy(self) -> Graph:
        """
        Structural copy of the graph.

        The copy shares vertex objects but owns new Edge records, so edges
        of the copy can be removed without touching the original. The copy
        is a mutable Graph even when this graph is frozen or a subclass.
        """
        clone = Graph(
            directed=self._directed,
            multigraph=self._multigraph,
            allow_loops=self._allow_loops,
        )
        for vertex in self._out:
            clone.add_vertex(vertex)
        for edge in self._edges:
            clone.add_edge(edge.source, edge.target)
        return clone

    def _require_mutable(self) -> None:
        if self._frozen:
            raise FrozenGraphError(f"{type(self).__name__} is frozen and cannot be modified")


class FilteredGraph(GraphView):
    """
    Read-only view of a base graph restricted by vertex and edge filters.

    A vertex is visible when the base graph contains it, vertex_filter
    accepts it and, if an explicit vertex collection was given, the
    collection holds it. An edge is visible when the base graph contains it,
    edge_filter accepts it and both its endpoints are visible. Filters are
    evaluated lazily on every query, nothing is copied from the base, and
    the view has no mutators.

    With an explicit vertex collection, vertex and edge iteration walk only
    that collection, so a view over k vertices costs O(k) instead of
    O(|V|) of the base graph.

    Example:
        keep = frozenset({1, 2, 3})
        view = FilteredGraph(graph, vertex_filter=keep.__contains__)
        same = FilteredGraph(graph, vertices=keep)
    """

    def __init__(
        self,
        base: GraphView,
        vertex_filter: Optional[Callable[[Any], bool]] = None,
        edge_filter: Optional[Callable[[Edge], bool]] = None,
        *,
        vertices: Optional[Iterable[Any]] = None,
    ) -> None:
        """
        Initialize the view.

        Args:
            base: Graph to filter
            vertex_filter: Predicate selecting visible vertices (None = all)
            edge_filter: Predicate selecting visible edges (None = all)
            vertices: Candidate vertices, iterated in the given order
                (None = every vertex of the base graph)
        """
        self._base = base
        self._vertex_filter = vertex_filter
        self._edge_filter = edge_filter
        self._vertices: Optional[dict[Any, None]] = (
            None if vertices is None else dict.fromkeys(vertices)
        )

    @property
    def base(self) -> GraphView:
        """The filtered graph."""
        return self._base

    @property
    def is_directed(self) -> bool:
        return self._base.is_directed

    def _keeps_vertex(self, vertex: Any) -> bool:
        if self._vertices is not None and vertex not in self._vertices:
            return False
        return self._vertex_filter is None or bool(self._vertex_filter(vertex))

    def _keeps_edge(self, edge: Edge) -> bool:
        if self._edge_filter is not None and not self._edge_filter(edge):
            return False
        return self._keeps_vertex(edge.source) and self._keeps_vertex(edge.target)

    def vertices(self) -> Iterator[Any]:
        if self._vertices is None:
            return (v for v in self._base.vertices() if self._keeps_vertex(v))
        return (v for v in self._vertices if self.contains_vertex(v))

    def edges(self) -> Iterator[Edge]:
        if self._vertices is None:
            return (e for e in self._base.edges() if self._keeps_edge(e))
        return self._incident_edges()

    def _incident_edges(self) -> Iterator[Edge]:
        # Undirected edges show up at both endpoints
        seen: set[Edge] = set()
        for vertex in self.vertices():
            for edge in self._base.out_edges_of(vertex):
                if edge not in seen and self._keeps_edge(edge):
                    seen.add(edge)
                    yield edge

    def contains_vertex(self, vertex: Hashable) -> bool:
        return self._base.contains_vertex(vertex) and self._keeps_vertex(vertex)

    def contains_edge(self, edge: Edge) -> bool:
        return self._base.contains_edge(edge) and self._keeps_edge(edge)

    def out_edges_of(self, vertex: Hashable) -> list[Edge]:
        validate_vertex(self, vertex)
        return [e for e in self._base.out_edges_of(vertex) if self._keeps_edge(e)]

    def in_edges_of(self, vertex: Hashable) -> list[Edge]:
        validate_vertex(self, vertex)
        return [e for e in self._base.in_edges_of(vertex) if self._keeps_edge(e)]


class ParanoidGraph(GraphView):
    """
    Graph wrapper that detects broken vertex equality.

    Python only consults __eq__ for objects whose hashes collide, so a
    vertex type whose __eq__ and __hash__ disagree lets two "equal" objects
    both be stored. This wrapper compares every new vertex against all stored
    vertices and refuses one that equals a stored vertex under a different
    hash. Insertion is O(|V|); use it to vet vertex types, not for
    production graphs.

    Example:
        pg = ParanoidGraph(Graph())
        pg.add_vertex(v1)
        pg.add_vertex(v1_clone)  # raises DuplicateVertexError
    """

    def __init__(self, graph: Graph) -> None:
        self._graph = graph

    @property
    def graph(self) -> Graph:
        """The wrapped graph."""
        return self._graph

    @property
    def is_directed(self) -> bool:
        return self._graph.is_directed

    def vertices(self) -> Iterator[Any]:
        return self._graph.vertices()

    def edges(self) -> Iterator[Edge]:
        return self._graph.edges()

    def contains_vertex(self, vertex: Hashable) -> bool:
        return self._graph.contains_vertex(vertex)

    def contains_edge(self, edge: Edge) -> bool:
        return self._graph.contains_edge(edge)

    def out_edges_of(self, vertex: Hashable) -> list[Edge]:
        return self._graph.out_edges_of(vertex)

    def in_edges_of(self, vertex: Hashable) -> list[Edge]:
        return self._graph.in_edges_of(vertex)

    def add_vertex(self, vertex: Hashable) -> bool:
        """
        Add a vertex after checking it against every stored vertex.

        Returns:
            True if the vertex was added, False if it was already present

        Raises:
            DuplicateVertexError: If a stored object equals the vertex but
                hashes differently, i.e. the graph would hold both
        """
        for existing in self._graph.vertices():
            if existing is vertex:
                continue
            if existing == vertex and hash(existing) != hash(vertex):
                raise DuplicateVertexError(
                    f"Vertex {vertex!r} equals stored vertex {existing!r} but hashes "
                    "differently; check its __eq__ and __hash__"
                )
        return self._graph.add_vertex(vertex)

    def add_edge(self, source: Hashable, target: Hashable) -> Optional[Edge]:
        """Add an edge; endpoints go through the same duplicate check."""
        self.add_vertex(source)
        self.add_vertex(target)
        return self._graph.add_edge(source, target)

    def remove_edge(self, edge: Edge) -> bool:
        return self._graph.remove_edge(edge)

    def remove_vertex(self, vertex: Hashable) -> bool:
        return self._graph.remove_vertex(vertex)
