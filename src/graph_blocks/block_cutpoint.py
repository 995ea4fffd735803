"""
Block-cutpoint graph of a connected undirected graph.

A block is a maximal biconnected subgraph of a graph, or a bridge with its
two endpoints. A cut vertex (cutpoint, articulation point) is a vertex whose
removal disconnects its component; equivalently, a vertex that belongs to
two or more blocks.

The block-cutpoint graph has one vertex per block and one per cut vertex,
and joins each cut vertex to every block containing it. Two blocks share at
most one vertex, which is then a cut vertex, so for a connected graph the
result is a tree whose leaves are all blocks.

Blocks are represented as FilteredGraph views over the input graph that keep
exactly the block's vertices. Cut vertices are represented by singleton
views holding just that vertex.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional

from .connectivity import connected_components
from .graph import Edge, FilteredGraph, Graph, GraphView
from .validation import (
    require_connected,
    require_non_empty,
    require_undirected,
    validate_vertex,
)


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


@dataclass(frozen=True)
class TraversalEdge:
    """
    An edge as the DFS walked it, from source to target.

    Kept apart from the graph's own Edge records: the block extraction rule
    needs the direction of traversal, which an undirected Edge does not carry.
    """

    source: Any
    target: Any


def _no_edges(edge: Edge) -> bool:
    return False


class _BlockFinder:
    """
    Single depth-first pass finding cut vertices and blocks.

    Tarjan's low-point algorithm with an explicit stack of frames, so the
    traversal depth is not bounded by the interpreter's recursion limit.
    Blocks are handed to on_block as ordered vertex dicts when their DFS
    subtree closes.
    """

    def __init__(
        self,
        graph: GraphView,
        start: Any,
        on_block: Callable[[dict[Any, None]], None],
    ) -> None:
        self.graph = graph
        self.start = start
        self.on_block = on_block

        self.order: dict[Any, int] = {}
        self.low: dict[Any, int] = {}
        self.parent: dict[Any, Any] = {}
        self.cutpoints: dict[Any, None] = {}
        self.edge_stack: list[TraversalEdge] = []
        self.dfs_tree = Graph(directed=True)

    def _discover(self, vertex: Any, parent: Any) -> None:
        # Pre-order numbers start at 1; a missing entry means unvisited
        self.order[vertex] = self.low[vertex] = len(self.order) + 1
        self.parent[vertex] = parent

    def run(self) -> None:
        graph = self.graph
        order = self.order
        low = self.low
        start = self.start

        self.dfs_tree.add_vertex(start)
        self._discover(start, start)
        incident: dict[Any, list[Edge]] = {start: graph.edges_of(start)}
        stack: list[tuple[Any, int]] = [(start, 0)]

        while stack:
            v, idx = stack[-1]
            if idx < len(incident[v]):
                stack[-1] = (v, idx + 1)
                n = graph.opposite(incident[v][idx], v)
                n_order = order.get(n, 0)
                if n_order == 0:
                    # Tree edge: descend into n
                    self.dfs_tree.add_vertex(n)
                    self.dfs_tree.add_edge(v, n)
                    self.edge_stack.append(TraversalEdge(v, n))
                    self._discover(n, v)
                    incident[n] = graph.edges_of(n)
                    stack.append((n, 0))
                elif n_order < order[v] and n != self.parent[v]:
                    # Back edge: n is an ancestor of v
                    self.edge_stack.append(TraversalEdge(v, n))
                    low[v] = min(low[v], n_order)
            else:
                stack.pop()
                del incident[v]
                if not stack:
                    break
                u = stack[-1][0]
                low[u] = min(low[u], low[v])
                if low[v] >= order[u]:
                    # Nothing in v's subtree reaches above u
                    self._close_block(u, v)

        # The rule above says nothing about the root; only its child count does
        if self.dfs_tree.out_degree(start) > 1:
            self.cutpoints[start] = None
        else:
            self.cutpoints.pop(start, None)

    def _close_block(self, vertex: Any, child: Any) -> None:
        """Pop the edges of the block hanging below the tree edge vertex->child."""
        self.cutpoints[vertex] = None

        child_order = self.order[child]
        members: dict[Any, None] = {}
        edge = self.edge_stack.pop()
        while self.order[edge.source] >= child_order and self.edge_stack:
            members[edge.source] = None
            members[edge.target] = None
            edge = self.edge_stack.pop()
        members[edge.source] = None
        members[edge.target] = None

        self.on_block(members)


class BlockCutpointGraph(Graph):
    """
    Block-cutpoint tree of a connected undirected graph.

    The object is itself an undirected simple Graph whose vertices are
    FilteredGraph views: one per block of the input graph and one singleton
    per cut vertex. Every cut vertex's singleton is joined to each block
    containing it. Everything is computed in the constructor in O(|V| + |E|)
    and the graph is frozen afterwards.

    The DFS starts from one vertex and only covers its connected component.
    Vertices of other components are left out of the result (a
    GraphStructureWarning reports how many) unless check_connected=True, in
    which case a disconnected input is rejected. Use block_cutpoint_forest()
    to cover every component.

    Self-loops and parallel edges never change block membership; a block
    view still shows every input edge between its vertices.

    Example:
        g = Graph.from_edges([(1, 2), (2, 3)])
        bc = BlockCutpointGraph(g)
        bc.get_cutpoints()            # frozenset({2})
        bc.get_block(1).vertex_set()  # frozenset({1, 2})
        bc.get_block(2).vertex_set()  # frozenset({2})
    """

    def __init__(
        self,
        graph: GraphView,
        *,
        start: Optional[Hashable] = None,
        check_connected: bool = False,
    ) -> None:
        """
        Build the block-cutpoint tree.

        Args:
            graph: Undirected input graph, simple or multigraph
            start: DFS root (default: the first vertex of the graph)
            check_connected: If True, raise on disconnected input instead of
                covering only the start vertex's component

        Raises:
            GraphTypeError: If the graph is directed
            EmptyGraphError: If the graph has no vertices
            InvalidVertexError: If start is not a vertex of the graph
            DisconnectedGraphError: If check_connected and the graph is disconnected
        """
        super().__init__()
        require_undirected(graph, "Graph must be undirected")
        require_non_empty(graph, "Graph must contain at least one vertex")
        if start is None:
            start = next(iter(graph.vertices()))
        else:
            validate_vertex(graph, start)
        if check_connected:
            require_connected(graph)

        self._graph = graph
        self._blocks: list[FilteredGraph] = []
        self._cutpoint_blocks: dict[FilteredGraph, Any] = {}
        self._vertex_to_block: dict[Any, FilteredGraph] = {}
        self._vertex_to_blocks: dict[Any, list[FilteredGraph]] = {}

        finder = _BlockFinder(graph, start, self._add_block)
        finder.run()
        self._cutpoints = frozenset(finder.cutpoints)

        if start not in self._vertex_to_block:
            # No edges at the start vertex: it is a block on its own
            self._add_block({start: None})

        for cutpoint in finder.cutpoints:
            singleton = FilteredGraph(graph, edge_filter=_no_edges, vertices=[cutpoint])
            self._vertex_to_block[cutpoint] = singleton
            self._cutpoint_blocks[singleton] = cutpoint
            self.add_vertex(singleton)
            for block in self._vertex_to_blocks[cutpoint]:
                self.add_edge(singleton, block)

        # Only needed while assembling the tree
        self._vertex_to_blocks = {}

        unreached = graph.vertex_count - len(finder.order)
        if unreached:
            warnings.warn(
                f"Graph is disconnected: {unreached} vertex(es) unreachable from "
                f"start vertex {start!r} are not covered by the block-cutpoint graph. "
                "Use block_cutpoint_forest() to cover every component.",
                GraphStructureWarning,
                stacklevel=2,
            )

        self.freeze()

    def _add_block(self, members: dict[Any, None]) -> None:
        """Create the view for a finished block and register it."""
        block = FilteredGraph(self._graph, vertices=members)
        for vertex in members:
            self._vertex_to_block.setdefault(vertex, block)
            self._vertex_to_blocks.setdefault(vertex, []).append(block)
        self._blocks.append(block)
        self.add_vertex(block)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def graph(self) -> GraphView:
        """The input graph."""
        return self._graph

    @property
    def blocks(self) -> list[FilteredGraph]:
        """Block views in the order their DFS subtrees closed."""
        return list(self._blocks)

    @property
    def cutpoint_blocks(self) -> list[FilteredGraph]:
        """Singleton views of the cut vertices."""
        return list(self._cutpoint_blocks)

    def get_cutpoints(self) -> frozenset[Any]:
        """Cut vertices of the input graph."""
        return self._cutpoints

    def is_cutpoint(self, vertex: Hashable) -> bool:
        """
        Check if a vertex of the input graph is a cut vertex.

        Raises:
            InvalidVertexError: If the vertex is not in the input graph
        """
        validate_vertex(self._graph, vertex)
        return vertex in self._cutpoints

    def is_cutpoint_block(self, view: GraphView) -> bool:
        """Check if a vertex of this tree is a cut vertex's singleton view."""
        return view in self._cutpoint_blocks

    def get_block(self, vertex: Hashable) -> Optional[FilteredGraph]:
        """
        The canonical block view of a vertex of the input graph.

        For a cut vertex this is its singleton view; otherwise it is the one
        block containing the vertex. Returns None for a vertex outside the
        start vertex's component.

        Raises:
            InvalidVertexError: If the vertex is not in the input graph
        """
        validate_vertex(self._graph, vertex)
        return self._vertex_to_block.get(vertex)


def block_cutpoint_forest(graph: GraphView) -> list[BlockCutpointGraph]:
    """
    Block-cutpoint trees of every connected component of a graph.

    Each tree is built over a FilteredGraph of one component, so its block
    views only ever hold vertices of that component.

    Args:
        graph: Undirected graph, possibly disconnected

    Returns:
        One BlockCutpointGraph per component, ordered like
        connected_components(). Empty for a graph without vertices.

    Raises:
        GraphTypeError: If the graph is directed
    """
    require_undirected(graph, "Graph must be undirected")
    forest: list[BlockCutpointGraph] = []
    for component in connected_components(graph):
        view = FilteredGraph(graph, vertices=component)
        forest.append(BlockCutpointGraph(view, start=component[0]))
    return forest


def cutpoints_of(graph: GraphView) -> frozenset[Any]:
    """Cut vertices of every component of an undirected graph."""
    found: set[Any] = set()
    for tree in block_cutpoint_forest(graph):
        found.update(tree.get_cutpoints())
    return frozenset(found)


def blocks_of(graph: GraphView) -> list[frozenset[Any]]:
    """Vertex sets of the blocks of every component of an undirected graph."""
    return [block.vertex_set() for tree in block_cutpoint_forest(graph) for block in tree.blocks]


__all__ = [
    "BlockCutpointGraph",
    "GraphStructureWarning",
    "TraversalEdge",
    "block_cutpoint_forest",
    "blocks_of",
    "cutpoints_of",
]
