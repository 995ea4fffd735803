"""
Matrix representations of graphs.

Dense numpy matrices for any GraphView, indexed by an explicit vertex
ordering. Useful for checking structural properties numerically (e.g. the
Laplacian of a tree has rank |V| - 1).
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, cast

import numpy as np

from .graph import GraphView
from .validation import validate_vertex


def _vertex_order(graph: GraphView, vertices: Optional[Sequence[Any]]) -> list[Any]:
    if vertices is None:
        return list(graph.vertices())
    for vertex in vertices:
        validate_vertex(graph, vertex)
    return list(vertices)


def adjacency_matrix(graph: GraphView, vertices: Optional[Sequence[Any]] = None) -> np.ndarray:
    """
    Compute the adjacency matrix.

    Entry (i, j) counts the edges from vertices[i] to vertices[j]. The matrix
    is symmetric for undirected graphs, where a self-loop counts 2 on the
    diagonal. Edges leaving the chosen vertex subset are ignored.

    Args:
        graph: Graph to convert
        vertices: Row/column order (default: graph iteration order)

    Returns:
        Float array of shape (n, n)

    Raises:
        InvalidVertexError: If vertices names a vertex outside the graph
    """
    order = _vertex_order(graph, vertices)
    index = {v: i for i, v in enumerate(order)}
    n = len(order)
    A = np.zeros((n, n))

    for edge in graph.edges():
        src = index.get(edge.source)
        tgt = index.get(edge.target)
        if src is None or tgt is None:
            continue
        A[src, tgt] += 1.0
        if not graph.is_directed:
            A[tgt, src] += 1.0  # Symmetric for undirected

    return cast(np.ndarray, A)


def degree_matrix(graph: GraphView, vertices: Optional[Sequence[Any]] = None) -> np.ndarray:
    """Diagonal matrix of row sums of the adjacency matrix (out-degrees if directed)."""
    A = adjacency_matrix(graph, vertices)
    return cast(np.ndarray, np.diag(np.sum(A, axis=1)))


def laplacian_matrix(graph: GraphView, vertices: Optional[Sequence[Any]] = None) -> np.ndarray:
    """Compute the graph Laplacian L = D - A."""
    A = adjacency_matrix(graph, vertices)
    D = np.diag(np.sum(A, axis=1))
    return cast(np.ndarray, D - A)
