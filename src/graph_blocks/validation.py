"""
Input validation utilities for graph algorithms.

Provides the exception hierarchy shared by the graph abstraction and the
algorithms built on it, plus precondition helpers. Raises descriptive
exceptions on invalid input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable

from .connectivity import connected_components

if TYPE_CHECKING:
    from .graph import GraphView


class ValidationError(ValueError):
    """Base exception for graph validation errors."""

    pass


class InvalidVertexError(ValidationError):
    """Raised when a vertex is not part of the graph."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge is not part of the graph or does not touch a vertex."""

    pass


class DuplicateVertexError(ValidationError):
    """Raised when a distinct vertex object compares equal to a stored one."""

    pass


class GraphTypeError(ValidationError):
    """Raised when a graph is of the wrong kind for an operation."""

    pass


class EmptyGraphError(ValidationError):
    """Raised when a graph without vertices is given where one is required."""

    pass


class DisconnectedGraphError(ValidationError):
    """Raised when a connected graph is required."""

    pass


class FrozenGraphError(TypeError):
    """Raised when a frozen graph is mutated."""

    pass


def require_undirected(graph: GraphView, message: str = "Graph must be undirected") -> GraphView:
    """
    Check that a graph is undirected.

    Args:
        graph: Graph to check
        message: Error message used when the check fails

    Returns:
        The graph itself, for chaining

    Raises:
        GraphTypeError: If the graph is directed
    """
    if graph.is_directed:
        raise GraphTypeError(message)
    return graph


def require_non_empty(graph: GraphView, message: str = "Graph must contain a vertex") -> GraphView:
    """
    Check that a graph has at least one vertex.

    Raises:
        EmptyGraphError: If the graph has no vertices
    """
    if graph.vertex_count == 0:
        raise EmptyGraphError(message)
    return graph


def require_connected(graph: GraphView) -> GraphView:
    """
    Check that a graph is (weakly) connected.

    Raises:
        DisconnectedGraphError: If the graph has more than one component
    """
    components = connected_components(graph)
    if len(components) > 1:
        sizes = ", ".join(str(len(c)) for c in components)
        raise DisconnectedGraphError(
            f"Graph must be connected, found {len(components)} components of sizes [{sizes}]"
        )
    return graph


def validate_vertex(graph: GraphView, vertex: Hashable) -> Any:
    """
    Check that a vertex belongs to a graph.

    Returns:
        The vertex itself

    Raises:
        InvalidVertexError: If the vertex is absent or unhashable
    """
    try:
        found = graph.contains_vertex(vertex)
    except TypeError as exc:
        # Unhashable values can never be vertices
        raise InvalidVertexError(f"No such vertex in the graph: {vertex!r}") from exc
    if not found:
        raise InvalidVertexError(f"No such vertex in the graph: {vertex!r}")
    return vertex
