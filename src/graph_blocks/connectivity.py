"""
Connectivity utilities.

Connected component detection over any graph view. Used to validate
inputs that must be connected and to partition a graph before running
algorithms that only cover a single component.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .graph import GraphView


def connected_components(graph: GraphView) -> list[list[Any]]:
    """
    Find connected components in a graph.

    Directed graphs are treated as undirected, so the result holds their
    weakly connected components.

    Args:
        graph: Graph to partition

    Returns:
        List of components, where each component is a list of vertices in
        BFS order. Components are ordered by their first vertex in the
        graph's vertex iteration order.

    Example:
        >>> from graph_blocks import Graph
        >>> g = Graph.from_edges([(0, 1), (2, 3)])
        >>> len(connected_components(g))
        2
    """
    visited: set[Any] = set()
    components: list[list[Any]] = []

    for start in graph.vertices():
        if start in visited:
            continue

        # BFS to find all vertices in this component
        component: list[Any] = []
        queue: deque[Any] = deque([start])
        visited.add(start)

        while queue:
            vertex = queue.popleft()
            component.append(vertex)

            for edge in graph.edges_of(vertex):
                neighbor = graph.opposite(edge, vertex)
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        components.append(component)

    return components


def is_connected(graph: GraphView) -> bool:
    """
    Check if a graph is connected.

    Graphs with zero or one vertex count as connected.
    """
    if graph.vertex_count <= 1:
        return True
    return len(connected_components(graph)) == 1
