"""
graph-blocks: Block-cutpoint decomposition of undirected graphs.

This package finds the cut vertices and blocks (biconnected components) of
an undirected graph and builds its block-cutpoint tree.

Modules:
- graph: Graph abstraction (Graph, FilteredGraph views, ParanoidGraph)
- block_cutpoint: Block-cutpoint tree construction
- connectivity: Connected components
- matrix: Adjacency/Laplacian matrices
- validation: Exceptions and precondition checks
"""

__version__ = "0.1.0"

# Block-cutpoint decomposition
from .block_cutpoint import (
    BlockCutpointGraph,
    GraphStructureWarning,
    TraversalEdge,
    block_cutpoint_forest,
    blocks_of,
    cutpoints_of,
)

# Connectivity
from .connectivity import connected_components, is_connected

# Graph abstraction
from .graph import (
    Edge,
    FilteredGraph,
    Graph,
    GraphView,
    ParanoidGraph,
)

# Matrix representations
from .matrix import adjacency_matrix, degree_matrix, laplacian_matrix

# Validation
from .validation import (
    DisconnectedGraphError,
    DuplicateVertexError,
    EmptyGraphError,
    FrozenGraphError,
    GraphTypeError,
    InvalidEdgeError,
    InvalidVertexError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Block-cutpoint
    "BlockCutpointGraph",
    "GraphStructureWarning",
    "TraversalEdge",
    "block_cutpoint_forest",
    "blocks_of",
    "cutpoints_of",
    # Connectivity
    "connected_components",
    "is_connected",
    # Graph
    "Edge",
    "FilteredGraph",
    "Graph",
    "GraphView",
    "ParanoidGraph",
    # Matrix
    "adjacency_matrix",
    "degree_matrix",
    "laplacian_matrix",
    # Validation
    "DisconnectedGraphError",
    "DuplicateVertexError",
    "EmptyGraphError",
    "FrozenGraphError",
    "GraphTypeError",
    "InvalidEdgeError",
    "InvalidVertexError",
    "ValidationError",
]
