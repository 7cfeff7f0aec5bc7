"""
adjgraph
========

Graphs with directed arcs and symmetric edges, optionally weighted, behind
one capability contract and two interchangeable stores.

Public API:

- Graph                : abstract capability contract.
- AdjacencyListGraph   : sparse store, unbounded vertex count.
- AdjacencyMatrixGraph : dense store with a fixed vertex capacity.
- GraphError           : base exception.
- VertexNotFoundError  : raised by traversals started from an absent vertex.
- GraphSettings / get_settings / configure_logging : configuration helpers.
"""

try:
    from ._version import version as __version__  # populated by setuptools-scm
except ModuleNotFoundError:
    __version__ = "0.0.0"

from ._logging import configure_logging
from .adjacency_list import AdjacencyListGraph
from .adjacency_matrix import AdjacencyMatrixGraph
from .base import Graph
from .config import ConfigError, GraphSettings, get_settings
from .errors import GraphError, VertexNotFoundError

__all__ = [
    "__version__",
    "Graph",
    "AdjacencyListGraph",
    "AdjacencyMatrixGraph",
    "GraphError",
    "VertexNotFoundError",
    "ConfigError",
    "GraphSettings",
    "get_settings",
    "configure_logging",
]
