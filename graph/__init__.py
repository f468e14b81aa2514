"""
graph/
-----
Graph model.  Public API:

    from graph import Graph, Vertex, Edge
    from graph import orient_edges, GraphFormatError
"""

from graph.vertex import Vertex
from graph.edge   import Edge, orient_edges
from graph.graph  import Graph, GraphFormatError

__all__ = [
    "Vertex",
    "Edge",      "orient_edges",
    "Graph",     "GraphFormatError",
]
