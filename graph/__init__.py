"""
graph/
-----
Core graph data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import MAX_NODES
"""

from graph.node  import Node
from graph.edge  import Edge
from graph.graph import Graph, MAX_NODES

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "MAX_NODES",
]
