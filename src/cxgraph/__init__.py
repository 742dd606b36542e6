"""
cxgraph - Linked in-memory graphs from NDEx CX network documents

cxgraph decodes a CX document (parallel arrays of nodes, edges,
citations and supports cross-referenced by numeric ids) and links it
into a graph where every reference is directly traversable: edges know
their subject and object, citations know the supports that cite them,
and supports without a declared citation inherit the single citation of
the edge they justify.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cxgraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from cxgraph.graph import (
    Citation,
    Edge,
    GraphBuilder,
    GraphBuildError,
    NetworkGraph,
    Node,
    Support,
    UnresolvedReferenceError,
)
from cxgraph.graph.factory import build_graph

__all__ = [
    "__version__",
    "build_graph",
    "Citation",
    "Edge",
    "GraphBuilder",
    "GraphBuildError",
    "NetworkGraph",
    "Node",
    "Support",
    "UnresolvedReferenceError",
]
