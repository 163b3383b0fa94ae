from .structure import *
from .errors import *
from ._options import GraphOptions, options
from .store import GraphStore
from .graph import TblGraph
from .classify import GraphDescription, describe_graph, is_forest, is_tree

__all__ = [
    "structure",
    "errors",
    "GraphOptions",
    "options",
    "GraphStore",
    "TblGraph",
    "GraphDescription",
    "describe_graph",
    "is_forest",
    "is_tree",
]
