from __future__ import annotations

from functools import singledispatch

import networkx as nx
import polars as pl

from ..core.errors import UnsupportedInputError
from ..core.graph import TblGraph

__all__ = ["as_tbl_graph", "is_tbl_graph", "is_grouped_tbl_graph"]


@singledispatch
def as_tbl_graph(x, directed: bool = True, **kwargs) -> TblGraph:
    """
    Convert a graph-like object to a TblGraph.

    Supported inputs: TblGraph (returned as is), Polars/pandas edge lists,
    ``{"nodes": ..., "edges": ...}`` dicts, networkx graphs and
    ``igraph.Graph``.

    Raises
    ------
    UnsupportedInputError
        If no adapter knows the input type.
    """
    module = type(x).__module__.split(".")[0]
    if module == "igraph":
        from .igraph import from_igraph

        return from_igraph(x, **kwargs)
    if module == "pandas":
        from .dataframe_adapter import tbl_graph

        return tbl_graph(edges=x, directed=directed, **kwargs)
    raise UnsupportedInputError(x)


@as_tbl_graph.register
def _(x: TblGraph, directed: bool = True, **kwargs) -> TblGraph:
    return x


@as_tbl_graph.register
def _(x: pl.DataFrame, directed: bool = True, **kwargs) -> TblGraph:
    from .dataframe_adapter import tbl_graph

    return tbl_graph(edges=x, directed=directed, **kwargs)


@as_tbl_graph.register
def _(x: dict, directed: bool = True, **kwargs) -> TblGraph:
    from .dataframe_adapter import tbl_graph

    if not {"nodes", "edges"} & set(x):
        raise UnsupportedInputError(x)
    return tbl_graph(nodes=x.get("nodes"), edges=x.get("edges"), directed=directed, **kwargs)


@as_tbl_graph.register
def _(x: nx.Graph, directed: bool | None = None, **kwargs) -> TblGraph:
    from .networkx import from_nx

    return from_nx(x, directed=directed)


def is_tbl_graph(x) -> bool:
    return isinstance(x, TblGraph)


def is_grouped_tbl_graph(x) -> bool:
    return isinstance(x, TblGraph) and x.is_grouped
