try:
    import igraph as ig
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'igraph' is not installed. "
        "Install with: pip install tidynet[igraph]"
    ) from e

import warnings
from enum import Enum
from typing import Any

import polars as pl

from ..core.errors import ReservedNameError
from ..core.structure import ENDPOINTS, FROM, TO
from ._base import GraphAdapter


def _serialize_value(v: Any) -> Any:
    if isinstance(v, Enum):
        return v.name
    return v


def store_to_igraph(store):
    """Structural igraph graph of a GraphStore (vertex i = node id i, edge i = edge id i)."""
    G = ig.Graph(n=store.order(), edges=store.edge_list(), directed=store.directed)
    return G


class IGraphAdapter(GraphAdapter):
    def export(self, nodes: pl.DataFrame, edges: pl.DataFrame, directed: bool = True, *,
               n_nodes: int | None = None, public_only: bool = False):
        """
        Export node/edge tables to ``igraph.Graph``.

        igraph vertex/edge indices coincide with tidynet node/edge ids, so no
        id attribute is needed; every table column becomes a vertex or edge
        attribute.
        """
        n = nodes.height if nodes.width else (n_nodes or 0)
        pairs = list(zip(edges[FROM].to_list(), edges[TO].to_list()))
        G = ig.Graph(n=n, edges=pairs, directed=directed)

        for col in nodes.columns:
            if public_only and col.startswith("__"):
                continue
            G.vs[col] = [_serialize_value(v) for v in nodes[col].to_list()]
        for col in edges.columns:
            if col in (FROM, TO) or (public_only and col.startswith("__")):
                continue
            G.es[col] = [_serialize_value(v) for v in edges[col].to_list()]
        return G


def to_igraph(graph, public_only: bool = False):
    """Export a TblGraph to ``igraph.Graph``."""
    store = graph.store
    return IGraphAdapter().export(
        store.node_attrs(),
        store.edge_frame(),
        directed=store.directed,
        n_nodes=store.order(),
        public_only=public_only,
    )


def _attr_frame(seq, names) -> pl.DataFrame:
    cols = []
    dropped = []
    for name in names:
        try:
            cols.append(pl.Series(name, seq[name]))
        except (TypeError, ValueError, OverflowError, pl.exceptions.PolarsError):
            dropped.append(name)
    if dropped:
        warnings.warn(
            "igraph→TblGraph conversion is lossy: heterogeneous attribute(s) dropped: "
            + ", ".join(dropped) + ".",
            category=RuntimeWarning,
            stacklevel=3,
        )
    return pl.DataFrame(cols)


def from_igraph(igG, directed: bool | None = None):
    """
    Build a TblGraph from an ``igraph.Graph``.

    Vertex and edge attributes become node and edge columns. Attributes whose
    values cannot form a single typed column are dropped with a warning. An
    edge attribute named ``from`` or ``to`` raises ``ReservedNameError``.
    """
    from ..core.graph import TblGraph

    if directed is None:
        directed = igG.is_directed()

    nodes = _attr_frame(igG.vs, igG.vs.attributes())
    pairs = igG.get_edgelist()
    edges = pl.DataFrame(
        {
            FROM: pl.Series([u for u, _ in pairs], dtype=pl.Int64),
            TO: pl.Series([v for _, v in pairs], dtype=pl.Int64),
        }
    )
    for key in ENDPOINTS:
        if key in igG.es.attributes():
            raise ReservedNameError(key)
    edge_attrs = _attr_frame(igG.es, igG.es.attributes())
    if edge_attrs.width:
        edges = edges.hstack(edge_attrs)

    return TblGraph(nodes=nodes, edges=edges, directed=directed, n_nodes=igG.vcount())
