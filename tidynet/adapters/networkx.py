import warnings
from enum import Enum
from typing import Any

import networkx as nx
import polars as pl

from ..core.errors import ReservedNameError
from ..core.structure import ENDPOINTS, FROM, TO
from ._base import GraphAdapter


def _serialize_value(v: Any) -> Any:
    if isinstance(v, Enum):
        return v.name
    if hasattr(v, "items"):
        return dict(v)
    return v


def _attrs_to_dict(row: dict, public_only: bool) -> dict:
    if public_only:
        return {k: _serialize_value(v) for k, v in row.items() if not str(k).startswith("__")}
    return {k: _serialize_value(v) for k, v in row.items()}


def _labels_series(labels: list) -> pl.Series:
    # polars columns are homogeneous; mixed label types fall back to strings
    kinds = {type(x) for x in labels}
    if len(kinds) > 1:
        labels = [str(x) for x in labels]
    return pl.Series("name", labels)


def store_to_nx(store):
    """Structural multigraph of a GraphStore: nodes ``0..N-1``, edge key = edge id."""
    G = nx.MultiDiGraph() if store.directed else nx.MultiGraph()
    G.add_nodes_from(range(store.order()))
    G.add_edges_from((u, v, eid) for eid, (u, v) in enumerate(store.edge_list()))
    return G


class NetworkXAdapter(GraphAdapter):
    def export(self, nodes: pl.DataFrame, edges: pl.DataFrame, directed: bool = True, *,
               n_nodes: int | None = None, simple: bool = False, public_only: bool = False):
        """
        Export node/edge tables to a networkx graph.

        Parameters
        ----------
        nodes : polars.DataFrame
            Node attributes in storage order (may have zero columns).
        edges : polars.DataFrame
            ``from``/``to`` plus edge attributes.
        directed : bool
        n_nodes : int, optional
            Node count, needed when ``nodes`` has no columns.
        simple : bool
            Build a ``Graph``/``DiGraph``; parallel edges collapse (last wins).
        public_only : bool
            Strip attributes whose name starts with ``"__"``.

        Returns
        -------
        networkx.Graph | networkx.DiGraph | networkx.MultiGraph | networkx.MultiDiGraph
        """
        if simple:
            G = nx.DiGraph() if directed else nx.Graph()
        else:
            G = nx.MultiDiGraph() if directed else nx.MultiGraph()

        if nodes.width:
            for i, row in enumerate(nodes.iter_rows(named=True)):
                G.add_node(i, **_attrs_to_dict(row, public_only))
        else:
            G.add_nodes_from(range(n_nodes or 0))

        for eid, row in enumerate(edges.iter_rows(named=True)):
            u = row.pop(FROM)
            v = row.pop(TO)
            if simple:
                G.add_edge(u, v, **_attrs_to_dict(row, public_only))
            else:
                G.add_edge(u, v, key=eid, **_attrs_to_dict(row, public_only))

        if simple and G.number_of_edges() < edges.height:
            warnings.warn(
                "Graph→NX conversion is lossy: parallel edges collapsed (simple=True).",
                category=RuntimeWarning,
                stacklevel=3,
            )
        return G


def to_nx(graph, simple: bool = False, public_only: bool = False):
    """
    Export a TblGraph to networkx.

    Nodes are keyed by their integer id; node and edge attributes become
    networkx attribute dicts.
    """
    store = graph.store
    return NetworkXAdapter().export(
        store.node_attrs(),
        store.edge_frame(),
        directed=store.directed,
        n_nodes=store.order(),
        simple=simple,
        public_only=public_only,
    )


def from_nx(nxG, directed: bool | None = None):
    """
    Build a TblGraph from any networkx graph.

    Parameters
    ----------
    nxG : networkx.Graph
        Any of Graph, DiGraph, MultiGraph, MultiDiGraph.
    directed : bool, optional
        Override the directedness of ``nxG``.

    Returns
    -------
    TblGraph

    Notes
    -----
    - Node labels are stored in a ``name`` column unless the nodes already
      carry a ``name`` attribute.
    - Multigraph edge keys are not preserved.

    Raises
    ------
    ReservedNameError
        If an edge carries a ``from`` or ``to`` attribute.
    """
    from ..core.graph import TblGraph

    if directed is None:
        directed = nxG.is_directed()

    labels = list(nxG.nodes)
    index = {v: i for i, v in enumerate(labels)}
    node_rows = [dict(data) for _, data in nxG.nodes(data=True)]
    has_name = any("name" in row for row in node_rows)

    if any(node_rows):
        nodes = pl.from_dicts(node_rows, infer_schema_length=None)
    else:
        nodes = pl.DataFrame()
    if labels and not has_name:
        nodes = nodes.hstack([_labels_series(labels)]) if nodes.width else _labels_series(labels).to_frame()
        nodes = nodes.select(["name"] + [c for c in nodes.columns if c != "name"])

    src, tgt, edge_rows = [], [], []
    for u, v, data in nxG.edges(data=True):
        src.append(index[u])
        tgt.append(index[v])
        edge_rows.append(dict(data))
    for row in edge_rows:
        for key in ENDPOINTS:
            if key in row:
                raise ReservedNameError(key)

    edges = pl.DataFrame({FROM: pl.Series(src, dtype=pl.Int64), TO: pl.Series(tgt, dtype=pl.Int64)})
    if any(edge_rows):
        edges = edges.hstack(pl.from_dicts(edge_rows, infer_schema_length=None))

    return TblGraph(nodes=nodes, edges=edges, directed=directed, n_nodes=len(labels))
