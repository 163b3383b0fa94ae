from __future__ import annotations

from typing import Dict

import polars as pl  # PL (Polars)

from ..core.errors import UnsupportedInputError
from ..core.structure import FROM, TO


def _to_polars(data) -> pl.DataFrame | None:
    """INTERNAL: accept Polars DF, pandas DF, or a dict of columns."""
    if data is None:
        return None
    if isinstance(data, pl.DataFrame):
        return data
    if isinstance(data, dict):
        return pl.DataFrame(data)
    if type(data).__module__.split(".")[0] == "pandas":
        return pl.from_pandas(data)
    raise UnsupportedInputError(data)


def _endpoint_columns(edges: pl.DataFrame) -> tuple[str, str] | None:
    if FROM in edges.columns and TO in edges.columns:
        return FROM, TO
    if edges.width >= 2:
        return edges.columns[0], edges.columns[1]
    if edges.width == 0:
        return None
    raise ValueError("edges must have two endpoint columns (from/to or the first two columns)")


def tbl_graph(nodes=None, edges=None, directed: bool = True, node_key: str = "name", **options):
    """
    Build a TblGraph from a node table and an edge table.

    Parameters
    ----------
    nodes : polars.DataFrame | pandas.DataFrame | dict, optional
        One row per node. When omitted, nodes are created from the edge
        endpoints.
    edges : polars.DataFrame | pandas.DataFrame | dict, optional
        Endpoints in ``from``/``to`` (or the first two columns); remaining
        columns become edge attributes. Integer endpoints are 0-based node
        positions; any other type is matched against ``node_key``.
    directed : bool, optional
    node_key : str, optional
        Node column used to resolve non-integer endpoints. Falls back to the
        first node column if absent.
    **options
        Graph options (see ``GraphOptions``).

    Returns
    -------
    TblGraph

    Raises
    ------
    ValueError
        If an endpoint cannot be matched to a node.
    UnsupportedInputError
        If ``nodes`` or ``edges`` is not a known table type.
    """
    from ..core.graph import TblGraph

    nodes = _to_polars(nodes)
    edges = _to_polars(edges)
    if edges is None:
        edges = pl.DataFrame()

    cols = _endpoint_columns(edges)
    if cols is None:
        n = nodes.height if nodes is not None else 0
        return TblGraph(nodes=nodes, edges=None, directed=directed, n_nodes=n, **options)

    src, tgt = edges[cols[0]], edges[cols[1]]
    attrs = edges.drop(list(cols))

    if src.dtype.is_integer() and tgt.dtype.is_integer():
        src_ids, tgt_ids = src.cast(pl.Int64), tgt.cast(pl.Int64)
        if nodes is not None and nodes.width:
            n = nodes.height
        else:
            n = int(max(src.max(), tgt.max())) + 1 if edges.height else 0
    else:
        if nodes is None or nodes.width == 0:
            names = pl.concat([src.alias(node_key), tgt.alias(node_key)]).unique(maintain_order=True)
            nodes = names.drop_nulls().to_frame()
        key = node_key if node_key in nodes.columns else nodes.columns[0]
        lookup = {v: i for i, v in enumerate(nodes[key].to_list())}
        missing = sorted(
            {str(v) for v in src.to_list() + tgt.to_list() if v not in lookup}
        )
        if missing:
            raise ValueError(f"Edge endpoints not found in node column {key!r}: {', '.join(missing)}")
        src_ids = pl.Series([lookup[v] for v in src.to_list()], dtype=pl.Int64)
        tgt_ids = pl.Series([lookup[v] for v in tgt.to_list()], dtype=pl.Int64)
        n = nodes.height

    edge_frame = pl.DataFrame([src_ids.alias(FROM), tgt_ids.alias(TO)])
    if attrs.width:
        edge_frame = edge_frame.hstack(attrs)
    return TblGraph(nodes=nodes, edges=edge_frame, directed=directed, n_nodes=n, **options)


def from_dataframes(*, nodes=None, edges=None, directed: bool = True, node_key: str = "name", **options):
    """Keyword-only alias of :func:`tbl_graph`."""
    return tbl_graph(nodes=nodes, edges=edges, directed=directed, node_key=node_key, **options)


def to_dataframes(graph, *, public_only: bool = False) -> Dict[str, pl.DataFrame]:
    """
    Export graph to Polars DataFrames.

    Returns
    -------
    dict
        ``{"nodes": node table, "edges": edge table with from/to}``.
    """
    nodes = graph.store.node_attrs()
    edges = graph.store.edge_frame()
    if public_only:
        nodes = nodes.select([c for c in nodes.columns if not c.startswith("__")])
        edges = edges.select([c for c in edges.columns if not c.startswith("__")])
    return {"nodes": nodes.clone(), "edges": edges.clone()}
