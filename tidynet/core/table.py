"""Relational view of the active element set.

``read`` projects the node or edge set into a Polars DF [DataFrame] in storage
order; ``write`` takes a transformed table back. Row identity across a
transformation is carried by the reserved ``.tbl_graph_index`` column.
"""
from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

import polars as pl

from ._groups import compute_groups
from .errors import ReservedNameError
from .structure import ROW_INDEX, Active

if TYPE_CHECKING:
    from .graph import TblGraph

__all__ = ["read", "write", "tbl_vars", "height"]


def height(graph: "TblGraph", active=None) -> int:
    what = graph.active_context if active is None else Active.coerce(active)
    return graph.store.order() if what is Active.NODES else graph.store.size()


def read(graph: "TblGraph", active=None, *, with_index: bool = False) -> pl.DataFrame:
    """
    Project the active (or requested) element set to a table.

    Parameters
    ----------
    graph : TblGraph
    active : {"nodes", "edges"}, optional
        Defaults to the graph's active context.
    with_index : bool, optional
        Append the row-identity handle ``.tbl_graph_index`` (``0..n-1``).

    Returns
    -------
    polars.DataFrame
        Node attributes, or ``from``/``to`` plus edge attributes.

    Raises
    ------
    InvalidContextError
        If ``active`` is not nodes/edges.
    ReservedNameError
        If ``with_index`` is requested and the table already has a
        ``.tbl_graph_index`` column.
    """
    what = graph.active_context if active is None else Active.coerce(active)
    store = graph.store
    if what is Active.NODES:
        frame = store.node_attrs()
    else:
        frame = store.edge_frame()
    if not with_index:
        return frame

    if ROW_INDEX in frame.columns:
        raise ReservedNameError(ROW_INDEX)
    index = pl.Series(ROW_INDEX, range(height(graph, what)), dtype=pl.Int64)
    if frame.width == 0:
        return index.to_frame()
    return frame.with_columns(index)


def write(graph: "TblGraph", frame: pl.DataFrame, active=None) -> "TblGraph":
    """
    Write a transformed table back to the active (or requested) element set.

    The table replaces every attribute of the element set, one row per node
    or edge in storage order. For edges the ``from``/``to`` columns are
    dropped before writing; endpoints never change through this path.

    If the element set is grouped, the grouping is recomputed over the new
    table. A grouping whose columns disappeared is dropped with a
    ``RuntimeWarning``.
    """
    what = graph.active_context if active is None else Active.coerce(active)
    if what is Active.NODES:
        graph.store.set_node_attrs(frame)
    else:
        graph.store.set_edge_attrs(frame)
    regroup(graph, what)
    return graph


def regroup(graph: "TblGraph", what: Active) -> None:
    """INTERNAL: refresh the stored grouping of ``what`` against its current table."""
    meta = graph._groups.get(what)
    if meta is None:
        return
    frame = read(graph, what)
    missing = [v for v in meta.vars if v not in frame.columns]
    if missing:
        graph._groups.drop(what)
        warnings.warn(
            f"Grouping of {what} dropped: column(s) {', '.join(missing)} no longer present.",
            category=RuntimeWarning,
            stacklevel=4,
        )
        return
    graph._groups.set(what, compute_groups(frame, meta.vars, height(graph, what)))


def tbl_vars(graph: "TblGraph", active=None) -> list[str]:
    """Column names of the active (or requested) table."""
    return list(read(graph, active).columns)
