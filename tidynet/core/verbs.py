"""Relational verbs translated into structural graph mutations.

Every verb works on the active table, hands it to Polars, reconciles the
result with storage order through the row-identity handle, and applies the
outcome back to the graph (deleting nodes/edges where rows disappeared).
"""
from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

import polars as pl

from ._context import graph_context
from ._groups import GroupMeta, compute_groups
from .errors import MissingColumnError, ReservedNameError
from .structure import ENDPOINTS, ROW_INDEX, Active
from .table import height, read, regroup, write

if TYPE_CHECKING:
    from .graph import TblGraph

__all__ = [
    "activate",
    "active",
    "group_by",
    "ungroup",
    "distinct",
    "group_vars",
    "groups",
    "n_groups",
    "group_size",
    "group_indices",
    "group_rows",
    "group_keys",
]


# Context


def activate(graph: "TblGraph", what) -> "TblGraph":
    """
    Select the table subsequent verbs address.

    Pure selector switch: stored groupings of either context are untouched.

    Raises
    ------
    InvalidContextError
        If ``what`` is not nodes/edges.
    """
    graph._active = Active.coerce(what)
    return graph


def active(graph: "TblGraph") -> str:
    return graph.active_context.value


# Column resolution


def _flatten(columns):
    for c in columns:
        if isinstance(c, (list, tuple)):
            yield from c
        else:
            yield c


def _as_expr(name: str, value, n: int):
    if callable(value) and not isinstance(value, (pl.Expr, pl.Series)):
        # zero-argument callback, evaluated while the graph context is pushed
        value = value()
    if isinstance(value, pl.Expr):
        return value.alias(name)
    if isinstance(value, (list, tuple)):
        value = pl.Series(name, list(value))
    if isinstance(value, pl.Series):
        if len(value) != n:
            raise ValueError(f"Computed column {name!r} has {len(value)} values, the table has {n} rows")
        return value.alias(name)
    if isinstance(value, str):
        return pl.col(value).alias(name)
    return pl.lit(value).alias(name)


def _resolve_columns(frame: pl.DataFrame, columns, computed: dict, what: Active):
    """
    INTERNAL: validate column names and evaluate computed columns.

    Returns
    -------
    tuple[polars.DataFrame, list[str]]
        The table with computed columns added and the requested names in
        order (positional first, then computed).
    """
    available = [c for c in frame.columns if c != ROW_INDEX]
    names: list[str] = []
    for c in _flatten(columns):
        if not isinstance(c, str):
            raise TypeError(f"Column names must be strings, got {type(c).__name__}")
        if c == ROW_INDEX:
            raise ReservedNameError(c)
        if c not in names:
            names.append(c)
    missing = [c for c in names if c not in frame.columns]
    if missing:
        raise MissingColumnError(missing, available)

    exprs = []
    for name, value in computed.items():
        if name == ROW_INDEX or (what is Active.EDGES and name in ENDPOINTS):
            raise ReservedNameError(name)
        exprs.append(_as_expr(name, value, frame.height))
        if name not in names:
            names.append(name)
    if exprs:
        try:
            frame = frame.with_columns(exprs)
        except pl.exceptions.ColumnNotFoundError as e:
            raise MissingColumnError([str(e).splitlines()[0]], available) from e
    return frame, names


# Grouping


def group_by(graph: "TblGraph", *columns, add: bool = False, **computed) -> "TblGraph":
    """
    Group the active table.

    Parameters
    ----------
    graph : TblGraph
    *columns : str | list[str]
        Grouping columns. With no columns at all, every column is used.
    add : bool, optional
        Extend the existing grouping of the active context instead of
        replacing it.
    **computed
        Computed grouping columns: a Polars expression, a Series, a sequence
        of values, a column name, a scalar, or a zero-argument callable
        evaluated inside the graph context (see ``tidynet.helpers``). Computed
        columns are written to the active table.

    Returns
    -------
    TblGraph
        The same graph, grouped. Rows are never reordered or dropped.

    Raises
    ------
    MissingColumnError
        If a grouping column does not exist.
    ReservedNameError
        If a computed column uses a reserved name.
    """
    what = graph.active_context
    with graph_context(graph):
        frame = read(graph, with_index=True)
        frame, names = _resolve_columns(frame, columns, computed, what)
    frame = frame.drop(ROW_INDEX)

    if computed:
        write(graph, frame)
    previous = graph._groups.get(what)
    if add and previous is not None:
        names = list(previous.vars) + [n for n in names if n not in previous.vars]
    elif not names:
        names = list(frame.columns)

    graph._groups.set(what, compute_groups(frame, names, height(graph)))
    return graph


def ungroup(graph: "TblGraph") -> "TblGraph":
    """Remove the grouping of the active context only."""
    graph._groups.drop(graph.active_context)
    return graph


# Deduplication


def distinct(graph: "TblGraph", *columns, keep_all: bool = False, **computed) -> "TblGraph":
    """
    Keep the first row of every distinct key combination and delete the
    nodes (or edges) of all other rows.

    Parameters
    ----------
    graph : TblGraph
    *columns : str | list[str]
        Key columns; none means every column (for edges including
        ``from``/``to``). A node table without columns is left unchanged.
    keep_all : bool, optional
        Keep every column of the retained rows. Otherwise only the key
        columns remain as attributes.
    **computed
        Computed key columns, as in :func:`group_by`.

    Returns
    -------
    TblGraph

    Raises
    ------
    ReservedNameError
        If the active table has a ``.tbl_graph_index`` column, or a key uses
        that name. Raised before the graph is touched.
    MissingColumnError
        If a key column does not exist.

    Notes
    -----
    - Node deletion cascades to every incident edge.
    - Retained rows keep their relative order.
    - A grouping of the active table is kept or dropped according to
      ``graph.options.distinct_regroup``.
    """
    what = graph.active_context
    with graph_context(graph):
        frame = read(graph, with_index=True)
        frame, keys = _resolve_columns(frame, columns, computed, what)
    if not keys:
        keys = [c for c in frame.columns if c != ROW_INDEX]
    if not keys:
        # attribute-less table: rows differ only by identity, all are distinct
        return graph

    kept = frame.unique(subset=keys, keep="first", maintain_order=True).sort(ROW_INDEX)

    retained = set(kept.get_column(ROW_INDEX).to_list())
    removed = [i for i in range(frame.height) if i not in retained]
    if what is Active.NODES:
        graph.store.delete_nodes(removed)
    else:
        graph.store.delete_edges(removed)
    # cascaded deletions shrink the other table too
    regroup(graph, what.other)

    if keep_all:
        out = kept.drop(ROW_INDEX)
    else:
        out = kept.select(keys)

    grouping = graph._groups.get(what)
    graph._groups.drop(what)
    write(graph, out)
    _propagate_grouping(graph, what, grouping)
    return graph


def _propagate_grouping(graph: "TblGraph", what: Active, grouping: GroupMeta | None) -> None:
    if grouping is None or graph.options.distinct_regroup == "drop":
        return
    frame = read(graph, what)
    missing = [v for v in grouping.vars if v not in frame.columns]
    if missing:
        warnings.warn(
            f"Grouping of {what} dropped by distinct: column(s) {', '.join(missing)} were not kept.",
            category=RuntimeWarning,
            stacklevel=3,
        )
        return
    graph._groups.set(what, compute_groups(frame, grouping.vars, height(graph, what)))


# Grouping accessors (computed from the live table)


def _live(graph: "TblGraph") -> GroupMeta | None:
    meta = graph._groups.get(graph.active_context)
    if meta is None:
        return None
    return compute_groups(read(graph), meta.vars, height(graph))


def group_vars(graph: "TblGraph") -> list[str]:
    meta = graph._groups.get(graph.active_context)
    return list(meta.vars) if meta is not None else []


def groups(graph: "TblGraph") -> list[str] | None:
    """Grouping columns of the active table, or ``None`` when it is ungrouped."""
    meta = graph._groups.get(graph.active_context)
    return list(meta.vars) if meta is not None else None


def n_groups(graph: "TblGraph") -> int:
    meta = _live(graph)
    return meta.n_groups if meta is not None else 1


def group_size(graph: "TblGraph") -> list[int]:
    meta = _live(graph)
    return meta.sizes if meta is not None else [height(graph)]


def group_indices(graph: "TblGraph") -> list[int]:
    meta = _live(graph)
    n = height(graph)
    return meta.indices(n) if meta is not None else [0] * n


def group_rows(graph: "TblGraph") -> list[list[int]]:
    meta = _live(graph)
    if meta is None:
        return [list(range(height(graph)))]
    return [list(r) for r in meta.rows]


def group_keys(graph: "TblGraph") -> pl.DataFrame:
    meta = _live(graph)
    return meta.keys if meta is not None else pl.DataFrame()
