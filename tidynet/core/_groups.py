from __future__ import annotations

from dataclasses import dataclass

import polars as pl

from .errors import MissingColumnError
from .structure import ROW_INDEX, Active

__all__ = ["GroupMeta", "GroupShadowState", "compute_groups"]


@dataclass(frozen=True, eq=False)
class GroupMeta:
    """Grouping of one table.

    Attributes:
        vars: Grouping column names, in grouping order
        keys: One row per group with the key values, sorted by key
        rows: Row positions of each group, aligned with ``keys``
    """

    vars: tuple[str, ...]
    keys: pl.DataFrame
    rows: tuple[tuple[int, ...], ...]

    @property
    def n_groups(self) -> int:
        return len(self.rows)

    @property
    def sizes(self) -> list[int]:
        return [len(r) for r in self.rows]

    def indices(self, n: int) -> list[int]:
        """Group id of each of the ``n`` rows."""
        out = [0] * n
        for gid, members in enumerate(self.rows):
            for row in members:
                out[row] = gid
        return out


def compute_groups(frame: pl.DataFrame, vars, n: int | None = None) -> GroupMeta:
    """
    Partition the rows of ``frame`` by the values of ``vars``.

    Groups are ordered by key (ascending, nulls last); rows keep table order
    within each group.

    Raises
    ------
    MissingColumnError
        If a grouping column is absent from ``frame``.
    """
    vars = tuple(vars)
    missing = [v for v in vars if v not in frame.columns]
    if missing:
        raise MissingColumnError(missing, frame.columns)
    if not vars:
        # no key columns: every row falls in a single group
        n = frame.height if n is None else n
        return GroupMeta(vars, pl.DataFrame(), (tuple(range(n)),) if n else ())
    if frame.height == 0 or n == 0:
        return GroupMeta(vars, frame.select(vars).clear(), ())

    keys = list(vars)
    grouped = (
        frame.select(keys)
        .with_columns(pl.int_range(pl.len(), dtype=pl.Int64).alias(ROW_INDEX))
        .group_by(keys, maintain_order=True)
        .agg(pl.col(ROW_INDEX))
        .sort(keys, nulls_last=True, maintain_order=True)
    )
    rows = tuple(tuple(r) for r in grouped.get_column(ROW_INDEX).to_list())
    return GroupMeta(vars, grouped.select(keys), rows)


class GroupShadowState:
    """
    Grouping metadata per context (nodes/edges).

    Kept apart from the attribute storage so that switching the active
    context leaves the other context's grouping in place.
    """

    def __init__(self):
        self._meta: dict[Active, GroupMeta] = {}

    def __repr__(self) -> str:
        parts = [f"{k}={list(v.vars)}" for k, v in self._meta.items()]
        return f"<GroupShadowState {' '.join(parts) or 'ungrouped'}>"

    def __contains__(self, what) -> bool:
        return Active.coerce(what) in self._meta

    def get(self, what) -> GroupMeta | None:
        return self._meta.get(Active.coerce(what))

    def set(self, what, meta: GroupMeta) -> None:
        self._meta[Active.coerce(what)] = meta

    def drop(self, what) -> None:
        self._meta.pop(Active.coerce(what), None)

    @property
    def is_grouped(self) -> bool:
        return bool(self._meta)

    def contexts(self) -> list[Active]:
        return [a for a in Active if a in self._meta]

    def copy(self) -> "GroupShadowState":
        other = GroupShadowState()
        other._meta = dict(self._meta)
        return other
