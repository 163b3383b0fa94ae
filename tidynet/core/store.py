from __future__ import annotations

import networkx as nx
import polars as pl

from ..adapters import manager as _backend_manager
from ._options import GraphOptions
from ._state import _State
from .errors import ReservedNameError
from .structure import ENDPOINTS, FROM, TO

__all__ = ["GraphStore"]


def _as_frame(data) -> pl.DataFrame:
    if data is None:
        return pl.DataFrame()
    if isinstance(data, pl.DataFrame):
        return data
    return pl.DataFrame(data)


def _null_rows(schema, n: int) -> pl.DataFrame:
    """INTERNAL: ``n`` all-null rows matching ``schema`` (column homogeneity on insert)."""
    return pl.DataFrame([pl.Series(name, [None] * n, dtype=dtype) for name, dtype in schema.items()])


def _endpoint_series(name: str, values) -> pl.Series:
    if isinstance(values, pl.Series):
        return values.cast(pl.Int64).alias(name)
    return pl.Series(name, list(values), dtype=pl.Int64)


class GraphStore:
    """
    Canonical node/edge storage backed by two Polars DF [DataFrame].

    Nodes are identified by their row position (dense ``0..N-1``), edges by
    theirs; the edge frame starts with the ``from``/``to`` endpoint columns.
    Every deletion is cascaded so that no edge ever references a missing node.

    Parameters
    ----------
    directed : bool, optional
        Whether edges are directed.
    options : GraphOptions, optional
        Shared with the owning TblGraph; ``cache_backends`` is read from it
        on every backend lookup.

    Notes
    -----
    - Ids are stable only between structural mutations: deleting rows
      compacts the remaining ids while preserving relative order.
    - A node frame may have zero columns; the node count is tracked
      separately because a width-0 Polars frame has no rows.
    - Structural predicates are answered by a networkx multigraph that is
      materialised lazily and cached per structural version.
    """

    def __init__(self, directed: bool = True, options: GraphOptions | None = None):
        self.directed = bool(directed)
        self.options = options if options is not None else GraphOptions()
        self._n_nodes = 0
        self._nodes = pl.DataFrame()
        self._edges = pl.DataFrame(schema={FROM: pl.Int64, TO: pl.Int64})
        self._state = _State()

    def __repr__(self) -> str:
        return f"<GraphStore | V={self.order()} · E={self.size()} · directed={self.directed}>"

    @property
    def cache_enabled(self) -> bool:
        return self.options.cache_backends

    @cache_enabled.setter
    def cache_enabled(self, value: bool) -> None:
        self.options.cache_backends = value

    # Counts

    def order(self) -> int:
        """Number of nodes."""
        return self._n_nodes

    def size(self) -> int:
        """Number of edges."""
        return self._edges.height

    # Build

    def add_nodes(self, n: int | None = None, attrs=None) -> list[int]:
        """
        Append nodes, optionally with attributes.

        Parameters
        ----------
        n : int, optional
            Number of nodes to add. Inferred from ``attrs`` when omitted.
        attrs : polars.DataFrame | dict, optional
            One row per new node. Columns unknown to the node table are added
            and null-filled for the existing nodes.

        Returns
        -------
        list[int]
            Ids of the new nodes.
        """
        frame = _as_frame(attrs)
        if frame.width:
            if n is not None and n != frame.height:
                raise ValueError(f"n={n} does not match {frame.height} attribute rows")
            n = frame.height
        n = int(n or 0)
        if n < 0:
            raise ValueError("n must be non-negative")

        start = self._n_nodes
        if frame.width:
            existing = self._nodes
            if existing.width == 0:
                existing = _null_rows(frame.schema, start)
            self._nodes = pl.concat([existing, frame], how="diagonal_relaxed")
        elif self._nodes.width:
            self._nodes = pl.concat([self._nodes, _null_rows(self._nodes.schema, n)], how="vertical")
        self._n_nodes += n
        self._touch()
        return list(range(start, start + n))

    def add_edges(self, sources, targets, attrs=None) -> list[int]:
        """
        Append edges between existing nodes.

        Parameters
        ----------
        sources, targets : Iterable[int]
            Endpoint node ids (same length).
        attrs : polars.DataFrame | dict, optional
            One row per new edge; must not contain ``from``/``to``.

        Returns
        -------
        list[int]
            Ids of the new edges.

        Raises
        ------
        ValueError
            If an endpoint does not reference an existing node.
        ReservedNameError
            If ``attrs`` carries an endpoint column.
        """
        src = _endpoint_series(FROM, sources)
        tgt = _endpoint_series(TO, targets)
        if len(src) != len(tgt):
            raise ValueError("sources and targets must have the same length")
        self._check_endpoints(src, tgt)

        frame = pl.DataFrame([src, tgt])
        extra = _as_frame(attrs)
        for col in ENDPOINTS:
            if col in extra.columns:
                raise ReservedNameError(col)
        if extra.width:
            if extra.height != frame.height:
                raise ValueError(f"{extra.height} attribute rows for {frame.height} edges")
            frame = frame.hstack(extra)

        start = self.size()
        self._edges = pl.concat([self._edges, frame], how="diagonal_relaxed")
        self._touch()
        return list(range(start, start + frame.height))

    # Structural deletion (cascade)

    def delete_nodes(self, ids) -> None:
        """
        Remove nodes and every edge incident to them.

        Parameters
        ----------
        ids : int | Iterable[int]

        Raises
        ------
        IndexError
            If an id does not exist.

        Notes
        -----
        - Incident edges go first, then the remaining endpoints are remapped to
          the compacted node ids.
        """
        removed = self._normalize_ids(ids, self._n_nodes, "Node")
        if not removed:
            return
        removed_set = set(removed)
        keep = [i for i in range(self._n_nodes) if i not in removed_set]

        incident = pl.col(FROM).is_in(removed) | pl.col(TO).is_in(removed)
        edges = self._edges.filter(~incident)
        if edges.height:
            new_ids = list(range(len(keep)))
            edges = edges.with_columns(
                pl.col(FROM).replace_strict(keep, new_ids, return_dtype=pl.Int64),
                pl.col(TO).replace_strict(keep, new_ids, return_dtype=pl.Int64),
            )
        self._edges = edges

        if self._nodes.width:
            self._nodes = self._nodes.select(pl.all().gather(keep))
        self._n_nodes = len(keep)
        self._touch()

    def delete_edges(self, ids) -> None:
        """Remove edges; nodes are untouched."""
        removed = self._normalize_ids(ids, self.size(), "Edge")
        if not removed:
            return
        removed_set = set(removed)
        keep = [i for i in range(self.size()) if i not in removed_set]
        self._edges = self._edges.select(pl.all().gather(keep))
        self._touch()

    # Attributes

    def node_attrs(self) -> pl.DataFrame:
        """Node attribute table (may have zero columns)."""
        return self._nodes

    def set_node_attrs(self, frame) -> None:
        """Replace the full node attribute set (one row per node, storage order)."""
        frame = _as_frame(frame)
        if frame.width and frame.height != self._n_nodes:
            raise ValueError(
                f"Node data has {frame.height} rows but the graph has {self._n_nodes} nodes"
            )
        self._nodes = frame

    def edge_attrs(self) -> pl.DataFrame:
        """Edge attribute table without the endpoint columns."""
        return self._edges.drop(ENDPOINTS)

    def edge_frame(self) -> pl.DataFrame:
        """Edge table including the read-only ``from``/``to`` columns."""
        return self._edges

    def set_edge_attrs(self, frame) -> None:
        """Replace the full edge attribute set; ``from``/``to`` columns are ignored."""
        frame = _as_frame(frame)
        frame = frame.drop([c for c in ENDPOINTS if c in frame.columns])
        if frame.width and frame.height != self.size():
            raise ValueError(
                f"Edge data has {frame.height} rows but the graph has {self.size()} edges"
            )
        endpoints = self._edges.select(ENDPOINTS)
        self._edges = endpoints.hstack(frame) if frame.width else endpoints

    def edge_list(self) -> list[tuple[int, int]]:
        return list(zip(self._edges[FROM].to_list(), self._edges[TO].to_list()))

    # Structural queries

    def degree(self, mode: str = "all", loops: bool = True) -> pl.Series:
        """
        Node degrees in storage order.

        Parameters
        ----------
        mode : {"all", "out", "in"}
            Ignored for undirected graphs.
        loops : bool
            Count self-loops (twice for ``"all"``).

        Returns
        -------
        polars.Series
            ``Int64`` series named ``degree``.
        """
        sides = {"all": ENDPOINTS, "out": (FROM,), "in": (TO,)}
        if mode not in sides:
            raise ValueError(f"mode must be one of {tuple(sides)}, got {mode!r}")
        cols = sides[mode] if self.directed else ENDPOINTS
        edges = self._edges if loops else self._edges.filter(pl.col(FROM) != pl.col(TO))

        nodes = pl.DataFrame({"node": pl.Series(range(self._n_nodes), dtype=pl.Int64)})
        ends = pl.concat([edges.select(pl.col(c).alias("node")) for c in cols])
        counts = ends.group_by("node").agg(pl.len().cast(pl.Int64).alias("degree"))
        out = nodes.join(counts, on="node", how="left").sort("node")
        return out.get_column("degree").fill_null(0)

    def has_loops(self) -> bool:
        if not self.size():
            return False
        return bool(self._edges.select((pl.col(FROM) == pl.col(TO)).any()).item())

    def has_multiple(self) -> bool:
        if self.size() < 2:
            return False
        if self.directed:
            pairs = self._edges.select(FROM, TO)
        else:
            pairs = self._edges.select(
                pl.min_horizontal(FROM, TO).alias(FROM),
                pl.max_horizontal(FROM, TO).alias(TO),
            )
        return bool(pairs.is_duplicated().any())

    def is_simple(self) -> bool:
        return not (self.has_loops() or self.has_multiple())

    def to_networkx(self):
        """Cached structural networkx multigraph (nodes ``0..N-1``, edge keys = edge ids)."""
        return _backend_manager.ensure_materialized("networkx", self)["graph"]

    def is_connected(self) -> bool:
        """Weak connectivity; the null graph is not connected."""
        if self._n_nodes == 0:
            return False
        G = self.to_networkx()
        return nx.is_weakly_connected(G) if self.directed else nx.is_connected(G)

    def count_components(self) -> int:
        if self._n_nodes == 0:
            return 0
        G = self.to_networkx()
        if self.directed:
            return nx.number_weakly_connected_components(G)
        return nx.number_connected_components(G)

    def is_dag(self) -> bool:
        """Directed acyclic check; undirected graphs are never DAGs."""
        if not self.directed:
            return False
        return nx.is_directed_acyclic_graph(self.to_networkx())

    def is_bipartite(self) -> bool:
        """Structural two-colouring check (self-loops make a graph non-bipartite)."""
        if self.has_loops():
            return False
        return nx.is_bipartite(self.to_networkx())

    def has_cycle(self) -> bool:
        """Cycle-basis check; parallel edges and loops count as cycles."""
        if self.directed:
            return not self.is_dag()
        if self.has_loops() or self.has_multiple():
            return True
        return bool(nx.cycle_basis(nx.Graph(self.to_networkx())))

    # Misc

    def copy(self) -> "GraphStore":
        other = GraphStore(directed=self.directed, options=self.options.copy())
        other._n_nodes = self._n_nodes
        other._nodes = self._nodes.clone()
        other._edges = self._edges.clone()
        return other

    def _check_endpoints(self, src: pl.Series, tgt: pl.Series) -> None:
        n = self._n_nodes
        for s in (src, tgt):
            if s.null_count():
                raise ValueError("Edge endpoints must not be missing")
            if len(s) and (s.min() < 0 or s.max() >= n):
                raise ValueError(f"Edge endpoints must reference existing nodes (0..{n - 1})")

    @staticmethod
    def _normalize_ids(ids, n: int, kind: str) -> list[int]:
        if isinstance(ids, int):
            ids = [ids]
        out = sorted({int(i) for i in ids})
        bad = [i for i in out if i < 0 or i >= n]
        if bad:
            raise IndexError(f"{kind} id(s) out of range: {bad}")
        return out

    def _touch(self) -> None:
        self._state.bump()
        self._check_integrity()

    def _check_integrity(self) -> None:
        """INTERNAL: edge endpoints reference existing nodes; node frame matches order."""
        if self._edges.height:
            lo = min(self._edges[FROM].min(), self._edges[TO].min())
            hi = max(self._edges[FROM].max(), self._edges[TO].max())
            assert lo >= 0 and hi < self._n_nodes, "dangling edge endpoint"
        assert self._nodes.width == 0 or self._nodes.height == self._n_nodes, "node table out of sync"
