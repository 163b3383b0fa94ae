from __future__ import annotations

import polars as pl

from . import _options
from . import verbs as _verbs
from ..adapters import manager as _backend_manager
from ._groups import GroupShadowState
from .classify import GraphDescription, describe, describe_graph
from .store import GraphStore
from .structure import ENDPOINTS, FROM, TO, Active
from .table import read, tbl_vars, write

__all__ = ["TblGraph"]


class TblGraph:
    """
    Graph manipulated through two relational tables (nodes, edges).

    One table is *active* at a time and relational verbs address it; verbs
    that remove rows remove the corresponding nodes or edges, cascading node
    removal to incident edges so that every edge keeps two valid endpoints.

    Parameters
    ----------
    nodes : polars.DataFrame | dict, optional
        Node attributes, one row per node. Node ids are row positions.
    edges : polars.DataFrame | dict, optional
        Must contain integer ``from``/``to`` columns (0-based node ids); other
        columns become edge attributes. Use :func:`tidynet.tbl_graph` to
        resolve endpoints by node name.
    directed : bool, optional
    n_nodes : int, optional
        Node count when ``nodes`` carries no columns.
    **options
        Overrides of :class:`~tidynet.core._options.GraphOptions`.

    Notes
    -----
    - Nodes are active after construction.
    - Verbs mutate the graph in place and return it, so calls chain.
    - Grouping is tracked per context; activating the other table keeps it.

    See Also
    --------
    activate, group_by, ungroup, distinct, describe
    """

    def __init__(self, nodes=None, edges=None, directed: bool = True, *, n_nodes: int | None = None,
                 **options):
        self.options = _options.options.copy(**options)
        self.store = GraphStore(directed=directed, options=self.options)
        self._active = Active.NODES
        self._groups = GroupShadowState()

        if nodes is not None or n_nodes:
            self.store.add_nodes(n_nodes, nodes)

        if edges is not None:
            edges = edges if isinstance(edges, pl.DataFrame) else pl.DataFrame(edges)
            if edges.width:
                if FROM not in edges.columns or TO not in edges.columns:
                    raise ValueError("edges must carry integer 'from'/'to' columns; use tbl_graph() to match by name")
                self.store.add_edges(edges[FROM], edges[TO], edges.drop(ENDPOINTS))

    def __repr__(self) -> str:
        return (
            f"<TblGraph | V={self.store.order()} · E={self.store.size()} · "
            f"directed={self.directed} · active={self.active}>"
        )

    def __str__(self) -> str:
        what = self._active
        lines = [
            f"# A tbl_graph: {self.store.order()} nodes and {self.store.size()} edges",
            "#",
            f"# {describe_graph(self)}",
            "#",
            self._table_header(what, active=True),
            str(read(self, what).head(6)),
            "#",
            self._table_header(what.other),
            str(read(self, what.other).head(3)),
        ]
        return "\n".join(lines)

    def _table_header(self, what: Active, active: bool = False) -> str:
        frame = read(self, what)
        n = self.store.order() if what is Active.NODES else self.store.size()
        title = "Node Data" if what is Active.NODES else "Edge Data"
        header = f"# {title}: {n} × {frame.width}" + (" (active)" if active else "")
        meta = self._groups.get(what)
        if meta is not None:
            header += f"\n# Groups: {', '.join(meta.vars)} [{meta.n_groups}]"
        return header

    # Properties

    @property
    def directed(self) -> bool:
        return self.store.directed

    @property
    def active_context(self) -> Active:
        return self._active

    @property
    def active(self) -> str:
        """Name of the active table (``"nodes"`` or ``"edges"``)."""
        return self._active.value

    @property
    def is_grouped(self) -> bool:
        """True if either table carries a grouping."""
        return self._groups.is_grouped

    @property
    def nodes(self) -> pl.DataFrame:
        """Node table regardless of the active context."""
        return read(self, Active.NODES)

    @property
    def edges(self) -> pl.DataFrame:
        """Edge table (``from``/``to`` + attributes) regardless of the active context."""
        return read(self, Active.EDGES)

    def number_of_nodes(self) -> int:
        return self.store.order()

    def number_of_edges(self) -> int:
        return self.store.size()

    # Tables

    def as_frame(self, active=None) -> pl.DataFrame:
        """
        Active (or requested) table as a Polars DF [DataFrame].

        Parameters
        ----------
        active : {"nodes", "edges"}, optional
            Override the active context for this call only.
        """
        return read(self, active)

    as_tibble = as_frame

    def tbl_vars(self, active=None) -> list[str]:
        return tbl_vars(self, active)

    def set_graph_data(self, frame: pl.DataFrame, active=None) -> "TblGraph":
        """Replace the attributes of the active (or requested) table."""
        return write(self, frame, active)

    # Verbs

    def activate(self, what) -> "TblGraph":
        return _verbs.activate(self, what)

    def group_by(self, *columns, add: bool = False, **computed) -> "TblGraph":
        return _verbs.group_by(self, *columns, add=add, **computed)

    def ungroup(self) -> "TblGraph":
        return _verbs.ungroup(self)

    def distinct(self, *columns, keep_all: bool = False, **computed) -> "TblGraph":
        return _verbs.distinct(self, *columns, keep_all=keep_all, **computed)

    # Grouping accessors

    def group_vars(self) -> list[str]:
        return _verbs.group_vars(self)

    def groups(self) -> list[str] | None:
        return _verbs.groups(self)

    def n_groups(self) -> int:
        return _verbs.n_groups(self)

    def group_size(self) -> list[int]:
        return _verbs.group_size(self)

    def group_indices(self) -> list[int]:
        return _verbs.group_indices(self)

    def group_rows(self) -> list[list[int]]:
        return _verbs.group_rows(self)

    def group_keys(self) -> pl.DataFrame:
        return _verbs.group_keys(self)

    # Structure

    def describe(self) -> GraphDescription:
        """Structural description plus node and edge counts."""
        return describe(self)

    @property
    def nx(self) -> "BackendProxy":  # type: ignore
        """On-demand accessor for NetworkX algorithms.

        Examples
        --------
        >>> G.nx.degree_centrality()
        """
        return _backend_manager.get_proxy("networkx", self)

    @property
    def ig(self) -> "BackendProxy":  # type: ignore
        """On-demand accessor for igraph methods (requires the igraph extra).

        Examples
        --------
        >>> G.ig.diameter()
        """
        return _backend_manager.get_proxy("igraph", self)

    def export(self, fmt: str = "networkx", **kwargs):
        """
        Export the graph using the specified adapter.

        Parameters
        ----------
        fmt : {"networkx", "igraph"}
            Name of the adapter to use.
        **kwargs
            Additional arguments passed to the adapter.
        """
        adapter = _backend_manager.get_adapter(fmt)
        return adapter.export(
            self.store.node_attrs(),
            self.store.edge_frame(),
            directed=self.directed,
            n_nodes=self.store.order(),
            **kwargs,
        )

    # Misc

    def set_options(self, **kwargs) -> "TblGraph":
        """Update this graph's options (see ``GraphOptions``)."""
        self.options.update(**kwargs)
        if not self.store.cache_enabled:
            self.store._state.clear_cache()
        return self

    def copy(self) -> "TblGraph":
        other = TblGraph.__new__(TblGraph)
        other.options = self.options.copy()
        other.store = self.store.copy()
        other.store.options = other.options
        other._active = self._active
        other._groups = self._groups.copy()
        return other
