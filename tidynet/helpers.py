"""Graph-aware callbacks for verbs.

Each helper reads the graph pushed by the verb that evaluates it, so pass the
function itself (or a ``functools.partial``) rather than its result:

>>> g.group_by(deg=node_degree)
>>> g.activate("edges").distinct(loop=edge_is_loop, keep_all=True)

Calling a helper outside a verb raises ``InvalidContextError``.
"""
import polars as pl

from .core._context import current_graph, expect_edges, expect_nodes
from .core.structure import FROM, TO

__all__ = [
    "graph_order",
    "graph_size",
    "graph_is_directed",
    "node_degree",
    "node_is_isolated",
    "node_is_source",
    "node_is_sink",
    "edge_is_loop",
    "edge_is_multiple",
    "edge_is_mutual",
]


def graph_order() -> int:
    return current_graph().store.order()


def graph_size() -> int:
    return current_graph().store.size()


def graph_is_directed() -> bool:
    return current_graph().directed


def node_degree(mode: str = "all", loops: bool = True) -> pl.Series:
    """Degree of every node (``mode`` in ``"all"``, ``"out"``, ``"in"``)."""
    return expect_nodes().store.degree(mode=mode, loops=loops)


def node_is_isolated() -> pl.Series:
    return expect_nodes().store.degree() == 0


def node_is_source() -> pl.Series:
    """No incoming and at least one outgoing edge."""
    store = expect_nodes().store
    return (store.degree("in") == 0) & (store.degree("out") > 0)


def node_is_sink() -> pl.Series:
    """No outgoing and at least one incoming edge."""
    store = expect_nodes().store
    return (store.degree("out") == 0) & (store.degree("in") > 0)


def edge_is_loop() -> pl.Series:
    edges = expect_edges().store.edge_frame()
    return edges.get_column(FROM) == edges.get_column(TO)


def edge_is_multiple() -> pl.Series:
    """True for every edge that repeats an earlier edge between the same nodes."""
    graph = expect_edges()
    edges = graph.store.edge_frame()
    if graph.directed:
        pairs = edges.select(FROM, TO)
    else:
        pairs = edges.select(
            pl.min_horizontal(FROM, TO).alias(FROM),
            pl.max_horizontal(FROM, TO).alias(TO),
        )
    return ~pairs.select(pl.struct(FROM, TO).is_first_distinct()).to_series()


def edge_is_mutual() -> pl.Series:
    """True for every edge whose reverse edge also exists."""
    graph = expect_edges()
    edges = graph.store.edge_frame()
    if not graph.directed:
        return pl.Series([True] * edges.height, dtype=pl.Boolean)
    reverse = set(zip(edges[TO].to_list(), edges[FROM].to_list()))
    return pl.Series(
        [(u, v) in reverse for u, v in zip(edges[FROM].to_list(), edges[TO].to_list())],
        dtype=pl.Boolean,
    )
