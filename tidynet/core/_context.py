"""Graph context for callbacks evaluated inside a verb.

Polars evaluates column expressions without any notion of the graph they
came from. Verbs that accept zero-argument callbacks push the graph they are
transforming with :func:`graph_context` and callbacks retrieve it with
:func:`current_graph`. The push is scoped to the verb invocation and undone
on every exit path.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator

from .errors import InvalidContextError
from .structure import Active

if TYPE_CHECKING:
    from .graph import TblGraph

__all__ = ["graph_context", "current_graph", "expect_nodes", "expect_edges"]

_CURRENT: ContextVar["TblGraph | None"] = ContextVar("tidynet_current_graph", default=None)


@contextmanager
def graph_context(graph: "TblGraph") -> Iterator["TblGraph"]:
    token = _CURRENT.set(graph)
    try:
        yield graph
    finally:
        _CURRENT.reset(token)


def current_graph() -> "TblGraph":
    """
    Graph being transformed by the enclosing verb.

    Raises
    ------
    InvalidContextError
        If called outside a verb.
    """
    graph = _CURRENT.get()
    if graph is None:
        raise InvalidContextError(
            "This function should not be called directly; it is only available inside verbs"
        )
    return graph


def expect_nodes() -> "TblGraph":
    graph = current_graph()
    if graph.active_context is not Active.NODES:
        raise InvalidContextError("This call requires nodes to be active")
    return graph


def expect_edges() -> "TblGraph":
    graph = current_graph()
    if graph.active_context is not Active.EDGES:
        raise InvalidContextError("This call requires edges to be active")
    return graph
