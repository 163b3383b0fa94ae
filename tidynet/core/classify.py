from __future__ import annotations

from typing import NamedTuple

from .store import GraphStore

__all__ = ["GraphDescription", "describe", "describe_graph", "graph_properties", "is_tree", "is_forest"]


class GraphDescription(NamedTuple):
    text: str
    n_nodes: int
    n_edges: int

    def __str__(self) -> str:
        return self.text


def _store(x) -> GraphStore:
    return x if isinstance(x, GraphStore) else x.store


def is_tree(x) -> bool:
    """Connected, simple, and exactly one node more than edges."""
    s = _store(x)
    return s.is_connected() and s.is_simple() and (s.order() - s.size() == 1)


def is_forest(x) -> bool:
    """Non-empty, disconnected, simple, and every component is a tree.

    An acyclic graph has exactly ``|V| - |E|`` components, so the check is
    ``|V| - |E| - components == 0``.
    """
    s = _store(x)
    return (
        s.order() > 0
        and not s.is_connected()
        and s.is_simple()
        and (s.order() - s.size() - s.count_components() == 0)
    )


def _is_bipartite(s: GraphStore, mode: str) -> bool:
    if mode == "type":
        return "type" in s.node_attrs().columns
    return s.is_bipartite()


def graph_properties(x, bipartite: str = "type") -> dict:
    """Structural predicates used by :func:`describe_graph`."""
    s = _store(x)
    return {
        "simple": s.is_simple(),
        "directed": s.directed,
        "bipartite": _is_bipartite(s, bipartite),
        "connected": s.is_connected(),
        "tree": is_tree(s),
        "forest": is_forest(s),
        "DAG": s.is_dag(),
    }


def describe_graph(x, bipartite: str | None = None) -> str:
    """
    Human-readable structural description.

    Parameters
    ----------
    x : TblGraph | GraphStore
    bipartite : {"type", "structural"}, optional
        Bipartiteness rule; defaults to the graph's ``options.bipartite``
        (``"type"`` for a bare store).

    Returns
    -------
    str
        e.g. ``"An unrooted tree"``, ``"A rooted forest with 2 trees"``,
        ``"A directed acyclic simple graph with 1 component"``.
    """
    if bipartite is None:
        options = getattr(x, "options", None)
        bipartite = options.bipartite if options is not None else "type"
    s = _store(x)
    prop = graph_properties(s, bipartite=bipartite)

    desc = []
    if prop["tree"] or prop["forest"]:
        desc.append("A rooted" if prop["directed"] else "An unrooted")
        desc.append("tree" if prop["tree"] else f"forest with {s.count_components()} trees")
    else:
        if prop["DAG"]:
            desc.append("A directed acyclic")
        elif prop["bipartite"]:
            desc.append("A bipartite")
        elif prop["directed"]:
            desc.append("A directed")
        else:
            desc.append("An undirected")
        desc.append("simple graph" if prop["simple"] else "multigraph")
        n_comp = s.count_components()
        desc.append(f"with {n_comp} component" + ("s" if n_comp > 1 else ""))
    return " ".join(desc)


def describe(x, bipartite: str | None = None) -> GraphDescription:
    """Description string together with node and edge counts."""
    s = _store(x)
    return GraphDescription(describe_graph(x, bipartite=bipartite), s.order(), s.size())
