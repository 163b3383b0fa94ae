import polars as pl
import pytest

from tidynet import TblGraph


@pytest.fixture
def kinds_graph():
    """Directed graph: 4 nodes (kind p, q, r, p), 6 weighted edges."""
    nodes = pl.DataFrame({"kind": ["p", "q", "r", "p"], "label": ["a", "b", "c", "d"]})
    edges = pl.DataFrame(
        {
            "from": [0, 1, 2, 3, 1, 0],
            "to": [1, 2, 3, 0, 3, 2],
            "w": [1, 2, 3, 4, 5, 6],
        }
    )
    return TblGraph(nodes=nodes, edges=edges, directed=True)


@pytest.fixture
def path_graph():
    """Undirected path 0 - 1 - 2 - 3."""
    nodes = pl.DataFrame({"name": ["a", "b", "c", "d"]})
    edges = pl.DataFrame({"from": [0, 1, 2], "to": [1, 2, 3]})
    return TblGraph(nodes=nodes, edges=edges, directed=False)


@pytest.fixture
def multi_graph():
    """Directed graph with a parallel edge, a reversed edge, and a self-loop."""
    edges = pl.DataFrame({"from": [0, 0, 1, 2], "to": [1, 1, 0, 2], "kind": ["x", "x", "y", "z"]})
    return TblGraph(edges=edges, directed=True, n_nodes=3)
