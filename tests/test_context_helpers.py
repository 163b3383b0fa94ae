import polars as pl
import pytest

from tidynet import TblGraph, current_graph, graph_context
from tidynet.core.errors import InvalidContextError
from tidynet.helpers import (
    edge_is_loop,
    edge_is_multiple,
    edge_is_mutual,
    graph_is_directed,
    graph_order,
    graph_size,
    node_degree,
    node_is_isolated,
    node_is_sink,
    node_is_source,
)


class TestGraphContext:
    """Scoped access to the graph inside verbs."""

    def test_outside_verb(self):
        with pytest.raises(InvalidContextError):
            current_graph()
        with pytest.raises(InvalidContextError):
            node_degree()

    def test_scoped_push(self, kinds_graph):
        with graph_context(kinds_graph) as G:
            assert current_graph() is G
        with pytest.raises(InvalidContextError):
            current_graph()

    def test_nested_push_restores_outer(self, kinds_graph, path_graph):
        with graph_context(kinds_graph):
            with graph_context(path_graph):
                assert current_graph() is path_graph
            assert current_graph() is kinds_graph

    def test_released_after_failing_callback(self, kinds_graph):
        def boom():
            assert current_graph() is kinds_graph
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            kinds_graph.group_by(x=boom)
        with pytest.raises(InvalidContextError):
            current_graph()
        assert not kinds_graph.is_grouped

    def test_graph_level_helpers(self, kinds_graph):
        seen = {}

        def constant_key():
            seen.update(order=graph_order(), size=graph_size(), directed=graph_is_directed())
            return pl.lit(1)

        kinds_graph.group_by(one=constant_key)
        assert seen == {"order": 4, "size": 6, "directed": True}

    def test_node_helper_in_edge_context(self, kinds_graph):
        with pytest.raises(InvalidContextError, match="nodes"):
            kinds_graph.activate("edges").group_by(deg=node_degree)

    def test_edge_helper_in_node_context(self, kinds_graph):
        with pytest.raises(InvalidContextError, match="edges"):
            kinds_graph.group_by(loop=edge_is_loop)


class TestHelpers:
    """Values computed by the graph-aware callbacks."""

    def _eval(self, G, fn):
        with graph_context(G):
            return fn().to_list()

    def test_node_degree_modes(self, multi_graph):
        G = multi_graph
        assert self._eval(G, node_degree) == [3, 3, 2]
        assert self._eval(G, lambda: node_degree("out")) == [2, 1, 1]
        assert self._eval(G, lambda: node_degree("in", loops=False)) == [1, 2, 0]

    def test_isolated_source_sink(self):
        G = TblGraph(edges={"from": [0, 1], "to": [1, 2]}, n_nodes=4)
        assert self._eval(G, node_is_isolated) == [False, False, False, True]
        assert self._eval(G, node_is_source) == [True, False, False, False]
        assert self._eval(G, node_is_sink) == [False, False, True, False]

    def test_edge_flags_directed(self, multi_graph):
        G = multi_graph.activate("edges")
        assert self._eval(G, edge_is_loop) == [False, False, False, True]
        assert self._eval(G, edge_is_multiple) == [False, True, False, False]
        assert self._eval(G, edge_is_mutual) == [True, True, True, True]

    def test_edge_flags_undirected(self):
        G = TblGraph(edges={"from": [0, 0, 1], "to": [1, 1, 0]}, directed=False, n_nodes=2)
        G.activate("edges")
        assert self._eval(G, edge_is_multiple) == [False, True, True]
        assert self._eval(G, edge_is_mutual) == [True, True, True]

    def test_mutual_requires_reverse(self):
        G = TblGraph(edges={"from": [0, 1], "to": [1, 2]}, n_nodes=3).activate("edges")
        assert self._eval(G, edge_is_mutual) == [False, False]
