import polars as pl
import pytest

from tidynet.core.errors import ReservedNameError
from tidynet.core.store import GraphStore


class TestGraphStore:
    """Storage, cascading deletion and structural queries."""

    def test_add_nodes_null_fills_new_columns(self):
        s = GraphStore()
        s.add_nodes(attrs={"a": [1, 2]})
        s.add_nodes(attrs={"b": ["x"]})
        assert s.order() == 3
        assert s.node_attrs().columns == ["a", "b"]
        assert s.node_attrs()["a"].to_list() == [1, 2, None]
        assert s.node_attrs()["b"].to_list() == [None, None, "x"]

    def test_add_bare_nodes_extends_attribute_columns(self):
        s = GraphStore()
        s.add_nodes(attrs={"a": [1]})
        ids = s.add_nodes(2)
        assert ids == [1, 2]
        assert s.node_attrs()["a"].to_list() == [1, None, None]

    def test_add_nodes_without_attributes(self):
        s = GraphStore()
        s.add_nodes(5)
        assert s.order() == 5
        assert s.node_attrs().width == 0

    def test_add_edges_rejects_dangling_endpoint(self):
        s = GraphStore()
        s.add_nodes(2)
        with pytest.raises(ValueError):
            s.add_edges([0], [2])
        assert s.size() == 0

    def test_add_edges_rejects_endpoint_attribute(self):
        s = GraphStore()
        s.add_nodes(2)
        with pytest.raises(ReservedNameError):
            s.add_edges([0], [1], {"from": [1]})
        assert s.size() == 0

    def test_delete_nodes_cascades_and_remaps(self):
        s = GraphStore()
        s.add_nodes(attrs={"name": ["a", "b", "c", "d"]})
        s.add_edges([0, 1, 2, 0], [1, 2, 3, 3], {"w": [1, 2, 3, 4]})
        s.delete_nodes([1])
        assert s.order() == 3
        assert s.node_attrs()["name"].to_list() == ["a", "c", "d"]
        # edges touching node 1 are gone, survivors point at compacted ids
        assert s.edge_list() == [(1, 2), (0, 2)]
        assert s.edge_attrs()["w"].to_list() == [3, 4]

    def test_delete_nodes_out_of_range(self):
        s = GraphStore()
        s.add_nodes(2)
        with pytest.raises(IndexError):
            s.delete_nodes([5])

    def test_delete_edges_keeps_nodes(self):
        s = GraphStore()
        s.add_nodes(3)
        s.add_edges([0, 1], [1, 2])
        s.delete_edges(0)
        assert s.order() == 3
        assert s.edge_list() == [(1, 2)]

    def test_set_node_attrs_height_mismatch(self):
        s = GraphStore()
        s.add_nodes(3)
        with pytest.raises(ValueError):
            s.set_node_attrs(pl.DataFrame({"a": [1, 2]}))

    def test_set_edge_attrs_ignores_endpoints(self):
        s = GraphStore()
        s.add_nodes(2)
        s.add_edges([0], [1])
        s.set_edge_attrs(pl.DataFrame({"from": [1], "to": [0], "w": [9]}))
        assert s.edge_list() == [(0, 1)]
        assert s.edge_attrs()["w"].to_list() == [9]

    def test_degree_modes(self):
        s = GraphStore(directed=True)
        s.add_nodes(3)
        s.add_edges([0, 0, 2], [1, 2, 2])
        assert s.degree("out").to_list() == [2, 0, 1]
        assert s.degree("in").to_list() == [0, 1, 2]
        assert s.degree().to_list() == [2, 1, 3]
        assert s.degree(loops=False).to_list() == [2, 1, 1]
        with pytest.raises(ValueError):
            s.degree("sideways")

    def test_multiple_edges_direction(self):
        directed = GraphStore(directed=True)
        directed.add_nodes(2)
        directed.add_edges([0, 1], [1, 0])
        assert not directed.has_multiple()
        assert directed.is_simple()

        undirected = GraphStore(directed=False)
        undirected.add_nodes(2)
        undirected.add_edges([0, 1], [1, 0])
        assert undirected.has_multiple()
        assert not undirected.is_simple()

    def test_connectivity(self):
        s = GraphStore(directed=True)
        assert not s.is_connected()
        assert s.count_components() == 0
        s.add_nodes(4)
        s.add_edges([0, 2], [1, 1])
        assert s.count_components() == 2
        assert not s.is_connected()
        s.add_edges([3], [2])
        assert s.is_connected()

    def test_dag_and_cycles(self):
        s = GraphStore(directed=True)
        s.add_nodes(3)
        s.add_edges([0, 1], [1, 2])
        assert s.is_dag()
        assert not s.has_cycle()
        s.add_edges([2], [0])
        assert not s.is_dag()
        assert s.has_cycle()

        u = GraphStore(directed=False)
        u.add_nodes(3)
        u.add_edges([0, 1], [1, 2])
        assert not u.is_dag()
        assert not u.has_cycle()

    def test_structural_bipartite(self):
        s = GraphStore(directed=False)
        s.add_nodes(4)
        s.add_edges([0, 1, 2, 3], [1, 2, 3, 0])
        assert s.is_bipartite()
        s.add_edges([0], [2])
        assert not s.is_bipartite()

    def test_networkx_materialisation_is_cached_per_version(self):
        s = GraphStore()
        s.add_nodes(2)
        first = s.to_networkx()
        assert s.to_networkx() is first
        s.add_edges([0], [1])
        second = s.to_networkx()
        assert second is not first
        assert second.number_of_edges() == 1

    def test_cache_disabled_rebuilds(self):
        s = GraphStore()
        s.cache_enabled = False
        s.add_nodes(2)
        assert s.to_networkx() is not s.to_networkx()

    def test_copy_is_independent(self):
        s = GraphStore()
        s.add_nodes(attrs={"a": [1, 2]})
        s.add_edges([0], [1])
        c = s.copy()
        c.delete_nodes([0])
        assert s.order() == 2 and s.size() == 1
        assert c.order() == 1 and c.size() == 0
