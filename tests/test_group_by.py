import polars as pl
import pytest

from tidynet import TblGraph
from tidynet.core.errors import InvalidContextError, MissingColumnError, ReservedNameError
from tidynet.helpers import node_degree

from .helpers import assert_frames_equal, assert_invariants


class TestGroupBy:
    """group_by / ungroup and the grouping accessors."""

    def test_group_by_column(self, kinds_graph):
        G = kinds_graph.group_by("kind")
        assert G.is_grouped
        assert G.groups() == ["kind"]
        assert G.group_vars() == ["kind"]
        assert G.n_groups() == 3
        assert G.group_rows() == [[0, 3], [1], [2]]
        assert G.group_size() == [2, 1, 1]
        assert G.group_indices() == [0, 1, 2, 0]
        assert G.group_keys()["kind"].to_list() == ["p", "q", "r"]
        assert_invariants(G)

    def test_group_by_keeps_rows_in_place(self, kinds_graph):
        before = kinds_graph.nodes.clone()
        G = kinds_graph.group_by("kind")
        assert_frames_equal(G.nodes, before)
        assert G.store.size() == 6

    def test_missing_values_sort_last(self):
        G = TblGraph(nodes={"kind": ["b", None, "a", "b"]})
        G.group_by("kind")
        assert G.group_keys()["kind"].to_list() == ["a", "b", None]
        assert G.group_rows() == [[2], [0, 3], [1]]

    def test_ungrouped_accessors(self, kinds_graph):
        G = kinds_graph
        assert not G.is_grouped
        assert G.groups() is None
        assert G.group_vars() == []
        assert G.n_groups() == 1
        assert G.group_size() == [4]
        assert G.group_indices() == [0, 0, 0, 0]
        assert G.group_rows() == [[0, 1, 2, 3]]

    def test_group_by_all_columns(self, kinds_graph):
        G = kinds_graph.group_by()
        assert G.group_vars() == ["kind", "label"]
        assert G.n_groups() == 4

    def test_group_by_replaces_unless_add(self, kinds_graph):
        G = kinds_graph.group_by("kind")
        G.group_by("label")
        assert G.group_vars() == ["label"]
        G.group_by("kind", add=True)
        assert G.group_vars() == ["label", "kind"]

    def test_add_without_columns_keeps_grouping(self, kinds_graph):
        G = kinds_graph.group_by("kind")
        G.group_by(add=True)
        assert G.group_vars() == ["kind"]
        assert G.n_groups() == 3

    def test_add_without_columns_or_grouping_uses_all(self, kinds_graph):
        G = kinds_graph.group_by(add=True)
        assert G.group_vars() == ["kind", "label"]

    def test_computed_sequence_of_wrong_length(self, kinds_graph):
        with pytest.raises(ValueError, match="2 values"):
            kinds_graph.group_by(x=[1, 2])
        assert "x" not in kinds_graph.nodes.columns
        assert not kinds_graph.is_grouped

    def test_computed_sequence(self, kinds_graph):
        G = kinds_graph.group_by(x=[1, 1, 2, 2])
        assert G.nodes["x"].to_list() == [1, 1, 2, 2]
        assert G.group_rows() == [[0, 1], [2, 3]]

    def test_missing_column(self, kinds_graph):
        with pytest.raises(MissingColumnError) as err:
            kinds_graph.group_by("colour")
        assert "colour" in str(err.value)
        assert isinstance(err.value, KeyError)
        assert not kinds_graph.is_grouped

    def test_computed_column_is_written(self, kinds_graph):
        G = kinds_graph.group_by(heavy=pl.col("kind") == "p")
        assert "heavy" in G.nodes.columns
        assert G.group_vars() == ["heavy"]
        assert G.group_keys()["heavy"].to_list() == [False, True]

    def test_computed_column_from_callback(self, path_graph):
        G = path_graph.group_by(deg=node_degree)
        assert G.nodes["deg"].to_list() == [1, 2, 2, 1]
        assert G.group_rows() == [[0, 3], [1, 2]]

    def test_computed_column_unknown_reference(self, kinds_graph):
        with pytest.raises(MissingColumnError):
            kinds_graph.group_by(x=pl.col("colour"))
        assert kinds_graph.nodes.columns == ["kind", "label"]

    def test_computed_endpoint_name_is_reserved(self, kinds_graph):
        G = kinds_graph.activate("edges")
        with pytest.raises(ReservedNameError):
            G.group_by(**{"from": pl.lit(0)})
        assert G.edges.columns == ["from", "to", "w"]
        assert not G.is_grouped

    def test_group_edges_by_endpoint(self, kinds_graph):
        G = kinds_graph.activate("edges").group_by("from")
        assert G.n_groups() == 4
        assert G.group_rows() == [[0, 5], [1, 4], [2], [3]]

    def test_ungroup_only_active_context(self, kinds_graph):
        G = kinds_graph.group_by("kind")
        G.activate("edges").group_by("w")
        G.ungroup()
        assert G.groups() is None
        G.activate("nodes")
        assert G.groups() == ["kind"]
        G.ungroup()
        assert not G.is_grouped


class TestActiveContext:
    """Switching the active table."""

    def test_default_is_nodes(self, kinds_graph):
        assert kinds_graph.active == "nodes"

    def test_activate_is_case_insensitive(self, kinds_graph):
        assert kinds_graph.activate("EDGES").active == "edges"

    def test_activate_unknown(self, kinds_graph):
        with pytest.raises(InvalidContextError, match="Only nodes and edges supported"):
            kinds_graph.activate("vertices")
        assert kinds_graph.active == "nodes"

    def test_activation_keeps_groupings(self, kinds_graph):
        G = kinds_graph.group_by("kind")
        G.activate("edges")
        assert G.groups() is None
        assert G.is_grouped
        G.activate("nodes")
        assert G.groups() == ["kind"]
        assert G.n_groups() == 3

    def test_functional_forms(self, kinds_graph):
        import tidynet as tn

        G = tn.group_by(tn.activate(kinds_graph, "nodes"), "kind")
        assert tn.active(G) == "nodes"
        assert tn.n_groups(G) == 3
        assert tn.group_vars(tn.ungroup(G)) == []
