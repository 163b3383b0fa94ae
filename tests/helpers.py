import polars as pl

from tidynet.core.structure import FROM, TO, Active


def assert_endpoints_valid(G):
    """Every edge references an existing node."""
    edges = G.store.edge_frame()
    n = G.store.order()
    if edges.height:
        assert edges[FROM].min() >= 0 and edges[TO].min() >= 0
        assert edges[FROM].max() < n and edges[TO].max() < n


def assert_groupings_valid(G):
    """Stored grouping columns exist in the table they group."""
    for what in Active:
        meta = G._groups.get(what)
        if meta is None:
            continue
        columns = G.as_frame(what).columns
        assert all(v in columns for v in meta.vars), (what, meta.vars, columns)


def assert_invariants(G):
    assert_endpoints_valid(G)
    assert_groupings_valid(G)
    assert G.active in ("nodes", "edges")


def assert_frames_equal(left: pl.DataFrame, right: pl.DataFrame):
    assert left.columns == right.columns
    assert left.to_dicts() == right.to_dicts()
