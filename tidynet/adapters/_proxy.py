class BackendProxy:
    """
    Attribute proxy over the structural backend graph of a TblGraph.

    Module-level functions of the backend (``networkx.degree_centrality``)
    are called with the materialised graph as first argument; anything else
    is looked up on the backend graph object (``igraph.Graph.diameter``).
    The backend graph is fetched on every access, so the proxy follows
    structural mutations of the TblGraph it was created from.
    """

    def __init__(self, graph, backend_name):
        self._graph = graph
        self._name = backend_name

    def __repr__(self) -> str:
        return f"<BackendProxy {self._name} of {self._graph!r}>"

    def _entry(self) -> dict:
        from .manager import ensure_materialized

        return ensure_materialized(self._name, self._graph.store)

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        entry = self._entry()
        fn = getattr(entry["module"], name, None)
        if callable(fn):

            def wrapped(*args, **kwargs):
                return fn(entry["graph"], *args, **kwargs)

            return wrapped

        return getattr(entry["graph"], name)
