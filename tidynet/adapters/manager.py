from __future__ import annotations

import importlib
from importlib import util
from typing import TYPE_CHECKING

from ._base import GraphAdapter

if TYPE_CHECKING:
    from ..core.graph import TblGraph
    from ..core.store import GraphStore

from ._proxy import BackendProxy

__all__ = [
    "available_backends",
    "ensure_materialized",
    "get_adapter",
    "get_proxy",
]

# backend name -> (import name, adapter module, store converter, adapter class)
_BACKENDS = {
    "networkx": ("networkx", ".networkx", "store_to_nx", "NetworkXAdapter"),
    "igraph": ("igraph", ".igraph", "store_to_igraph", "IGraphAdapter"),  # pip pkg is igraph (formerly python-igraph)
}


def _is_installed(modname: str) -> bool:
    return util.find_spec(modname) is not None


def _load(name: str):
    if name not in _BACKENDS:
        raise ValueError(f"No backend '{name}' registered")
    modname, submod, _, _ = _BACKENDS[name]
    if not _is_installed(modname):
        raise ModuleNotFoundError(
            f"Optional backend '{name}' is not installed. "
            f"Install with `pip install tidynet[{name}]`."
        )
    return importlib.import_module(submod, __package__)


def available_backends() -> dict:
    """Backend name -> whether its library is importable."""
    return {name: _is_installed(mod) for name, (mod, _, _, _) in _BACKENDS.items()}


def get_adapter(name: str) -> GraphAdapter:
    """Return a *new* adapter instance of the requested backend."""
    mod = _load(name.lower())
    return getattr(mod, _BACKENDS[name.lower()][3])()


def get_proxy(backend_name: str, graph: "TblGraph") -> BackendProxy:
    """Return a lazy proxy so users can write `G.nx.<algo>()`."""
    if backend_name not in _BACKENDS:
        raise ValueError(f"No backend '{backend_name}' registered")
    return BackendProxy(graph, backend_name)


def ensure_materialized(backend_name: str, store: "GraphStore") -> dict:
    """
    Structural backend graph of *store*, rebuilt when the store changed.

    Parameters
    ----------
    backend_name : {"networkx", "igraph"}
    store : GraphStore

    Returns
    -------
    dict
        ``{"module": backend module, "graph": backend graph, "version": int}``.
        The entry is cached on the store's state unless the store's
        ``options.cache_backends`` is False, in which case any cached entry
        is discarded.
    """
    cache = store._state._backend_cache
    if not store.cache_enabled:
        # caching was switched off through the options; drop what was kept
        cache.clear()
    entry = cache.get(backend_name)
    if entry is not None and not store._state.dirty_since(entry["version"]):
        return entry

    adapter_module = _load(backend_name)
    modname, _, converter, _ = _BACKENDS[backend_name]
    entry = {
        "module": importlib.import_module(modname),
        "graph": getattr(adapter_module, converter)(store),
        "version": store._state.version,
    }
    if store.cache_enabled:
        cache[backend_name] = entry
    return entry
