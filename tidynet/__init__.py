# tidynet/__init__.py
"""tidynet: relational verbs on graphs, single import, full API."""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "adapters": "tidynet.adapters",
    "core": "tidynet.core",
    "helpers": "tidynet.helpers",
    "networkx": "tidynet.adapters.networkx",
    "igraph": "tidynet.adapters.igraph",
    "dataframe": "tidynet.adapters.dataframe_adapter",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "TblGraph": ("tidynet.core.graph", "TblGraph"),
    "GraphStore": ("tidynet.core.store", "GraphStore"),
    "GraphOptions": ("tidynet.core._options", "GraphOptions"),
    "options": ("tidynet.core._options", "options"),
    "Active": ("tidynet.core.structure", "Active"),

    # Verbs (functional forms)
    "activate": ("tidynet.core.verbs", "activate"),
    "active": ("tidynet.core.verbs", "active"),
    "group_by": ("tidynet.core.verbs", "group_by"),
    "ungroup": ("tidynet.core.verbs", "ungroup"),
    "distinct": ("tidynet.core.verbs", "distinct"),
    "group_vars": ("tidynet.core.verbs", "group_vars"),
    "groups": ("tidynet.core.verbs", "groups"),
    "n_groups": ("tidynet.core.verbs", "n_groups"),
    "group_size": ("tidynet.core.verbs", "group_size"),
    "group_indices": ("tidynet.core.verbs", "group_indices"),
    "group_rows": ("tidynet.core.verbs", "group_rows"),
    "group_keys": ("tidynet.core.verbs", "group_keys"),
    "as_frame": ("tidynet.core.table", "read"),
    "set_graph_data": ("tidynet.core.table", "write"),
    "tbl_vars": ("tidynet.core.table", "tbl_vars"),

    # Classification
    "describe": ("tidynet.core.classify", "describe"),
    "describe_graph": ("tidynet.core.classify", "describe_graph"),
    "is_tree": ("tidynet.core.classify", "is_tree"),
    "is_forest": ("tidynet.core.classify", "is_forest"),

    # Context
    "graph_context": ("tidynet.core._context", "graph_context"),
    "current_graph": ("tidynet.core._context", "current_graph"),

    # Errors
    "TblGraphError": ("tidynet.core.errors", "TblGraphError"),
    "InvalidContextError": ("tidynet.core.errors", "InvalidContextError"),
    "ReservedNameError": ("tidynet.core.errors", "ReservedNameError"),
    "MissingColumnError": ("tidynet.core.errors", "MissingColumnError"),
    "UnsupportedInputError": ("tidynet.core.errors", "UnsupportedInputError"),

    # Conversion layer
    "tbl_graph": ("tidynet.adapters.dataframe_adapter", "tbl_graph"),
    "from_dataframes": ("tidynet.adapters.dataframe_adapter", "from_dataframes"),
    "to_dataframes": ("tidynet.adapters.dataframe_adapter", "to_dataframes"),
    "as_tbl_graph": ("tidynet.adapters.convert", "as_tbl_graph"),
    "is_tbl_graph": ("tidynet.adapters.convert", "is_tbl_graph"),
    "is_grouped_tbl_graph": ("tidynet.adapters.convert", "is_grouped_tbl_graph"),

    # NetworkX adapter
    "to_nx": ("tidynet.adapters.networkx", "to_nx"),
    "from_nx": ("tidynet.adapters.networkx", "from_nx"),

    # igraph adapter (optional dependency)
    "to_igraph": ("tidynet.adapters.igraph", "to_igraph"),
    "from_igraph": ("tidynet.adapters.igraph", "from_igraph"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("tidynet")
except PackageNotFoundError:
    __version__ = "0.0.0"
