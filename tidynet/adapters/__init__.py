"""Conversion layer: build a TblGraph from graph-like inputs and export it back."""
from importlib import import_module
from typing import Any

_lazy_symbols: dict[str, tuple[str, str]] = {
    "as_tbl_graph": ("tidynet.adapters.convert", "as_tbl_graph"),
    "tbl_graph": ("tidynet.adapters.dataframe_adapter", "tbl_graph"),
    "from_dataframes": ("tidynet.adapters.dataframe_adapter", "from_dataframes"),
    "to_dataframes": ("tidynet.adapters.dataframe_adapter", "to_dataframes"),
    "to_nx": ("tidynet.adapters.networkx", "to_nx"),
    "from_nx": ("tidynet.adapters.networkx", "from_nx"),
    "to_igraph": ("tidynet.adapters.igraph", "to_igraph"),
    "from_igraph": ("tidynet.adapters.igraph", "from_igraph"),
    "available_backends": ("tidynet.adapters.manager", "available_backends"),
}

__all__ = sorted(_lazy_symbols)


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))
