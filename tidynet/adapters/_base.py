from abc import ABC, abstractmethod
from typing import Any

import polars as pl


class GraphAdapter(ABC):
    """Shared interface of backend exporters.

    ``nodes`` is the node attribute table in storage order; ``edges`` carries
    the ``from``/``to`` endpoint columns followed by edge attributes.
    """

    @abstractmethod
    def export(self, nodes: pl.DataFrame, edges: pl.DataFrame, directed: bool = True, **kwargs) -> Any:
        pass
