from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["GraphOptions", "options"]


class GraphOptions(BaseModel):
    """Per-graph behaviour switches.

    Parameters
    ----------
    distinct_regroup : {"recompute", "drop"}
        What ``distinct`` does with a grouping of the active table.
        ``"recompute"`` regroups the deduplicated table on the same columns
        (the grouping is dropped with a warning when ``keep_all=False`` trimmed
        a grouping column away); ``"drop"`` always removes the grouping.
    bipartite : {"type", "structural"}
        How the classifier decides bipartiteness. ``"type"`` follows the igraph
        convention (the node table carries a ``type`` column); ``"structural"``
        asks networkx for a two-colouring.
    cache_backends : bool
        Cache the networkx materialisation per structural version.

    Notes
    -----
    - Graphs copy the module level :data:`options` at creation time, so
      changing the defaults later does not affect existing graphs.
    - Invalid values and unknown names raise ``pydantic.ValidationError``
      (a ``ValueError``), on construction and on assignment alike.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    distinct_regroup: Literal["recompute", "drop"] = Field(
        "recompute", description="Grouping propagation of distinct()."
    )
    bipartite: Literal["type", "structural"] = Field(
        "type", description="Bipartiteness rule of the classifier."
    )
    cache_backends: bool = Field(
        True, strict=True, description="Cache backend graphs per structural version."
    )

    def update(self, **kwargs) -> "GraphOptions":
        """Set options in place and return ``self``.

        All values are validated together first, so a failing call leaves
        every option unchanged.
        """
        validated = self.model_validate({**self.model_dump(), **kwargs})
        for key in kwargs:
            setattr(self, key, getattr(validated, key))
        return self

    def copy(self, **overrides) -> "GraphOptions":
        if overrides:
            return self.model_validate({**self.model_dump(), **overrides})
        return self.model_copy()


# Module-level defaults, copied by every new graph
options = GraphOptions()
