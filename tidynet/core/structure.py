from enum import Enum

from .errors import InvalidContextError

__all__ = ["Active", "FROM", "TO", "ROW_INDEX", "ENDPOINTS"]

# Edge endpoint columns (derived, read-only projections of the edge table)
FROM = "from"
TO = "to"
ENDPOINTS = (FROM, TO)

# Row-identity handle used to reconcile a transformed table with storage order
ROW_INDEX = ".tbl_graph_index"


class Active(str, Enum):
    """Active context of a graph (NODES, EDGES).

    Attributes:
        NODES: Relational verbs address the node table
        EDGES: Relational verbs address the edge table
    """

    NODES = "nodes"
    EDGES = "edges"

    @classmethod
    def coerce(cls, what) -> "Active":
        if isinstance(what, cls):
            return what
        try:
            return cls(str(what).lower())
        except ValueError:
            raise InvalidContextError(
                f"Unknown active element: {what}. Only nodes and edges supported"
            ) from None

    @property
    def other(self) -> "Active":
        return Active.EDGES if self is Active.NODES else Active.NODES

    def __str__(self) -> str:
        return self.value
