"""Exceptions raised by tidynet.

Every error derives from :class:`TblGraphError` and from the closest builtin,
so ``except ValueError`` style handlers keep working.
"""

__all__ = [
    "TblGraphError",
    "InvalidContextError",
    "ReservedNameError",
    "MissingColumnError",
    "UnsupportedInputError",
]


class TblGraphError(Exception):
    """Base exception for table-graph operations."""
    pass


class InvalidContextError(TblGraphError, ValueError):
    """Raised when a verb meets an active context other than nodes/edges."""
    pass


class ReservedNameError(TblGraphError, ValueError):
    """Raised when a column name collides with an internally reserved name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'The attribute name "{name}" is reserved')


class MissingColumnError(TblGraphError, KeyError):
    """Raised when a grouping or key column is absent from the active table."""

    def __init__(self, columns, available=()):
        self.columns = list(columns)
        self.available = list(available)
        super().__init__(
            f"Column(s) not found: {', '.join(map(str, self.columns))}"
            + (f" (available: {', '.join(map(str, self.available))})" if self.available else "")
        )

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class UnsupportedInputError(TblGraphError, TypeError):
    """Raised when the conversion layer has no adapter for an input type."""

    def __init__(self, obj):
        self.type_name = type(obj).__name__
        super().__init__(f"No support for {self.type_name} objects")
