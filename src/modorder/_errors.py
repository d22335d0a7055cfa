"""Errors raised by dependency queries."""

from collections.abc import Sequence


class MissingProvideError(Exception):
    """No unit provides the requested symbol."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"No input provides symbol '{symbol}'")


class UnknownInputError(ValueError):
    """A query referenced units that were not part of the sorted collection."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(names)
        joined = ", ".join(f"'{name}'" for name in self.names)
        super().__init__(f"Inputs are not part of the sorted collection: {joined}")
