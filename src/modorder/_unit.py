"""Units: the named inputs that provide and require symbols."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


class Unit(Protocol):
    """Anything with a name, provided symbols and required symbols.

    Units are tracked by identity. Two units with identical contents are
    still distinct entries in every structure built from them.
    """

    @property
    def name(self) -> str: ...

    @property
    def provides(self) -> Sequence[str]: ...

    @property
    def requires(self) -> Sequence[str]: ...


@dataclass(frozen=True, slots=True, eq=False)
class SourceUnit:
    """A plain unit record, e.g. one source file of a build."""

    name: str
    provides: tuple[str, ...] = ()
    requires: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"SourceUnit({self.name!r})"
