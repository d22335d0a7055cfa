"""Import-ordered view over a collection of units."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._errors import MissingProvideError, UnknownInputError
from ._graph import DependencyEdges, SymbolIndex, import_order, reachable
from ._module_names import file_to_module_name, is_synthetic_symbol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from ._unit import Unit

logger = logging.getLogger(__name__)


class SortedDependencies[T: Unit]:
    """Units sorted so that each one comes after the units it depends on.

    Circular references are allowed: a unit reached again while its own
    dependencies are still being traversed is not revisited, so the first
    unit of a cycle is emitted after the rest of the cycle.

    The resulting order is influenced by the user order, since traversals
    start from each unit in turn. Everything is computed once, on
    construction; all methods are read-only afterwards.

    Example:
        >>> a = SourceUnit("a.js", provides=("a",), requires=("b",))
        >>> b = SourceUnit("b.js", provides=("b",))
        >>> SortedDependencies([a, b]).get_sorted_list()
        (SourceUnit('b.js'), SourceUnit('a.js'))

    """

    def __init__(
        self,
        user_ordered_inputs: Iterable[T],
        *,
        is_synthetic: Callable[[str], bool] = is_synthetic_symbol,
        module_namer: Callable[[str], str] = file_to_module_name,
    ) -> None:
        """Index, link and order the inputs.

        Args:
            user_ordered_inputs: Units in user order.
            is_synthetic: Predicate recognizing symbols generated for modules
                rather than declared by them.
            module_namer: Maps a unit name or symbol to a canonical module name.

        """
        self._module_namer = module_namer
        self._user_ordered: tuple[T, ...] = tuple(user_ordered_inputs)
        # Units are tracked by identity, never by value
        self._known: frozenset[int] = frozenset(map(id, self._user_ordered))
        self._index: SymbolIndex[T] = SymbolIndex.build(
            self._user_ordered,
            is_synthetic=is_synthetic,
            module_namer=module_namer,
        )
        # Edges are only needed while ordering
        edges = DependencyEdges.from_units(self._user_ordered, self._index)
        self._import_ordered: tuple[T, ...] = tuple(import_order(self._user_ordered, edges.dependencies, key=id))
        logger.debug(f"Sorted {len(self._import_ordered)} inputs")

    def get_sorted_list(self) -> tuple[T, ...]:
        """Return all inputs in import order."""
        return self._import_ordered

    def get_user_ordered_list(self) -> tuple[T, ...]:
        """Return all inputs in the order they were given."""
        return self._user_ordered

    def get_dependencies_of(
        self,
        roots: Iterable[T],
        sorted: bool = True,  # noqa: A002, FBT001, FBT002
    ) -> tuple[T, ...]:
        """Get the roots and everything they transitively require.

        Args:
            roots: Units to start from. Each must be one of the sorted inputs.
            sorted: Return the result in import order if True, in user order
                otherwise.

        Returns:
            The closure, ordered like the chosen base list.

        Raises:
            UnknownInputError: If a root is not one of the sorted inputs.

        """
        roots = list(roots)
        unknown = [root.name for root in roots if id(root) not in self._known]
        if unknown:
            raise UnknownInputError(unknown)

        included = {id(unit) for unit in reachable(roots, self._required_inputs, key=id)}
        base = self._import_ordered if sorted else self._user_ordered
        return tuple(unit for unit in base if id(unit) in included)

    def get_sorted_dependencies_of(self, roots: Iterable[T]) -> tuple[T, ...]:
        """Get the roots and their transitive dependencies in import order."""
        return self.get_dependencies_of(roots, sorted=True)

    def get_input_providing(self, symbol: str) -> T:
        """Get the input providing a symbol.

        Raises:
            MissingProvideError: If no input provides the symbol.

        """
        unit = self.maybe_get_input_providing(symbol)
        if unit is None:
            raise MissingProvideError(symbol)
        return unit

    def maybe_get_input_providing(self, symbol: str) -> T | None:
        """Get the input providing a symbol, or None.

        Falls back to the exportless input whose module name matches the
        symbol, so a module can be looked up by its path.
        """
        provider = self._index.provider_of(symbol)
        if provider is not None:
            return provider
        return self._index.exportless_for(self._module_namer(symbol))

    def get_inputs_without_provides(self) -> tuple[T, ...]:
        """Return inputs that provide no real symbol, in user order."""
        return self._index.exportless_units

    def _required_inputs(self, unit: T) -> Iterator[T]:
        for symbol in unit.requires:
            provider = self._index.provider_of(symbol)
            if provider is not None:
                yield provider

    def __len__(self) -> int:
        """Return the number of inputs."""
        return len(self._user_ordered)

    def __iter__(self) -> Iterator[T]:
        """Iterate over inputs in import order."""
        return iter(self._import_ordered)
