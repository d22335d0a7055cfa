"""Index from provided symbols to the units that provide them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from modorder._module_names import file_to_module_name, is_synthetic_symbol

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from modorder._unit import Unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SymbolIndex[T: Unit]:
    """Symbol providers and exportless units of a unit collection.

    Attributes:
        _providers: Mapping from symbol name to the unit providing it. When
            several units provide a symbol the last one in user order wins.
        _exportless: Mapping from normalized module name to units that
            provide nothing, or only a single synthetic symbol. Ordered by
            first insertion.

    """

    _providers: Mapping[str, T] = field(default_factory=dict)
    _exportless: Mapping[str, T] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        units: Iterable[T],
        *,
        is_synthetic: Callable[[str], bool] = is_synthetic_symbol,
        module_namer: Callable[[str], str] = file_to_module_name,
    ) -> SymbolIndex[T]:
        """Index a unit collection in user order.

        Args:
            units: Units in user order.
            is_synthetic: Predicate telling generated symbols from declared ones.
            module_namer: Maps a unit name to the key used for exportless units.

        Returns:
            A new SymbolIndex.

        """
        providers: dict[str, T] = {}
        exportless: dict[str, T] = {}

        for unit in units:
            provides = list(unit.provides)
            if not provides or (len(provides) == 1 and is_synthetic(provides[0])):
                exportless[module_namer(unit.name)] = unit
            # Exportless units still register their synthetic symbol
            for symbol in provides:
                providers[symbol] = unit

        logger.debug(f"Indexed {len(providers)} symbols, {len(exportless)} exportless inputs")
        return cls(
            _providers=MappingProxyType(providers),
            _exportless=MappingProxyType(exportless),
        )

    def provider_of(self, symbol: str) -> T | None:
        """Get the unit providing a symbol, if any."""
        return self._providers.get(symbol)

    def exportless_for(self, module_name: str) -> T | None:
        """Get the exportless unit registered under a module name, if any."""
        return self._exportless.get(module_name)

    @property
    def exportless_units(self) -> tuple[T, ...]:
        """Exportless units in insertion order."""
        return tuple(self._exportless.values())
