"""Ordered dependency edges between units."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._algorithms import node_itself

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable

    from ._symbol_index import SymbolIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DependencyEdges[T]:
    """An insertion-ordered multimap from a node to the nodes it depends on.

    Unlike a plain graph, iteration order is part of the contract: each
    node's dependencies appear in the order they were first recorded. Cycles
    and self edges are allowed. Nodes are looked up through a key function,
    so units can be tracked by identity.

    Attributes:
        _dependencies: Mapping from node key to the node's direct dependencies.
        _key: Maps a node to its key.

    """

    _dependencies: dict[Hashable, tuple[T, ...]] = field(default_factory=dict)
    _key: Callable[[T], Hashable] = node_itself

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[T, T]],
        *,
        key: Callable[[T], Hashable] = node_itself,
    ) -> DependencyEdges[T]:
        """Build edges from (dependent, dependency) pairs.

        Repeated pairs collapse into a single edge.

        Example:
            >>> edges = DependencyEdges.from_edges([("app", "util"), ("app", "log"), ("app", "util")])
            >>> edges.dependencies("app")
            ('util', 'log')

        """
        # Inner dicts double as ordered sets of dependencies
        dependencies: dict[Hashable, dict[Hashable, T]] = {}
        for dependent, dependency in edges:
            dependencies.setdefault(key(dependent), {}).setdefault(key(dependency), dependency)
        return cls(
            _dependencies={k: tuple(v.values()) for k, v in dependencies.items()},
            _key=key,
        )

    @classmethod
    def from_units(cls, units: Iterable[T], index: SymbolIndex[T]) -> DependencyEdges[T]:
        """Derive edges by resolving each unit's requires through a symbol index.

        Units are tracked by identity. Requires with no provider are skipped.

        Args:
            units: Units in user order.
            index: Index of the symbols the units provide.

        Returns:
            A new DependencyEdges instance.

        """
        pairs: list[tuple[T, T]] = []
        for unit in units:
            for symbol in unit.requires:
                provider = index.provider_of(symbol)
                if provider is not None:
                    pairs.append((unit, provider))
        edges = cls.from_edges(pairs, key=id)
        logger.debug(f"Resolved {edges.edge_count} dependency edges")
        return edges

    @property
    def edge_count(self) -> int:
        """Number of distinct edges."""
        return sum(len(deps) for deps in self._dependencies.values())

    def dependencies(self, node: T) -> tuple[T, ...]:
        """Get direct dependencies of a node in recorded order."""
        return self._dependencies.get(self._key(node), ())
