"""Graph module providing the structures behind the import order.

This module contains:
- SymbolIndex[T]: symbol providers and exportless units
- DependencyEdges[T]: an ordered dependency multimap
- import_order: cycle-tolerant ordering of nodes after their dependencies
- reachable: transitive closure from a set of roots
"""

from ._algorithms import import_order, reachable
from ._dependency_graph import DependencyEdges
from ._symbol_index import SymbolIndex

__all__ = ["DependencyEdges", "SymbolIndex", "import_order", "reachable"]
