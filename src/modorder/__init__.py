"""Cycle-tolerant import ordering for units that provide and require symbols."""

__all__ = [
    "MODULE_PREFIX",
    "DependencyEdges",
    "Manifest",
    "ManifestError",
    "MissingProvideError",
    "SortedDependencies",
    "SourceUnit",
    "SymbolIndex",
    "Unit",
    "UnitEntry",
    "UnknownInputError",
    "export_order_to_toml",
    "file_to_module_name",
    "import_order",
    "is_synthetic_symbol",
    "load_manifest",
    "load_units_from_toml",
    "reachable",
    "synthetic_prefix_predicate",
]

from ._errors import MissingProvideError, UnknownInputError
from ._graph import DependencyEdges, SymbolIndex, import_order, reachable
from ._manifest import Manifest, ManifestError, UnitEntry, export_order_to_toml, load_manifest, load_units_from_toml
from ._module_names import MODULE_PREFIX, file_to_module_name, is_synthetic_symbol, synthetic_prefix_predicate
from ._sorted_dependencies import SortedDependencies
from ._unit import SourceUnit, Unit
