"""Loading units from TOML manifests and exporting import orders."""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._unit import SourceUnit

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ._unit import Unit

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Error reading a unit manifest."""


class UnitEntry(BaseModel):
    """One ``[[unit]]`` table of a manifest."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    provides: list[str] = Field(default_factory=list)
    requires: list[str] = Field(default_factory=list)

    def to_unit(self) -> SourceUnit:
        return SourceUnit(name=self.name, provides=tuple(self.provides), requires=tuple(self.requires))


class Manifest(BaseModel):
    """A manifest listing units in user order."""

    model_config = ConfigDict(extra="forbid")

    units: list[UnitEntry] = Field(default_factory=list, alias="unit")


def load_manifest(path: Path) -> Manifest:
    """Read and validate a manifest file.

    Args:
        path: Path to the TOML manifest.

    Returns:
        The validated Manifest.

    Raises:
        ManifestError: If the file cannot be read, is not valid TOML, or does
            not match the manifest schema.

    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        msg = f"Cannot read manifest {path}: {e}"
        raise ManifestError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ManifestError(msg) from e

    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid manifest {path}:\n{e}"
        raise ManifestError(msg) from e

    logger.debug(f"Loaded {len(manifest.units)} units from {path}")
    return manifest


def load_units_from_toml(path: Path) -> list[SourceUnit]:
    """Load the units of a manifest file in user order."""
    return [entry.to_unit() for entry in load_manifest(path).units]


def export_order_to_toml(units: Iterable[Unit], path: Path) -> None:
    """Write unit names, in the given order, to a TOML file as ``order = [...]``."""
    data = {"order": [unit.name for unit in units]}
    with path.open("wb") as f:
        tomli_w.dump(data, f)
    logger.debug(f"Exported {len(data['order'])} names to {path}")
