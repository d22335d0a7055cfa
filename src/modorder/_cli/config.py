"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from modorder._module_names import MODULE_PREFIX


class ConfigError(Exception):
    """Error in modorder configuration."""


@dataclass(slots=True, frozen=True)
class ModorderConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    manifest: Path | None = None
    synthetic_prefix: str = MODULE_PREFIX
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def load_config(pyproject_path: Path) -> ModorderConfig:
    """Load and validate [tool.modorder] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed ModorderConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("modorder", {})
    if not section:
        return ModorderConfig(project_root=project_root)

    manifest_path: Path | None = None
    if "manifest" in section:
        manifest_value = section["manifest"]
        if not isinstance(manifest_value, str):
            msg = "Invalid [tool.modorder].manifest: expected string path"
            raise ConfigError(msg)
        manifest_path = Path(manifest_value)
        if not manifest_path.is_absolute():
            manifest_path = project_root / manifest_path

    synthetic_prefix = section.get("synthetic_prefix", MODULE_PREFIX)
    if not isinstance(synthetic_prefix, str) or not synthetic_prefix:
        msg = "Invalid [tool.modorder].synthetic_prefix: expected non-empty string"
        raise ConfigError(msg)

    return ModorderConfig(
        manifest=manifest_path,
        synthetic_prefix=synthetic_prefix,
        project_root=project_root,
    )


def get_config() -> ModorderConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        ModorderConfig (may be empty if no pyproject.toml or no [tool.modorder] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return ModorderConfig()
    return load_config(pyproject_path)
