"""Canonical module names for file paths and symbols."""

import posixpath
from collections.abc import Callable

MODULE_PREFIX = "module$"

_ESCAPES = (
    ("\\", "/"),
    (":", "-"),
    (" ", "%20"),
)

_IDENTIFIER_REPLACEMENTS = (
    ("/", "$"),
    ("\\", "$"),
    ("@", "$"),
    ("-", "_"),
    (":", "_"),
    (".", "_"),
    ("%20", "_"),
)


def is_synthetic_symbol(symbol: str) -> bool:
    """Check whether a provided symbol was generated for a module rather than declared.

    This is a heuristic: generated symbols carry the ``module$`` prefix.
    """
    return symbol.startswith(MODULE_PREFIX)


def synthetic_prefix_predicate(prefix: str) -> Callable[[str], bool]:
    """Build a synthetic-symbol predicate for a custom prefix."""

    def _predicate(symbol: str) -> bool:
        return symbol.startswith(prefix)

    return _predicate


def _escape_path(path: str) -> str:
    for old, new in _ESCAPES:
        path = path.replace(old, new)
    if not path:
        return path
    normalized = posixpath.normpath(path)
    return "" if normalized == "." else normalized


def file_to_module_name(path: str) -> str:
    """Map a file path or symbol to its canonical module name.

    Args:
        path: A file-like name (``src/app.js``) or a symbol (``app.util``).

    Returns:
        The module name, e.g. ``module$src$app``. Names that already carry
        the module prefix are returned unchanged rather than being prefixed a
        second time (``module$module$...``), so a synthetic symbol maps to the
        module it was generated for.

    Example:
        >>> file_to_module_name("./lib/my-util.js")
        'module$lib$my_util'

    """
    if path.startswith(MODULE_PREFIX):
        return path

    name = _escape_path(path)
    name = name.removeprefix("./").removesuffix(".js")
    for old, new in _IDENTIFIER_REPLACEMENTS:
        name = name.replace(old, new)
    return MODULE_PREFIX + name
