import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from modorder._errors import MissingProvideError, UnknownInputError
from modorder._manifest import ManifestError, export_order_to_toml, load_units_from_toml
from modorder._module_names import synthetic_prefix_predicate
from modorder._sorted_dependencies import SortedDependencies
from modorder._unit import SourceUnit

from .config import ConfigError, get_config
from .render import render_unit_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

ManifestOption = Annotated[
    Path | None,
    typer.Option("-m", "--manifest", help="Path to the unit manifest TOML file (defaults to [tool.modorder].manifest)"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print input names as a JSON list"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Modorder CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]✗ {escape(message)}[/red]")
    return typer.Exit(code=1)


def _load_sorted(manifest: Path | None) -> SortedDependencies[SourceUnit]:
    """Load the manifest and sort its units.

    Args:
        manifest: Manifest path from the command line. If None, the path
            configured in pyproject.toml is used.

    Returns:
        The sorted units.

    """
    try:
        config = get_config()
    except ConfigError as e:
        raise _fail(str(e)) from e

    manifest = manifest or config.manifest
    if manifest is None:
        msg = "No manifest given. Pass --manifest or set [tool.modorder].manifest in pyproject.toml"
        raise _fail(msg)

    try:
        units = load_units_from_toml(manifest)
    except ManifestError as e:
        raise _fail(str(e)) from e

    logger.debug(f"Sorting {len(units)} inputs from {manifest}")
    return SortedDependencies(units, is_synthetic=synthetic_prefix_predicate(config.synthetic_prefix))


def _print_units(units: tuple[SourceUnit, ...], *, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps([unit.name for unit in units]))
    else:
        render_unit_table(units, out_console)


@app.command("sort")
def sort_inputs(
    *,
    manifest: ManifestOption = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the order to a TOML file"),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Print all inputs in import order."""
    sorted_dependencies = _load_sorted(manifest)
    order = sorted_dependencies.get_sorted_list()
    _print_units(order, as_json=as_json)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        export_order_to_toml(order, output)
        if not as_json:
            err_console.print(f"[green]✓ Order written to {escape(str(output))}[/green]")


@app.command()
def deps(
    names: Annotated[
        list[str],
        typer.Argument(help="Names of the inputs to start from"),
    ],
    *,
    manifest: ManifestOption = None,
    unsorted: Annotated[
        bool,
        typer.Option("--unsorted", help="Keep the manifest order instead of import order"),
    ] = False,
    as_json: JsonOption = False,
) -> None:
    """Print the given inputs and everything they transitively require."""
    sorted_dependencies = _load_sorted(manifest)

    by_name: dict[str, SourceUnit] = {}
    for unit in sorted_dependencies.get_user_ordered_list():
        by_name.setdefault(unit.name, unit)

    missing = [name for name in names if name not in by_name]
    if missing:
        raise _fail(str(UnknownInputError(missing)))

    roots = [by_name[name] for name in names]
    _print_units(sorted_dependencies.get_dependencies_of(roots, sorted=not unsorted), as_json=as_json)


@app.command()
def provider(
    symbol: Annotated[str, typer.Argument(help="Symbol or module path to look up")],
    *,
    manifest: ManifestOption = None,
) -> None:
    """Print the input providing a symbol."""
    sorted_dependencies = _load_sorted(manifest)
    try:
        unit = sorted_dependencies.get_input_providing(symbol)
    except MissingProvideError as e:
        raise _fail(str(e)) from e
    typer.echo(unit.name)


@app.command()
def exportless(
    *,
    manifest: ManifestOption = None,
    as_json: JsonOption = False,
) -> None:
    """Print the inputs that provide no real symbol."""
    sorted_dependencies = _load_sorted(manifest)
    _print_units(sorted_dependencies.get_inputs_without_provides(), as_json=as_json)


def main() -> None:
    app()
