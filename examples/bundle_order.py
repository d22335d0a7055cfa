"""Bundle ordering example for modorder.

Loads the units of a small web bundle, prints them in import order, and
shows the dependency and provider queries.

Run from the repository root:
    python examples/bundle_order.py
"""

from pathlib import Path

import modorder as mo

units = mo.load_units_from_toml(Path(__file__).parent / "units.toml")
sorted_units = mo.SortedDependencies(units)

print("Import order:")
for unit in sorted_units.get_sorted_list():
    print(f"  {unit.name}")

# -----------------------------------------------------------------------------
# Queries
# -----------------------------------------------------------------------------

router = sorted_units.get_input_providing("router")
print(f"\n'router' is provided by {router.name}")

print(f"\nEverything {router.name} needs:")
for unit in sorted_units.get_sorted_dependencies_of([router]):
    print(f"  {unit.name}")

print("\nInputs without real provides:")
for unit in sorted_units.get_inputs_without_provides():
    print(f"  {unit.name}")

# Exportless inputs can be found by path
polyfills = sorted_units.get_input_providing("vendor/polyfills.js")
print(f"\n'vendor/polyfills.js' resolves to {polyfills.name}")

try:
    sorted_units.get_input_providing("tracker")
except mo.MissingProvideError as e:
    print(f"\n{e}")
