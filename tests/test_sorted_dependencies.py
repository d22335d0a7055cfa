"""Tests for SortedDependencies."""

from dataclasses import dataclass, field

import pytest

from modorder import MissingProvideError, SortedDependencies, SourceUnit, UnitEntry, UnknownInputError
from modorder._module_names import synthetic_prefix_predicate

# --- Fixtures ---


@pytest.fixture
def app_units() -> list[SourceUnit]:
    """A small app: main -> app -> (util, log), log -> util, plus a stray file."""
    return [
        SourceUnit("src/main.js", requires=("app",)),
        SourceUnit("src/app.js", provides=("app",), requires=("util", "log")),
        SourceUnit("src/log.js", provides=("log",), requires=("util",)),
        SourceUnit("src/util.js", provides=("util",)),
        SourceUnit("src/stray.js", provides=("stray",), requires=("missing",)),
    ]


def _names(units: tuple[SourceUnit, ...]) -> list[str]:
    return [unit.name for unit in units]


@dataclass(frozen=True)
class ValueUnit:
    """A unit compared by value."""

    name: str
    provides: tuple[str, ...] = ()
    requires: tuple[str, ...] = ()


@dataclass(frozen=True)
class ListUnit:
    """A unit with unhashable fields."""

    name: str
    provides: list[str] = field(default_factory=list)
    requires: list[str] = field(default_factory=list)


class TestSortedList:
    """Tests for the import order."""

    def test_empty(self) -> None:
        assert SortedDependencies([]).get_sorted_list() == ()

    def test_dependencies_come_first(self, app_units: list[SourceUnit]) -> None:
        result = SortedDependencies(app_units).get_sorted_list()
        assert _names(result) == [
            "src/util.js",
            "src/log.js",
            "src/app.js",
            "src/main.js",
            "src/stray.js",
        ]

    def test_is_permutation_of_input(self, app_units: list[SourceUnit]) -> None:
        result = SortedDependencies(app_units).get_sorted_list()
        assert len(result) == len(app_units)
        assert {id(unit) for unit in result} == {id(unit) for unit in app_units}

    def test_provider_precedes_dependent(self, app_units: list[SourceUnit]) -> None:
        result = SortedDependencies(app_units).get_sorted_list()
        position = {id(unit): i for i, unit in enumerate(result)}
        main, app, log, util, _ = app_units
        assert position[id(app)] < position[id(main)]
        assert position[id(util)] < position[id(log)] < position[id(app)]

    def test_cycle(self) -> None:
        a = SourceUnit("a.js", provides=("a",), requires=("b",))
        b = SourceUnit("b.js", provides=("b",), requires=("a",))
        assert SortedDependencies([a, b]).get_sorted_list() == (b, a)

    def test_cycle_reversed_user_order(self) -> None:
        a = SourceUnit("a.js", provides=("a",), requires=("b",))
        b = SourceUnit("b.js", provides=("b",), requires=("a",))
        assert SortedDependencies([b, a]).get_sorted_list() == (a, b)

    def test_identical_units_are_distinct(self) -> None:
        first = SourceUnit("same.js", provides=("s",))
        second = SourceUnit("same.js", provides=("s",))
        result = SortedDependencies([first, second]).get_sorted_list()
        assert len(result) == 2
        assert result[0] is first
        assert result[1] is second

    def test_repeated_calls_are_identical(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        assert sorted_dependencies.get_sorted_list() == sorted_dependencies.get_sorted_list()
        assert sorted_dependencies.get_sorted_list() is sorted_dependencies.get_sorted_list()

    def test_input_list_is_copied(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        app_units.clear()
        assert len(sorted_dependencies) == 5
        assert len(sorted_dependencies.get_user_ordered_list()) == 5

    def test_iterates_in_import_order(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        assert tuple(sorted_dependencies) == sorted_dependencies.get_sorted_list()

    def test_long_chain(self) -> None:
        size = 3000
        units = [
            SourceUnit(f"u{i}.js", provides=(f"s{i}",), requires=(f"s{i + 1}",))
            for i in range(size)
        ]
        result = SortedDependencies(units).get_sorted_list()
        assert result == tuple(reversed(units))


class TestDependenciesOf:
    """Tests for transitive dependency queries."""

    def test_unit_without_resolvable_requires(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        stray = app_units[4]
        assert sorted_dependencies.get_dependencies_of([stray], sorted=True) == (stray,)

    def test_sorted_closure(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        main = app_units[0]
        result = sorted_dependencies.get_dependencies_of([main], sorted=True)
        assert _names(result) == ["src/util.js", "src/log.js", "src/app.js", "src/main.js"]

    def test_unsorted_closure_keeps_user_order(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        main = app_units[0]
        result = sorted_dependencies.get_dependencies_of([main], sorted=False)
        assert _names(result) == ["src/main.js", "src/app.js", "src/log.js", "src/util.js"]

    def test_sorted_is_default(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        log = app_units[2]
        assert sorted_dependencies.get_dependencies_of([log]) == sorted_dependencies.get_sorted_dependencies_of([log])

    def test_sorted_dependencies_of(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        log = app_units[2]
        assert _names(sorted_dependencies.get_sorted_dependencies_of([log])) == ["src/util.js", "src/log.js"]

    def test_multiple_roots(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        log, stray = app_units[2], app_units[4]
        result = sorted_dependencies.get_sorted_dependencies_of([stray, log])
        assert _names(result) == ["src/util.js", "src/log.js", "src/stray.js"]

    def test_empty_roots(self, app_units: list[SourceUnit]) -> None:
        assert SortedDependencies(app_units).get_dependencies_of([]) == ()

    def test_cycle_closure(self) -> None:
        a = SourceUnit("a.js", provides=("a",), requires=("b",))
        b = SourceUnit("b.js", provides=("b",), requires=("a",))
        c = SourceUnit("c.js", provides=("c",))
        sorted_dependencies = SortedDependencies([a, b, c])
        assert sorted_dependencies.get_dependencies_of([b]) == (b, a)

    def test_unknown_root_raises(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        foreign = SourceUnit("src/main.js", requires=("app",))
        with pytest.raises(UnknownInputError, match="src/main.js") as exc_info:
            sorted_dependencies.get_dependencies_of([foreign], sorted=True)
        assert exc_info.value.names == ("src/main.js",)

    def test_unknown_root_is_value_error(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        with pytest.raises(ValueError, match="not part of the sorted collection"):
            sorted_dependencies.get_sorted_dependencies_of([app_units[0], SourceUnit("other.js")])


class TestInputProviding:
    """Tests for provider lookup."""

    def test_provided_symbol(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        assert sorted_dependencies.get_input_providing("log") is app_units[2]

    def test_missing_symbol_raises(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        with pytest.raises(MissingProvideError, match="nonexistent") as exc_info:
            sorted_dependencies.get_input_providing("nonexistent")
        assert exc_info.value.symbol == "nonexistent"

    def test_maybe_missing_symbol(self, app_units: list[SourceUnit]) -> None:
        assert SortedDependencies(app_units).maybe_get_input_providing("nonexistent") is None

    def test_last_provider_wins(self) -> None:
        p1 = SourceUnit("p1.js", provides=("x",))
        p2 = SourceUnit("p2.js", provides=("x",))
        assert SortedDependencies([p1, p2]).get_input_providing("x") is p2

    def test_exportless_found_by_module_name(self, app_units: list[SourceUnit]) -> None:
        sorted_dependencies = SortedDependencies(app_units)
        main = app_units[0]
        assert sorted_dependencies.maybe_get_input_providing("src/main.js") is main
        assert sorted_dependencies.maybe_get_input_providing("./src/main") is main
        assert sorted_dependencies.get_input_providing("module$src$main") is main

    def test_exporting_unit_not_found_by_path(self, app_units: list[SourceUnit]) -> None:
        # Only exportless units are reachable through their module name
        assert SortedDependencies(app_units).maybe_get_input_providing("src/app.js") is None

    def test_symbol_takes_precedence_over_module_name(self) -> None:
        exportless = SourceUnit("lib.js")
        provider = SourceUnit("other.js", provides=("module$lib",))
        sorted_dependencies = SortedDependencies([exportless, provider])
        assert sorted_dependencies.get_input_providing("module$lib") is provider


class TestInputsWithoutProvides:
    """Tests for listing exportless inputs."""

    def test_lists_in_user_order(self) -> None:
        units = [
            SourceUnit("b.js", provides=("module$b",)),
            SourceUnit("real.js", provides=("real",)),
            SourceUnit("a.js"),
            SourceUnit("mixed.js", provides=("module$mixed", "mixed")),
        ]
        result = SortedDependencies(units).get_inputs_without_provides()
        assert result == (units[0], units[2])

    def test_custom_predicate(self) -> None:
        units = [SourceUnit("gen.js", provides=("gen:gen",)), SourceUnit("b.js", provides=("module$b",))]
        sorted_dependencies = SortedDependencies(units, is_synthetic=synthetic_prefix_predicate("gen:"))
        assert sorted_dependencies.get_inputs_without_provides() == (units[0],)

    def test_custom_module_namer(self) -> None:
        unit = SourceUnit("Main")
        sorted_dependencies = SortedDependencies([unit], module_namer=str.upper)
        assert sorted_dependencies.maybe_get_input_providing("main") is unit


class TestUnitIdentity:
    """Units are tracked by identity, whatever their equality."""

    def test_value_equal_units_are_all_sorted(self) -> None:
        first = ValueUnit("same.js", provides=("s",))
        second = ValueUnit("same.js", provides=("s",))
        assert first == second

        result = SortedDependencies([first, second]).get_sorted_list()

        assert len(result) == 2
        assert result[0] is first
        assert result[1] is second

    def test_value_equal_dependents_keep_their_own_edges(self) -> None:
        user = ValueUnit("user.js", requires=("lib",))
        twin = ValueUnit("user.js", requires=("lib",))
        lib = ValueUnit("lib.js", provides=("lib",))

        result = SortedDependencies([user, twin, lib]).get_sorted_list()

        assert len(result) == 3
        assert result[0] is lib
        assert result[1] is user
        assert result[2] is twin

    def test_value_equal_foreign_root_is_unknown(self) -> None:
        unit = ValueUnit("a.js", provides=("a",))
        sorted_dependencies = SortedDependencies([unit])

        with pytest.raises(UnknownInputError):
            sorted_dependencies.get_dependencies_of([ValueUnit("a.js", provides=("a",))])

    def test_value_equal_closure(self) -> None:
        user = ValueUnit("user.js", requires=("lib",))
        twin = ValueUnit("user.js", requires=("lib",))
        lib = ValueUnit("lib.js", provides=("lib",))
        sorted_dependencies = SortedDependencies([user, twin, lib])

        result = sorted_dependencies.get_dependencies_of([twin], sorted=False)

        assert len(result) == 2
        assert result[0] is twin
        assert result[1] is lib

    def test_unhashable_units(self) -> None:
        a = ListUnit("a.js", provides=["a"], requires=["b"])
        b = ListUnit("b.js", provides=["b"], requires=["a"])
        c = ListUnit("c.js", requires=["a"])
        sorted_dependencies = SortedDependencies([a, b, c])

        result = sorted_dependencies.get_sorted_list()
        assert [unit.name for unit in result] == ["b.js", "a.js", "c.js"]
        assert [unit.name for unit in sorted_dependencies.get_sorted_dependencies_of([c])] == [
            "b.js",
            "a.js",
            "c.js",
        ]
        assert sorted_dependencies.get_inputs_without_provides() == (c,)

    def test_manifest_entries_as_units(self) -> None:
        main = UnitEntry(name="src/main.js", requires=["app"])
        app = UnitEntry(name="src/app.js", provides=["app"])

        sorted_dependencies = SortedDependencies([main, app])

        assert [unit.name for unit in sorted_dependencies.get_sorted_list()] == ["src/app.js", "src/main.js"]
        assert sorted_dependencies.get_input_providing("app") is app
        assert sorted_dependencies.get_dependencies_of([main], sorted=True)[-1] is main
