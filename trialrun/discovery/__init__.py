"""Discovery pipeline: constructors, scenarios, entries, expansion, wrapping."""

from trialrun.discovery.constructors import (
    Constructor,
    constructor,
    declared_constructors,
    find_only_constructor,
    new_instance,
)
from trialrun.discovery.entries import (
    TestEntry,
    Visibility,
    class_name,
    declared_test_methods,
    infer_visibility,
    test,
)
from trialrun.discovery.expansion import ExecutionUnit, discover, expand
from trialrun.discovery.scenarios import (
    DEFAULT_SCENARIO,
    MultipleScenarios,
    is_scenario_class,
    scenarios_of,
)
from trialrun.discovery.wrapping import WrappedMethod, is_snake_case, wrap

__all__ = [
    "Constructor",
    "DEFAULT_SCENARIO",
    "ExecutionUnit",
    "MultipleScenarios",
    "TestEntry",
    "Visibility",
    "WrappedMethod",
    "class_name",
    "constructor",
    "declared_constructors",
    "declared_test_methods",
    "discover",
    "expand",
    "find_only_constructor",
    "infer_visibility",
    "is_scenario_class",
    "is_snake_case",
    "new_instance",
    "scenarios_of",
    "test",
    "wrap",
]
