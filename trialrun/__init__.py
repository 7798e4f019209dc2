"""trialrun: scenario-aware test discovery and execution.

Test classes register their methods with ``@test``, may supply several
scenarios through ``MultipleScenarios`` and join suites with ``@part_of``.
"""

from trialrun.discovery import (
    DEFAULT_SCENARIO,
    ExecutionUnit,
    MultipleScenarios,
    Visibility,
    WrappedMethod,
    constructor,
    discover,
    expand,
    new_instance,
    scenarios_of,
    test,
    wrap,
)
from trialrun.exceptions import (
    AmbiguousOrMissingConstructorError,
    DiscoveryError,
    ErrorCode,
    ExecutionError,
    InstantiationError,
    InvalidTestMethodError,
    ScenarioHarvestError,
    TrialRunError,
    ValidationError,
)
from trialrun.runner import AssumptionViolated, assume, run_all, run_suite
from trialrun.suite import Suite, SuiteRegistry, classes_to_run, members_of, part_of

__version__ = "0.1.0"

__all__ = [
    "AmbiguousOrMissingConstructorError",
    "AssumptionViolated",
    "DEFAULT_SCENARIO",
    "DiscoveryError",
    "ErrorCode",
    "ExecutionError",
    "ExecutionUnit",
    "InstantiationError",
    "InvalidTestMethodError",
    "MultipleScenarios",
    "ScenarioHarvestError",
    "Suite",
    "SuiteRegistry",
    "TrialRunError",
    "ValidationError",
    "Visibility",
    "WrappedMethod",
    "assume",
    "classes_to_run",
    "constructor",
    "discover",
    "expand",
    "members_of",
    "new_instance",
    "part_of",
    "run_all",
    "run_suite",
    "scenarios_of",
    "test",
    "wrap",
]
