"""Execution of discovered units and reporting."""

from trialrun.runner.harness import AssumptionViolated, Harness, InvocationHarness, assume
from trialrun.runner.models import ClassReport, RunReport, UnitResult, UnitStatus
from trialrun.runner.runner import ClassDiscovery, execute_unit, run_all, run_suite
from trialrun.runner.targets import expand_targets, resolve_target

__all__ = [
    "AssumptionViolated",
    "ClassDiscovery",
    "ClassReport",
    "Harness",
    "InvocationHarness",
    "RunReport",
    "UnitResult",
    "UnitStatus",
    "assume",
    "execute_unit",
    "expand_targets",
    "resolve_target",
    "run_all",
    "run_suite",
]
