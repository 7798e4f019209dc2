"""Run orchestration.

``run_all`` discovers every class independently; ``run_suite`` additionally
executes each unit on a fresh instance through a harness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from trialrun.discovery.constructors import new_instance
from trialrun.discovery.entries import class_name
from trialrun.discovery.expansion import ExecutionUnit, discover
from trialrun.exceptions import DiscoveryError, ExecutionError, TrialRunError, ValidationError
from trialrun.runner.harness import Harness, InvocationHarness
from trialrun.runner.models import ClassReport, RunReport, UnitResult, UnitStatus

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ClassDiscovery:
    """Discovery outcome for one class: its units, or the error that stopped it."""

    cls: type
    units: tuple[ExecutionUnit, ...] = ()
    error: Optional[TrialRunError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_all(classes: Iterable[type]) -> list[ClassDiscovery]:
    """Discover every class; a failing class does not affect its siblings."""
    results = []
    for cls in classes:
        log = logger.bind(cls=class_name(cls))
        try:
            units = discover(cls)
        except (DiscoveryError, ValidationError) as e:
            log.warning("Discovery failed", code=e.code.value, error=e.message)
            results.append(ClassDiscovery(cls=cls, error=e))
            continue
        log.debug("Discovery succeeded", unit_count=len(units))
        results.append(ClassDiscovery(cls=cls, units=units))
    return results


def execute_unit(unit: ExecutionUnit, harness: Harness) -> UnitResult:
    """Run ``unit`` on a brand new instance of its class."""
    try:
        instance = new_instance(unit.owner)
        return harness.run_unit(unit.method, unit.scenario, instance)
    except (DiscoveryError, ExecutionError) as e:
        logger.warning("Unit not run", unit=unit.describe(), code=e.code.value, error=e.message)
        return UnitResult(
            class_name=class_name(unit.owner),
            method=unit.method.name,
            scenario=repr(unit.scenario),
            status=UnitStatus.FAILED,
            message=e.message,
        )


def run_suite(classes: Iterable[type], harness: Harness | None = None) -> RunReport:
    """Discover and execute ``classes`` sequentially."""
    harness = harness or InvocationHarness()
    reports = []
    for discovery in run_all(classes):
        name = class_name(discovery.cls)
        if discovery.error is not None:
            reports.append(ClassReport(class_name=name, error=discovery.error.to_dict()))
            continue
        results = [execute_unit(unit, harness) for unit in discovery.units]
        reports.append(ClassReport(class_name=name, units=results))

    report = RunReport.from_classes(reports)

    logger.info(
        "Run finished",
        passed=report.passed,
        failed=report.failed,
        skipped=report.skipped,
        errors=report.errors,
    )
    return report
