"""Per-unit execution harness.

The discovery pipeline only produces units. Invoking them and classifying the
outcome is the harness's job, behind the ``Harness`` protocol.
"""

from __future__ import annotations

import time
from typing import Any, Protocol

import structlog

from trialrun.discovery.entries import class_name
from trialrun.discovery.wrapping import WrappedMethod
from trialrun.runner.models import UnitResult, UnitStatus

logger = structlog.get_logger(__name__)


class AssumptionViolated(Exception):
    """Raised inside a test body to have the unit reported as skipped."""


def assume(condition: Any, reason: str = "assumption does not hold") -> None:
    """Skip the running unit unless ``condition`` is truthy."""
    if not condition:
        raise AssumptionViolated(reason)


class Harness(Protocol):
    def run_unit(self, method: WrappedMethod, scenario: Any, instance: Any) -> UnitResult:
        """Run one method on one fresh instance against one scenario."""
        ...


def _result(
    method: WrappedMethod, scenario: Any, status: UnitStatus, message: str | None, started: float
) -> UnitResult:
    return UnitResult(
        class_name=class_name(method.owner),
        method=method.name,
        scenario=repr(scenario),
        status=status,
        message=message,
        duration_ms=(time.perf_counter() - started) * 1000,
    )


class InvocationHarness:
    """Default harness: call the method and classify what happens."""

    def run_unit(self, method: WrappedMethod, scenario: Any, instance: Any) -> UnitResult:
        started = time.perf_counter()
        try:
            method.invoke(instance, scenario)
        except AssumptionViolated as e:
            logger.debug("Unit skipped", unit=method.qualified_name, reason=str(e))
            return _result(method, scenario, UnitStatus.SKIPPED, str(e), started)
        except Exception as e:
            logger.debug("Unit failed", unit=method.qualified_name, error=repr(e))
            return _result(method, scenario, UnitStatus.FAILED, f"{type(e).__name__}: {e}", started)
        return _result(method, scenario, UnitStatus.PASSED, None, started)
