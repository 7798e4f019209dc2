"""Scenario × method expansion into execution units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from trialrun.discovery.constructors import find_only_constructor
from trialrun.discovery.entries import TestEntry, class_name, declared_test_methods
from trialrun.discovery.scenarios import scenarios_of
from trialrun.discovery.wrapping import WrappedMethod, wrap

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExecutionUnit:
    """One test method paired with one scenario of the same class."""

    method: WrappedMethod
    scenario: Any

    @property
    def owner(self) -> type:
        return self.method.owner

    def describe(self) -> str:
        return f"{self.method.qualified_name}[{self.scenario!r}]"


def expand(cls: type) -> tuple[tuple[Any, TestEntry], ...]:
    """Pair every scenario of ``cls`` with every declared test entry.

    Methods keep declaration order within each scenario. Scenario order is
    whatever the provider yielded and must not be relied upon.
    """
    scenarios = scenarios_of(cls)
    entries = declared_test_methods(cls)
    return tuple((scenario, entry) for scenario in scenarios for entry in entries)


def discover(cls: type) -> tuple[ExecutionUnit, ...]:
    """Turn ``cls`` into its ordered execution units.

    Runs constructor check, expansion and wrapping in that order. Any error
    aborts the whole class; no partial result is returned.

    Raises:
        DiscoveryError: If the class cannot be constructed or scenarios harvested.
        ValidationError: If a test entry breaks the naming or visibility rules.
    """
    find_only_constructor(cls)

    pairs = expand(cls)
    wrapped: dict[TestEntry, WrappedMethod] = {}
    units = []
    for scenario, entry in pairs:
        if entry not in wrapped:
            wrapped[entry] = wrap(entry)
        units.append(ExecutionUnit(method=wrapped[entry], scenario=scenario))

    logger.debug("Discovered class", cls=class_name(cls), unit_count=len(units))
    return tuple(units)
