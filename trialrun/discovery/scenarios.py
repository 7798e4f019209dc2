"""Scenario provider resolution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

import structlog

from trialrun.discovery.constructors import new_instance
from trialrun.discovery.entries import class_name
from trialrun.exceptions import ScenarioHarvestError

logger = structlog.get_logger(__name__)


class MultipleScenarios(ABC):
    """Capability of a test class that runs every test once per scenario."""

    @abstractmethod
    def scenarios(self) -> Iterable[Any]:
        """Return the scenarios. Iteration order carries no meaning."""


class _DefaultScenario:
    _instance: "_DefaultScenario | None" = None

    def __new__(cls) -> "_DefaultScenario":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<default scenario>"

    def __reduce__(self) -> str:
        return "DEFAULT_SCENARIO"


# Shared by every class that does not provide scenarios
DEFAULT_SCENARIO = _DefaultScenario()


def is_scenario_class(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, MultipleScenarios)


def _unique(scenarios: Iterable[Any]) -> tuple[Any, ...]:
    seen_values: set[Any] = set()
    seen_ids: set[int] = set()
    unique = []
    for scenario in scenarios:
        try:
            hash(scenario)
        except TypeError:
            # unhashable, including tuples holding lists
            if id(scenario) in seen_ids:
                continue
            seen_ids.add(id(scenario))
        else:
            if scenario in seen_values:
                continue
            seen_values.add(scenario)
        unique.append(scenario)
    return tuple(unique)


def scenarios_of(cls: type) -> tuple[Any, ...]:
    """Resolve the scenarios a class runs its tests against.

    Scenario classes are instantiated once and asked for their scenarios;
    every other class gets the shared ``DEFAULT_SCENARIO``. An empty result
    is valid and means the class has nothing to run.

    Raises:
        InstantiationError: If the harvesting instance cannot be built.
        ScenarioHarvestError: If ``scenarios()`` raises, returns a non-collection,
            or fails while being iterated.
    """
    if not is_scenario_class(cls):
        return (DEFAULT_SCENARIO,)

    instance = new_instance(cls)
    try:
        harvested = instance.scenarios()
    except Exception as e:
        raise ScenarioHarvestError(class_name(cls), f"scenarios() raised {e!r}") from e

    if harvested is None or isinstance(harvested, (str, bytes)) or not isinstance(
        harvested, Iterable
    ):
        raise ScenarioHarvestError(
            class_name(cls), f"scenarios() returned {type(harvested).__name__}"
        )

    # lazy providers only fail once iterated
    try:
        result = _unique(harvested)
    except Exception as e:
        raise ScenarioHarvestError(
            class_name(cls), f"iterating scenarios() raised {e!r}"
        ) from e

    logger.debug("Harvested scenarios", cls=class_name(cls), scenario_count=len(result))
    return result
