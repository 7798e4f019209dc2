"""Naming and visibility checks for test entries.

Provides the wrapper that turns a registered entry into an invocable handle.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable

from trialrun.discovery.entries import TestEntry, Visibility, class_name
from trialrun.exceptions import InvalidTestMethodError

SNAKE_CASE = re.compile(r"[a-z][a-z0-9]*(?:_[a-z0-9]+)*")


def is_snake_case(name: str) -> bool:
    """True for lowercase ASCII segments joined by single underscores."""
    return SNAKE_CASE.fullmatch(name) is not None


def naming_violation(entry: TestEntry) -> str | None:
    if is_snake_case(entry.name):
        return None
    return f"Test method name '{entry.name}' must be snake_cased"


def visibility_violation(entry: TestEntry) -> str | None:
    if entry.visibility is Visibility.PACKAGE:
        return None
    return (
        f"Test method '{entry.name}' is {entry.visibility.value}; "
        "test methods must have package visibility"
    )


@dataclass(frozen=True)
class WrappedMethod:
    """A validated test entry that can be invoked on any instance of its class."""

    entry: TestEntry
    function: Callable[..., Any] = field(repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def owner(self) -> type:
        return self.entry.owner

    @property
    def qualified_name(self) -> str:
        return self.entry.qualified_name

    def invoke(self, instance: Any, scenario: Any) -> Any:
        """Call the test on ``instance``, passing ``scenario`` if it is accepted."""
        if self.entry.takes_scenario:
            return self.function(instance, scenario)
        return self.function(instance)


def wrap(entry: TestEntry) -> WrappedMethod:
    """Validate ``entry`` and return an invocable handle.

    Both the naming and the visibility check always run, and every violation
    is reported together.

    Raises:
        InvalidTestMethodError: If any convention is violated.
    """
    violations = [
        v for v in (naming_violation(entry), visibility_violation(entry)) if v is not None
    ]
    if violations:
        raise InvalidTestMethodError(class_name(entry.owner), entry.name, violations)

    # Bound through the stored function so name mangling does not matter
    return WrappedMethod(entry=entry, function=entry.function)
