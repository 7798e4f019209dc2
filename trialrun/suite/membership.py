"""Suite membership registry and resolver.

A suite is a class deriving from ``Suite``. Test classes join a suite with
``@part_of(MySuite)`` or through explicit ``SuiteRegistry.register`` calls,
and suites can include other suites.

Resolving a suite flattens that map:

- a declaration on an abstract base covers every concrete descendant that
  does not declare a different suite of its own
- classes nested in the body of any class of a declaring hierarchy are
  members as well, at any depth
- every class appears once, however many paths lead to it
"""

from __future__ import annotations

import inspect
from abc import ABC
from typing import Iterator

import structlog

from trialrun.discovery.entries import ENTRIES_ATTR, class_name
from trialrun.discovery.scenarios import is_scenario_class

logger = structlog.get_logger(__name__)

SUITE_ATTR = "__trialrun_suite__"

# Global registry instance
_registry: SuiteRegistry | None = None


class Suite:
    """Base class of suite declarations."""


def is_suite(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, Suite) and cls is not Suite


def is_abstract(cls: type) -> bool:
    """Abstract classes are never run, only inherited from.

    Deriving from ``ABC`` directly declares a class abstract even when it has
    no abstract methods.
    """
    return inspect.isabstract(cls) or ABC in cls.__bases__


def is_test_class(cls: type) -> bool:
    """True when ``cls`` or an ancestor registers test entries."""
    return is_scenario_class(cls) or any(ENTRIES_ATTR in vars(k) for k in cls.__mro__)


def declared_suite(cls: type) -> type | None:
    """Return the suite declared by the nearest class in ``cls.__mro__``."""
    for klass in cls.__mro__:
        if SUITE_ATTR in vars(klass):
            return vars(klass)[SUITE_ATTR]
    return None


def nested_classes(cls: type) -> Iterator[type]:
    """Yield classes defined in the body of ``cls``, depth first."""
    for value in list(vars(cls).values()):
        if (
            isinstance(value, type)
            and value.__module__ == cls.__module__
            and value.__qualname__ == f"{cls.__qualname__}.{value.__name__}"
        ):
            yield value
            yield from nested_classes(value)


def descendants(cls: type) -> Iterator[type]:
    """Yield every subclass of ``cls``, each once."""
    seen: set[type] = set()
    stack = list(reversed(cls.__subclasses__()))
    while stack:
        klass = stack.pop()
        if klass in seen:
            continue
        seen.add(klass)
        yield klass
        stack.extend(reversed(klass.__subclasses__()))


class SuiteRegistry:
    """Map from suite to its declared members and included suites.

    Attributes:
        _members: Suite -> ordered, deduplicated declared member classes.
        _includes: Suite -> ordered, deduplicated composed suites.
    """

    def __init__(self) -> None:
        self._members: dict[type, dict[type, None]] = {}
        self._includes: dict[type, dict[type, None]] = {}

    def register(self, suite: type, cls: type) -> None:
        """Declare ``cls`` (and its non-overriding descendants) a member of ``suite``."""
        self._members.setdefault(suite, {})[cls] = None
        logger.debug("Registered suite member", suite=class_name(suite), member=class_name(cls))

    def include(self, suite: type, other: type) -> None:
        """Make every member of ``other`` a member of ``suite``."""
        self._includes.setdefault(suite, {})[other] = None

    def declared_members(self, suite: type) -> tuple[type, ...]:
        return tuple(self._members.get(suite, ()))

    def suites(self) -> tuple[type, ...]:
        return tuple(dict.fromkeys([*self._members, *self._includes]))

    def clear(self) -> None:
        self._members.clear()
        self._includes.clear()

    def members_of(self, suite: type) -> tuple[type, ...]:
        """Resolve ``suite`` into its flattened, deduplicated member classes."""
        members: dict[type, None] = {}
        self._collect(suite, members, visited=set())
        logger.debug("Resolved suite", suite=class_name(suite), member_count=len(members))
        return tuple(members)

    def _collect(self, suite: type, members: dict[type, None], visited: set[type]) -> None:
        if suite in visited:
            return
        visited.add(suite)

        for declared in self._members.get(suite, ()):
            for klass in (declared, *descendants(declared)):
                owner = declared_suite(klass)
                if klass is not declared and owner is not None and owner is not suite:
                    continue
                if not is_abstract(klass) and not is_suite(klass):
                    members[klass] = None
                for nested in nested_classes(klass):
                    if _nested_member(nested, suite):
                        members[nested] = None

        for other in self._includes.get(suite, ()):
            self._collect(other, members, visited)


def _nested_member(cls: type, suite: type) -> bool:
    owner = declared_suite(cls)
    if owner is not None and owner is not suite:
        return False
    return is_test_class(cls) and not is_abstract(cls) and not is_suite(cls)


def get_suite_registry() -> SuiteRegistry:
    """Get the global suite registry, creating it on first use."""
    global _registry
    if _registry is None:
        _registry = SuiteRegistry()
    return _registry


def set_suite_registry(registry: SuiteRegistry) -> None:
    """Set the global suite registry instance."""
    global _registry
    _registry = registry


def part_of(suite: type, registry: SuiteRegistry | None = None):
    """Class decorator declaring membership of ``suite``.

    The declaration is inherited: concrete subclasses are members too unless
    they declare another suite.
    """

    def decorate(cls: type) -> type:
        setattr(cls, SUITE_ATTR, suite)
        (registry or get_suite_registry()).register(suite, cls)
        return cls

    return decorate


def members_of(suite: type, registry: SuiteRegistry | None = None) -> tuple[type, ...]:
    """Resolve ``suite`` against the given or global registry."""
    return (registry or get_suite_registry()).members_of(suite)


def classes_to_run(target: type, registry: SuiteRegistry | None = None) -> tuple[type, ...]:
    """Classes a run of ``target`` covers.

    A suite runs its members. A test class runs itself plus the test classes
    nested in it or in any of its ancestors.
    """
    if is_suite(target):
        return members_of(target, registry)

    classes: dict[type, None] = {}
    if not is_abstract(target):
        classes[target] = None
    for klass in target.__mro__:
        if klass is object:
            continue
        for nested in nested_classes(klass):
            if is_test_class(nested) and not is_abstract(nested) and not is_suite(nested):
                classes[nested] = None
    return tuple(classes)
