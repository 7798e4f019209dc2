"""Instance factory for test classes.

A test class is constructed through exactly one zero-argument constructor.
Its constructors are ``__init__`` plus any factory classmethods the class
body registers with ``@constructor``.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable

import structlog

from trialrun.discovery.entries import class_name
from trialrun.exceptions import AmbiguousOrMissingConstructorError, InstantiationError

logger = structlog.get_logger(__name__)

CONSTRUCTORS_ATTR = "__trialrun_constructors__"


@dataclass(frozen=True)
class Constructor:
    """One declared way of building an instance."""

    name: str
    zero_arg: bool
    build: Callable[[], Any] = field(repr=False, compare=False)


def _callable_without_arguments(func: Callable[..., Any]) -> bool:
    try:
        params = list(inspect.signature(func).parameters.values())[1:]
    except ValueError:
        # builtin slot wrappers without signature metadata
        return True
    return all(
        p.default is not p.empty or p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD) for p in params
    )


class _ConstructorRegistration:
    def __init__(self, func: Callable[..., Any]):
        self.func = func

    def __set_name__(self, owner: type, attribute: str) -> None:
        if CONSTRUCTORS_ATTR not in vars(owner):
            setattr(owner, CONSTRUCTORS_ATTR, [])
        getattr(owner, CONSTRUCTORS_ATTR).append((attribute, self.func))
        setattr(owner, attribute, classmethod(self.func))


def constructor(func: Any) -> _ConstructorRegistration:
    """Register a factory classmethod as an additional constructor."""
    if isinstance(func, classmethod):
        func = func.__func__
    if not inspect.isfunction(func):
        raise TypeError(f"@constructor expects a function, got {func!r}")
    return _ConstructorRegistration(func)


def declared_constructors(cls: type) -> list[Constructor]:
    """List the constructors of ``cls``, ``__init__`` first."""
    init = cls.__init__
    if init is object.__init__:
        constructors = [Constructor("__init__", True, cls)]
    else:
        constructors = [Constructor("__init__", _callable_without_arguments(init), cls)]

    for attribute, func in vars(cls).get(CONSTRUCTORS_ATTR, ()):
        constructors.append(
            Constructor(
                attribute,
                _callable_without_arguments(func),
                lambda func=func: func(cls),
            )
        )
    return constructors


def find_only_constructor(cls: type) -> Constructor:
    """Return the single zero-argument constructor of ``cls``.

    Raises:
        AmbiguousOrMissingConstructorError: If there are none or several.
    """
    candidates = [c for c in declared_constructors(cls) if c.zero_arg]
    if len(candidates) != 1:
        raise AmbiguousOrMissingConstructorError(class_name(cls), len(candidates))
    return candidates[0]


def new_instance(cls: type) -> Any:
    """Build a fresh, unshared instance of ``cls``.

    Raises:
        AmbiguousOrMissingConstructorError: If the constructor is not unique.
        InstantiationError: If the constructor raises or returns a foreign object.
    """
    ctor = find_only_constructor(cls)
    try:
        instance = ctor.build()
    except Exception as e:
        logger.debug("Instantiation failed", cls=class_name(cls), error=repr(e))
        raise InstantiationError(class_name(cls), e) from e

    if not isinstance(instance, cls):
        raise InstantiationError(
            class_name(cls),
            TypeError(f"constructor {ctor.name} returned {type(instance).__name__}"),
        )
    return instance
