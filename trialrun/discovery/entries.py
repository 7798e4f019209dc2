"""Test entry registration.

Test methods are registered explicitly with the ``@test`` decorator. The
decorator records a ``TestEntry`` on the owning class when the class body is
executed, so discovery never has to scan attributes. Entries are kept per
class in declaration order and are not inherited.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

ENTRIES_ATTR = "__trialrun_entries__"


class Visibility(str, Enum):
    """Declared visibility tier of a test entry."""

    PUBLIC = "public"
    PACKAGE = "package"
    PROTECTED = "protected"
    PRIVATE = "private"


def infer_visibility(name: str) -> Visibility:
    """Derive the visibility tier from an attribute name."""
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    if name.startswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PACKAGE


@dataclass(frozen=True)
class TestEntry:
    """A registered test method.

    Attributes:
        name: Simple name as written in the class body.
        attribute: Name the function is stored under on the class (mangled
            for ``__private`` methods).
        function: The raw function object.
        owner: Class whose body declared the entry.
        visibility: Declared visibility tier.
        takes_scenario: True when the function accepts a scenario argument.
    """

    __test__ = False

    name: str
    attribute: str
    function: Callable[..., Any] = field(repr=False)
    owner: type = field(repr=False)
    visibility: Visibility
    takes_scenario: bool = False

    @property
    def qualified_name(self) -> str:
        return f"{class_name(self.owner)}.{self.name}"


def class_name(cls: type) -> str:
    """Qualified name used in messages and reports."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _takes_scenario(func: Callable[..., Any]) -> bool:
    params = [
        p
        for p in inspect.signature(func).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    return len(params) >= 2


class _Registration:
    """Placeholder living in the class body until the class is created."""

    def __init__(self, func: Callable[..., Any], visibility: Optional[Visibility]):
        self.func = func
        self.visibility = visibility

    def __set_name__(self, owner: type, attribute: str) -> None:
        name = self.func.__name__
        entry = TestEntry(
            name=name,
            attribute=attribute,
            function=self.func,
            owner=owner,
            visibility=self.visibility or infer_visibility(name),
            takes_scenario=_takes_scenario(self.func),
        )
        if ENTRIES_ATTR not in vars(owner):
            setattr(owner, ENTRIES_ATTR, [])
        getattr(owner, ENTRIES_ATTR).append(entry)
        # Leave a plain function behind so the class behaves normally.
        setattr(owner, attribute, self.func)


def test(
    func: Optional[Callable[..., Any]] = None,
    *,
    visibility: Optional[Visibility] = None,
) -> Any:
    """Mark a method as a test entry point.

    Usable bare (``@test``) or with arguments
    (``@test(visibility=Visibility.PUBLIC)``). When ``visibility`` is omitted
    it is inferred from the method name.
    """

    def decorate(f: Callable[..., Any]) -> _Registration:
        if not inspect.isfunction(f):
            raise TypeError(f"@test expects a plain function, got {f!r}")
        return _Registration(f, visibility)

    if func is not None:
        return decorate(func)
    return decorate


# pytest must not collect the decorator itself
test.__test__ = False  # type: ignore[attr-defined]


def declared_test_methods(cls: type) -> tuple[TestEntry, ...]:
    """Return the test entries declared on ``cls`` itself, in declaration order."""
    return tuple(vars(cls).get(ENTRIES_ATTR, ()))
