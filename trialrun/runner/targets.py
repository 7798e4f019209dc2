"""Resolve ``module`` / ``module:Class`` targets into classes to run."""

from __future__ import annotations

import importlib
from types import ModuleType

from trialrun.exceptions import ConfigurationError
from trialrun.suite.membership import (
    SuiteRegistry,
    classes_to_run,
    is_abstract,
    is_suite,
    is_test_class,
)


def _import(module_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"Cannot import module '{module_name}': {e}", details={"module": module_name}
        ) from e


def _module_targets(module: ModuleType) -> list[type]:
    targets = []
    for value in vars(module).values():
        if not isinstance(value, type) or value.__module__ != module.__name__:
            continue
        # top-level declarations only; nested ones come in through their parents
        if value.__qualname__ != value.__name__:
            continue
        if is_suite(value) or (is_test_class(value) and not is_abstract(value)):
            targets.append(value)
    return targets


def resolve_target(target: str) -> list[type]:
    """Turn a ``package.module[:ClassName]`` string into root classes."""
    module_name, _, attr = target.partition(":")
    if not module_name:
        raise ConfigurationError(f"Invalid target: '{target}'", details={"target": target})

    module = _import(module_name)
    if not attr:
        return _module_targets(module)

    value = module
    for part in attr.split("."):
        value = getattr(value, part, None)
        if value is None:
            raise ConfigurationError(
                f"'{attr}' not found in module '{module_name}'", details={"target": target}
            )
    if not isinstance(value, type):
        raise ConfigurationError(f"'{target}' is not a class", details={"target": target})
    return [value]


def expand_targets(targets: list[str], registry: SuiteRegistry | None = None) -> list[type]:
    """Resolve targets and flatten suites, keeping first-seen order."""
    classes: dict[type, None] = {}
    for target in targets:
        for root in resolve_target(target):
            for cls in classes_to_run(root, registry):
                classes[cls] = None
    return list(classes)
