"""Suite declarations and membership resolution."""

from trialrun.suite.membership import (
    Suite,
    SuiteRegistry,
    classes_to_run,
    declared_suite,
    get_suite_registry,
    is_abstract,
    is_suite,
    is_test_class,
    members_of,
    nested_classes,
    part_of,
    set_suite_registry,
)

__all__ = [
    "Suite",
    "SuiteRegistry",
    "classes_to_run",
    "declared_suite",
    "get_suite_registry",
    "is_abstract",
    "is_suite",
    "is_test_class",
    "members_of",
    "nested_classes",
    "part_of",
    "set_suite_registry",
]
