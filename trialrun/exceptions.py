"""Centralized error handling and custom exceptions for trialrun."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for reports and the CLI."""

    # General errors
    INTERNAL_ERROR = "internal_error"
    CONFIGURATION_ERROR = "configuration_error"

    # Discovery errors
    DISCOVERY_ERROR = "discovery_error"
    AMBIGUOUS_OR_MISSING_CONSTRUCTOR = "ambiguous_or_missing_constructor"
    INSTANTIATION_FAILED = "instantiation_failed"
    SCENARIO_HARVEST_FAILED = "scenario_harvest_failed"

    # Validation errors
    VALIDATION_ERROR = "validation_error"
    INVALID_TEST_METHOD = "invalid_test_method"

    # Execution errors
    EXECUTION_ERROR = "execution_error"


class TrialRunError(Exception):
    """Base exception for all trialrun errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class DiscoveryError(TrialRunError):
    """A test class cannot be processed."""

    def __init__(
        self,
        class_name: str,
        message: str,
        code: ErrorCode = ErrorCode.DISCOVERY_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            details={"class": class_name, **(details or {})},
        )
        self.class_name = class_name


class AmbiguousOrMissingConstructorError(DiscoveryError):
    """The class does not have exactly one zero-argument constructor."""

    def __init__(self, class_name: str, found: int):
        super().__init__(
            class_name,
            f"The class {class_name} should have exactly one no-arg constructor (found {found})",
            code=ErrorCode.AMBIGUOUS_OR_MISSING_CONSTRUCTOR,
            details={"zero_arg_constructors": found},
        )


class InstantiationError(DiscoveryError):
    """The zero-argument constructor raised."""

    def __init__(self, class_name: str, cause: BaseException):
        super().__init__(
            class_name,
            f"Could not instantiate {class_name}: {cause!r}",
            code=ErrorCode.INSTANTIATION_FAILED,
            details={"cause": repr(cause)},
        )


class ScenarioHarvestError(DiscoveryError):
    """The scenario provider did not return a usable collection."""

    def __init__(self, class_name: str, reason: str):
        super().__init__(
            class_name,
            f"Could not harvest scenarios from {class_name}: {reason}",
            code=ErrorCode.SCENARIO_HARVEST_FAILED,
            details={"reason": reason},
        )


class ValidationError(TrialRunError):
    """A test entry violates the naming or visibility convention."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validation failed for '{field}': {message}",
            code=ErrorCode.VALIDATION_ERROR,
            details={"field": field, "error": message},
        )


class InvalidTestMethodError(ValidationError):
    """One or more conventions are broken by a single test method."""

    def __init__(self, class_name: str, method_name: str, violations: list[str]):
        super().__init__(f"{class_name}.{method_name}", "; ".join(violations))
        self.code = ErrorCode.INVALID_TEST_METHOD
        self.details = {
            "class": class_name,
            "method": method_name,
            "violations": list(violations),
        }
        self.class_name = class_name
        self.method_name = method_name
        self.violations = list(violations)


class ExecutionError(TrialRunError):
    """Raised by harnesses when a unit cannot be invoked at all."""

    def __init__(self, unit: str, message: str):
        super().__init__(
            message=f"Execution of {unit} failed: {message}",
            code=ErrorCode.EXECUTION_ERROR,
            details={"unit": unit},
        )


class ConfigurationError(TrialRunError):
    """Bad CLI target or configuration value."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.CONFIGURATION_ERROR, details=details)
