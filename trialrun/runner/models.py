"""Pydantic models for run results.

These are what the CLI prints and serializes; the discovery pipeline itself
works with the plain dataclasses in ``trialrun.discovery``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class UnitStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class UnitResult(BaseModel):
    """Outcome of one execution unit."""

    class_name: str = Field(..., description="Qualified name of the test class")
    method: str = Field(..., description="Test method name")
    scenario: str = Field(..., description="repr() of the scenario")
    status: UnitStatus
    message: Optional[str] = Field(None, description="Failure cause or skip reason")
    duration_ms: float = Field(0.0, ge=0.0)


class ClassReport(BaseModel):
    """Units of one class, or the error that stopped its discovery."""

    class_name: str
    units: list[UnitResult] = Field(default_factory=list)
    error: Optional[dict[str, Any]] = Field(None, description="Discovery or validation error")

    def count(self, status: UnitStatus) -> int:
        return sum(1 for u in self.units if u.status == status)

    @property
    def ok(self) -> bool:
        return self.error is None and self.count(UnitStatus.FAILED) == 0


class RunReport(BaseModel):
    """Results of a whole run."""

    classes: list[ClassReport] = Field(default_factory=list)
    passed: int = Field(0, description="Units that passed")
    failed: int = Field(0, description="Units that failed")
    skipped: int = Field(0, description="Units skipped by a violated assumption")
    errors: int = Field(0, description="Classes rejected during discovery")

    @classmethod
    def from_classes(cls, classes: list[ClassReport]) -> "RunReport":
        """Build a report and its totals from per-class reports."""
        return cls(
            classes=classes,
            passed=sum(c.count(UnitStatus.PASSED) for c in classes),
            failed=sum(c.count(UnitStatus.FAILED) for c in classes),
            skipped=sum(c.count(UnitStatus.SKIPPED) for c in classes),
            errors=sum(1 for c in classes if c.error is not None),
        )

    @property
    def ok(self) -> bool:
        return all(c.ok for c in self.classes)
