"""Observability utilities for trialrun."""

from trialrun.observability.logging import setup_logging

__all__ = ["setup_logging"]
