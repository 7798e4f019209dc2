"""Importable sample module with discovery errors and failing tests."""

from __future__ import annotations

from trialrun import test


class Healthy:
    @test
    def passes(self):
        pass


class CamelCased:
    @test
    def doSomething(self):
        pass


class Failing:
    @test
    def always_fails(self):
        assert 1 == 2, "math is broken"
