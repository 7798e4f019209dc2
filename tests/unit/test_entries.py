"""Unit tests for test entry registration."""

from __future__ import annotations

import pytest

from trialrun.discovery.entries import (
    Visibility,
    class_name,
    declared_test_methods,
    infer_visibility,
    test,
)


class Sample:
    @test
    def first(self):
        pass

    def helper(self):
        pass

    @test
    def second(self, scenario):
        pass

    @test(visibility=Visibility.PUBLIC)
    def exported(self):
        pass

    @test
    def __hidden(self):
        return "hidden"


class Child(Sample):
    @test
    def own(self):
        pass


class Plain:
    def not_a_test(self):
        pass


class TestDeclaredTestMethods:
    """Test declared_test_methods."""

    def test_declaration_order(self):
        """Entries come back in the order they were written."""
        names = [e.name for e in declared_test_methods(Sample)]
        assert names == ["first", "second", "exported", "__hidden"]

    def test_undecorated_methods_ignored(self):
        """Only @test methods are entries."""
        names = [e.name for e in declared_test_methods(Sample)]
        assert "helper" not in names

    def test_inherited_entries_excluded(self):
        """A subclass only sees entries written in its own body."""
        assert [e.name for e in declared_test_methods(Child)] == ["own"]

    def test_class_without_entries(self):
        """A class with no @test methods has no entries."""
        assert declared_test_methods(Plain) == ()

    def test_entry_owner(self):
        """Entries remember the declaring class."""
        for entry in declared_test_methods(Sample):
            assert entry.owner is Sample


class TestEntryDetails:
    """Test what a registered entry records."""

    def test_class_keeps_plain_functions(self):
        """Decorated methods stay callable on instances."""
        assert Sample().first() is None

    def test_mangled_attribute(self):
        """Private names are stored under their mangled attribute."""
        entry = declared_test_methods(Sample)[-1]
        assert entry.name == "__hidden"
        assert entry.attribute == "_Sample__hidden"

    def test_takes_scenario(self):
        """A second positional parameter means the scenario is injected."""
        entries = {e.name: e for e in declared_test_methods(Sample)}
        assert entries["second"].takes_scenario is True
        assert entries["first"].takes_scenario is False

    def test_explicit_visibility(self):
        """An explicit visibility overrides name inference."""
        entries = {e.name: e for e in declared_test_methods(Sample)}
        assert entries["exported"].visibility is Visibility.PUBLIC
        assert entries["first"].visibility is Visibility.PACKAGE

    def test_qualified_name(self):
        """Qualified names include module and class."""
        entry = declared_test_methods(Sample)[0]
        assert entry.qualified_name == f"{__name__}.Sample.first"
        assert class_name(Sample) == f"{__name__}.Sample"

    def test_rejects_non_functions(self):
        """@test only accepts plain functions."""
        with pytest.raises(TypeError):
            test(staticmethod(lambda: None))


class TestInferVisibility:
    """Test infer_visibility."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("plain_name", Visibility.PACKAGE),
            ("_internal", Visibility.PROTECTED),
            ("__secret", Visibility.PRIVATE),
            ("__call__", Visibility.PUBLIC),
        ],
    )
    def test_inference(self, name, expected):
        """Leading underscores map onto visibility tiers."""
        assert infer_visibility(name) is expected
