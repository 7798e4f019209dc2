"""Unit tests for the instance factory."""

from __future__ import annotations

import pytest

from trialrun.discovery.constructors import (
    constructor,
    declared_constructors,
    find_only_constructor,
    new_instance,
)
from trialrun.exceptions import (
    AmbiguousOrMissingConstructorError,
    DiscoveryError,
    ErrorCode,
    InstantiationError,
)


class Implicit:
    pass


class ExplicitInit:
    def __init__(self):
        self.ready = True


class DefaultedInit:
    def __init__(self, size=3):
        self.size = size


class ParameterizedOnly:
    def __init__(self, size):
        self.size = size


class TwoZeroArg:
    def __init__(self):
        self.via = "init"

    @constructor
    def fresh(cls):
        instance = cls.__new__(cls)
        instance.via = "fresh"
        return instance


class FactoryOnly:
    def __init__(self, size):
        self.size = size

    @constructor
    def small(cls):
        return cls(1)


class Exploding:
    def __init__(self):
        raise RuntimeError("boom")


class WrongType:
    def __init__(self, size):
        pass

    @constructor
    def build(cls):
        return object()


class TestDeclaredConstructors:
    """Test declared_constructors."""

    def test_implicit_default(self):
        """A class without __init__ has one zero-arg constructor."""
        ctors = declared_constructors(Implicit)
        assert [c.name for c in ctors] == ["__init__"]
        assert ctors[0].zero_arg is True

    def test_defaulted_parameters_count_as_zero_arg(self):
        """Parameters with defaults do not need arguments."""
        assert declared_constructors(DefaultedInit)[0].zero_arg is True

    def test_parameterized_init(self):
        """A required parameter makes __init__ parameterized."""
        assert declared_constructors(ParameterizedOnly)[0].zero_arg is False

    def test_registered_factories_listed(self):
        """@constructor factories follow __init__."""
        assert [c.name for c in declared_constructors(TwoZeroArg)] == ["__init__", "fresh"]


class TestFindOnlyConstructor:
    """Test find_only_constructor."""

    def test_single_constructor(self):
        """Exactly one zero-arg constructor is accepted."""
        assert find_only_constructor(ExplicitInit).name == "__init__"

    def test_factory_is_the_only_zero_arg(self):
        """A factory can be the one zero-arg constructor."""
        assert find_only_constructor(FactoryOnly).name == "small"

    def test_two_zero_arg_constructors(self):
        """Two zero-arg constructors are ambiguous."""
        with pytest.raises(AmbiguousOrMissingConstructorError) as exc_info:
            find_only_constructor(TwoZeroArg)
        assert "TwoZeroArg" in exc_info.value.message
        assert exc_info.value.details["zero_arg_constructors"] == 2
        assert exc_info.value.code == ErrorCode.AMBIGUOUS_OR_MISSING_CONSTRUCTOR

    def test_only_parameterized(self):
        """No zero-arg constructor at all is an error too."""
        with pytest.raises(DiscoveryError) as exc_info:
            find_only_constructor(ParameterizedOnly)
        assert exc_info.value.details["zero_arg_constructors"] == 0
        assert exc_info.value.class_name.endswith("ParameterizedOnly")


class TestNewInstance:
    """Test new_instance."""

    def test_fresh_instances(self):
        """Every call builds a new object."""
        first = new_instance(ExplicitInit)
        second = new_instance(ExplicitInit)
        assert first is not second
        assert first.ready is True

    def test_factory_used(self):
        """The factory builds the instance when it is the only zero-arg one."""
        assert new_instance(FactoryOnly).size == 1

    def test_constructor_failure_wrapped(self):
        """Exceptions from the constructor become InstantiationError."""
        with pytest.raises(InstantiationError) as exc_info:
            new_instance(Exploding)
        assert "boom" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_factory_returning_foreign_object(self):
        """A factory must return an instance of its class."""
        with pytest.raises(InstantiationError):
            new_instance(WrongType)

    def test_constructor_attribute_is_classmethod(self):
        """Registered factories stay usable as classmethods."""
        assert FactoryOnly.small().size == 1

    def test_rejects_non_functions(self):
        """@constructor only accepts functions."""
        with pytest.raises(TypeError):
            constructor(42)
