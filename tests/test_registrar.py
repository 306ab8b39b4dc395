"""Tests for the name-keyed registrars.

This module tests:
- Registration, lookup and snapshots of the base Registrar
- Name validation and duplicate detection
- Atomic registration of mappings
- Deep duplication
- Field type and middleware restrictions of the specialized registrars
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from edit_in_place.core.exceptions import (
    DuplicateFieldTypeRegistrationError,
    DuplicateRegistrationError,
    InvalidFieldTypeError,
    InvalidFieldTypeNameError,
    InvalidMiddlewareError,
    InvalidRegistrationNameError,
)
from edit_in_place.core.registrar import (
    FieldTypeRegistrar,
    MiddlewareRegistrar,
    Registrar,
    is_registration_name,
)
from tests.support import (
    ComplexTestFieldType,
    MiddlewareOne,
    TestFieldType,
    append_bang,
    invalid_registration_names,
    registration_names,
)


class TestRegistrar:
    """Test the base Registrar."""

    def test_register_and_find(self) -> None:
        registrar = Registrar()
        registrar.register("answer", 42)

        assert registrar.find("answer") == 42
        assert "answer" in registrar
        assert len(registrar) == 1

    def test_find_unregistered_returns_none(self) -> None:
        assert Registrar().find("missing") is None

    @pytest.mark.parametrize("name", [["answer"], {"answer": 1}, None, 42])
    def test_find_non_names_returns_none(self, name) -> None:
        registrar = Registrar()
        registrar.register("answer", 42)

        assert registrar.find(name) is None
        assert name not in registrar

    def test_register_duplicate_name(self) -> None:
        registrar = Registrar()
        registrar.register("answer", 42)

        with pytest.raises(DuplicateRegistrationError):
            registrar.register("answer", 43)
        assert registrar.find("answer") == 42

    @pytest.mark.parametrize("name", ["", "two words", "3d", None, 42, b"bytes"])
    def test_register_invalid_name(self, name) -> None:
        registrar = Registrar()
        with pytest.raises(InvalidRegistrationNameError):
            registrar.register(name, "object")
        assert len(registrar) == 0

    def test_register_all(self) -> None:
        registrar = Registrar()
        registrar.register_all({"one": 1, "two": 2})

        assert registrar.names() == ["one", "two"]

    def test_register_all_is_atomic(self) -> None:
        """A single invalid entry leaves the registrar unchanged."""
        registrar = Registrar()
        registrar.register("taken", 0)

        with pytest.raises(DuplicateRegistrationError):
            registrar.register_all({"first": 1, "taken": 2})
        assert registrar.names() == ["taken"]

        with pytest.raises(InvalidRegistrationNameError):
            registrar.register_all({"second": 2, "not valid": 3})
        assert registrar.names() == ["taken"]

    def test_all_returns_deep_copies(self) -> None:
        registrar = Registrar()
        registrar.register("items", ["a"])

        snapshot = registrar.all()
        snapshot["items"].append("b")
        snapshot["extra"] = 1

        assert registrar.find("items") == ["a"]
        assert "extra" not in registrar

    def test_all_shares_classes(self) -> None:
        registrar = Registrar()
        registrar.register("cls", TestFieldType)

        assert registrar.all()["cls"] is TestFieldType

    def test_dup_is_independent(self) -> None:
        registrar = Registrar()
        registrar.register("items", ["a"])

        copy = registrar.dup()
        copy.register("other", 1)
        copy.find("items").append("b")

        assert type(copy) is Registrar
        assert "other" not in registrar
        assert registrar.find("items") == ["a"]


class TestFieldTypeRegistrar:
    """Test the FieldTypeRegistrar restrictions."""

    def test_accepts_instances_and_subclasses(self) -> None:
        registrar = FieldTypeRegistrar()
        registrar.register("test", TestFieldType("init"))
        registrar.register("complex", ComplexTestFieldType)

        assert registrar.find("complex") is ComplexTestFieldType
        assert registrar.find("test").init_arg == "init"

    @pytest.mark.parametrize("obj", ["text", 42, object(), str, MiddlewareOne])
    def test_rejects_other_objects(self, obj) -> None:
        with pytest.raises(InvalidFieldTypeError):
            FieldTypeRegistrar().register("field", obj)

    def test_uses_field_type_errors(self) -> None:
        registrar = FieldTypeRegistrar()
        registrar.register("test", TestFieldType)

        with pytest.raises(DuplicateFieldTypeRegistrationError):
            registrar.register("test", ComplexTestFieldType)
        with pytest.raises(InvalidFieldTypeNameError):
            registrar.register("not valid", ComplexTestFieldType)

    def test_dup_keeps_subclass(self) -> None:
        registrar = FieldTypeRegistrar()
        registrar.register("test", TestFieldType("init"))

        copy = registrar.dup()
        assert isinstance(copy, FieldTypeRegistrar)
        assert copy.find("test") is not registrar.find("test")
        assert copy.find("test").init_arg == "init"


class TestMiddlewareRegistrar:
    """Test the MiddlewareRegistrar restrictions."""

    def test_accepts_classes_instances_and_functions(self) -> None:
        registrar = MiddlewareRegistrar()
        registrar.register_all({"one": MiddlewareOne, "two": MiddlewareOne(), "bang": append_bang})

        assert registrar.names() == ["one", "two", "bang"]

    @pytest.mark.parametrize("obj", ["text", 42, None])
    def test_rejects_non_callables(self, obj) -> None:
        with pytest.raises(InvalidMiddlewareError):
            MiddlewareRegistrar().register("middleware", obj)


# Feature: registrar, Property 1: Registered objects can be found
@given(entries=st.dictionaries(registration_names, st.integers(), max_size=10))
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_property_registered_objects_can_be_found(entries):
    """For any mapping of valid names, every registered object can be found."""
    registrar = Registrar()
    registrar.register_all(entries)

    assert registrar.all() == entries
    for name, obj in entries.items():
        assert registrar.find(name) == obj


# Feature: registrar, Property 2: Invalid names are always rejected
@given(name=invalid_registration_names)
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_property_invalid_names_rejected(name):
    """For any string that is not an identifier, registration fails."""
    assert not is_registration_name(name)

    registrar = Registrar()
    with pytest.raises(InvalidRegistrationNameError):
        registrar.register(name, "object")
    assert len(registrar) == 0


# Feature: registrar, Property 3: Names are unique
@given(name=registration_names, first=st.integers(), second=st.integers())
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_property_names_are_unique(name, first, second):
    """For any name, a second registration fails and keeps the first object."""
    registrar = Registrar()
    registrar.register(name, first)

    with pytest.raises(DuplicateRegistrationError):
        registrar.register(name, second)
    assert registrar.find(name) == first
