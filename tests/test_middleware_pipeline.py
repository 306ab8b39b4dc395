"""Tests for middleware validation, ordering and execution.

This module tests:
- Membership of middlewares in the defined list (exact class match)
- Canonical ordering by defined position
- Threading of the argument list through the middlewares
- Errors for unpermitted middlewares and malformed results
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from edit_in_place.core.exceptions import (
    InvalidMiddlewareError,
    InvalidMiddlewareResultError,
    UnpermittedMiddlewareError,
    UnregisteredMiddlewareError,
)
from edit_in_place.core.middleware import MiddlewareWrapper
from edit_in_place.core.pipeline import MiddlewareDefinition, MiddlewareStack, apply_middlewares
from edit_in_place.core.registrar import MiddlewareRegistrar
from tests.support import (
    MiddlewareOne,
    MiddlewareThree,
    MiddlewareTwo,
    NoneMiddleware,
    append_bang,
    middleware_classes,
)

DEFINED = [MiddlewareOne, MiddlewareTwo, MiddlewareThree]


class SubclassedOne(MiddlewareOne):
    """Subclass of a defined middleware that is not itself defined."""


class TestMiddlewareDefinition:
    """Test membership and ordering."""

    def test_exact_class_is_defined(self) -> None:
        definition = MiddlewareDefinition(DEFINED)
        assert definition.is_defined(MiddlewareTwo())
        assert definition.index_of(MiddlewareThree()) == 2

    def test_subclass_is_not_defined(self) -> None:
        assert not MiddlewareDefinition(DEFINED).is_defined(SubclassedOne())

    def test_wrapped_middleware_matches_wrapped_class(self) -> None:
        assert MiddlewareDefinition(DEFINED).index_of(MiddlewareWrapper(MiddlewareTwo)) == 1

    def test_sort_orders_by_defined_position(self) -> None:
        three, one, two = MiddlewareThree(), MiddlewareOne(), MiddlewareTwo()
        assert MiddlewareDefinition(DEFINED).sort([three, one, two]) == [one, two, three]

    def test_sort_is_stable(self) -> None:
        first, second = MiddlewareOne(), MiddlewareOne()
        three = MiddlewareThree()
        assert MiddlewareDefinition(DEFINED).sort([three, first, second]) == [first, second, three]

    def test_sort_rejects_undefined(self) -> None:
        middleware = MiddlewareTwo()
        with pytest.raises(UnpermittedMiddlewareError) as exc_info:
            MiddlewareDefinition([MiddlewareOne]).sort([MiddlewareOne(), middleware])

        assert exc_info.value.middleware is middleware
        assert exc_info.value.context["defined"] == ["MiddlewareOne"]


class TestMiddlewareStack:
    """Test execution of the middleware pipeline."""

    def test_no_middlewares(self) -> None:
        assert MiddlewareStack(DEFINED, []).call("viewing", "input") == ["viewing", "input"]

    def test_requested_order_does_not_matter(self) -> None:
        stack = MiddlewareStack(DEFINED, [MiddlewareThree, MiddlewareOne, MiddlewareTwo])
        assert stack.call("viewing", "ARG") == ["viewing", "ARG*ONE*!TWO!$THREE$"]

    def test_extra_arguments_pass_through(self) -> None:
        stack = MiddlewareStack(DEFINED, [MiddlewareThree])
        assert stack("viewing", "input", "&") == ["viewing", "input$THREE$", "&"]

    def test_registered_names(self) -> None:
        registrar = MiddlewareRegistrar()
        registrar.register("two", MiddlewareTwo)

        stack = MiddlewareStack(DEFINED, ["two", MiddlewareOne()], registrar)
        assert stack.call("viewing", "x") == ["viewing", "x*ONE*!TWO!"]

    def test_function_middleware(self) -> None:
        stack = MiddlewareStack([type(append_bang)], [append_bang])
        assert stack.call("viewing", "hi") == ["viewing", "hi!"]

    def test_unregistered_name(self) -> None:
        with pytest.raises(UnregisteredMiddlewareError):
            MiddlewareStack(DEFINED, ["missing"], MiddlewareRegistrar()).call("viewing", "x")

    def test_invalid_reference(self) -> None:
        with pytest.raises(InvalidMiddlewareError):
            MiddlewareStack(DEFINED, [MiddlewareOne, 42]).call("viewing", "x")

    def test_undefined_middleware_fails_before_any_runs(self) -> None:
        calls = []

        class Recording(MiddlewareOne):
            def __call__(self, *args):
                calls.append(args)
                return list(args)

        stack = MiddlewareStack([Recording], [Recording, MiddlewareTwo])
        with pytest.raises(UnpermittedMiddlewareError):
            stack.call("viewing", "x")
        assert calls == []

    def test_malformed_result(self) -> None:
        with pytest.raises(InvalidMiddlewareResultError) as exc_info:
            MiddlewareStack([NoneMiddleware], [NoneMiddleware]).call("viewing", "x")
        assert exc_info.value.context["result_type"] == "NoneType"

    def test_middleware_exceptions_propagate(self) -> None:
        class Exploding:
            def __call__(self, *args):
                raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            apply_middlewares([Exploding], [Exploding], ["viewing", "x"])


SUFFIXES = {MiddlewareOne: "*ONE*", MiddlewareTwo: "!TWO!", MiddlewareThree: "$THREE$"}


# Feature: middleware-pipeline, Property 1: Canonical execution order
@given(requested=st.lists(middleware_classes, max_size=6), data=st.text(max_size=10))
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_property_canonical_order(requested, data):
    """For any requested order, middlewares run in their defined order."""
    result = apply_middlewares(DEFINED, requested, ["viewing", data])

    expected = data + "".join(
        SUFFIXES[cls] for cls in sorted(requested, key=DEFINED.index)
    )
    assert result == ["viewing", expected]


# Feature: middleware-pipeline, Property 2: Permutations are equivalent
@given(requested=st.lists(middleware_classes, max_size=6).flatmap(
    lambda items: st.tuples(st.just(items), st.permutations(items))
))
@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
def test_property_permutations_are_equivalent(requested):
    """Any permutation of the requested middlewares gives the same result."""
    original, permuted = requested
    assert apply_middlewares(DEFINED, original, ["viewing", "x"]) == apply_middlewares(
        DEFINED, permuted, ["viewing", "x"]
    )
