"""Middleware pipeline for the argument list of a render call.

This module validates and executes the middlewares requested for a render
call. The pipeline follows this flow:

1. Wrap: Normalize every middleware reference (name, class or instance)
2. Validate: Reject middlewares whose class is not in the defined list
3. Sort: Order the middlewares by the position of their class in the
   defined list, regardless of the order in which they were requested
4. Execute: Thread the argument list through each middleware in turn

The defined list is therefore both an allow-list and the canonical execution
order. Requested middlewares are accumulated from several configuration
layers (global, builder, call), so sorting them guarantees that their effect
on the argument list does not depend on where they were added.
"""

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from edit_in_place.core.exceptions import InvalidMiddlewareResultError, UnpermittedMiddlewareError
from edit_in_place.core.middleware import MiddlewareWrapper

if TYPE_CHECKING:
    from edit_in_place.core.registrar import MiddlewareRegistrar

logger = logging.getLogger(__name__)


def middleware_class(middleware: Any) -> type:
    """Return the class of a middleware, looking through MiddlewareWrapper."""
    if isinstance(middleware, MiddlewareWrapper):
        middleware = middleware.base
    return type(middleware)


class MiddlewareDefinition:
    """Ordered list of the middleware classes that may be executed.

    A middleware is defined when its exact class (subclasses do not count)
    appears in the list. Wrapped middlewares are matched on the class of the
    middleware they wrap.

    Attributes:
        defined_middlewares: Permitted middleware classes in execution order

    Example:
        >>> definition = MiddlewareDefinition([Trim, Upcase])
        >>> definition.sort([Upcase(), Trim()])
        [<Trim object at ...>, <Upcase object at ...>]
    """

    def __init__(self, defined_middlewares: Sequence[type]) -> None:
        self.defined_middlewares = list(defined_middlewares)

    @staticmethod
    def matches_class(middleware: Any, cls: type) -> bool:
        """Return whether the middleware is an instance of exactly cls."""
        return middleware_class(middleware) is cls

    def index_of(self, middleware: Any) -> int | None:
        """Return the position of the middleware's class, or None if undefined."""
        for index, cls in enumerate(self.defined_middlewares):
            if self.matches_class(middleware, cls):
                return index
        return None

    def is_defined(self, middleware: Any) -> bool:
        return self.index_of(middleware) is not None

    def sort(self, middlewares: Iterable[Any]) -> list[Any]:
        """Validate the middlewares and order them by their defined position.

        Middlewares of the same class keep their relative order.

        Args:
            middlewares: Middleware instances (possibly wrapped)

        Returns:
            New list of the middlewares in canonical order

        Raises:
            UnpermittedMiddlewareError: For the first middleware whose class
                is not defined
        """
        indexed: list[tuple[int, Any]] = []
        for middleware in middlewares:
            index = self.index_of(middleware)
            if index is None:
                raise UnpermittedMiddlewareError(
                    middleware, middleware_class(middleware), self.defined_middlewares
                )
            indexed.append((index, middleware))

        indexed.sort(key=lambda pair: pair[0])
        return [middleware for _, middleware in indexed]


class MiddlewareStack:
    """Applies a list of middlewares to an argument list.

    Attributes:
        definition: The MiddlewareDefinition used for validation and ordering
        middlewares: The requested middleware references
        registrar: Registrar used to resolve middleware names

    Example:
        >>> stack = MiddlewareStack([Trim, Upcase], [Upcase, "trim"], registrar)
        >>> stack.call("viewing", "  hello ")
        ['viewing', 'HELLO']
    """

    def __init__(
        self,
        defined_middlewares: Sequence[type],
        middlewares: Iterable[Any],
        registrar: "MiddlewareRegistrar | None" = None,
    ) -> None:
        self.definition = MiddlewareDefinition(defined_middlewares)
        self.middlewares = list(middlewares)
        self.registrar = registrar

    def resolve(self) -> list[MiddlewareWrapper]:
        """Wrap, validate and sort the requested middlewares.

        Raises:
            UnregisteredMiddlewareError: If a middleware name is not registered
            InvalidMiddlewareError: If a reference is not a valid middleware
            UnpermittedMiddlewareError: If a middleware's class is not defined
        """
        wrapped = [MiddlewareWrapper(m, self.registrar) for m in self.middlewares]
        return self.definition.sort(wrapped)

    def call(self, *args: Any) -> list[Any]:
        """Apply the middlewares to the given arguments.

        Args:
            *args: The argument list to transform, mode first by convention

        Returns:
            The transformed argument list

        Raises:
            InvalidMiddlewareResultError: If a middleware does not return a
                list or tuple
        """
        ordered = self.resolve()
        logger.debug("Applying %d middlewares: %s", len(ordered), ordered)

        result = list(args)
        for middleware in ordered:
            output = middleware(*result)
            if not isinstance(output, (list, tuple)):
                raise InvalidMiddlewareResultError(middleware, output)
            result = list(output)
        return result

    __call__ = call


def apply_middlewares(
    defined_middlewares: Sequence[type],
    middlewares: Iterable[Any],
    args: Sequence[Any],
    registrar: "MiddlewareRegistrar | None" = None,
) -> list[Any]:
    """Apply middlewares to an argument list.

    Shorthand for ``MiddlewareStack(defined_middlewares, middlewares,
    registrar).call(*args)``.
    """
    return MiddlewareStack(defined_middlewares, middlewares, registrar).call(*args)
