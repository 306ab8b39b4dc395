"""Middleware references and their resolution to middleware instances.

Wherever a middleware is expected, three kinds of reference are accepted:

1. a middleware instance (any callable),
2. a middleware class, instantiated without arguments,
3. the name of a middleware registered in a MiddlewareRegistrar.

All of them are normalized to an instance before the pipeline runs.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from edit_in_place.core.exceptions import InvalidMiddlewareError, UnregisteredMiddlewareError

if TYPE_CHECKING:
    from edit_in_place.core.registrar import MiddlewareRegistrar


def is_middleware(obj: Any) -> bool:
    """Return whether obj is a middleware class or a callable instance."""
    return isinstance(obj, type) or callable(obj)


def lookup_middleware(name: str, registrar: "MiddlewareRegistrar | None") -> Any:
    """Find the middleware registered under name.

    Raises:
        UnregisteredMiddlewareError: If no middleware is registered under name
    """
    result = registrar.find(name) if registrar is not None else None
    if result is None:
        available = registrar.names() if registrar is not None else []
        raise UnregisteredMiddlewareError(name, available)
    return result


def resolve_middleware(middleware: Any, registrar: "MiddlewareRegistrar | None" = None) -> Any:
    """Normalize a middleware reference to a middleware instance.

    Args:
        middleware: Middleware instance, middleware class or registered name
        registrar: Registrar used to look up names

    Returns:
        Callable middleware instance

    Raises:
        UnregisteredMiddlewareError: If a name is not registered
        InvalidMiddlewareError: If the result is not callable

    Example:
        >>> class Upcase:
        ...     def __call__(self, mode, text):
        ...         return [mode, text.upper()]
        ...
        >>> resolve_middleware(Upcase)("viewing", "hi")
        ['viewing', 'HI']
    """
    if isinstance(middleware, str):
        middleware = lookup_middleware(middleware, registrar)
    if isinstance(middleware, type):
        middleware = middleware()
    if not callable(middleware):
        raise InvalidMiddlewareError(middleware)
    return middleware


def parse_middlewares(
    middlewares: Iterable[Any], registrar: "MiddlewareRegistrar | None" = None
) -> list[Any]:
    """Normalize every middleware reference in the given iterable.

    Names are looked up and classes instantiated; instances are kept.

    Example:
        >>> registrar = MiddlewareRegistrar()
        >>> registrar.register("upcase", Upcase)
        >>> parse_middlewares(["upcase", Lowercase, Titleize()], registrar)
        [<Upcase object at ...>, <Lowercase object at ...>, <Titleize object at ...>]
    """
    return [resolve_middleware(m, registrar) for m in middlewares]


class MiddlewareWrapper:
    """Consistent wrapper around any kind of middleware reference.

    The wrapper resolves the reference on construction and forwards calls to
    the resolved middleware. Its ``repr()`` and ``str()`` are those of the
    wrapped middleware, so error messages name the real middleware rather
    than the wrapper.

    Attributes:
        base: The resolved middleware instance
    """

    def __init__(self, middleware: Any, registrar: "MiddlewareRegistrar | None" = None) -> None:
        if isinstance(middleware, MiddlewareWrapper):
            middleware = middleware.base
        self.base = resolve_middleware(middleware, registrar)

    def __call__(self, *args: Any) -> Any:
        return self.base(*args)

    def __repr__(self) -> str:
        return repr(self.base)

    def __str__(self) -> str:
        return str(self.base)
