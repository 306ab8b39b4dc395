"""Protocol definitions for edit_in_place pipeline components.

This module defines the structural interfaces used by the rendering pipeline.
Middlewares and builders are duck-typed: any object providing the methods
below can take part in the pipeline without inheriting from a base class.

Protocols:
    - Middleware: Transforms a render call's argument list
    - BuilderLike: The operations an ExtendedBuilder may forward to its base

Field types are the exception: they share behavior (mode validation and
dispatch), so they derive from edit_in_place.core.field_type.FieldType.
"""

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from edit_in_place.core.configuration import Configuration


class Middleware(Protocol):
    """Protocol for argument-list middlewares.

    A middleware receives the current argument list of a render call,
    unpacked, and returns the argument list that should be passed on. The
    first argument is conventionally the rendering mode. All implementations
    must:

    1. Return a list or tuple (the next middleware receives it unpacked)
    2. Keep the mode as the first element unless they deliberately change it
    3. Be constructible without arguments when referenced by class

    Plain functions satisfy this protocol as well as instances of classes
    defining ``__call__``.

    Example:
        >>> class Shout:
        ...     def __call__(self, mode: str, text: str, *rest: Any) -> list[Any]:
        ...         return [mode, text.upper(), *rest]
        ...
        >>> Shout()("viewing", "hello")
        ['viewing', 'HELLO']
    """

    def __call__(self, *args: Any) -> Sequence[Any]:
        """Transform the argument list.

        Args:
            *args: The current argument list, mode first

        Returns:
            The transformed argument list
        """
        ...


BUILDER_LIKE_OPERATIONS = ("config", "field", "configure", "scoped", "with_middlewares", "dup")


def provides_builder_operations(obj: Any) -> bool:
    """Return whether obj provides every operation of BuilderLike.

    Attributes are looked up dynamically, so objects forwarding attributes
    through ``__getattr__`` (such as ExtendedBuilder) qualify.
    """
    return all(hasattr(obj, name) for name in BUILDER_LIKE_OPERATIONS)


class BuilderLike(Protocol):
    """Protocol listing the operations a builder must provide.

    ExtendedBuilder accepts any object satisfying this protocol as its base,
    including other ExtendedBuilder instances, which is what allows
    extensions to be chained. Use provides_builder_operations for runtime
    checks.
    """

    config: "Configuration"

    def field(self, field_type: Any, *args: Any) -> Any:
        """Render a single field."""
        ...

    def configure(
        self, callback: Callable[["Configuration"], Any] | None = None
    ) -> "Configuration":
        """Expose the configuration for in-place mutation."""
        ...

    def scoped(self, field_options: Any = None, callback: Callable[..., Any] | None = None) -> Any:
        """Create a builder with merged field options."""
        ...

    def with_middlewares(self, *middlewares: Any, callback: Callable[..., Any] | None = None) -> Any:
        """Create a builder with additional middlewares."""
        ...

    def dup(self) -> Any:
        """Create an independent copy."""
        ...
