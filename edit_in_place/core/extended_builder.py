"""Extension of builders with additional operations.

An ExtendedBuilder wraps a base builder and forwards every attribute it does
not define itself to that base. Because an ExtendedBuilder satisfies the
BuilderLike protocol through forwarding, extensions can be stacked:

    base = Builder()
    hello = HelloBuilder(base)       # adds hello()
    world = WorldBuilder(hello)      # adds world()
    world.world(); world.hello(); world.field("text", "input")

Extensions may only add operations. A subclass that redefines an operation
of the builder surface (``field``, ``scoped``, ...) is rejected when the class
is created, since outer extensions would keep reaching the base's version.
"""

from typing import Any

from edit_in_place.core.builder import Builder
from edit_in_place.core.protocols import BuilderLike, provides_builder_operations

BUILDER_OPERATIONS = frozenset(name for name in dir(Builder) if not name.startswith("_")) | {
    "config"
}


class ExtendedBuilder:
    """Base class for builders that add operations to another builder.

    Attributes:
        base: The builder being extended; any object satisfying BuilderLike

    Example:
        >>> class HelloBuilder(ExtendedBuilder):
        ...     def hello(self, name):
        ...         return self.field("text", f"Hello, {name}!")
        ...
        >>> HelloBuilder(Builder()).hello("Jacob")
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        redefined = sorted(BUILDER_OPERATIONS.intersection(vars(cls)))
        if redefined:
            raise TypeError(
                f"{cls.__name__} may not redefine builder operations: {', '.join(redefined)}"
            )

    def __init__(self, base: BuilderLike) -> None:
        """Initialize the extension.

        Args:
            base: The builder to extend

        Raises:
            TypeError: If base does not provide the builder operations
        """
        if not provides_builder_operations(base):
            raise TypeError(f"{type(base).__name__} does not provide the builder operations")
        self.base = base

    def __getattr__(self, name: str) -> Any:
        if name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "config":
            setattr(self.base, name, value)
        else:
            super().__setattr__(name, value)

    def __dir__(self) -> list[str]:
        base = self.__dict__.get("base")
        return sorted(set(super().__dir__()) | set(dir(base) if base is not None else []))
