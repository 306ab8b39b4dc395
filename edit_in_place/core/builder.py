"""Builder: renders fields through the middleware pipeline.

The Builder orchestrates a single render call:

1. Options: Split optional field options off the call's arguments
2. Merge: Merge them into the builder's default field options
3. Middlewares: Run the merged middleware list over ``[mode, *args]``
4. Field type: Resolve the field type reference to a FieldType instance
5. Render: Call the field type's ``render`` with the transformed arguments

When a Builder is created its configuration is copied from the global
configuration, so each builder can be reconfigured without affecting others.
"""

import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any

from edit_in_place.core.configuration import Configuration, snapshot_config
from edit_in_place.core.exceptions import InvalidFieldTypeError, UnregisteredFieldTypeError
from edit_in_place.core.field_options import FieldOptions
from edit_in_place.core.field_type import FieldType
from edit_in_place.core.pipeline import MiddlewareStack
from edit_in_place.core.registrar import is_registration_name

logger = logging.getLogger(__name__)

FIELD_METHOD_SUFFIX = "_field"


class Builder:
    """Builds and renders editable content.

    Registered field types are also available as ``<name>_field`` methods:
    if a ``text`` field type is registered, ``builder.text_field(...)`` is
    equivalent to ``builder.field("text", ...)``.

    Builders can be extended with additional methods by wrapping them in an
    ExtendedBuilder.

    Attributes:
        config: The configuration of this builder, initially a copy of the
                global configuration

    Example:
        >>> builder = Builder()
        >>> builder.config.field_types.register("name", NameField)
        >>> builder.field("name", "Jacob")
        'Jacob'
        >>> builder.field("name", {"mode": "editing"}, "Jacob")
        '<input value="Jacob">'
        >>> builder.name_field("Jacob")
        'Jacob'
    """

    def __init__(self, config: Configuration | None = None) -> None:
        """Initialize the builder.

        Args:
            config: Configuration to use; defaults to a copy of the global
                    configuration
        """
        self.config = config if config is not None else snapshot_config()

    def __getattr__(self, name: str) -> Any:
        field_type = self._parse_field_method(name)
        if field_type is None:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return functools.partial(self.field, field_type)

    def __dir__(self) -> list[str]:
        config = self.__dict__.get("config")
        names = config.field_types.names() if config is not None else []
        return sorted(set(super().__dir__()) | {f"{n}{FIELD_METHOD_SUFFIX}" for n in names})

    def __enter__(self) -> "Builder":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None

    def dup(self) -> "Builder":
        """Create a copy of this builder whose configuration can be safely modified."""
        return type(self)(self.config.dup())

    def configure(self, callback: Callable[[Configuration], Any] | None = None) -> Configuration:
        """Configure this builder by passing its configuration to callback.

        This is a convenience method: ``builder.configure(setup)`` is the same
        as ``setup(builder.config)``.

        Args:
            callback: Function receiving the builder's configuration

        Returns:
            The builder's configuration
        """
        if callback is not None:
            callback(self.config)
        return self.config

    def field(self, field_type: Any, *args: Any) -> Any:
        """Render a single field.

        If the first argument after the field type is a FieldOptions instance
        or a mapping, it is used as the field options of this call and merged
        into the builder's defaults. All other arguments are the field's
        input and are transformed by the middlewares before rendering.

        Args:
            field_type: A FieldType instance, a FieldType subclass (which is
                        instantiated) or the name of a registered field type
            *args: Optional field options followed by the field's input

        Returns:
            The rendered field, exactly as returned by the field type

        Raises:
            InvalidFieldTypeError: If field_type cannot be used as a field type
            UnregisteredFieldTypeError: If no field type is registered under
                the given name
            UnsupportedModeError: If the field type does not support the mode
            UnpermittedMiddlewareError: If a middleware is not defined
        """
        overlay, inputs = self._split_field_options(args)
        options = self.config.field_options.merge(overlay)
        logger.debug("Rendering %r with %r", field_type, options)

        transformed = self._apply_middlewares(options.middlewares, [options.mode, *inputs])

        resolved = self._evaluate_field_type(field_type)
        return resolved.render(*transformed)

    def scoped(
        self,
        field_options: FieldOptions | Mapping[str, Any] | None = None,
        callback: Callable[["Builder"], Any] | None = None,
    ) -> Any:
        """Create a scoped builder with the given field options.

        The scoped builder is a copy of this one whose field options have the
        given ones merged in. This builder is never modified. This is helpful
        when many fields require the same options.

        Args:
            field_options: FieldOptions instance or mapping of options
            callback: Optional function receiving the scoped builder

        Returns:
            The result of callback if given, otherwise the scoped builder,
            which can also be used as a context manager

        Example:
            >>> with builder.scoped({"mode": "editing"}) as editing:
            ...     editing.field("name", "Jacob")
            '<input value="Jacob">'
        """
        scoped_builder = self.dup()
        scoped_builder.config.field_options.update(FieldOptions.coerce(field_options))

        if callback is None:
            return scoped_builder
        return callback(scoped_builder)

    scope = scoped

    def with_middlewares(
        self, *middlewares: Any, callback: Callable[["Builder"], Any] | None = None
    ) -> Any:
        """Create a scoped builder with the given middlewares added.

        Equivalent to ``scoped({"middlewares": list(middlewares)}, callback)``.
        """
        return self.scoped({"middlewares": list(middlewares)}, callback)

    middleware_scope = with_middlewares

    def _parse_field_method(self, method_name: str) -> str | None:
        # Called from __getattr__; config may not exist yet while copying.
        config = self.__dict__.get("config")
        if config is None or not method_name.endswith(FIELD_METHOD_SUFFIX):
            return None

        name = method_name[: -len(FIELD_METHOD_SUFFIX)]
        return name if name in config.field_types else None

    def _split_field_options(self, args: tuple[Any, ...]) -> tuple[FieldOptions, list[Any]]:
        if args and isinstance(args[0], FieldOptions):
            return args[0], list(args[1:])
        if args and isinstance(args[0], Mapping):
            return FieldOptions.from_mapping(args[0]), list(args[1:])
        return FieldOptions(), list(args)

    def _apply_middlewares(self, middlewares: list[Any], args: list[Any]) -> list[Any]:
        stack = MiddlewareStack(
            self.config.defined_middlewares, middlewares, self.config.registered_middlewares
        )
        return stack.call(*args)

    def _evaluate_field_type(self, field_type: Any) -> FieldType:
        if isinstance(field_type, FieldType):
            return field_type
        if isinstance(field_type, type) and issubclass(field_type, FieldType):
            return field_type()
        if is_registration_name(field_type):
            return self._evaluate_field_type(self._lookup_field_type(field_type))
        raise InvalidFieldTypeError(field_type)

    def _lookup_field_type(self, name: str) -> Any:
        result = self.config.field_types.find(name)
        if result is None:
            raise UnregisteredFieldTypeError(name, self.config.field_types.names())
        return result
