"""Custom exception classes for edit_in_place error handling.

This module defines the exception hierarchy for the rendering pipeline:
- Registration errors: invalid or duplicate registrar names
- Field type errors: unknown, unregistered or unrenderable field types
- Middleware errors: unregistered, invalid or unpermitted middlewares
- UnsupportedModeError: a field type rendered in a mode it does not know

All exceptions inherit from EditInPlaceError so that a caller can catch any
failure of this package with a single except clause. Every error keeps the
offending value both as an attribute and in its context.
"""

from typing import Any


class EditInPlaceError(Exception):
    """Base exception for all edit_in_place errors.

    Provides a common base class for all custom exceptions raised by the
    registrars, the middleware pipeline and the builder.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (names,
                    modes, offending objects, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class InvalidRegistrationNameError(EditInPlaceError):
    """Exception raised when a registration name is not a valid identifier.

    Registration names must be strings for which ``str.isidentifier()`` is
    true (for example ``"text"`` or ``"rich_text"``).
    """

    def __init__(self, name: Any, message: str | None = None, **extra_context: Any) -> None:
        self.name = name
        super().__init__(
            message or f"The name {name!r} is not a valid registration name!",
            {"name": name, **extra_context},
        )


class InvalidFieldTypeNameError(InvalidRegistrationNameError):
    """Exception raised when a field type is registered under an invalid name."""

    def __init__(self, name: Any, **extra_context: Any) -> None:
        super().__init__(name, f"The field type name {name!r} is invalid!", **extra_context)


class DuplicateRegistrationError(EditInPlaceError):
    """Exception raised when a name has already been registered in a registrar.

    Registrations are permanent: there is no way to overwrite or remove one,
    so registering the same name twice is always an error.
    """

    def __init__(self, name: Any, message: str | None = None, **extra_context: Any) -> None:
        self.name = name
        super().__init__(
            message or f"The name {name!r} has already been registered!",
            {"name": name, **extra_context},
        )


class DuplicateFieldTypeRegistrationError(DuplicateRegistrationError):
    """Exception raised when a field type name has already been registered."""

    def __init__(self, name: Any, **extra_context: Any) -> None:
        super().__init__(
            name, f"The field type name {name!r} has already been registered!", **extra_context
        )


class InvalidFieldTypeError(EditInPlaceError):
    """Exception raised when an object cannot be used as a field type.

    Valid field types are FieldType instances, FieldType subclasses (which are
    instantiated) and the names of registered field types.
    """

    def __init__(self, field_type: Any, **extra_context: Any) -> None:
        self.field_type = field_type
        super().__init__(
            f"{field_type!r} is not a valid field type!",
            {"field_type_class": type(field_type).__name__, **extra_context},
        )


class UnregisteredFieldTypeError(EditInPlaceError):
    """Exception raised when no field type is registered under a given name."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        context: dict[str, Any] = {"name": name}
        if available is not None:
            context["available"] = available
        super().__init__(f"No field types are registered with the name {name!r}", context)


class UnregisteredMiddlewareError(EditInPlaceError):
    """Exception raised when no middleware is registered under a given name."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        context: dict[str, Any] = {"name": name}
        if available is not None:
            context["available"] = available
        super().__init__(f"No middlewares are registered with the name {name!r}", context)


class InvalidMiddlewareError(EditInPlaceError):
    """Exception raised when an object is not a valid middleware.

    A valid middleware is either a class (instantiated with no arguments when
    the pipeline runs) or a callable instance.
    """

    def __init__(self, middleware: Any, **extra_context: Any) -> None:
        self.middleware = middleware
        super().__init__(
            f"{middleware!r} is not a valid middleware!",
            {"middleware_class": type(middleware).__name__, **extra_context},
        )


class UnpermittedMiddlewareError(EditInPlaceError):
    """Exception raised when a middleware's class is not in the defined list.

    The message embeds the ``repr()`` of the offending middleware so the
    failure can be diagnosed without a debugger.

    Context typically includes:
        - middleware_class: Name of the class that was not permitted
        - defined: Names of the permitted middleware classes, in order
    """

    def __init__(
        self,
        middleware: Any,
        middleware_class: type | None = None,
        defined: list[type] | None = None,
    ) -> None:
        self.middleware = middleware
        middleware_class = middleware_class or type(middleware)
        context: dict[str, Any] = {"middleware_class": middleware_class.__qualname__}
        if defined is not None:
            context["defined"] = [cls.__qualname__ for cls in defined]
        super().__init__(f"The middleware {middleware!r} is not permitted!", context)


class InvalidMiddlewareResultError(EditInPlaceError):
    """Exception raised when a middleware does not return an argument list."""

    def __init__(self, middleware: Any, result: Any) -> None:
        self.middleware = middleware
        self.result = result
        super().__init__(
            f"The middleware {middleware!r} must return a list or tuple of arguments",
            {"result_type": type(result).__name__},
        )


class UnsupportedModeError(EditInPlaceError):
    """Exception raised when a field type is rendered in an unsupported mode."""

    def __init__(self, mode: Any, supported_modes: frozenset[str] | None = None) -> None:
        self.mode = mode
        context: dict[str, Any] = {"mode": mode}
        if supported_modes is not None:
            context["supported_modes"] = sorted(supported_modes)
        super().__init__(f"The mode {mode!r} is not supported by this field type!", context)
