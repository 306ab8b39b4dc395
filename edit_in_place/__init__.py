"""Mode-aware field rendering with a middleware pipeline.

edit_in_place renders the same logical field differently depending on a
runtime mode (viewing, editing, ...), and lets middlewares transform a field's
input arguments before it is rendered. Configuration is layered: the global
configuration is copied into every Builder, and every render call may merge
its own field options on top.

Example:
    >>> import edit_in_place
    >>> from edit_in_place import Builder, TemplateFieldType
    >>>
    >>> def setup(config):
    ...     config.field_types.register(
    ...         "title", TemplateFieldType(viewing="<h1>{0}</h1>", editing='<input value="{0}">')
    ...     )
    ...
    >>> edit_in_place.configure(setup)
    >>> builder = Builder()
    >>> builder.title_field("Hello")
    '<h1>Hello</h1>'
"""

# Orchestration
from edit_in_place.core.builder import Builder
from edit_in_place.core.extended_builder import ExtendedBuilder

# Configuration
from edit_in_place.core.configuration import (
    Configuration,
    configure,
    get_config,
    reset_config,
    set_config,
    snapshot_config,
)

# Exceptions
from edit_in_place.core.exceptions import (
    DuplicateFieldTypeRegistrationError,
    DuplicateRegistrationError,
    EditInPlaceError,
    InvalidFieldTypeError,
    InvalidFieldTypeNameError,
    InvalidMiddlewareError,
    InvalidMiddlewareResultError,
    InvalidRegistrationNameError,
    UnpermittedMiddlewareError,
    UnregisteredFieldTypeError,
    UnregisteredMiddlewareError,
    UnsupportedModeError,
)

# Field options and field types
from edit_in_place.core.field_options import FieldOptions, Mode, normalize_mode
from edit_in_place.core.field_type import FieldType
from edit_in_place.fields import TemplateFieldType

# Middlewares
from edit_in_place.core.middleware import MiddlewareWrapper, parse_middlewares, resolve_middleware
from edit_in_place.core.pipeline import MiddlewareDefinition, MiddlewareStack, apply_middlewares

# Protocols
from edit_in_place.core.protocols import BuilderLike, Middleware

# Registrars
from edit_in_place.core.registrar import FieldTypeRegistrar, MiddlewareRegistrar, Registrar

__version__ = "0.2.0"

__all__ = [
    # Orchestration
    "Builder",
    "ExtendedBuilder",
    # Configuration
    "Configuration",
    "configure",
    "get_config",
    "reset_config",
    "set_config",
    "snapshot_config",
    # Field options and field types
    "FieldOptions",
    "Mode",
    "normalize_mode",
    "FieldType",
    "TemplateFieldType",
    # Middlewares
    "MiddlewareWrapper",
    "parse_middlewares",
    "resolve_middleware",
    "MiddlewareDefinition",
    "MiddlewareStack",
    "apply_middlewares",
    # Protocols
    "BuilderLike",
    "Middleware",
    # Registrars
    "Registrar",
    "FieldTypeRegistrar",
    "MiddlewareRegistrar",
    # Exceptions
    "EditInPlaceError",
    "InvalidRegistrationNameError",
    "InvalidFieldTypeNameError",
    "DuplicateRegistrationError",
    "DuplicateFieldTypeRegistrationError",
    "InvalidFieldTypeError",
    "UnregisteredFieldTypeError",
    "UnregisteredMiddlewareError",
    "InvalidMiddlewareError",
    "UnpermittedMiddlewareError",
    "InvalidMiddlewareResultError",
    "UnsupportedModeError",
]
