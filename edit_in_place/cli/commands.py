"""CLI command implementations.

This module implements the CLI commands for the edit-in-place tool:
- render: Render a single field in a given mode
- list_field_types: List registered field types
- list_middlewares: List registered middlewares
- check_config: Validate configuration files

Each command is implemented as a function that returns an exit code,
enabling both direct invocation and subprocess-based testing.
"""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

from cyclopts import Parameter

from edit_in_place.cli.config import (
    ConfigError,
    apply_config,
    import_reference,
    load_config,
    validate_config,
)
from edit_in_place.cli.exit_codes import ExitCode
from edit_in_place.cli.output import configure_logging, handle_error
from edit_in_place.core.builder import Builder
from edit_in_place.core.configuration import Configuration, snapshot_config
from edit_in_place.core.exceptions import (
    DuplicateRegistrationError,
    EditInPlaceError,
    InvalidRegistrationNameError,
)
from edit_in_place.core.field_options import FieldOptions
from edit_in_place.core.registrar import Registrar

logger = logging.getLogger(__name__)

REGISTRATION_ERRORS = (InvalidRegistrationNameError, DuplicateRegistrationError)


def load_configuration(config_path: Path | None = None) -> Configuration:
    """Build the configuration a command works on.

    The configuration is a copy of the global configuration with the
    configuration file, if any, applied on top.

    Args:
        config_path: Optional configuration file path

    Returns:
        The configuration

    Raises:
        ConfigError: If the configuration file cannot be loaded or applied
    """
    configuration = snapshot_config()
    if config_path is not None:
        apply_config(load_config(config_path), configuration)
        logger.info("Loaded configuration from %s", config_path)
    return configuration


def render(
    field_type: Annotated[str, Parameter(help="Registered field type name or import path")],
    *args: Annotated[str, Parameter(help="Field input arguments")],
    mode: Annotated[str | None, Parameter(help="Rendering mode (viewing, editing)")] = None,
    middleware: Annotated[
        list[str] | None, Parameter(help="Middleware name or import path (repeatable)")
    ] = None,
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str, Parameter(help="Log level (debug, info, warning, error)")] = "warning",
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Render a field and print the result.

    The field type and middlewares are looked up in the configuration built
    from the global configuration and the optional configuration file. The
    mode and middlewares given on the command line are merged into the
    configured field options for this call only.

    Args:
        field_type: Registered field type name, or import path of a field type
        *args: Field input arguments
        mode: Rendering mode (defaults to the configured mode)
        middleware: Middlewares to add for this call
        config: Configuration file path
        verbose: Show stack traces on errors
        log_level: Log level
        log_file: Log file path (defaults to stderr)

    Returns:
        Exit code (0 for success, non-zero for errors)

    Example:
        >>> from edit_in_place.cli.commands import render
        >>>
        >>> exit_code = render("title", "Hello", mode="editing", config=Path("fields.yaml"))
    """
    try:
        configure_logging(log_level, log_file)
    except ValueError as e:
        handle_error(e, verbose)
        return ExitCode.CONFIG_ERROR

    try:
        builder = Builder(load_configuration(config))
        options = FieldOptions(mode, [import_reference(m) for m in middleware or []])

        result = builder.field(import_reference(field_type), options, *args)
        print(result)
        return ExitCode.SUCCESS

    except ConfigError as e:
        handle_error(e, verbose)
        return ExitCode.CONFIG_ERROR
    except REGISTRATION_ERRORS as e:
        handle_error(e, verbose)
        return ExitCode.REGISTRATION_ERROR
    except EditInPlaceError as e:
        handle_error(e, verbose)
        return ExitCode.RENDER_ERROR
    except Exception as e:
        handle_error(e, verbose)
        return ExitCode.UNEXPECTED_ERROR


def list_field_types(
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
) -> int:
    """List registered field types with descriptions.

    Returns:
        Exit code (0 for success, 6 if the configuration file is invalid)
    """
    return _list_registrations("field types", lambda c: c.field_types, config)


def list_middlewares(
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
) -> int:
    """List registered middlewares with descriptions.

    Returns:
        Exit code (0 for success, 6 if the configuration file is invalid)
    """
    return _list_registrations("middlewares", lambda c: c.registered_middlewares, config)


def check_config(
    config_path: Annotated[Path, Parameter(help="Configuration file path")],
) -> int:
    """Validate configuration file.

    Loads and validates a configuration file, checking syntax, structure,
    that all import paths resolve and that all registrations are valid.
    Displays specific validation errors if found.

    Args:
        config_path: Path to configuration file to validate

    Returns:
        Exit code (0 for valid config, 6 for invalid config)

    Example:
        >>> from pathlib import Path
        >>> from edit_in_place.cli.commands import check_config
        >>>
        >>> exit_code = check_config(config_path=Path("fields.yaml"))
    """
    try:
        config = load_config(config_path)
        errors = validate_config(config)

        if errors:
            print("✗ Configuration validation failed:", file=sys.stderr)
            for error in errors:
                print(f"  {error}", file=sys.stderr)
            return ExitCode.CONFIG_ERROR

        print("✓ Configuration is valid")

        if config.get("mode"):
            print(f"  Mode: {config['mode']}")
        if config.get("field_types"):
            print(f"  Field types: {', '.join(config['field_types'])}")
        if config.get("middlewares"):
            print(f"  Middlewares: {', '.join(config['middlewares'])}")

        return ExitCode.SUCCESS

    except ConfigError as e:
        print("✗ Configuration error:", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=False)
        return ExitCode.UNEXPECTED_ERROR


def _list_registrations(
    label: str, select: Callable[[Configuration], Registrar], config_path: Path | None
) -> int:
    try:
        registrar = select(load_configuration(config_path))
    except ConfigError as e:
        handle_error(e)
        return ExitCode.CONFIG_ERROR
    except REGISTRATION_ERRORS as e:
        handle_error(e)
        return ExitCode.REGISTRATION_ERROR

    if not len(registrar):
        print(f"No {label} registered.")
        return ExitCode.SUCCESS

    print(f"Available {label}:")
    for name in registrar.names():
        print(f"  {name:15} {_describe(registrar.find(name))}")

    return ExitCode.SUCCESS


def _describe(obj: Any) -> str:
    doc = obj.__doc__ if isinstance(obj, type) else type(obj).__doc__
    if not doc:
        return ""
    return doc.strip().splitlines()[0]
