"""Exit code constants for CLI commands.

This module defines standard exit codes for different error conditions,
following Unix conventions where 0 indicates success and non-zero values
indicate different types of failures.

Exit codes:
    0: SUCCESS - Operation completed successfully
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception
    2: RENDER_ERROR - Field type, mode or middleware failure while rendering
    3: REGISTRATION_ERROR - Invalid or duplicate registration name
    6: CONFIG_ERROR - Configuration file or argument error
"""


class ExitCode:
    """Standard exit codes for CLI commands.

    Example:
        >>> from edit_in_place.cli.exit_codes import ExitCode
        >>> import sys
        >>>
        >>> try:
        ...     # ... operation ...
        ...     sys.exit(ExitCode.SUCCESS)
        ... except UnsupportedModeError:
        ...     sys.exit(ExitCode.RENDER_ERROR)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected or unhandled exception occurred."""

    RENDER_ERROR = 2
    """Rendering failed (unknown field type, unsupported mode, middleware error)."""

    REGISTRATION_ERROR = 3
    """A field type or middleware could not be registered."""

    CONFIG_ERROR = 6
    """Configuration file or argument error."""
