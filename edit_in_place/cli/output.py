"""Error output and logging setup for CLI operations.

This module provides:
- handle_error: Formatted error messages with context and optional stack traces
- configure_logging: Logging configuration from --log-level and --log-file
"""

import logging
import sys
import traceback
from pathlib import Path

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_level: str = "warning", log_file: Path | None = None) -> None:
    """Configure the root logger for a CLI command.

    Log records go to stderr, or to log_file when one is given, so stdout
    only carries the command's actual output.

    Args:
        log_level: One of debug, info, warning, error (case-insensitive)
        log_file: Optional path of a file to append log records to

    Raises:
        ValueError: If log_level is not a known level
    """
    level = LOG_LEVELS.get(log_level.lower())
    if level is None:
        raise ValueError(
            f"Invalid log level '{log_level}'. Available: {', '.join(LOG_LEVELS)}"
        )

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler], force=True)


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Format and display error message with context.

    Displays error messages to stderr with optional context fields from
    EditInPlaceError exceptions. When verbose mode is enabled, also displays
    the full stack trace.

    Args:
        error: Exception to display
        verbose: Whether to show stack trace (default False)

    Example:
        try:
            # ... operation ...
        except EditInPlaceError as e:
            handle_error(e, verbose=True)
    """
    message = getattr(error, "message", None) or str(error)
    print(f"Error: {message}", file=sys.stderr)

    # EditInPlaceError carries a context dictionary
    context = getattr(error, "context", None)
    if context:
        print("Context:", file=sys.stderr)
        for key, value in context.items():
            print(f"  {key}: {value}", file=sys.stderr)

    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exception(type(error), error, error.__traceback__, file=sys.stderr)
