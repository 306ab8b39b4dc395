"""Builder configuration and the process-wide global configuration.

Every Builder works on its own Configuration, which is a deep copy of the
global configuration taken when the builder is created. Later changes to the
global configuration never reach builders that already exist, and changes to
a builder's configuration never reach the global one.

The global configuration is created once at import time with the defaults,
changed through ``configure``, and replaced wholesale by ``set_config`` or
``reset_config``. Reads and writes of the global configuration are serialized
by a re-entrant lock so builders can be created from several threads.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from edit_in_place.core.field_options import FieldOptions, Mode
from edit_in_place.core.registrar import FieldTypeRegistrar, MiddlewareRegistrar

logger = logging.getLogger(__name__)


class Configuration:
    """Stores the configuration of a Builder.

    Attributes:
        field_types: Registrar of the field types known by name
        field_options: Default field options merged into every render call
        defined_middlewares: Middleware classes that may run, in the order
                             in which they run
        registered_middlewares: Registrar of the middlewares known by name

    Example:
        >>> config = Configuration()
        >>> config.field_options.mode
        'viewing'
        >>> config.defined_middlewares = [Trim, Upcase]
        >>> config.registered_middlewares.register("trim", Trim)
    """

    DEFAULT_MODE = Mode.VIEWING.value

    def __init__(self) -> None:
        self.field_types = FieldTypeRegistrar()
        self.field_options = FieldOptions(mode=self.DEFAULT_MODE)
        self.defined_middlewares: list[type] = []
        self.registered_middlewares = MiddlewareRegistrar()

    def dup(self) -> "Configuration":
        """Create a deep copy of this configuration that can be safely modified.

        The registrars and field options are duplicated. The list of defined
        middlewares is copied but the classes in it are shared.
        """
        config = type(self)()
        config.field_types = self.field_types.dup()
        config.field_options = self.field_options.dup()
        config.defined_middlewares = list(self.defined_middlewares)
        config.registered_middlewares = self.registered_middlewares.dup()
        return config

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(field_types={self.field_types!r}, "
            f"field_options={self.field_options!r}, "
            f"defined_middlewares={self.defined_middlewares!r}, "
            f"registered_middlewares={self.registered_middlewares!r})"
        )


_config = Configuration()
_config_lock = threading.RLock()


def get_config() -> Configuration:
    """Return the global configuration applied to new builders."""
    with _config_lock:
        return _config


def set_config(config: Configuration) -> None:
    """Replace the global configuration.

    Args:
        config: The new global configuration
    """
    global _config
    with _config_lock:
        _config = config


def reset_config() -> Configuration:
    """Replace the global configuration with a default one and return it."""
    config = Configuration()
    set_config(config)
    logger.debug("Global configuration reset")
    return config


def configure(callback: Callable[[Configuration], Any] | None = None) -> Configuration:
    """Configure edit_in_place by passing the global configuration to callback.

    Args:
        callback: Function receiving the global configuration; it is called
                  while holding the global configuration lock

    Returns:
        The global configuration

    Example:
        >>> def setup(config):
        ...     config.field_options.mode = "editing"
        ...     config.defined_middlewares = [Trim, Upcase]
        ...
        >>> configure(setup).field_options.mode
        'editing'
    """
    with _config_lock:
        if callback is not None:
            callback(_config)
        return _config


def snapshot_config() -> Configuration:
    """Return a deep copy of the global configuration."""
    with _config_lock:
        return _config.dup()
