"""Per-render field options and rendering modes.

FieldOptions stores the options required to render a field: the mode in
which to render it and the middlewares to apply to its input. Options are
layered: the builder's configuration holds the base options and every render
call may pass an overlay that is merged on top.

Merging overrides scalars and concatenates lists: the overlay's mode wins
when it is set, and the overlay's middlewares are appended to the base ones.
"""

import copy
import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Well-known rendering modes.

    Attributes:
        VIEWING: Render the field for reading
        EDITING: Render the field for editing

    Field types are free to support other modes; any string is a valid mode.
    """

    VIEWING = "viewing"
    EDITING = "editing"


def normalize_mode(mode: Any) -> str | None:
    """Convert a mode to its canonical string form.

    Args:
        mode: A string, an Enum member (such as Mode.EDITING) or None

    Returns:
        None if mode is None, the member's value for Enum members, otherwise
        str(mode)

    Example:
        >>> normalize_mode(Mode.EDITING)
        'editing'
        >>> normalize_mode(None) is None
        True
    """
    if mode is None:
        return None
    if isinstance(mode, Enum):
        return str(mode.value)
    return str(mode)


class FieldOptions:
    """Options and context required to render a field.

    Attributes:
        mode: The mode in which the field should be rendered, or None to
              inherit it when merged into other options. Assigned values are
              normalized with normalize_mode.
        middlewares: Middlewares to apply to the field's input. Each entry is
                     a middleware instance, a middleware class or the name of
                     a registered middleware. A single name is treated as
                     a one-element list.

    Example:
        >>> base = FieldOptions(mode="viewing", middlewares=["a"])
        >>> merged = base.merge(FieldOptions(middlewares=["b"]))
        >>> merged.mode, merged.middlewares
        ('viewing', ['a', 'b'])
    """

    RECOGNIZED_OPTIONS = ("mode", "middlewares")

    def __init__(self, mode: Any = None, middlewares: Iterable[Any] | None = None) -> None:
        self.mode = mode
        if middlewares is None:
            middlewares = []
        elif isinstance(middlewares, str):
            middlewares = [middlewares]
        self.middlewares: list[Any] = list(middlewares)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "FieldOptions":
        """Create field options from a mapping of options.

        Only the keys ``mode`` and ``middlewares`` are recognized; other keys
        are ignored.

        Args:
            options: Mapping such as ``{"mode": "editing"}``

        Returns:
            New FieldOptions instance
        """
        ignored = [key for key in options if key not in cls.RECOGNIZED_OPTIONS]
        if ignored:
            logger.debug("Ignoring unrecognized field options: %s", ", ".join(map(str, ignored)))
        return cls(mode=options.get("mode"), middlewares=options.get("middlewares"))

    @classmethod
    def coerce(cls, value: "FieldOptions | Mapping[str, Any] | None") -> "FieldOptions":
        """Return value as a FieldOptions instance.

        Args:
            value: Existing FieldOptions (returned as is), a mapping of
                   options, or None for empty options

        Returns:
            FieldOptions instance

        Raises:
            TypeError: If value is of any other type
        """
        if isinstance(value, FieldOptions):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to FieldOptions")

    @property
    def mode(self) -> str | None:
        return self._mode

    @mode.setter
    def mode(self, mode: Any) -> None:
        self._mode = normalize_mode(mode)

    def dup(self) -> "FieldOptions":
        """Create a deep copy of these options that can be safely modified.

        Middleware classes are shared between the copies; every other
        middleware entry is deep-copied.
        """
        options = type(self)()
        options.mode = self.mode
        options.middlewares = [
            m if isinstance(m, type) else copy.deepcopy(m) for m in self.middlewares
        ]
        return options

    def update(self, other: "FieldOptions") -> None:
        """Merge other into these options in place.

        The other options are duplicated first, so they can be modified
        afterwards without affecting these ones. The other mode replaces this
        one when it is set; the middleware lists are concatenated.

        Args:
            other: Options to merge into these ones
        """
        other = other.dup()

        if other.mode is not None:
            self.mode = other.mode
        self.middlewares = self.middlewares + other.middlewares

    def merge(self, other: "FieldOptions") -> "FieldOptions":
        """Return new options resulting from merging other into these ones.

        Neither instance is modified. Merging happens exactly as in update().

        Args:
            other: Options to merge into a copy of these ones

        Returns:
            The merged options
        """
        merged = self.dup()
        merged.update(other)
        return merged

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldOptions):
            return NotImplemented
        return self.mode == other.mode and self.middlewares == other.middlewares

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mode={self.mode!r}, middlewares={self.middlewares!r})"
