"""Base class for mode-dispatching field types.

A field is a single, self-contained piece of content that is displayed
differently depending on the rendering mode, typically "viewing" or
"editing". Field types are the templates for similar fields.
"""

import copy
from collections.abc import Callable
from typing import Any

from edit_in_place.core.exceptions import UnsupportedModeError
from edit_in_place.core.field_options import Mode, normalize_mode


class FieldType:
    """Represents a single type of field.

    Rendering validates the mode against ``supported_modes()`` and then
    dispatches to the renderer for that mode. By default the renderer for a
    mode is the method named ``render_<mode>``, which receives the mode
    followed by the field's input arguments.

    Subclasses that hold construction-time state should override ``dup`` to
    copy that state; ``copy.deepcopy`` delegates to it.

    Example:
        >>> class NameField(FieldType):
        ...     def render_viewing(self, mode, name):
        ...         return name
        ...     def render_editing(self, mode, name):
        ...         return f'<input value="{name}">'
        ...
        >>> NameField().render("viewing", "Jacob")
        'Jacob'
    """

    def supported_modes(self) -> frozenset[str]:
        """Return the modes this field type can be rendered in."""
        return frozenset({Mode.VIEWING.value, Mode.EDITING.value})

    def render(self, mode: str, *args: Any) -> Any:
        """Render the field in the given mode.

        Enum members such as Mode.EDITING are converted to their string value
        before the mode is validated and dispatched.

        Args:
            mode: The mode in which to render the field
            *args: Input arguments passed by the caller (after middlewares)

        Returns:
            The rendered field, as returned by the mode's renderer

        Raises:
            UnsupportedModeError: If mode is not one of supported_modes()
        """
        mode = normalize_mode(mode)
        supported = self.supported_modes()
        if mode not in supported:
            raise UnsupportedModeError(mode, supported)
        return self.renderer_for(mode)(mode, *args)

    def renderer_for(self, mode: str) -> Callable[..., Any]:
        """Return the routine that renders the given mode.

        Raises:
            NotImplementedError: If the mode is supported but no
                ``render_<mode>`` method is defined
        """
        renderer = getattr(self, f"render_{mode}", None)
        if renderer is None:
            raise NotImplementedError(
                f"{type(self).__name__} supports the mode {mode!r} but defines no render_{mode}"
            )
        return renderer

    def dup(self) -> "FieldType":
        """Create a copy of this field type that can be safely modified.

        The default implementation performs a shallow copy.
        """
        return copy.copy(self)

    def __deepcopy__(self, memo: dict[int, Any]) -> "FieldType":
        return self.dup()
