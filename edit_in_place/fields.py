"""Built-in field types."""

from collections.abc import Callable
from functools import partial
from typing import Any

from edit_in_place.core.field_type import FieldType


class TemplateFieldType(FieldType):
    """Field type rendering one ``str.format`` template per mode.

    The supported modes are exactly the modes a template is given for. The
    field's input arguments are the positional arguments of the template and
    the mode is available as ``{mode}``.

    Example:
        >>> title = TemplateFieldType(viewing="<h1>{0}</h1>", editing='<input value="{0}">')
        >>> title.render("viewing", "Hello")
        '<h1>Hello</h1>'
        >>> sorted(title.supported_modes())
        ['editing', 'viewing']
    """

    def __init__(self, **templates: str) -> None:
        if not templates:
            raise ValueError("TemplateFieldType requires at least one template")
        self.templates = dict(templates)

    def supported_modes(self) -> frozenset[str]:
        return frozenset(self.templates)

    def renderer_for(self, mode: str) -> Callable[..., Any]:
        return partial(self._format, self.templates[mode])

    def dup(self) -> "TemplateFieldType":
        return type(self)(**self.templates)

    def __repr__(self) -> str:
        templates = ", ".join(f"{mode}={template!r}" for mode, template in self.templates.items())
        return f"{type(self).__name__}({templates})"

    @staticmethod
    def _format(template: str, mode: str, *args: Any) -> str:
        return template.format(*args, mode=mode)
