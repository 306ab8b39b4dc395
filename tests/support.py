"""Field types, middlewares and Hypothesis strategies shared by the tests."""

import threading

from hypothesis import strategies as st

from edit_in_place.core.field_options import Mode
from edit_in_place.core.field_type import FieldType


class TestFieldType(FieldType):
    """Field type rendering its construction argument and its first input."""

    __test__ = False

    def __init__(self, init_arg: str = "default") -> None:
        self.init_arg = init_arg

    def render_viewing(self, mode, first):
        return f"Init: {self.init_arg}, After: {first}"

    def render_editing(self, mode, first):
        return f"EDITING: {self.render_viewing(mode, first)}"


class ComplexTestFieldType(FieldType):
    """Field type surrounding its data with a separator."""

    def render_viewing(self, mode, data, separator):
        return f"{separator} {data} {separator}"

    def render_editing(self, mode, data, separator):
        return f"||{separator} |{data}| {separator}||"


class ViewingOnlyFieldType(FieldType):
    """Field type that can only be viewed."""

    def supported_modes(self):
        return frozenset({"viewing"})

    def render_viewing(self, mode, text):
        return text


class MissingRendererFieldType(FieldType):
    """Field type supporting a mode it has no renderer for."""

    def supported_modes(self):
        return frozenset({"viewing", "preview"})

    def render_viewing(self, mode, text):
        return text


class MiddlewareOne:
    """Appends *ONE* to the first input."""

    def __call__(self, mode, first, *rest):
        return [mode, f"{first}*ONE*", *rest]


class MiddlewareTwo:
    """Appends !TWO! to the first input."""

    def __call__(self, mode, first, *rest):
        return [mode, f"{first}!TWO!", *rest]


class MiddlewareThree:
    """Appends $THREE$ to the first input."""

    def __call__(self, mode, first, *rest):
        return (mode, f"{first}$THREE$", *rest)


class EditingMiddleware:
    """Switches the render call to the editing mode."""

    def __call__(self, mode, *rest):
        return ["editing", *rest]


class EditingModeMiddleware:
    """Switches the render call to Mode.EDITING."""

    def __call__(self, mode, *rest):
        return [Mode.EDITING, *rest]


class LockingMiddleware:
    """Passes its input through while holding a lock."""

    def __init__(self):
        self.lock = threading.Lock()

    def __call__(self, mode, *rest):
        with self.lock:
            return [mode, *rest]


locking_middleware = LockingMiddleware()


class NoneMiddleware:
    """Misbehaving middleware that returns nothing."""

    def __call__(self, *args):
        return None


def append_bang(mode, first, *rest):
    """Plain function middleware."""
    return [mode, f"{first}!", *rest]


# Registration names: Python identifiers
registration_names = st.from_regex(r"[a-z_][a-z0-9_]{0,15}", fullmatch=True)

# Strings that can never be registration names
invalid_registration_names = st.one_of(
    st.just(""),
    st.from_regex(r"[0-9][a-z0-9_]{0,10}", fullmatch=True),
    st.from_regex(r"[a-z]{1,5}[ \-.][a-z]{1,5}", fullmatch=True),
)

middleware_classes = st.sampled_from([MiddlewareOne, MiddlewareTwo, MiddlewareThree])
