"""Name-keyed registrars for field types and middlewares.

A registrar stores objects under identifier names. Names are unique within
a registrar and registrations are permanent: there is no API to overwrite or
remove an entry. The only way to obtain an independently mutable registrar is
to duplicate an existing one with ``dup()``.

The registrar supports:
- Registration of single objects and atomic registration of whole mappings
- Lookup by name (returning None when nothing is registered)
- Snapshots of all registrations that can be modified safely
- Deep duplication

Subclasses restrict what may be registered by extending
``validate_registration``:
- FieldTypeRegistrar only accepts FieldType instances and subclasses
- MiddlewareRegistrar only accepts valid middlewares
"""

import copy
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from edit_in_place.core.exceptions import (
    DuplicateFieldTypeRegistrationError,
    DuplicateRegistrationError,
    InvalidFieldTypeError,
    InvalidFieldTypeNameError,
    InvalidMiddlewareError,
    InvalidRegistrationNameError,
)
from edit_in_place.core.field_type import FieldType
from edit_in_place.core.middleware import is_middleware

logger = logging.getLogger(__name__)


def is_registration_name(name: Any) -> bool:
    """Return whether the given object can be used as a registration name.

    Args:
        name: Candidate name

    Returns:
        True if name is a string that is a valid Python identifier

    Example:
        >>> is_registration_name("rich_text")
        True
        >>> is_registration_name("rich text")
        False
    """
    return isinstance(name, str) and name.isidentifier()


def duplicate(obj: Any) -> Any:
    """Return a deep copy of obj, or obj itself when it is a class."""
    return obj if isinstance(obj, type) else copy.deepcopy(obj)


class Registrar:
    """Stores a list of objects registered with identifier names.

    The base class makes no attempt to validate the objects registered. If
    such validation is required, subclass Registrar and extend
    ``validate_registration``.

    Attributes:
        duplicate_error: Exception class raised for duplicate names
        invalid_name_error: Exception class raised for invalid names

    Example:
        >>> registrar = Registrar()
        >>> registrar.register("answer", 42)
        >>> registrar.find("answer")
        42
        >>> registrar.find("question") is None
        True
    """

    duplicate_error: type[DuplicateRegistrationError] = DuplicateRegistrationError
    invalid_name_error: type[InvalidRegistrationNameError] = InvalidRegistrationNameError

    def __init__(self) -> None:
        self._registrations: dict[str, Any] = {}

    def __contains__(self, name: object) -> bool:
        return is_registration_name(name) and name in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._registrations))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._registrations)!r})"

    def dup(self) -> "Registrar":
        """Create a deep copy of this registrar that can be safely modified.

        Returns:
            A new registrar of the same class holding copies of all entries
            (classes are shared, not copied)
        """
        registrar = type(self)()
        registrar.register_all(self.all())
        return registrar

    def register(self, name: str, obj: Any) -> None:
        """Register the given object with the given name.

        Args:
            name: Identifier with which to associate the object
            obj: Object to register

        Raises:
            InvalidRegistrationNameError: If name is not an identifier string
            DuplicateRegistrationError: If name is already registered
        """
        self.validate_registration(name, obj)
        self._registrations[name] = obj
        logger.debug("Registered %r in %s", name, type(self).__name__)

    def register_all(self, objects: Mapping[str, Any]) -> None:
        """Register every name and object of the given mapping.

        All entries are validated before any of them is registered, so a
        single invalid entry leaves the registrar unchanged.

        Args:
            objects: Mapping of names to objects

        Raises:
            EditInPlaceError: The first validation error encountered
        """
        for name, obj in objects.items():
            self.validate_registration(name, obj)
        for name, obj in objects.items():
            self.register(name, obj)

    def find(self, name: Any) -> Any | None:
        """Find the object registered with the given name.

        Args:
            name: Name to search for; any object that is not a registration
                  name is never registered

        Returns:
            The registered object, or None if nothing is registered under name
        """
        if not is_registration_name(name):
            return None
        return self._registrations.get(name)

    def all(self) -> dict[str, Any]:
        """Get all registrations.

        The returned dictionary is a deep copy of the internal one and can be
        modified without affecting the registrar. Registered classes are
        returned by reference.

        Returns:
            Dictionary mapping names to (copies of) registered objects
        """
        return {name: duplicate(obj) for name, obj in self._registrations.items()}

    def names(self) -> list[str]:
        """Return the registered names in registration order."""
        return list(self._registrations)

    def validate_registration(self, name: Any, obj: Any) -> None:
        """Ensure that the given registration is valid.

        By default a registration is valid if its name is an identifier
        string that has not been registered yet. Subclasses may extend this
        method to validate the object; they must call the base implementation.

        Args:
            name: Name to validate
            obj: Object to validate (unused by the base implementation)

        Raises:
            InvalidRegistrationNameError: If name is not an identifier string
            DuplicateRegistrationError: If name is already registered
        """
        if not is_registration_name(name):
            raise self.invalid_name_error(name)
        if name in self._registrations:
            raise self.duplicate_error(name)


class FieldTypeRegistrar(Registrar):
    """Registrar that only stores FieldType instances and FieldType subclasses."""

    duplicate_error = DuplicateFieldTypeRegistrationError
    invalid_name_error = InvalidFieldTypeNameError

    def validate_registration(self, name: Any, obj: Any) -> None:
        super().validate_registration(name, obj)
        if isinstance(obj, type):
            valid = issubclass(obj, FieldType)
        else:
            valid = isinstance(obj, FieldType)
        if not valid:
            raise InvalidFieldTypeError(obj, name=name)


class MiddlewareRegistrar(Registrar):
    """Registrar that only stores middlewares (classes or callable instances)."""

    def validate_registration(self, name: Any, obj: Any) -> None:
        super().validate_registration(name, obj)
        if not is_middleware(obj):
            raise InvalidMiddlewareError(obj, name=name)
