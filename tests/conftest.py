"""Shared test fixtures for edit_in_place tests."""

import pytest

from edit_in_place.core.builder import Builder
from edit_in_place.core.configuration import configure, reset_config
from tests.support import MiddlewareOne, MiddlewareThree, MiddlewareTwo


@pytest.fixture(autouse=True)
def global_config():
    """Give every test a fresh default global configuration."""
    config = reset_config()
    yield config
    reset_config()


@pytest.fixture
def defined_middlewares(global_config):
    """Define the test middlewares in the global configuration."""
    defined = [MiddlewareOne, MiddlewareTwo, MiddlewareThree]
    configure(lambda c: setattr(c, "defined_middlewares", list(defined)))
    return defined


@pytest.fixture
def builder(defined_middlewares) -> Builder:
    """Builder created after the test middlewares have been defined."""
    return Builder()
