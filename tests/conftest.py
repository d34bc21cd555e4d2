"""Test configuration and fixtures for modelql."""

import logging

import pytest

from modelql import ModelSchema, Store
from tests.schema import BLOG_SDL, USER_POST_SDL

logging.getLogger("modelql").setLevel(logging.DEBUG)


@pytest.fixture(scope="function")
def store():
    """A fresh, empty store for each test."""
    return Store()


@pytest.fixture(scope="function")
def blog_schema(store):
    return ModelSchema.from_sdl(BLOG_SDL, store=store)


@pytest.fixture(scope="function")
def user_post_schema(store):
    return ModelSchema.from_sdl(USER_POST_SDL, store=store)


# Import fixtures from fixtures module
from tests.fixtures import populated_blog  # noqa: E402,F401
