"""Shared fixtures for core unit tests"""

from datetime import datetime

import pytest

from mdsite.config import Settings
from mdsite.core.resource.base import Resource
from mdsite.core.resource.model import Model
from mdsite.core.resource.origin import GeneratedOrigin
from mdsite.core.site import Site


BUILD_TIME = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="site")
def site_fixture(settings, tmp_path):
    """A Site rooted in tmp_path with a fixed build time."""
    return Site(settings, root=tmp_path, time=BUILD_TIME)


@pytest.fixture(name="make_resource")
def make_resource_fixture(site):
    """Factory for unread resources backed by an in-memory origin."""
    def _make(relative_path: str, data: dict = None, content: str = None,
              collection: str = "posts", original_path: str = None) -> Resource:
        origin = GeneratedOrigin(relative_path, collection, data=data, content=content,
                                 original_path=original_path)
        return Resource(Model(origin, site))
    return _make


@pytest.fixture(name="read_resource")
def read_resource_fixture(make_resource):
    """Factory for resources that have already been read."""
    def _read(*args, **kwargs) -> Resource:
        return make_resource(*args, **kwargs).read()
    return _read
