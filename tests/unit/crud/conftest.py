"""Shared fixtures for crud unit tests"""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlmodel import Session, SQLModel

from mdsite.config import Settings
from mdsite.core.resource.base import Resource
from mdsite.core.resource.model import Model
from mdsite.core.resource.origin import GeneratedOrigin
from mdsite.core.site import Site
from mdsite.crud import models  # noqa: F401


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Fresh session per test; changes are not committed."""
    with Session(engine) as s:
        yield s


@pytest.fixture(name="site")
def site_fixture(tmp_path):
    return Site(Settings(), root=tmp_path, time=datetime(2024, 1, 1))


@pytest.fixture(name="resource")
def resource_fixture(site):
    """A read and transformed post."""
    origin = GeneratedOrigin("_posts/2023-5-1-hello.md", "posts", {"tags": ["a", "b"]}, "Hello")
    resource = Resource(Model(origin, site)).read()
    resource.transform()
    return resource
