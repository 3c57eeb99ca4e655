"""Fixtures backed by a real SQLAlchemy engine (in-memory SQLite)."""

import pytest
from fastapi.testclient import TestClient

from bos.config import Settings
from bos.infrastructure.bootstrap import Container, build_container
from bos.infrastructure.web.app import create_app
from tests.infrastructure.seed import seed_catalog


@pytest.fixture
def container() -> Container:
    container = build_container(Settings(database_url="sqlite://"))
    container.init_schema()
    seed_catalog(container)
    yield container
    container.engine.dispose()


@pytest.fixture
def client(container: Container) -> TestClient:
    return TestClient(create_app(container))
