"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from folderconfig.api import deps
from folderconfig.main import app


@pytest.fixture
def client(directory):
    """TestClient backed by the in-memory directory. Startup hooks are not run."""
    app.dependency_overrides[deps.get_directory_service] = lambda: directory
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def override_directory():
    """Install an arbitrary object (usually a mock) as the directory service."""

    def install(service):
        app.dependency_overrides[deps.get_directory_service] = lambda: service
        return TestClient(app, raise_server_exceptions=False)

    yield install
    app.dependency_overrides.clear()
