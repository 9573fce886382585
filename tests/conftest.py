"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from uploadserver.chunk_registry import ChunkRegistry
from uploadserver.chunk_storage import ChunkStore
from uploadserver.main import create_app


@pytest.fixture
def staging_dir(tmp_path):
    """
    Staging directory path that does not exist yet.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to a not-yet-created staging directory
    """
    return tmp_path / 'temp'


@pytest.fixture
def chunk_store(staging_dir):
    """Create a chunk store writing into the temporary staging directory."""
    return ChunkStore(staging_dir)


@pytest.fixture
def chunk_registry():
    """Create an empty chunk registry."""
    return ChunkRegistry()


@pytest.fixture
def app(staging_dir):
    """Create an application with its own registry and staging directory."""
    return create_app(staging_dir=staging_dir)


@pytest.fixture
def client(app):
    """Create FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def registry(app):
    """Registry owned by the test application."""
    return app.state.chunk_registry
