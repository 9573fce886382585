"""FastAPI dependencies handing the app's registry and store to handlers."""

from fastapi import Request

from uploadserver.chunk_registry import ChunkRegistry
from uploadserver.chunk_storage import ChunkStore


def get_chunk_registry(request: Request) -> ChunkRegistry:
    """Get the registry owned by the running application."""
    return request.app.state.chunk_registry


def get_chunk_store(request: Request) -> ChunkStore:
    """Get the chunk store owned by the running application."""
    return request.app.state.chunk_store
