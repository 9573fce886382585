"""Entry point for the chunk upload server."""

import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from uploadserver.chunk_registry import ChunkRegistry
from uploadserver.chunk_storage import ChunkStore
from uploadserver.config import LISTEN_HOST, LISTEN_PORT, STAGING_DIRECTORY
from uploadserver.exceptions import (
    UploadServerException,
    InvalidChunkRequestError,
    ChunkStorageError
)
from uploadserver.routes.upload_routes import router as upload_router

logger = setup_logging('uploadserver')


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Log startup and shutdown; chunks and registry are left as they are.
    """
    store: ChunkStore = app.state.chunk_store
    logger.info(f"Upload server starting up, staging chunks in {store.staging_dir}")
    yield
    logger.info(
        f"Upload server shutting down with {app.state.chunk_registry.file_count()} files tracked"
    )


async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


async def invalid_chunk_request_handler(request: Request, exc: InvalidChunkRequestError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid chunk request: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "INVALID_CHUNK_REQUEST"}
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    fields = ", ".join(
        ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        for error in exc.errors()
    )
    logger.warning(
        f"Malformed upload form: invalid fields {fields} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"Malformed upload form: invalid fields {fields}", "code": "INVALID_CHUNK_REQUEST"}
    )


async def chunk_storage_error_handler(request: Request, exc: ChunkStorageError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Chunk storage error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "CHUNK_STORAGE_FAILED"}
    )


async def upload_server_exception_handler(request: Request, exc: UploadServerException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Upload server exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": "INTERNAL_ERROR"}
    )


def create_app(staging_dir: Optional[Union[str, Path]] = None) -> FastAPI:
    """
    Build the application with its own registry and chunk store.

    Args:
        staging_dir: Where chunks are written (default: configured STAGING_DIRECTORY)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Chunk Upload Server",
        description="Accepts file chunks and tracks which chunks have arrived",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.chunk_registry = ChunkRegistry()
    app.state.chunk_store = ChunkStore(staging_dir or STAGING_DIRECTORY)

    app.middleware("http")(log_requests)

    app.add_exception_handler(InvalidChunkRequestError, invalid_chunk_request_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ChunkStorageError, chunk_storage_error_handler)
    app.add_exception_handler(UploadServerException, upload_server_exception_handler)

    app.include_router(upload_router)

    @app.get("/")
    async def root():
        """
        Root endpoint.
        """
        return {"message": "Chunk Upload Server API", "status": "running"}

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint.
        Returns 200 if service is alive.
        """
        return {"status": "healthy", "service": "uploadserver"}

    return app


app = create_app()


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    logger.info(f"Server starting on {LISTEN_HOST}:{LISTEN_PORT}")
    uvicorn.run(
        "uploadserver.main:app",
        host=LISTEN_HOST,
        port=LISTEN_PORT
    )


if __name__ == "__main__":
    main()
