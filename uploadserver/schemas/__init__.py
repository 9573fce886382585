"""Pydantic schemas for API requests and responses."""

from uploadserver.schemas.upload import UploadChunkResponse
from uploadserver.schemas.common import ErrorResponse

__all__ = [
    "UploadChunkResponse",
    "ErrorResponse"
]
