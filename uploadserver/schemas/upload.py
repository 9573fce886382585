"""Pydantic schemas for chunk upload endpoints."""

from pydantic import BaseModel


class UploadChunkResponse(BaseModel):
    """Response model for a staged chunk."""
    message: str
    file_name: str
    index: int
    size: int
