"""Chunk upload API routes."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from common.logging_config import get_logger
from uploadserver.chunk_registry import ChunkRegistry
from uploadserver.chunk_storage import ChunkStore
from uploadserver.dependencies import get_chunk_registry, get_chunk_store
from uploadserver.exceptions import InvalidChunkRequestError
from uploadserver.schemas.common import ErrorResponse
from uploadserver.schemas.upload import UploadChunkResponse
from uploadserver.utils import parse_chunk_index, sanitize_file_name

logger = get_logger(__name__)

router = APIRouter(tags=["Chunks"])


@router.post(
    "/upload_chunk",
    response_model=UploadChunkResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def upload_chunk(
    file: Optional[UploadFile] = File(None),
    index: Optional[str] = Form(None),
    registry: ChunkRegistry = Depends(get_chunk_registry),
    store: ChunkStore = Depends(get_chunk_store)
):
    """
    Stage one chunk of a file and record it.

    Declared as a plain function so each upload runs on its own worker
    thread and the blocking copy does not stall the event loop.

    Parameters:
        - file: Chunk payload (multipart/form-data); the last component of its
          filename names the file
        - index: Decimal chunk index

    Returns:
        - message: Confirmation naming the stored chunk index
        - file_name: File name the chunk was recorded under
        - index: Chunk index
        - size: Bytes written

    Raises:
        - 400: Missing payload, missing filename, or invalid index
        - 405: Method other than POST
        - 500: Chunk could not be written to the staging directory
    """
    if file is None:
        raise InvalidChunkRequestError("Missing chunk payload field 'file'")

    file_name = sanitize_file_name(file.filename)
    chunk_index = parse_chunk_index(index)

    stored = store.write_chunk(file_name, chunk_index, file.file)
    registry.record(file_name, chunk_index, stored.location)

    logger.info(f"Chunk {chunk_index} of {file_name} stored ({stored.size} bytes)")

    return UploadChunkResponse(
        message=f"Chunk {chunk_index} uploaded successfully",
        file_name=file_name,
        index=chunk_index,
        size=stored.size,
    )
