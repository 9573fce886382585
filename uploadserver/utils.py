"""Utility helper functions for the upload server."""

import re
from pathlib import Path

from uploadserver.exceptions import InvalidChunkRequestError

MAX_CHUNK_INDEX = 2 ** 63 - 1

_INDEX_PATTERN = re.compile(r'\+?[0-9]{1,19}')


def parse_chunk_index(value: str) -> int:
    """
    Parse the decimal chunk index sent with an upload.

    Args:
        value: Raw form value (e.g., "0", "17", "+3")

    Returns:
        Chunk index between 0 and MAX_CHUNK_INDEX

    Raises:
        InvalidChunkRequestError: If the value is missing, not a decimal integer, or out of range
    """
    if value is None:
        raise InvalidChunkRequestError("Missing chunk index")

    if not _INDEX_PATTERN.fullmatch(value):
        raise InvalidChunkRequestError(f"Invalid chunk index: {value[:32]!r}")

    index = int(value)
    if index > MAX_CHUNK_INDEX:
        raise InvalidChunkRequestError(f"Chunk index out of range: {value!r}")

    return index


def sanitize_file_name(filename: str) -> str:
    """
    Reduce an uploaded file name to its final path component.

    The result is both the registry key and the base of the staging file
    name, so uploads that differ only in directory parts are one file.

    Args:
        filename: File name declared by the uploader

    Returns:
        Final path component of the name

    Raises:
        InvalidChunkRequestError: If nothing usable is left
    """
    name = Path(filename).name if filename else ''
    if name in ('', '.', '..'):
        raise InvalidChunkRequestError("Chunk payload has no usable filename")
    return name
