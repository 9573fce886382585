"""Stages uploaded chunk bytes on disk, one file per (file name, chunk index)."""

from pathlib import Path
from typing import BinaryIO, Union

from common.constants import CHUNK_NAME_SEPARATOR, COPY_PIECE_SIZE_BYTES
from common.logging_config import get_logger
from common.types import StoredChunk
from uploadserver.exceptions import ChunkStorageError

logger = get_logger(__name__)


class ChunkStore:
    """
    Writes chunk payloads into a single flat staging directory.

    Re-uploading the same (file name, index) pair overwrites the earlier
    bytes at the same path. Nothing here synchronizes concurrent writers.
    """

    def __init__(self, staging_dir: Union[str, Path], piece_size: int = COPY_PIECE_SIZE_BYTES):
        self.staging_dir = Path(staging_dir)
        self.piece_size = piece_size

    def ensure_staging_directory(self) -> None:
        """Ensure staging directory exists."""
        self.staging_dir.mkdir(parents=True, exist_ok=True)

    def get_chunk_path(self, file_id: str, index: int) -> Path:
        """
        Get staging path for a chunk.

        Only the final component of the uploaded name is used, so the
        staging directory stays flat whatever the client sends.

        Args:
            file_id: Uploaded file name
            index: Chunk index

        Returns:
            Path object for chunk file
        """
        name = Path(file_id).name
        return self.staging_dir / f"{name}{CHUNK_NAME_SEPARATOR}{index}"

    def write_chunk(self, file_id: str, index: int, stream: BinaryIO) -> StoredChunk:
        """
        Copy a chunk's byte stream to its staging path.

        Args:
            file_id: Uploaded file name
            index: Chunk index
            stream: Readable binary stream with the chunk payload

        Returns:
            StoredChunk with the path written and the number of bytes copied

        Raises:
            ChunkStorageError: If the directory or file cannot be created or the copy fails
        """
        filepath = self.get_chunk_path(file_id, index)
        written = 0

        try:
            self.ensure_staging_directory()
            with open(filepath, 'wb') as f:
                while True:
                    piece = stream.read(self.piece_size)
                    if not piece:
                        break
                    f.write(piece)
                    written += len(piece)
        except OSError as e:
            logger.error(f"Failed to stage chunk {index} of {file_id} at {filepath}: {e}")
            raise ChunkStorageError(f"Failed to store chunk {index}: {e}") from e

        logger.debug(f"Staged chunk {index} of {file_id}: {written} bytes at {filepath}")
        return StoredChunk(location=str(filepath), size=written)

    def read_chunk(self, file_id: str, index: int) -> bytes:
        """
        Read a staged chunk from disk.

        Raises:
            FileNotFoundError: If chunk does not exist
        """
        return self.get_chunk_path(file_id, index).read_bytes()

    def chunk_exists(self, file_id: str, index: int) -> bool:
        """Check if a chunk file is staged on disk."""
        return self.get_chunk_path(file_id, index).exists()
