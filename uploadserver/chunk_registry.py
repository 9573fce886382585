"""In-memory registry: file name -> chunk descriptors in arrival order."""

import threading
from typing import Dict, List

from common.logging_config import get_logger
from common.types import ChunkDescriptor

logger = get_logger(__name__)


class ChunkRegistry:
    """
    Tracks which chunks have been staged for each uploaded file name.

    A single lock covers the whole map, so every append is serialized
    against every other one regardless of file name. Entries are only ever
    appended; duplicate indices produce separate descriptors.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._files: Dict[str, List[ChunkDescriptor]] = {}
        self._lock = threading.Lock()

    def record(self, file_id: str, index: int, location: str) -> ChunkDescriptor:
        """
        Record a chunk whose bytes have already been written to disk.

        Args:
            file_id: Uploaded file name
            index: Chunk index
            location: Path the chunk was staged at

        Returns:
            The ChunkDescriptor that was appended
        """
        descriptor = ChunkDescriptor(index=index, location=location)

        with self._lock:
            chunks = self._files.setdefault(file_id, [])
            chunks.append(descriptor)
            count = len(chunks)

        logger.debug(f"Recorded chunk {index} for {file_id} ({count} chunks received)")
        return descriptor

    def get_chunks(self, file_id: str) -> List[ChunkDescriptor]:
        """
        Get a copy of the descriptors recorded for a file, in arrival order.

        Returns:
            List of ChunkDescriptor (empty if the file was never seen)
        """
        with self._lock:
            return list(self._files.get(file_id, []))

    def chunk_count(self, file_id: str) -> int:
        """Get number of chunks recorded for a file."""
        with self._lock:
            return len(self._files.get(file_id, []))

    def file_count(self) -> int:
        """Get number of distinct file names seen."""
        with self._lock:
            return len(self._files)
