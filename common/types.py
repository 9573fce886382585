"""Shared data type definitions (ChunkDescriptor, StoredChunk)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkDescriptor:
    """
    Recorded fact that a chunk with a given index was staged at a location.
    """
    index: int
    location: str


@dataclass(frozen=True)
class StoredChunk:
    """
    Result of staging a chunk's bytes on disk.
    """
    location: str
    size: int
