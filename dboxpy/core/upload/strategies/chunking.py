"""
Chunking strategies for file uploads.

Implements Strategy Pattern for different chunking algorithms.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ChunkInfo

# 150 MB, the largest body Dropbox accepts per request
DEFAULT_CHUNK_SIZE = 157_286_400


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def calculate_chunks(self, file_size: int) -> List[ChunkInfo]:
        """Calculate chunk windows."""
        pass


class FixedSizeChunkingStrategy(BaseChunkingStrategy):
    """
    Fixed-size chunking strategy.

    Every window is `chunk_size` bytes except the last, which holds
    the remainder. Each window carries its own index so part files are
    named from the plan, not from read offsets.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of each chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def calculate_chunks(self, file_size: int) -> List[ChunkInfo]:
        """
        Calculate fixed-size chunk windows.

        Args:
            file_size: Total file size in bytes

        Returns:
            List of ChunkInfo, ceil(file_size / chunk_size) entries
        """
        if file_size == 0:
            return []

        chunks = []
        position = 0

        while position < file_size:
            end = min(position + self.chunk_size, file_size)
            chunks.append(ChunkInfo(index=len(chunks), start=position, end=end))
            position = end

        return chunks
