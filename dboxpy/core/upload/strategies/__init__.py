"""Upload strategies module."""
from .chunking import (
    BaseChunkingStrategy,
    FixedSizeChunkingStrategy,
    DEFAULT_CHUNK_SIZE
)

__all__ = [
    'BaseChunkingStrategy',
    'FixedSizeChunkingStrategy',
    'DEFAULT_CHUNK_SIZE',
]
