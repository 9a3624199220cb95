"""
Upload module for Dropbox file uploads.

Small files go up in one request; large files go through an upload
session (start -> append* -> finish) fed from numbered part files.
"""
from .facade import UploadFacade
from .orchestrator import UploadOrchestrator
from .planner import UploadPlanner, build_destination_path
from .models import (
    WriteMode,
    UploadStrategy,
    SessionState,
    CommitInfo,
    UploadSessionCursor,
    ChunkInfo,
    UploadRequest,
    UploadPlan,
    UploadResult,
    UploadProgress
)
from .protocols import UploadServiceProtocol, FileReaderProtocol
from .strategies import FixedSizeChunkingStrategy, DEFAULT_CHUNK_SIZE

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadOrchestrator',
    'UploadPlanner',
    'build_destination_path',

    # Models
    'WriteMode',
    'UploadStrategy',
    'SessionState',
    'CommitInfo',
    'UploadSessionCursor',
    'ChunkInfo',
    'UploadRequest',
    'UploadPlan',
    'UploadResult',
    'UploadProgress',

    # Protocols
    'UploadServiceProtocol',
    'FileReaderProtocol',

    # Strategies
    'FixedSizeChunkingStrategy',
    'DEFAULT_CHUNK_SIZE',
]
