"""Upload models."""
from .upload_models import (
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

__all__ = [
    'WriteMode',
    'UploadStrategy',
    'SessionState',
    'CommitInfo',
    'UploadSessionCursor',
    'ChunkInfo',
    'UploadRequest',
    'UploadPlan',
    'UploadResult',
    'UploadProgress'
]
