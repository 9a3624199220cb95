"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, Dict, Any
from pathlib import Path

from .models import CommitInfo, UploadSessionCursor


class UploadServiceProtocol(Protocol):
    """
    Remote operations the orchestrator drives.

    Implemented by AsyncAPIClient; tests substitute AsyncMock objects.
    """

    async def upload(self, commit: CommitInfo, data: bytes) -> Dict[str, Any]:
        """Upload a whole file, returning file metadata."""
        ...

    async def upload_session_start(self, data: bytes) -> UploadSessionCursor:
        """Open a session with the first chunk, returning its cursor."""
        ...

    async def upload_session_append(
        self,
        cursor: UploadSessionCursor,
        data: bytes
    ) -> UploadSessionCursor:
        """Append a chunk, returning the advanced cursor."""
        ...

    async def upload_session_finish(
        self,
        cursor: UploadSessionCursor,
        commit: CommitInfo,
        data: bytes = b''
    ) -> Dict[str, Any]:
        """Commit the session, returning file metadata."""
        ...


class FileReaderProtocol(Protocol):
    """Protocol for file reading operations."""

    async def read_file(self, file_path: Path) -> bytes:
        """
        Read an entire file.

        Raises:
            OSError: If the file cannot be read
        """
        ...
