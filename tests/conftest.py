"""Pytest fixtures for dboxpy tests."""
import pytest
from unittest.mock import AsyncMock, Mock

from dboxpy.core.upload.models import UploadSessionCursor


@pytest.fixture
def make_file(tmp_path):
    """Returns a factory writing a file of `size` bytes with a repeating pattern."""
    def _make(name="file.txt", size=16384):
        path = tmp_path / name
        pattern = bytes(range(256))
        data = (pattern * (size // 256 + 1))[:size]
        path.write_bytes(data)
        return path
    return _make


@pytest.fixture
def file_metadata():
    """Returns a factory for Dropbox FileMetadata JSON."""
    def _metadata(name="file.txt", rev="abc123", size=16384, folder=""):
        return {
            'name': name,
            'id': 'id:a4ayc_80_OEAAAAAAAAAXw',
            'rev': rev,
            'size': size,
            'path_lower': f"{folder}/{name}".lower(),
            'path_display': f"{folder}/{name}",
        }
    return _metadata


@pytest.fixture
def mock_api(file_metadata):
    """
    Returns a mock of the remote upload operations.

    Appends advance the cursor like the real client does.
    """
    api = Mock()
    api.upload = AsyncMock(return_value=file_metadata())
    api.upload_session_start = AsyncMock(
        side_effect=lambda data: UploadSessionCursor('session-1', len(data))
    )
    api.upload_session_append = AsyncMock(
        side_effect=lambda cursor, data: cursor.advance(len(data))
    )
    api.upload_session_finish = AsyncMock(return_value=file_metadata())
    return api
