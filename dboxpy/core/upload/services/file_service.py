"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Union
import logging
import aiofiles

from ...exceptions import ValidationError


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path, None]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            ValidationError: If no path is given, the file doesn't exist
                or the path is not a regular file
        """
        if not file_path:
            raise ValidationError("No file path specified for upload to Dropbox")

        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise ValidationError(f"Couldn't find file at path '{path}'")

        if not path.is_file():
            raise ValidationError(f"Path is not a file: {path}")

        file_size = path.stat().st_size

        return path, file_size


class AsyncFileReader:
    """
    Asynchronous file reader.

    Uses aiofiles for non-blocking I/O operations. Read errors
    propagate to the caller as OSError.
    """

    def __init__(self):
        """Initialize file reader."""
        self._logger = logging.getLogger('dboxpy.upload.file')

    async def read_file(self, file_path: Path) -> bytes:
        """
        Read entire file.

        Args:
            file_path: Path to the file

        Returns:
            File data
        """
        async with aiofiles.open(file_path, 'rb') as f:
            data = await f.read()
        self._logger.debug(f"Read {file_path} ({len(data)} bytes)")
        return data

