"""
Upload planner.

Decides between single-shot and session uploads and computes the commit
metadata. Pure: no file system or network access.
"""
from typing import Optional, Union

from .models import (
    CommitInfo,
    UploadPlan,
    UploadStrategy,
    WriteMode
)
from .strategies import FixedSizeChunkingStrategy, DEFAULT_CHUNK_SIZE
from ..exceptions import ValidationError


def build_destination_path(destination_folder: Optional[str], file_name: str) -> str:
    """
    Join a Dropbox folder and a file name with '/'.

    Host path conventions are ignored. The folder gets a leading '/'
    and loses any trailing '/'; an empty folder means the root.

    Example:
        >>> build_destination_path('/Reports/', 'a.txt')
        '/Reports/a.txt'
        >>> build_destination_path('', 'a.txt')
        '/a.txt'
    """
    folder = (destination_folder or '').strip().rstrip('/')
    if folder and not folder.startswith('/'):
        folder = f"/{folder}"
    return f"{folder}/{file_name}"


class UploadPlanner:
    """
    Chooses the upload strategy for a file.

    Files strictly smaller than the threshold are uploaded in one
    request; anything else, including a file exactly at the threshold,
    goes through an upload session.
    """

    def plan(
        self,
        file_size: int,
        chunk_threshold: int = DEFAULT_CHUNK_SIZE,
        write_mode: Union[WriteMode, str] = WriteMode.ADD,
        update_rev: Optional[str] = None,
        destination_path: str = ''
    ) -> UploadPlan:
        """
        Build an upload plan.

        Args:
            file_size: Size of the local file in bytes
            chunk_threshold: Threshold and window size in bytes
            write_mode: Write mode
            update_rev: Revision required for UPDATE
            destination_path: Full Dropbox path of the file

        Returns:
            UploadPlan

        Raises:
            ValidationError: If UPDATE has no revision or the threshold
                is not positive
        """
        try:
            mode = WriteMode.parse(write_mode)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if mode is WriteMode.UPDATE and not update_rev:
            raise ValidationError("update_rev required")
        if chunk_threshold <= 0:
            raise ValidationError("chunk size must be positive")

        commit = CommitInfo(
            path=destination_path,
            mode=mode,
            rev=update_rev if mode is WriteMode.UPDATE else None
        )

        if file_size < chunk_threshold:
            return UploadPlan(
                strategy=UploadStrategy.SINGLE_SHOT,
                commit=commit,
                file_size=file_size,
                chunk_size=chunk_threshold
            )

        chunks = FixedSizeChunkingStrategy(chunk_threshold).calculate_chunks(file_size)
        return UploadPlan(
            strategy=UploadStrategy.CHUNKED,
            commit=commit,
            file_size=file_size,
            chunk_size=chunk_threshold,
            chunks=tuple(chunks)
        )
