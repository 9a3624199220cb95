"""
Part file service.

Materializes a chunk plan as numbered part files on disk and removes
them afterwards.
"""
import os
import logging
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Union

import aiofiles

from ..models import ChunkInfo

PART_PREFIX = 'part'

# Copy buffer; parts themselves can be 150 MB
COPY_BLOCK_SIZE = 4 * 1024 * 1024


def part_file_name(index: int, prefix: str = PART_PREFIX) -> str:
    """Return the part file name for a chunk index, e.g. part_00003."""
    return f"{prefix}_{index:05d}"


class PartFileWriter:
    """
    Splits a file into sequential part files.

    Every split gets its own private temporary directory, so concurrent
    uploads never share part files. `cleanup()` removes whatever was
    created, including the directory, and never raises.

    Example:
        >>> writer = PartFileWriter()
        >>> parts = await writer.split(path, plan.chunks)
        >>> try:
        ...     ...
        ... finally:
        ...     writer.cleanup()
    """

    def __init__(
        self,
        work_dir: Optional[Union[str, Path]] = None,
        prefix: str = PART_PREFIX
    ):
        """
        Initialize writer.

        Args:
            work_dir: Parent directory for the temporary part directory
                (system temp dir when None)
            prefix: Part file name prefix
        """
        self._work_dir = Path(work_dir) if work_dir else None
        self._prefix = prefix
        self._directory: Optional[Path] = None
        self._parts: List[Path] = []
        self._logger = logging.getLogger('dboxpy.upload.parts')

    @property
    def parts(self) -> List[Path]:
        """Part files created so far, in chunk order."""
        return list(self._parts)

    @property
    def directory(self) -> Optional[Path]:
        """Temporary directory holding the parts."""
        return self._directory

    async def split(self, file_path: Path, chunks: Sequence[ChunkInfo]) -> List[Path]:
        """
        Write one part file per chunk.

        Args:
            file_path: Source file
            chunks: Chunk windows in file order

        Returns:
            Part file paths in chunk order

        Raises:
            OSError: If reading or writing fails; parts written so far
                stay registered for cleanup
        """
        if self._work_dir is not None:
            self._work_dir.mkdir(parents=True, exist_ok=True)
        self._directory = Path(tempfile.mkdtemp(prefix='dboxpy-', dir=self._work_dir))

        async with aiofiles.open(file_path, 'rb') as source:
            for chunk in chunks:
                part = self._directory / part_file_name(chunk.index, self._prefix)
                self._parts.append(part)
                await source.seek(chunk.start)
                remaining = chunk.size
                async with aiofiles.open(part, 'wb') as target:
                    while remaining > 0:
                        block = await source.read(min(COPY_BLOCK_SIZE, remaining))
                        if not block:
                            raise OSError(
                                f"Unexpected end of file at byte {chunk.end - remaining} "
                                f"while writing {part.name}"
                            )
                        await target.write(block)
                        remaining -= len(block)
                self._logger.debug(f"Wrote {part.name} ({chunk.size} bytes)")

        return self.parts

    def cleanup(self) -> None:
        """Delete every part file and the temporary directory."""
        for part in self._parts:
            try:
                part.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                self._logger.warning(f"Could not delete part file {part}: {e}")
        self._parts.clear()

        if self._directory is not None:
            try:
                os.rmdir(self._directory)
            except OSError as e:
                self._logger.warning(f"Could not remove {self._directory}: {e}")
            self._directory = None
