"""
Upload orchestrator.

Drives the remote calls for an upload plan.
Follows Dependency Inversion Principle - depends on abstractions, not concretions.
"""
import time
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .protocols import UploadServiceProtocol, FileReaderProtocol
from .models import (
    SessionState,
    UploadPlan,
    UploadProgress,
    UploadRequest,
    UploadResult,
    UploadStrategy
)
from .services import AsyncFileReader, PartFileWriter
from ..exceptions import DropboxError, UploadError

logger = logging.getLogger('dboxpy.upload.orchestrator')

ProgressCallback = Callable[[UploadProgress], None]


class UploadOrchestrator:
    """
    Executes an UploadPlan against the Dropbox API.

    Single shot: NOT_STARTED -> DONE.
    Chunked: NOT_STARTED -> SESSION_STARTED -> APPENDING(k) -> FINISHING -> DONE.
    Any failure moves to FAILED. Session calls are strictly sequential
    because each append needs the cursor produced by the previous call.
    Nothing is retried.

    The orchestrator holds no per-upload state, so one instance can
    serve concurrent uploads.
    """

    def __init__(
        self,
        api_client: UploadServiceProtocol,
        file_reader: Optional[FileReaderProtocol] = None,
        work_dir: Optional[Union[str, Path]] = None
    ):
        """
        Initialize upload orchestrator.

        Args:
            api_client: Remote upload operations
            file_reader: File reader implementation
            work_dir: Parent directory for temporary part files
        """
        self._api = api_client
        self._file_reader = file_reader or AsyncFileReader()
        self._work_dir = work_dir

    async def execute(
        self,
        request: UploadRequest,
        plan: UploadPlan,
        progress_callback: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Run the plan for a request.

        Args:
            request: Validated upload request
            plan: Plan produced by UploadPlanner
            progress_callback: Called after every state transition

        Returns:
            UploadResult built from the remote file metadata

        Raises:
            TransportError: If a Dropbox call fails
            UploadError: If a local read or write fails
        """
        if plan.strategy is UploadStrategy.CHUNKED:
            return await self._execute_chunked(request.file_path, plan, progress_callback)
        return await self._execute_single(request.file_path, plan, progress_callback)

    async def _execute_single(
        self,
        path: Path,
        plan: UploadPlan,
        progress_callback: Optional[ProgressCallback]
    ) -> UploadResult:
        progress = UploadProgress(total_chunks=1, total_bytes=plan.file_size)
        start = time.time()
        try:
            data = await self._file_reader.read_file(path)
            metadata = await self._api.upload(plan.commit, data)
        except DropboxError:
            self._notify(progress, SessionState.FAILED, progress_callback)
            raise
        except OSError as e:
            self._notify(progress, SessionState.FAILED, progress_callback)
            raise UploadError(f"Could not read {path}: {e}") from e

        progress.uploaded_chunks = 1
        progress.uploaded_bytes = plan.file_size
        self._notify(progress, SessionState.DONE, progress_callback)
        logger.info(f"Uploaded {path.name} in one request ({time.time() - start:.2f}s)")
        return self._to_result(metadata, UploadStrategy.SINGLE_SHOT, 1)

    async def _execute_chunked(
        self,
        path: Path,
        plan: UploadPlan,
        progress_callback: Optional[ProgressCallback]
    ) -> UploadResult:
        total = len(plan.chunks)
        chunk_mb = plan.chunk_size / (1024 * 1024)
        progress = UploadProgress(total_chunks=total, total_bytes=plan.file_size)
        writer = PartFileWriter(self._work_dir)
        state = SessionState.NOT_STARTED
        start = time.time()

        logger.info(f"{path.name} is a big file, uploading it in {total} chunks of {chunk_mb:.0f} MB")

        try:
            parts = await writer.split(path, plan.chunks)

            first = plan.chunks[0]
            logger.info(f"Uploading part #1 ({first.size} bytes)...")
            data = await self._file_reader.read_file(parts[0])
            cursor = await self._api.upload_session_start(data)
            del data

            progress.uploaded_chunks = 1
            progress.uploaded_bytes = first.size
            state = SessionState.SESSION_STARTED
            self._notify(progress, state, progress_callback)

            for chunk, part in zip(plan.chunks[1:], parts[1:]):
                state = SessionState.APPENDING
                logger.info(f"Uploading part #{chunk.index + 1} ({chunk.size} bytes)...")
                data = await self._file_reader.read_file(part)
                next_cursor = await self._api.upload_session_append(cursor, data)
                del data
                if next_cursor is not None:
                    cursor = next_cursor

                progress.uploaded_chunks = chunk.index + 1
                progress.uploaded_bytes += chunk.size
                self._notify(progress, state, progress_callback)

            state = SessionState.FINISHING
            self._notify(progress, state, progress_callback)
            metadata = await self._api.upload_session_finish(cursor, plan.commit)
        except DropboxError:
            logger.error(f"Upload session failed in state {state.name}")
            self._notify(progress, SessionState.FAILED, progress_callback)
            raise
        except OSError as e:
            logger.error(f"Upload session failed in state {state.name}: {e}")
            self._notify(progress, SessionState.FAILED, progress_callback)
            raise UploadError(f"Could not prepare chunks of {path}: {e}") from e
        finally:
            writer.cleanup()
            logger.debug("Temporary part files removed")

        self._notify(progress, SessionState.DONE, progress_callback)
        logger.info(f"Upload session committed: {total} chunks in {time.time() - start:.2f}s")
        return self._to_result(metadata, UploadStrategy.CHUNKED, total)

    @staticmethod
    def _notify(
        progress: UploadProgress,
        state: SessionState,
        progress_callback: Optional[ProgressCallback]
    ) -> None:
        progress.state = state
        if progress_callback:
            progress_callback(progress)

    @staticmethod
    def _to_result(
        metadata: Optional[Dict[str, Any]],
        strategy: UploadStrategy,
        chunk_count: int
    ) -> UploadResult:
        if not metadata:
            raise UploadError("Dropbox returned no file metadata")
        return UploadResult.from_metadata(metadata, strategy, chunk_count)
