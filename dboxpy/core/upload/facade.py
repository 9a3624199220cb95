"""
Upload facade.

Provides a simplified interface for file uploads.
Follows Facade Pattern - hides complexity of the upload subsystem.
"""
from pathlib import Path
from typing import Optional, Union
import logging

from .models import UploadPlan, UploadRequest, UploadResult, WriteMode
from .orchestrator import UploadOrchestrator, ProgressCallback
from .planner import UploadPlanner, build_destination_path
from .protocols import UploadServiceProtocol
from .services import FileValidator
from .strategies import DEFAULT_CHUNK_SIZE
from ..exceptions import IntegrityError


class UploadFacade:
    """
    Simplified interface for Dropbox file uploads.

    Validation and planning happen in `prepare()` without touching the
    network; `execute()` runs the plan and checks that Dropbox stored
    the file under the local base name.

    Example:
        >>> from dboxpy.core.upload import UploadFacade
        >>> uploader = UploadFacade(api_client)
        >>> result = await uploader.upload("build.zip", "/Builds")
        >>> print(result.rev)
    """

    def __init__(
        self,
        api_client: UploadServiceProtocol,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        work_dir: Optional[Union[str, Path]] = None,
        planner: Optional[UploadPlanner] = None
    ):
        """
        Initialize upload facade.

        Args:
            api_client: Dropbox API client
            chunk_size: Threshold and window size for session uploads
            work_dir: Parent directory for temporary part files
            planner: Optional custom planner
        """
        self._logger = logging.getLogger('dboxpy.upload')
        self._chunk_size = chunk_size
        self._validator = FileValidator()
        self._planner = planner or UploadPlanner()
        self._orchestrator = UploadOrchestrator(api_client, work_dir=work_dir)

    def prepare(self, request: UploadRequest) -> UploadPlan:
        """
        Validate a request and plan it.

        Raises:
            ValidationError: If the file is missing or the write mode
                lacks its revision
        """
        path, file_size = self._validator.validate(request.file_path)
        destination = build_destination_path(request.destination_folder, path.name)
        plan = self._planner.plan(
            file_size,
            self._chunk_size,
            request.write_mode,
            request.update_rev,
            destination
        )
        self._logger.debug(
            f"Planned {plan.strategy.name} upload of {path.name} "
            f"({file_size} bytes) to {destination}"
        )
        return plan

    async def execute(
        self,
        request: UploadRequest,
        plan: UploadPlan,
        progress_callback: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Run a prepared plan and verify the remote name.

        Raises:
            TransportError: If a Dropbox call fails
            IntegrityError: If Dropbox stored the file under another name
        """
        self._logger.info(f"Starting upload of {request.file_path} to Dropbox")
        result = await self._orchestrator.execute(request, plan, progress_callback)

        if result.name != request.file_name:
            self._logger.error(
                f"Failed to upload {request.file_name}: Dropbox stored '{result.name}'"
            )
            raise IntegrityError(request.file_name, result.name)

        self._logger.info(f"Successfully uploaded file to Dropbox at {plan.commit.path}")
        return result

    async def upload(
        self,
        file_path: Union[str, Path],
        destination_folder: str = '',
        write_mode: Union[WriteMode, str] = WriteMode.ADD,
        update_rev: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> UploadResult:
        """
        Upload a file to Dropbox.

        Args:
            file_path: Path to file to upload
            destination_folder: Dropbox folder
            write_mode: add, overwrite or update
            update_rev: Revision to update (update mode only)
            progress_callback: Optional progress callback

        Returns:
            UploadResult with remote name and revision
        """
        request = UploadRequest(
            file_path=Path(file_path),
            destination_folder=destination_folder,
            write_mode=write_mode,
            update_rev=update_rev
        )
        plan = self.prepare(request)
        return await self.execute(request, plan, progress_callback)
