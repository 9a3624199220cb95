"""
High-level Dropbox upload client.

Composes credential resolution and the upload subsystem behind a
single async context manager.
"""
import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Union

from .core.api import APIConfig, AsyncAPIClient, AsyncAuthService
from .core.auth import CredentialRequest, CredentialResolver
from .core.keychain import KeychainSecretStore, SecretStore, StoreLocator
from .core.upload import (
    DEFAULT_CHUNK_SIZE,
    UploadFacade,
    UploadProgress,
    UploadRequest,
    UploadResult,
    WriteMode
)

logger = logging.getLogger('dboxpy')


class DropboxClient:
    """
    Async Dropbox upload client.

    Example:
        >>> async with DropboxClient(app_key="key", app_secret="secret") as dbx:
        ...     result = await dbx.upload("build.zip", "/Builds")
        ...     print(result.rev)
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        *,
        app_key: Optional[str] = None,
        app_secret: Optional[str] = None,
        keychain: Optional[str] = None,
        keychain_password: Optional[str] = None,
        config: Optional[APIConfig] = None,
        secret_store: Optional[SecretStore] = None,
        prompt: Optional[Callable[[str], str]] = None,
        open_url: Optional[Callable[[str], Any]] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        work_dir: Optional[Union[str, Path]] = None
    ):
        """
        Initialize client.

        Args:
            access_token: Explicit token (skips keychain and authorization)
            app_key: Dropbox app key, needed for interactive authorization
            app_secret: Dropbox app secret, needed for interactive authorization
            keychain: Keychain holding the cached token (default keychain if None)
            keychain_password: Password used to unlock the keychain
            config: API configuration
            secret_store: Credential store (macOS keychain by default)
            prompt: Reads the authorization code from the user
            open_url: Opens the authorization page
            chunk_size: Threshold and window size for session uploads
            work_dir: Parent directory for temporary part files
        """
        self._api = AsyncAPIClient(config)
        self._credentials = CredentialRequest(
            access_token=access_token,
            app_key=app_key,
            app_secret=app_secret,
            locator=StoreLocator(keychain=keychain, password=keychain_password)
        )
        self._resolver = CredentialResolver(
            AsyncAuthService(self._api),
            secret_store or KeychainSecretStore(),
            prompt=prompt,
            open_url=open_url
        )
        self._uploader = UploadFacade(self._api, chunk_size=chunk_size, work_dir=work_dir)

    @property
    def is_authorized(self) -> bool:
        return bool(self._api.access_token)

    async def __aenter__(self) -> 'DropboxClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP session."""
        await self._api.close()

    async def authorize(self) -> str:
        """
        Resolve the access token once and install it on the API client.

        Returns:
            Access token
        """
        if not self._api.access_token:
            self._api.access_token = await self._resolver.resolve(self._credentials)
        return self._api.access_token

    async def logout(self) -> bool:
        """
        Forget the cached token and the one in use.

        Returns:
            True if a cached token was removed
        """
        self._api.access_token = None
        return self._resolver.forget(self._credentials.locator)

    async def upload(
        self,
        file_path: Union[str, Path],
        dropbox_path: str = '',
        write_mode: Union[WriteMode, str] = WriteMode.ADD,
        update_rev: Optional[str] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> UploadResult:
        """
        Upload a file.

        The request is validated and planned before any network call.

        Args:
            file_path: Local file
            dropbox_path: Destination folder in Dropbox
            write_mode: add, overwrite or update
            update_rev: Revision to update (update mode only)
            progress_callback: Optional progress callback

        Returns:
            UploadResult

        Raises:
            ValidationError: Bad input
            AuthError: Authorization failed
            TransportError: A Dropbox call failed
            IntegrityError: Dropbox stored the file under another name
        """
        request = UploadRequest(
            file_path=Path(file_path),
            destination_folder=dropbox_path,
            write_mode=write_mode,
            update_rev=update_rev
        )
        plan = self._uploader.prepare(request)
        await self.authorize()
        return await self._uploader.execute(request, plan, progress_callback)

    async def upload_many(
        self,
        file_paths: Iterable[Union[str, Path]],
        dropbox_path: str = '',
        write_mode: Union[WriteMode, str] = WriteMode.ADD,
        max_concurrent: int = 2
    ) -> List[UploadResult]:
        """
        Upload several files concurrently.

        Each upload keeps its own session cursor and part files.

        Args:
            file_paths: Local files
            dropbox_path: Destination folder for all files
            write_mode: add or overwrite
            max_concurrent: Maximum uploads in flight

        Returns:
            Results in the same order as `file_paths`

        Raises:
            DropboxError: The first upload error; uploads still running or
                waiting are cancelled before it propagates
        """
        paths = [Path(p) for p in file_paths]
        requests = [
            UploadRequest(file_path=p, destination_folder=dropbox_path, write_mode=write_mode)
            for p in paths
        ]
        plans = [self._uploader.prepare(r) for r in requests]
        await self.authorize()

        semaphore = asyncio.Semaphore(max(1, max_concurrent))

        async def run(request: UploadRequest, plan) -> UploadResult:
            async with semaphore:
                return await self._uploader.execute(request, plan)

        logger.info(f"Uploading {len(requests)} files ({max_concurrent} at a time)")
        tasks = [asyncio.ensure_future(run(r, p)) for r, p in zip(requests, plans)]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            # Let cancelled uploads remove their part files
            await asyncio.gather(*pending, return_exceptions=True)
            if pending:
                logger.warning(f"Cancelled {len(pending)} pending upload(s) after a failure")
            raise
