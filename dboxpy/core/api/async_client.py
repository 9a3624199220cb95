"""
Async Dropbox API client.

Implements only the endpoints an upload needs: single-shot upload,
the upload-session trio and a raw form POST for the OAuth token exchange.
"""
import json
import logging
import asyncio
from typing import Dict, Optional, Any, Tuple
import aiohttp

from .config import APIConfig
from ..exceptions import TransportError
from ..logging import get_logger
from ..upload.models import CommitInfo, UploadSessionCursor


def encode_api_arg(arg: Dict[str, Any]) -> str:
    """
    Serialize a Dropbox-API-Arg header value.

    HTTP headers must be ASCII, so non-ASCII characters are escaped.
    """
    return json.dumps(arg, ensure_ascii=True, separators=(',', ':'))


class AsyncAPIClient:
    """
    Asynchronous Dropbox API client.

    Features:
    - Full async/await support
    - Configurable proxy, SSL, timeouts
    - Connection pooling
    - No retries: every failure surfaces as TransportError

    Example:
        >>> async with AsyncAPIClient(access_token="sl.xxx") as client:
        ...     cursor = await client.upload_session_start(b"...")
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        access_token: Optional[str] = None
    ):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
            access_token: OAuth2 bearer token
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._access_token = access_token

        self._logger = get_logger('dboxpy.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def access_token(self) -> Optional[str]:
        """Get access token."""
        return self._access_token

    @access_token.setter
    def access_token(self, value: Optional[str]):
        """Set access token."""
        self._access_token = value

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    async def __aenter__(self) -> 'AsyncAPIClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    def _auth_headers(self) -> Dict[str, str]:
        if not self._access_token:
            raise TransportError("No access token set on the API client")
        return {'Authorization': f"Bearer {self._access_token}"}

    def _proxy(self) -> Optional[str]:
        return self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

    async def _post(
        self,
        endpoint: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[bytes] = None
    ) -> Any:
        """
        POST to a Dropbox endpoint and decode its JSON response.

        Raises:
            TransportError: On connection failure, timeout or HTTP status >= 400
        """
        session = await self._ensure_session()
        size_kb = len(data) / 1024 if data else 0
        self._logger.debug(f"POST {endpoint} ({size_kb:.1f} KB)")

        try:
            async with session.post(
                url,
                data=data,
                headers=headers,
                proxy=self._proxy()
            ) as response:
                body = await response.text()
                if response.status >= 400:
                    self._logger.error(f"{endpoint} failed: HTTP {response.status} {body}")
                    raise TransportError(
                        f"Dropbox API error on {endpoint}: {response.status} - {body}",
                        status=response.status,
                        body=body,
                        endpoint=endpoint
                    )
        except asyncio.TimeoutError as e:
            self._logger.error(f"{endpoint} timed out")
            raise TransportError(
                f"Dropbox API request to {endpoint} timed out",
                endpoint=endpoint
            ) from e
        except aiohttp.ClientError as e:
            self._logger.error(f"{endpoint} failed: {e}")
            raise TransportError(
                f"Dropbox API request to {endpoint} failed: {e}",
                endpoint=endpoint
            ) from e

        if not body or body == 'null':
            return None
        try:
            return json.loads(body)
        except ValueError as e:
            raise TransportError(
                f"Dropbox API returned invalid JSON from {endpoint}",
                status=response.status,
                body=body,
                endpoint=endpoint
            ) from e

    async def content(
        self,
        endpoint: str,
        arg: Dict[str, Any],
        data: bytes = b''
    ) -> Any:
        """Call a content-upload endpoint (argument in header, bytes in body)."""
        headers = {
            **self._auth_headers(),
            'Dropbox-API-Arg': encode_api_arg(arg),
            'Content-Type': 'application/octet-stream',
        }
        return await self._post(
            endpoint, self._config.content_endpoint(endpoint), headers, data
        )

    async def upload(self, commit: CommitInfo, data: bytes) -> Dict[str, Any]:
        """
        Upload a whole file in one request.

        Args:
            commit: Destination path and write mode
            data: File contents

        Returns:
            File metadata ({'name': ..., 'rev': ..., ...})
        """
        return await self.content('files/upload', commit.to_dict(), data)

    async def upload_session_start(self, data: bytes) -> UploadSessionCursor:
        """
        Open an upload session with the first chunk.

        Returns:
            Cursor positioned after `data`
        """
        result = await self.content(
            'files/upload_session/start', {'close': False}, data
        )
        if not result or 'session_id' not in result:
            raise TransportError(
                "upload_session/start returned no session_id",
                body=json.dumps(result),
                endpoint='files/upload_session/start'
            )
        return UploadSessionCursor(result['session_id'], len(data))

    async def upload_session_append(
        self,
        cursor: UploadSessionCursor,
        data: bytes
    ) -> UploadSessionCursor:
        """
        Append a chunk to an open session.

        Returns:
            Cursor positioned after `data`
        """
        await self.content(
            'files/upload_session/append_v2',
            {'cursor': cursor.to_dict(), 'close': False},
            data
        )
        return cursor.advance(len(data))

    async def upload_session_finish(
        self,
        cursor: UploadSessionCursor,
        commit: CommitInfo,
        data: bytes = b''
    ) -> Dict[str, Any]:
        """
        Close the session and commit the file.

        Returns:
            File metadata of the committed file
        """
        return await self.content(
            'files/upload_session/finish',
            {'cursor': cursor.to_dict(), 'commit': commit.to_dict()},
            data
        )

    async def post_form(
        self,
        url: str,
        form: Dict[str, str],
        auth: Optional[aiohttp.BasicAuth] = None
    ) -> Tuple[int, str]:
        """
        POST a form-encoded body without following redirects.

        Used for the OAuth token exchange, which is not bearer-authenticated.

        Returns:
            Tuple of (HTTP status, response body)

        Raises:
            aiohttp.ClientError: On connection failure
        """
        session = await self._ensure_session()
        async with session.post(
            url,
            data=form,
            auth=auth,
            allow_redirects=False,
            proxy=self._proxy()
        ) as response:
            return response.status, await response.text()
