"""
Async authentication service.

Handles the Dropbox OAuth2 authorization-code exchange.
"""
import json
import asyncio
from typing import Optional
from urllib.parse import urlencode

import aiohttp

from .async_client import AsyncAPIClient
from ..exceptions import AuthError
from ..logging import get_logger


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Builds the authorize URL and exchanges authorization codes for
    access tokens.
    """

    def __init__(self, client: AsyncAPIClient):
        """
        Initialize auth service.

        Args:
            client: Async API client (its HTTP session is reused)
        """
        self._client = client
        self._logger = get_logger('dboxpy.auth')

    def authorization_url(self, app_key: str) -> str:
        """
        Build the page the user visits to authorize the app.

        Args:
            app_key: App key of the Dropbox app

        Returns:
            Authorization URL
        """
        config = self._client.config
        params = {'response_type': 'code', 'client_id': app_key}
        if config.require_role:
            params['require_role'] = config.require_role
        return f"{config.authorize_url}?{urlencode(params)}"

    async def request_access_token(
        self,
        app_key: str,
        app_secret: str,
        authorization_code: str
    ) -> str:
        """
        Exchange an authorization code for an access token.

        Args:
            app_key: App key (Basic auth user)
            app_secret: App secret (Basic auth password)
            authorization_code: Code pasted by the user

        Returns:
            Access token

        Raises:
            AuthError: On non 2xx/3xx status, transport failure or a body
                without `access_token`
        """
        form = {
            'grant_type': 'authorization_code',
            'code': authorization_code,
        }
        try:
            status, body = await self._client.post_form(
                self._client.config.token_url,
                form,
                auth=aiohttp.BasicAuth(app_key, app_secret)
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthError(f"Error during authorization with Dropbox: {e}") from e

        if not 200 <= status < 400:
            self._logger.error(f"Token exchange failed: HTTP {status}")
            raise AuthError(
                f"Error during authorization with Dropbox: {status} - {body}",
                status=status,
                body=body
            )

        access_token: Optional[str] = None
        try:
            access_token = json.loads(body).get('access_token')
        except (ValueError, AttributeError):
            pass
        if not access_token:
            raise AuthError(
                "Error during authorization with Dropbox: "
                f"no access_token in response ({status})",
                status=status,
                body=body
            )

        self._logger.info("Successfully authorized dboxpy to access Dropbox")
        return access_token
