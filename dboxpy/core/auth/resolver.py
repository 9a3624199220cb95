"""
Credential resolver.

Resolves the Dropbox access token with strict precedence:
explicit token, then the cached token, then interactive authorization.
"""
import logging
import webbrowser
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..api.async_auth import AsyncAuthService
from ..exceptions import AuthError, SecretStoreError, ValidationError
from ..keychain import SecretStore, StoreLocator

KEYCHAIN_SERVICE_NAME = 'dboxpy'

logger = logging.getLogger('dboxpy.auth')


@dataclass(frozen=True)
class CredentialRequest:
    """
    Inputs for credential resolution.

    Attributes:
        access_token: Explicit token; wins over everything else
        app_key: Dropbox app key (interactive flow only)
        app_secret: Dropbox app secret (interactive flow only)
        locator: Credential store to read from and write to
    """
    access_token: Optional[str] = None
    app_key: Optional[str] = None
    app_secret: Optional[str] = field(default=None, repr=False)
    locator: StoreLocator = field(default_factory=StoreLocator)


class CredentialResolver:
    """
    Resolves an access token for one invocation.

    The interactive flow opens the authorization page, asks the user for
    the code, exchanges it and caches the token. A token that cannot be
    cached is an error: the next run would have to authorize again.
    """

    def __init__(
        self,
        auth_service: AsyncAuthService,
        secret_store: SecretStore,
        prompt: Optional[Callable[[str], str]] = None,
        open_url: Optional[Callable[[str], Any]] = None,
        service_name: str = KEYCHAIN_SERVICE_NAME
    ):
        """
        Initialize resolver.

        Args:
            auth_service: OAuth service for the code exchange
            secret_store: Store for the cached token
            prompt: Reads the authorization code (default: input)
            open_url: Opens the authorization page (default: webbrowser.open)
            service_name: Key of the cached token in the store
        """
        self._auth = auth_service
        self._store = secret_store
        self._prompt = prompt or input
        self._open_url = open_url or webbrowser.open
        self._service = service_name

    async def resolve(self, request: CredentialRequest) -> str:
        """
        Resolve an access token.

        Args:
            request: Credential inputs

        Returns:
            Access token

        Raises:
            ValidationError: If authorization is needed but the app key
                or secret is missing
            AuthError: If the exchange fails or the token cannot be cached
        """
        if request.access_token:
            logger.debug("Using explicit access token")
            return request.access_token

        cached = self._load_cached(request.locator)
        if cached:
            logger.info("Using access token from the keychain")
            return cached

        if not request.app_key or not request.app_secret:
            raise ValidationError(
                "app_key and app_secret are required to authorize with Dropbox "
                "when no access token is given or cached"
            )

        access_token = await self._authorize(request.app_key, request.app_secret)

        try:
            self._store.put(self._service, access_token, request.locator)
        except SecretStoreError as e:
            raise AuthError("Failed to store access token in the keychain") from e

        logger.info("Access token stored in the keychain")
        return access_token

    def forget(self, locator: StoreLocator) -> bool:
        """
        Delete the cached token.

        Returns:
            True if a token was removed
        """
        self._store.unlock(locator)
        return self._store.delete(self._service, locator)

    def _load_cached(self, locator: StoreLocator) -> Optional[str]:
        if not self._store.unlock(locator):
            logger.warning("Keychain unlock failed, trying lookup anyway")
        return self._store.get(self._service, locator)

    async def _authorize(self, app_key: str, app_secret: str) -> str:
        url = self._auth.authorization_url(app_key)
        logger.info(f"Opening {url}")
        self._open_url(url)

        code = self._prompt(
            "Please authorize dboxpy (via your Dropbox app) to access your Dropbox account.\n"
            "Once authorized, please paste the authorization code here"
        )
        code = (code or '').strip()
        if not code:
            raise AuthError("No authorization code entered")

        return await self._auth.request_access_token(app_key, app_secret, code)
