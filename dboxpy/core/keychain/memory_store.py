"""
In-memory secret store implementation.

Provides non-persistent storage for testing and temporary use.
"""
from typing import Dict, Optional, Tuple

from .models import StoreLocator
from .protocols import SecretStore


class MemorySecretStore(SecretStore):
    """
    In-memory secret store.

    Stores secrets in memory only.
    Data is lost when the object is destroyed.

    Useful for:
    - Unit testing
    - CI/CD environments without a keychain

    Example:
        >>> store = MemorySecretStore()
        >>> store.put('dboxpy', 'token', StoreLocator())
        >>> store.get('dboxpy', StoreLocator())
        'token'
    """

    def __init__(self):
        """Initialize memory store."""
        self._secrets: Dict[Tuple[Optional[str], str], str] = {}

    def unlock(self, locator: StoreLocator) -> bool:
        """Always unlocked."""
        return True

    def get(self, service: str, locator: StoreLocator) -> Optional[str]:
        return self._secrets.get((locator.keychain, service))

    def put(self, service: str, secret: str, locator: StoreLocator) -> None:
        self._secrets[(locator.keychain, service)] = secret

    def delete(self, service: str, locator: StoreLocator) -> bool:
        return self._secrets.pop((locator.keychain, service), None) is not None
