"""
Credential store protocols.

Defines the interface the credential resolver depends on.
Follows Dependency Inversion Principle (DIP).
"""
from typing import Protocol, Optional, runtime_checkable

from .models import StoreLocator


@runtime_checkable
class SecretStore(Protocol):
    """
    Protocol for secret store implementations.

    Secrets are keyed by a service identifier inside the store named
    by a StoreLocator.
    """

    def unlock(self, locator: StoreLocator) -> bool:
        """
        Unlock the store. Best effort.

        Returns:
            True if the store reported success
        """
        ...

    def get(self, service: str, locator: StoreLocator) -> Optional[str]:
        """
        Look up a secret.

        Returns:
            The secret, or None if there is no entry
        """
        ...

    def put(self, service: str, secret: str, locator: StoreLocator) -> None:
        """
        Store a secret, replacing any existing entry.

        Raises:
            SecretStoreError: If the store rejects the write
        """
        ...

    def delete(self, service: str, locator: StoreLocator) -> bool:
        """
        Remove a secret.

        Returns:
            True if an entry was removed
        """
        ...
