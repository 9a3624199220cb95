"""
Credential store module.

Caches the Dropbox access token between runs. The macOS keychain is
the default store; an in-memory store is provided for tests and CI.
"""
from .protocols import SecretStore
from .models import StoreLocator
from .keychain_store import KeychainSecretStore
from .memory_store import MemorySecretStore

__all__ = [
    'SecretStore',
    'StoreLocator',
    'KeychainSecretStore',
    'MemorySecretStore',
]
