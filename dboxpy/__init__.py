"""
dboxpy - Async Python uploader for Dropbox.

Usage:
    >>> from dboxpy import DropboxClient
    >>>
    >>> async with DropboxClient(app_key="key", app_secret="secret") as dbx:
    ...     result = await dbx.upload("build.zip", "/Builds")
    ...     print(result.name, result.rev)
"""
import logging
from .client import DropboxClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
    AsyncAuthService
)

# Credentials
from .core.auth import CredentialResolver, CredentialRequest
from .core.keychain import (
    SecretStore,
    StoreLocator,
    KeychainSecretStore,
    MemorySecretStore
)

# Uploads
from .core.upload import (
    UploadFacade,
    UploadPlanner,
    UploadOrchestrator,
    UploadResult,
    UploadProgress,
    WriteMode,
    DEFAULT_CHUNK_SIZE
)

from .core.exceptions import (
    DropboxError,
    ValidationError,
    AuthError,
    SecretStoreError,
    UploadError,
    TransportError,
    IntegrityError
)
from .core.logging import configure_package_loggers

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for dboxpy modules.

    This ensures that all dboxpy loggers are properly configured
    to show log messages at the specified level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    configure_package_loggers(level)


__all__ = [
    'DropboxClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'CredentialResolver',
    'CredentialRequest',
    'SecretStore',
    'StoreLocator',
    'KeychainSecretStore',
    'MemorySecretStore',
    'UploadFacade',
    'UploadPlanner',
    'UploadOrchestrator',
    'UploadResult',
    'UploadProgress',
    'WriteMode',
    'DEFAULT_CHUNK_SIZE',
    'DropboxError',
    'ValidationError',
    'AuthError',
    'SecretStoreError',
    'UploadError',
    'TransportError',
    'IntegrityError',
    'setup_logging',
]
