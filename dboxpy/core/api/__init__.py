"""Dropbox API module."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .async_client import AsyncAPIClient, encode_api_arg
from .async_auth import AsyncAuthService

__all__ = [
    # Async client
    'AsyncAPIClient',
    'AsyncAuthService',
    'encode_api_arg',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
]
