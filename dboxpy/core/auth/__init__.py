"""Credential resolution module."""
from .resolver import CredentialResolver, CredentialRequest, KEYCHAIN_SERVICE_NAME

__all__ = [
    'CredentialResolver',
    'CredentialRequest',
    'KEYCHAIN_SERVICE_NAME',
]
