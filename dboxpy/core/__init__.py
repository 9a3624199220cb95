"""Core building blocks: API client, credentials, uploads."""
