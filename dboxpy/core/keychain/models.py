"""
Credential store models.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoreLocator:
    """
    Which credential store to use and how to unlock it.

    Attributes:
        keychain: Path or name of the keychain (None = system default)
        password: Unlock password (None = let the system prompt or skip)
    """
    keychain: Optional[str] = None
    password: Optional[str] = None

    def __repr__(self) -> str:
        masked = '***' if self.password else None
        return f"StoreLocator(keychain={self.keychain!r}, password={masked!r})"
