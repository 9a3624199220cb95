"""
macOS keychain secret store.

Stores secrets as generic passwords through the `security` command line
tool. Commands run as argument lists, never through a shell.
"""
import re
import logging
import subprocess
from typing import Callable, List, Optional

from .models import StoreLocator
from .protocols import SecretStore
from ..exceptions import SecretStoreError

Runner = Callable[..., subprocess.CompletedProcess]


class KeychainSecretStore(SecretStore):
    """
    Secret store backed by the macOS keychain.

    Example:
        >>> store = KeychainSecretStore()
        >>> store.put('dboxpy', 'sl.token', StoreLocator())
        >>> store.get('dboxpy', StoreLocator())
        'sl.token'
    """

    SECURITY = 'security'
    TIMEOUT = 30

    def __init__(self, runner: Optional[Runner] = None):
        """
        Initialize keychain store.

        Args:
            runner: subprocess.run compatible callable (injectable for tests)
        """
        self._run = runner or subprocess.run
        self._logger = logging.getLogger('dboxpy.keychain')

    def _security(self, *args: str) -> subprocess.CompletedProcess:
        cmd: List[str] = [self.SECURITY, *args]
        try:
            return self._run(cmd, capture_output=True, text=True, timeout=self.TIMEOUT)
        except (OSError, subprocess.TimeoutExpired) as e:
            # Missing `security` binary (non-macOS) or hung prompt
            self._logger.warning(f"{self.SECURITY} {args[0]} could not run: {e}")
            return subprocess.CompletedProcess(cmd, 127, stdout='', stderr=str(e))

    def default_keychain(self) -> Optional[str]:
        """
        Return the path of the user's default keychain.

        `security default-keychain` prints the path in double quotes.
        """
        result = self._security('default-keychain')
        if result.returncode != 0:
            return None
        match = re.search(r'"(.+)"', result.stdout)
        return match.group(1) if match else (result.stdout.strip() or None)

    def unlock(self, locator: StoreLocator) -> bool:
        """
        Unlock the keychain with the locator's password.

        Without a password nothing is run: `security` would prompt on a
        terminal whose output is captured. The keychain is assumed to be
        unlocked already, as a login keychain normally is.
        """
        if locator.password is None:
            self._logger.info(
                f"No keychain password given, not unlocking {locator.keychain or '(default)'}"
            )
            return True

        keychain = locator.keychain or self.default_keychain()
        args = ['unlock-keychain', '-p', locator.password]
        if keychain:
            args.append(keychain)

        result = self._security(*args)
        if result.returncode != 0:
            self._logger.warning(
                f"Could not unlock keychain {keychain or '(default)'}: {result.stderr.strip()}"
            )
            return False
        return True

    def get(self, service: str, locator: StoreLocator) -> Optional[str]:
        args = ['find-generic-password', '-s', service, '-w']
        if locator.keychain:
            args.append(locator.keychain)

        result = self._security(*args)
        if result.returncode != 0:
            self._logger.debug(f"No keychain entry for {service} (exit {result.returncode})")
            return None
        return result.stdout.strip() or None

    def put(self, service: str, secret: str, locator: StoreLocator) -> None:
        args = ['add-generic-password', '-a', service, '-s', service, '-w', secret, '-U']
        if locator.keychain:
            args.append(locator.keychain)

        result = self._security(*args)
        if result.returncode != 0:
            raise SecretStoreError(
                f"security add-generic-password failed (exit {result.returncode}): "
                f"{result.stderr.strip()}"
            )

    def delete(self, service: str, locator: StoreLocator) -> bool:
        args = ['delete-generic-password', '-s', service]
        if locator.keychain:
            args.append(locator.keychain)

        result = self._security(*args)
        return result.returncode == 0
