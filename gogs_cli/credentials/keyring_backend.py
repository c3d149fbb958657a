"""OS-level keyring backend using system credential stores.

Platform Support:
- Linux: Secret Service API (GNOME Keyring, KWallet)
- macOS: Keychain
- Windows: Windows Credential Locker
"""

from typing import cast

import keyring
import structlog
from keyring.errors import KeyringError

from gogs_cli.exceptions import BackendNotAvailableError, CredentialError

log = structlog.get_logger(__name__)


class KeyringBackend:
    """Token storage in the OS keyring.

    The ``gog init`` wizard stores tokens under service ``gogs-cli`` with the
    profile name as key, and writes ``@keyring:gogs-cli/<profile>`` into the
    config file in place of the token.

    Example:
        >>> backend = KeyringBackend()
        >>> backend.set("gogs-cli", "planner", "abc123")
        >>> backend.get("gogs-cli", "planner")
        'abc123'
    """

    @property
    def name(self) -> str:
        return "keyring"

    @property
    def available(self) -> bool:
        """Check if a functional keyring backend is configured.

        Headless systems commonly resolve to the ``fail`` keyring, whose
        priority is zero and which cannot store anything.
        """
        try:
            backend = keyring.get_keyring()
        except (KeyringError, RuntimeError) as e:
            log.debug("keyring_unavailable", error=str(e))
            return False
        return backend.priority > 0

    def get(self, service: str, key: str) -> str | None:
        """Retrieve a credential from the OS keyring.

        Raises:
            BackendNotAvailableError: If no keyring is configured
            CredentialError: If the keyring operation fails
        """
        if not self.available:
            raise BackendNotAvailableError(
                "Keyring backend is not available",
                reference=f"@keyring:{service}/{key}",
                suggestion="Use an environment variable reference: ${VAR_NAME}",
            )

        try:
            credential = cast(str | None, keyring.get_password(service, key))
        except KeyringError as e:
            raise CredentialError(
                f"Keyring operation failed: {e}", reference=f"@keyring:{service}/{key}"
            ) from e

        if credential is not None:
            log.debug("credential_read_from_keyring", service=service, key=key)
        return credential

    def set(self, service: str, key: str, value: str) -> None:
        """Store a credential in the OS keyring.

        Raises:
            BackendNotAvailableError: If no keyring is configured
            CredentialError: If the keyring operation fails
        """
        if not value:
            raise ValueError("Credential value cannot be empty")

        if not self.available:
            raise BackendNotAvailableError("Keyring backend is not available")

        try:
            keyring.set_password(service, key, value)
        except KeyringError as e:
            raise CredentialError(
                f"Failed to store credential: {e}", reference=f"@keyring:{service}/{key}"
            ) from e

        log.debug("credential_stored_in_keyring", service=service, key=key)
