"""Resolve token references stored in profile entries."""

import re

import structlog

from gogs_cli.exceptions import CredentialFormatError, CredentialNotFoundError

from .environment_backend import EnvironmentBackend
from .keyring_backend import KeyringBackend

log = structlog.get_logger(__name__)


class CredentialResolver:
    """Resolve credential references to actual token values.

    Supports three forms:
    1. @keyring:service/key - OS keyring
    2. ${VAR_NAME} - Environment variable
    3. Direct value - Returned as-is

    Example:
        >>> resolver = CredentialResolver()
        >>> token = resolver.resolve("@keyring:gogs-cli/planner")
        >>> token = resolver.resolve("${PLANNER_TOKEN}")
        >>> resolver.resolve("literal-value")
        'literal-value'
    """

    KEYRING_PATTERN = re.compile(r"^@keyring:([^/]+)/(.+)$")
    ENV_PATTERN = re.compile(r"^\$\{([A-Z_][A-Z0-9_]*)\}$")

    def __init__(
        self,
        environment_backend: EnvironmentBackend | None = None,
        keyring_backend: KeyringBackend | None = None,
    ) -> None:
        self.environment_backend = environment_backend or EnvironmentBackend()
        self.keyring_backend = keyring_backend or KeyringBackend()

    def resolve(self, value: str) -> str:
        """Resolve a credential reference to its value.

        Raises:
            CredentialNotFoundError: If the referenced credential doesn't exist
            CredentialFormatError: If a reference-looking value is malformed
            BackendNotAvailableError: If the keyring is unavailable
        """
        keyring_match = self.KEYRING_PATTERN.match(value)
        if keyring_match:
            service, key = keyring_match.group(1), keyring_match.group(2)
            credential = self.keyring_backend.get(service, key)
            if credential is None:
                raise CredentialNotFoundError(
                    f"Credential not found in keyring: {service}/{key}",
                    reference=value,
                    suggestion="Run 'gog init' again to store the token",
                )
            return credential

        env_match = self.ENV_PATTERN.match(value)
        if env_match:
            var_name = env_match.group(1)
            credential = self.environment_backend.get(var_name)
            if credential is None:
                raise CredentialNotFoundError(
                    f"Environment variable not set: {var_name}",
                    reference=value,
                    suggestion=f"Set the environment variable:\n  export {var_name}='your-token-here'",
                )
            return credential

        if value.startswith("@keyring:") or value.startswith("${"):
            raise CredentialFormatError(
                "Malformed credential reference",
                reference=value,
                suggestion="Use @keyring:service/key or ${VAR_NAME}",
            )

        return value
