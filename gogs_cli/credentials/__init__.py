"""Token reference resolution for profile entries.

Profile tokens in the config file may be literal values or references:

- ``${VAR_NAME}``: read from the environment (CI runners, agent sandboxes)
- ``@keyring:service/key``: read from the OS keyring (workstations)
"""

from gogs_cli.exceptions import (
    BackendNotAvailableError,
    CredentialError,
    CredentialFormatError,
    CredentialNotFoundError,
)

from .environment_backend import EnvironmentBackend
from .keyring_backend import KeyringBackend
from .resolver import CredentialResolver

__all__ = [
    "BackendNotAvailableError",
    "CredentialError",
    "CredentialFormatError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "EnvironmentBackend",
    "KeyringBackend",
]
