"""Environment variable backend for CI and agent sandboxes."""

import os
from collections.abc import Mapping

import structlog

log = structlog.get_logger(__name__)


class EnvironmentBackend:
    """Read tokens injected as environment variables.

    Suited to automated agents whose token is provisioned by the runner
    rather than stored on disk.

    Example:
        >>> backend = EnvironmentBackend({"PLANNER_TOKEN": "abc123"})
        >>> backend.get("PLANNER_TOKEN")
        'abc123'
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    @property
    def name(self) -> str:
        return "environment"

    @property
    def available(self) -> bool:
        """Environment backend is always available."""
        return True

    def get(self, var_name: str) -> str | None:
        """Retrieve a credential from an environment variable.

        Args:
            var_name: Environment variable name (e.g., 'PLANNER_TOKEN')

        Returns:
            Credential value or None if not set
        """
        value = self._environ.get(var_name)

        if value is not None:
            log.debug("credential_read_from_environment", var=var_name)

        return value
