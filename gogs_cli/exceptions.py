"""Exception hierarchy for gogs-cli.

Every failure the client can report is a subclass of ``GogsCliError``. Each
class carries the process exit code the CLI should terminate with, so the
command layer can map the first error it sees to an exit status without
inspecting the error type.

Exception Hierarchy:
    GogsCliError (base, exit 1)
    ├── ConfigError
    │   ├── ProfileNotFoundError
    │   └── CredentialError
    │       ├── CredentialNotFoundError
    │       ├── CredentialFormatError
    │       └── BackendNotAvailableError
    ├── AuthError
    ├── NotFoundError (exit 2)
    ├── ValidationError
    │   └── MissingRepositoryError
    ├── NetworkError
    └── ApiError
        └── ResponseDecodeError

Example Usage:
    >>> from gogs_cli.exceptions import ConfigError
    >>> try:
    ...     config = GogsConfig.load(path)
    ... except ConfigError as e:
    ...     click.echo(f"Error: {e.message}", err=True)
    ...     sys.exit(e.exit_code)
"""


class GogsCliError(Exception):
    """Base exception for all gogs-cli errors.

    Attributes:
        message: Human-readable error description
        exit_code: Process exit status the CLI should use for this error
    """

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigError(GogsCliError):
    """Configuration is unreadable, malformed, or incomplete.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Profile entry missing required fields
    """

    pass


class ProfileNotFoundError(ConfigError):
    """The resolved profile name has no entry in the configuration."""

    def __init__(self, profile: str) -> None:
        self.profile = profile
        super().__init__(f"Profile '{profile}' not found in config")


class CredentialError(ConfigError):
    """A token reference in the configuration could not be resolved.

    Attributes:
        message: Human-readable error description
        reference: The credential reference that failed (e.g., "@keyring:gogs-cli/planner")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The credential reference that failed
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # super() stored the decorated text; keep the short form as message
        self.message = message


class CredentialNotFoundError(CredentialError):
    """Credential reference points at a value that does not exist."""

    pass


class CredentialFormatError(CredentialError):
    """Credential reference has invalid format."""

    pass


class BackendNotAvailableError(CredentialError):
    """Requested credential backend is not usable on this system."""

    pass


class AuthError(GogsCliError):
    """The tracker rejected the credentials (HTTP 401/403)."""

    pass


class NotFoundError(GogsCliError):
    """A repository, issue, or label does not exist (HTTP 404 or lookup miss)."""

    exit_code = 2


class ValidationError(GogsCliError):
    """Input was malformed, either caught locally or rejected by the tracker.

    Examples:
        - Repository reference not in ``owner/name`` form
        - Tracker answered HTTP 400 or 422
    """

    pass


class MissingRepositoryError(ValidationError):
    """No repository was given and no default repository is configured."""

    def __init__(self) -> None:
        super().__init__(
            "Repository not specified. Use --repo owner/name or set defaults.repo in config"
        )


class NetworkError(GogsCliError):
    """Transport failure: connection refused, DNS failure, or timeout."""

    pass


class ApiError(GogsCliError):
    """Any other non-success answer from the tracker.

    Attributes:
        status_code: HTTP status code, when one was received
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
        """
        self.status_code = status_code

        full_message = message
        if status_code:
            full_message = f"API error {status_code}: {message}"

        super().__init__(full_message)


class ResponseDecodeError(ApiError):
    """A success response did not have the shape the endpoint promises."""

    pass
