"""Tests for gogs_cli.exceptions module."""

import pytest

from gogs_cli.exceptions import (
    ApiError,
    AuthError,
    BackendNotAvailableError,
    ConfigError,
    CredentialError,
    CredentialNotFoundError,
    GogsCliError,
    MissingRepositoryError,
    NetworkError,
    NotFoundError,
    ProfileNotFoundError,
    ResponseDecodeError,
    ValidationError,
)


class TestGogsCliError:
    """Test base GogsCliError class."""

    def test_init_with_message(self):
        """Test initialization with message."""
        error = GogsCliError("Test error message")

        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_default_exit_code(self):
        """Test that errors exit with status 1 unless overridden."""
        assert GogsCliError("x").exit_code == 1

    def test_exception_chain(self):
        """Test exception chaining keeps the cause."""
        original = ValueError("Original error")

        with pytest.raises(GogsCliError) as exc_info:
            raise GogsCliError("Wrapped error") from original

        assert exc_info.value.__cause__ is original


class TestExitCodes:
    """Exit codes per error kind."""

    def test_not_found_exits_two(self):
        assert NotFoundError("Issue not found").exit_code == 2

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("bad config"),
            ProfileNotFoundError("ghost"),
            CredentialNotFoundError("missing"),
            AuthError("denied"),
            ValidationError("bad input"),
            MissingRepositoryError(),
            NetworkError("refused"),
            ApiError("boom", status_code=500),
            ResponseDecodeError("garbled"),
        ],
    )
    def test_other_errors_exit_one(self, error):
        assert error.exit_code == 1
        assert isinstance(error, GogsCliError)


class TestConfigErrors:
    """Test configuration and credential errors."""

    def test_profile_not_found_message(self):
        error = ProfileNotFoundError("reviewer")

        assert error.profile == "reviewer"
        assert error.message == "Profile 'reviewer' not found in config"
        assert isinstance(error, ConfigError)

    def test_credential_error_keeps_short_message(self):
        """The message stays short while str() carries reference and suggestion."""
        error = CredentialError(
            "Environment variable not set: TOKEN",
            reference="${TOKEN}",
            suggestion="export TOKEN=...",
        )

        assert error.message == "Environment variable not set: TOKEN"
        assert "(reference: ${TOKEN})" in str(error)
        assert "Suggestion: export TOKEN=..." in str(error)

    def test_credential_subclasses_are_config_errors(self):
        assert isinstance(CredentialNotFoundError("x"), ConfigError)
        assert isinstance(BackendNotAvailableError("x"), CredentialError)


class TestApiErrors:
    """Test errors raised from HTTP responses."""

    def test_api_error_with_status(self):
        error = ApiError("Internal Server Error", status_code=500)

        assert error.status_code == 500
        assert error.message == "API error 500: Internal Server Error"

    def test_api_error_without_status(self):
        error = ApiError("No status")

        assert error.status_code is None
        assert error.message == "No status"

    def test_missing_repository_message(self):
        error = MissingRepositoryError()

        assert "--repo owner/name" in error.message
        assert isinstance(error, ValidationError)
