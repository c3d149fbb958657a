"""
Configuration system using Pydantic for type-safe settings management.

The configuration file holds the tracker URL, optional defaults, and one
entry per profile (agent identity). It is read once per invocation and
passed down explicitly; nothing consults it as global state.
"""

from __future__ import annotations

import os
from pathlib import Path

import click
import structlog
import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, HttpUrl, field_validator
from pydantic import ValidationError as PydanticValidationError

from gogs_cli.exceptions import ConfigError, ValidationError
from gogs_cli.models.domain import RepoRef

log = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "GOGS_CONFIG"
APP_NAME = "gogs-cli"
CONFIG_FILE_NAME = "config.yaml"


class ServerConfig(BaseModel):
    """Tracker server configuration."""

    url: HttpUrl = Field(..., description="Base URL of the Gogs server")
    timeout: float = Field(default=30.0, gt=0, le=300, description="Per-request timeout in seconds")
    max_concurrency: int = Field(
        default=4, ge=1, le=8, description="Concurrent requests when listing across repositories"
    )

    @property
    def base_url(self) -> str:
        return str(self.url).rstrip("/")


class Defaults(BaseModel):
    """Fallbacks used when a command omits --repo or --profile."""

    repo: str | None = Field(default=None, description="Default repository (owner/name)")
    profile: str | None = Field(default=None, description="Default profile name")

    @field_validator("repo")
    @classmethod
    def validate_repo(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            RepoRef.parse(value)
        except ValidationError as e:
            raise ValueError(e.message) from e
        return value


class Profile(BaseModel):
    """One agent identity.

    The token may be a literal value or a credential reference:
    - token: "${PLANNER_TOKEN}"
    - token: "@keyring:gogs-cli/planner"
    """

    model_config = ConfigDict(populate_by_name=True)

    user: str = Field(..., min_length=1, validation_alias=AliasChoices("user", "gogs_user"))
    token: str = Field(..., min_length=1, description="API token or credential reference")
    role: str = Field(..., description="Human-readable role, e.g. 'Planning Agent'")
    signature: str = Field(..., min_length=1, description="Prefix attached to authored text")


class GogsConfig(BaseModel):
    """Complete client configuration.

    Example:
        >>> config = GogsConfig.load()
        >>> config.server.base_url
        'https://gogs.example.com'
    """

    server: ServerConfig
    defaults: Defaults = Field(default_factory=Defaults)
    profiles: dict[str, Profile] = Field(default_factory=dict)

    @property
    def default_repo(self) -> RepoRef | None:
        if self.defaults.repo is None:
            return None
        return RepoRef.parse(self.defaults.repo)

    @staticmethod
    def config_path() -> Path:
        """Location of the configuration file.

        ``$GOGS_CONFIG`` wins; otherwise the per-user application directory.
        """
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override)
        return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> GogsConfig:
        """Load configuration from a YAML file.

        Args:
            config_path: Explicit file path; defaults to ``config_path()``

        Raises:
            ConfigError: If the file is missing, unreadable, not valid YAML,
                or fails validation
        """
        path = Path(config_path) if config_path is not None else cls.config_path()

        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ConfigError(
                f"Failed to read config from {path}. Run 'gog init' to create configuration."
            ) from e
        except OSError as e:
            raise ConfigError(f"Cannot read configuration file: {path}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a YAML mapping, not a list or scalar")

        try:
            config = cls.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {_summarize(e)}") from e

        log.debug("config_loaded", path=str(path), profiles=sorted(config.profiles))
        return config

    def save(self, config_path: str | Path | None = None) -> Path:
        """Write configuration as YAML, readable only by the owner.

        Returns:
            The path written to
        """
        path = Path(config_path) if config_path is not None else self.config_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json", exclude_none=True)

        # Restrict permissions before the token is written, then rename over the target
        temp_file = path.with_suffix(".tmp")
        temp_file.unlink(missing_ok=True)
        temp_file.touch(mode=0o600)
        temp_file.chmod(0o600)
        temp_file.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        temp_file.replace(path)

        log.info("config_saved", path=str(path))
        return path


def _summarize(error: PydanticValidationError) -> str:
    """Render pydantic errors as ``loc: msg`` pairs."""
    parts = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"])
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)
