"""CLI command for creating or extending the gog configuration file."""

import asyncio
from pathlib import Path

import click
import structlog
from pydantic import ValidationError as PydanticValidationError

from gogs_cli.api.client import DEFAULT_TIMEOUT, APIClient
from gogs_cli.cli.session import CliOptions
from gogs_cli.config.settings import APP_NAME, Defaults, GogsConfig, Profile, ServerConfig
from gogs_cli.credentials import CredentialError, KeyringBackend
from gogs_cli.exceptions import ConfigError, GogsCliError, ValidationError
from gogs_cli.models.domain import RepoRef
from gogs_cli.providers.gogs_rest import GogsRestProvider

log = structlog.get_logger(__name__)

DEFAULT_PROFILE = "default"
DEFAULT_ROLE = "Human"


@click.command(name="init")
@click.pass_context
def init_command(ctx: click.Context):
    """Initialize configuration interactively.

    Prompts for the server URL and one profile, tests the connection,
    optionally stores the token in the OS keyring, and writes the
    configuration file. An existing file is extended with the new profile
    after confirmation.
    """
    options: CliOptions = ctx.ensure_object(CliOptions)
    config_path = options.config_path or GogsConfig.config_path()

    try:
        ConfigWizard(config_path).run()
    except GogsCliError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        log.debug("init_error", exc_info=True)
        ctx.exit(e.exit_code)


class ConfigWizard:
    """Interactive collection of one profile and the server settings."""

    def __init__(self, config_path: Path):
        self.config_path = Path(config_path)
        self.existing: GogsConfig | None = None

    def run(self) -> bool:
        """Run the wizard.

        Returns:
            True if a configuration file was written
        """
        click.echo(click.style("Gogs CLI Configuration Setup", bold=True))
        click.echo()

        if not self._check_existing():
            click.echo("Aborted.")
            return False

        server = click.prompt(
            "Gogs server URL (e.g., https://gogs.example.com)",
            value_proc=_parse_server,
        )
        profile_name = click.prompt("Profile name", default=DEFAULT_PROFILE)
        user = click.prompt("Gogs username", value_proc=_non_empty("Username"))
        token = click.prompt(
            "API token (from Gogs settings)", hide_input=True, value_proc=_non_empty("API token")
        )
        role = click.prompt("Role description (e.g., 'Human Developer' or 'Planning Agent')", default=DEFAULT_ROLE)
        signature = click.prompt("Comment signature", default=f"[{role}]")

        if not self._test_connection(server, token):
            click.echo("Aborted.")
            return False

        default_repo = click.prompt(
            "Default repository (owner/repo, optional)",
            default="",
            show_default=False,
            value_proc=_parse_optional_repo,
        )

        profile = Profile(
            user=user,
            token=self._store_token(profile_name, token),
            role=role,
            signature=signature,
        )
        config = self._build_config(server, profile_name, profile, default_repo or None)
        path = config.save(self.config_path)

        click.echo()
        click.echo(click.style(f"Configuration saved to {path}", fg="green"))
        click.echo(f"Profile '{profile_name}' created.")
        click.echo()
        click.echo("You can now use gog commands. Try:")
        click.echo("  gog repo list")
        click.echo("  gog issue list --all")
        return True

    def _check_existing(self) -> bool:
        if not self.config_path.exists():
            return True

        click.echo(f"Config file already exists at {self.config_path}")
        try:
            self.existing = GogsConfig.load(self.config_path)
        except ConfigError as e:
            click.echo(click.style(f"Warning: {e.message}", fg="yellow"))
            return click.confirm("Overwrite it?", default=False)

        click.echo(f"Existing profiles: {', '.join(sorted(self.existing.profiles)) or '(none)'}")
        return click.confirm("Add a profile to it?", default=False)

    def _test_connection(self, server: ServerConfig, token: str) -> bool:
        click.echo()
        click.echo(f"Testing connection to {server.base_url}...")
        try:
            count = asyncio.run(_count_repositories(server.base_url, token, server.timeout))
        except GogsCliError as e:
            click.echo(click.style(f"Warning: Connection test failed: {e.message}", fg="yellow"))
            log.debug("init_connection_failed", exc_info=True)
            return click.confirm("Save config anyway?", default=False)

        click.echo(
            click.style(f"Connection successful! Found {count} accessible repositories.", fg="green")
        )
        return True

    def _store_token(self, profile_name: str, token: str) -> str:
        """Return the value to write as the profile token.

        When the user opts in and a keyring is usable, the token goes into
        the keyring and a ``@keyring:`` reference is written instead.
        """
        backend = KeyringBackend()
        if not backend.available:
            return token
        if not click.confirm("Store the token in the OS keyring?", default=True):
            return token

        try:
            backend.set(APP_NAME, profile_name, token)
        except CredentialError as e:
            click.echo(click.style(f"Warning: {e.message}; storing the token in the config file", fg="yellow"))
            return token

        return f"@keyring:{APP_NAME}/{profile_name}"

    def _build_config(
        self,
        server: ServerConfig,
        profile_name: str,
        profile: Profile,
        default_repo: str | None,
    ) -> GogsConfig:
        if self.existing is None:
            return GogsConfig(
                server=server,
                defaults=Defaults(repo=default_repo, profile=profile_name),
                profiles={profile_name: profile},
            )

        config = self.existing.model_copy(deep=True)
        config.server = server
        config.profiles[profile_name] = profile
        if default_repo is not None:
            config.defaults.repo = default_repo
        if config.defaults.profile is None:
            config.defaults.profile = profile_name
        return config


async def _count_repositories(server_url: str, token: str, timeout: float = DEFAULT_TIMEOUT) -> int:
    async with APIClient(server_url, token, timeout=timeout) as client:
        repos = await GogsRestProvider(client).list_user_repos()
    return len(repos)


def _parse_server(value: str) -> ServerConfig:
    try:
        return ServerConfig(url=value.strip())
    except PydanticValidationError as e:
        raise click.BadParameter(f"Invalid server URL: {value!r}") from e


def _parse_optional_repo(value: str) -> str:
    value = value.strip()
    if not value:
        return ""
    try:
        return str(RepoRef.parse(value))
    except ValidationError as e:
        raise click.BadParameter(e.message) from e


def _non_empty(field: str):
    def check(value: str) -> str:
        value = value.strip()
        if not value:
            raise click.BadParameter(f"{field} cannot be empty")
        return value

    return check
