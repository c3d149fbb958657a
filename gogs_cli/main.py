"""CLI entry point for the gog client."""

from pathlib import Path

import click
import structlog

from gogs_cli import __version__
from gogs_cli.cli import init_command, issue_group, repo_group
from gogs_cli.cli.session import CliOptions
from gogs_cli.utils.logging_config import DEFAULT_LOG_LEVEL, configure_logging

log = structlog.get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.version_option(__version__, prog_name="gog")
@click.option("--profile", default=None, help="Profile to use (overrides $GOGS_PROFILE and defaults.profile)")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file (default: $GOGS_CONFIG or the user config directory)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    help="Logging level (logs go to stderr)",
)
@click.pass_context
def cli(ctx: click.Context, profile: str | None, as_json: bool, config_path: Path | None, log_level: str) -> None:
    """gog: Gogs CLI for multi-agent development orchestration.

    Every write is attributed with the active profile's signature, so
    several agents can share one tracker and stay distinguishable.
    """
    configure_logging(log_level)
    ctx.obj = CliOptions(profile=profile, as_json=as_json, config_path=config_path)
    log.debug("cli_invoked", command=ctx.invoked_subcommand, profile=profile, json=as_json)


cli.add_command(init_command)
cli.add_command(issue_group)
cli.add_command(repo_group)


if __name__ == "__main__":
    cli()
