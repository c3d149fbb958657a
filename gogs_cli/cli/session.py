"""Run one orchestrator command for a click handler.

Each invocation loads the configuration, resolves the identity, opens a
single HTTP client, runs the command inside ``asyncio.run`` and renders
the result. Taxonomy errors become ``Error: <message>`` on stderr and the
error's exit code.
"""

import asyncio
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
import structlog

from gogs_cli.api.client import APIClient
from gogs_cli.config.settings import GogsConfig
from gogs_cli.engine.commands import Command
from gogs_cli.engine.orchestrator import CommandOrchestrator
from gogs_cli.exceptions import CredentialError, GogsCliError
from gogs_cli.identity import IdentityResolver
from gogs_cli.providers.gogs_rest import GogsRestProvider

log = structlog.get_logger(__name__)

Renderer = Callable[[Any, bool], str]


@dataclass
class CliOptions:
    """Global options shared by every subcommand through ``ctx.obj``."""

    profile: str | None = None
    as_json: bool = False
    config_path: Path | None = None


async def execute(options: CliOptions, command: Command) -> Any:
    config = GogsConfig.load(options.config_path)
    identity = IdentityResolver(config).resolve(options.profile)

    async with APIClient(identity.server_url, identity.token, timeout=config.server.timeout) as client:
        orchestrator = CommandOrchestrator(
            identity,
            GogsRestProvider(client),
            default_repo=config.default_repo,
            max_workers=config.server.max_concurrency,
        )
        return await orchestrator.execute(command)


def run_command(ctx: click.Context, command: Command, render: Renderer) -> None:
    """Execute ``command`` and print its rendered result, or exit on error."""
    options: CliOptions = ctx.ensure_object(CliOptions)
    command_name = type(command).__name__

    try:
        result = asyncio.run(execute(options, command))
    except GogsCliError as e:
        click.echo(f"Error: {e.message}", err=True)
        if isinstance(e, CredentialError) and e.suggestion:
            click.echo(f"Suggestion: {e.suggestion}", err=True)
        log.debug("command_failed", command=command_name, exit_code=e.exit_code, exc_info=True)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        log.error("command_unexpected", command=command_name, exc_info=True)
        sys.exit(1)

    click.echo(render(result, options.as_json), nl=False)
