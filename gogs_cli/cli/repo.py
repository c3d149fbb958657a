"""CLI commands for repository operations."""

import click

from gogs_cli.cli import output
from gogs_cli.cli.session import run_command
from gogs_cli.engine.commands import ListRepositories


@click.group(name="repo")
def repo_group():
    """Repository operations."""
    pass


@repo_group.command(name="list")
@click.pass_context
def list_repos(ctx: click.Context):
    """List repositories accessible to the current profile."""
    run_command(ctx, ListRepositories(), output.format_repo_list)
