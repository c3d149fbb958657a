"""CLI commands for issue operations.

This module provides the ``gog issue`` command group. Every subcommand
builds one command value and hands it to the session runner, which signs
authored text, applies the default repository and renders the result.

Example:
    Coordinate work across agents::

        $ gog issue list --all --label bug
        $ gog --profile planner issue create "Fix login" --repo team/web --label bug
        $ gog issue comment 42 "Working on this" --repo team/web
"""

import click

from gogs_cli.cli import output
from gogs_cli.cli.session import run_command
from gogs_cli.engine.commands import (
    AddLabel,
    CloseIssue,
    CommentOnIssue,
    CreateIssue,
    ListIssues,
    RemoveLabel,
    ReopenIssue,
    ShowIssue,
)
from gogs_cli.models.domain import IssueFilter

ISSUE_NUMBER = click.IntRange(min=1)

repo_option = click.option("--repo", default=None, help="Repository (owner/repo); defaults to defaults.repo")


@click.group(name="issue")
def issue_group():
    """Issue operations."""
    pass


@issue_group.command(name="list")
@click.option("--all", "all_repos", is_flag=True, help="List issues across all repositories")
@click.option("--open", "open_only", is_flag=True, help="Only show open issues (default)")
@click.option("--closed", "closed_only", is_flag=True, help="Only show closed issues")
@click.option("--all-states", "any_state", is_flag=True, help="Show open and closed issues")
@repo_option
@click.option("--label", "labels", multiple=True, help="Filter by label (can be repeated)")
@click.pass_context
def list_issues(
    ctx: click.Context,
    all_repos: bool,
    open_only: bool,
    closed_only: bool,
    any_state: bool,
    repo: str | None,
    labels: tuple[str, ...],
):
    """List issues from one repository or from all of them.

    Examples:

        gog issue list --all

        gog issue list --repo owner/project --closed

        gog issue list --all --label bug

        gog issue list --repo owner/project --all-states
    """
    if open_only + closed_only + any_state > 1:
        raise click.UsageError("--open, --closed and --all-states cannot be used together")

    if any_state:
        state = IssueFilter.ALL
    elif closed_only:
        state = IssueFilter.CLOSED
    else:
        state = IssueFilter.OPEN
    command = ListIssues(state=state, repo=repo, labels=labels, all_repos=all_repos)
    run_command(ctx, command, output.format_issue_list)


@issue_group.command(name="show")
@click.argument("number", type=ISSUE_NUMBER)
@repo_option
@click.pass_context
def show_issue(ctx: click.Context, number: int, repo: str | None):
    """Show an issue with its comments."""
    run_command(ctx, ShowIssue(number=number, repo=repo), output.format_issue_detail)


@issue_group.command(name="create")
@click.argument("title")
@repo_option
@click.option("--body", default=None, help="Issue body")
@click.option("--label", "labels", multiple=True, help="Add labels (can be repeated)")
@click.pass_context
def create_issue(ctx: click.Context, title: str, repo: str | None, body: str | None, labels: tuple[str, ...]):
    """Create a new issue signed by the active profile.

    Examples:

        gog issue create "Fix bug" --repo owner/project

        gog issue create "New feature" --body "Details here" --label enhancement
    """
    command = CreateIssue(title=title, body=body, labels=labels, repo=repo)
    run_command(ctx, command, output.format_created_issue)


@issue_group.command(name="comment")
@click.argument("number", type=ISSUE_NUMBER)
@click.argument("text")
@repo_option
@click.pass_context
def comment_issue(ctx: click.Context, number: int, text: str, repo: str | None):
    """Add a signed comment to an issue."""
    run_command(ctx, CommentOnIssue(number=number, text=text, repo=repo), output.format_created_comment)


@issue_group.command(name="close")
@click.argument("number", type=ISSUE_NUMBER)
@repo_option
@click.pass_context
def close_issue(ctx: click.Context, number: int, repo: str | None):
    """Close an issue."""
    run_command(ctx, CloseIssue(number=number, repo=repo), output.format_state_change)


@issue_group.command(name="reopen")
@click.argument("number", type=ISSUE_NUMBER)
@repo_option
@click.pass_context
def reopen_issue(ctx: click.Context, number: int, repo: str | None):
    """Reopen a closed issue."""
    run_command(ctx, ReopenIssue(number=number, repo=repo), output.format_state_change)


@issue_group.command(name="label")
@click.argument("number", type=ISSUE_NUMBER)
@click.argument("label")
@repo_option
@click.pass_context
def label_issue(ctx: click.Context, number: int, label: str, repo: str | None):
    """Add an existing repository label to an issue."""
    run_command(ctx, AddLabel(number=number, label=label, repo=repo), output.format_label_change)


@issue_group.command(name="unlabel")
@click.argument("number", type=ISSUE_NUMBER)
@click.argument("label")
@repo_option
@click.pass_context
def unlabel_issue(ctx: click.Context, number: int, label: str, repo: str | None):
    """Remove a label from an issue."""
    run_command(ctx, RemoveLabel(number=number, label=label, repo=repo), output.format_label_change)
