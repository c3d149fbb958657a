"""Human and JSON rendering of orchestrator results.

Every ``format_*`` function returns the full text to print, newline
terminated, so command handlers only call ``click.echo(..., nl=False)``.
"""

import dataclasses
import json
from collections.abc import Sequence
from datetime import datetime
from enum import Enum
from typing import Any

from gogs_cli.models.domain import (
    Comment,
    Issue,
    IssueDetail,
    IssueStateChange,
    LabelChange,
    RepoIssues,
    RepoRef,
    Repository,
)


def to_jsonable(value: Any) -> Any:
    """Convert domain objects to JSON-compatible structures.

    Repository references become ``owner/name`` strings, timestamps become
    ISO 8601 strings, and enums their values.
    """
    if isinstance(value, RepoRef):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    return value


def dump_json(value: Any) -> str:
    return json.dumps(to_jsonable(value), indent=2) + "\n"


def format_issue_list(results: Sequence[RepoIssues], as_json: bool = False) -> str:
    """Render an aggregated listing.

    JSON output is a flat array of issues in aggregated order. The human
    form groups by repository and skips repositories without issues.
    """
    if as_json:
        return dump_json([issue for entry in results for issue in entry.issues])

    lines: list[str] = []
    total = 0
    repo_count = 0

    for entry in results:
        if not entry.issues:
            continue
        repo_count += 1
        lines.append("")
        lines.append(str(entry.repository))
        for issue in entry.issues:
            labels = "".join(f" [{name}]" for name in issue.label_names)
            lines.append(f"  #{issue.number:<4} [{issue.state}]{labels} {issue.title}")
            total += 1

    lines.append("")
    if total == 0:
        lines.append("No issues found.")
    else:
        lines.append(f"Total: {total} issue(s) across {repo_count} repo(s)")
    return "\n".join(lines) + "\n"


def format_issue_detail(detail: IssueDetail, as_json: bool = False) -> str:
    if as_json:
        data = to_jsonable(detail.issue)
        data["comment_list"] = to_jsonable(detail.comments)
        return json.dumps(data, indent=2) + "\n"

    issue = detail.issue
    lines = [
        f"#{issue.number} {issue.title}",
        f"Repository: {issue.repository}",
        f"State: {issue.state}",
        f"Author: {issue.author}",
        f"Created: {issue.created_at.isoformat()}",
        f"Updated: {issue.updated_at.isoformat()}",
    ]
    if issue.labels:
        lines.append(f"Labels: {', '.join(issue.label_names)}")
    if issue.html_url:
        lines.append(f"URL: {issue.html_url}")
    if issue.body:
        lines.extend(["", issue.body])

    if detail.comments:
        lines.extend(["", f"--- {len(detail.comments)} comment(s) ---"])
        for comment in detail.comments:
            lines.extend(["", f"@{comment.author} ({comment.created_at.isoformat()})", comment.body])

    return "\n".join(lines) + "\n"


def format_repo_list(repos: Sequence[Repository], as_json: bool = False) -> str:
    if as_json:
        return dump_json(list(repos))

    if not repos:
        return "No repositories found.\n"

    lines = [f"Found {len(repos)} repository(ies):", ""]
    for repo in repos:
        visibility = "[private]" if repo.private else "[public]"
        lines.append(f"  {repo.full_name} {visibility}")
        if repo.description:
            lines.append(f"    {repo.description}")
    return "\n".join(lines) + "\n"


def format_created_issue(issue: Issue, as_json: bool = False) -> str:
    if as_json:
        return dump_json(issue)
    text = f"Created issue #{issue.number} in {issue.repository}: {issue.title}\n"
    if issue.html_url:
        text += f"URL: {issue.html_url}\n"
    return text


def format_created_comment(comment: Comment, as_json: bool = False) -> str:
    if as_json:
        return dump_json(comment)
    return (
        f"Comment added to {comment.repository}#{comment.issue_number} "
        f"by @{comment.author} at {comment.created_at.isoformat()}\n"
    )


def format_state_change(change: IssueStateChange, as_json: bool = False) -> str:
    if as_json:
        return dump_json(change.issue)
    return f"Issue #{change.issue.number} {change.action}: {change.issue.title}\n"


def format_label_change(change: LabelChange, as_json: bool = False) -> str:
    if as_json:
        return dump_json(
            {
                "status": "success",
                "action": change.action,
                "repo": change.repository,
                "issue": change.issue_number,
                "label": change.label.name,
                "label_id": change.label.id,
            }
        )
    preposition = "to" if change.action == "added" else "from"
    return f"Label '{change.label.name}' {change.action} {preposition} issue #{change.issue_number}\n"
