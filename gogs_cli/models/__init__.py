"""Domain models for tracker objects and command results.

Key Models:
    - RepoRef: Validated ``owner/name`` repository reference
    - Repository, Issue, Comment, Label, User: Tracker snapshots
    - RepoIssues: One repository's slice of an aggregated listing
    - IssueDetail, IssueStateChange, LabelChange: Command results

Example:
    >>> from gogs_cli.models import RepoRef
    >>> RepoRef.parse("acme/widgets").owner
    'acme'
"""

from gogs_cli.models.domain import (
    Comment,
    Issue,
    IssueDetail,
    IssueFilter,
    IssueState,
    IssueStateChange,
    Label,
    LabelChange,
    RepoIssues,
    RepoRef,
    Repository,
    User,
)

__all__ = [
    "Comment",
    "Issue",
    "IssueDetail",
    "IssueFilter",
    "IssueState",
    "IssueStateChange",
    "Label",
    "LabelChange",
    "RepoIssues",
    "RepoRef",
    "Repository",
    "User",
]
