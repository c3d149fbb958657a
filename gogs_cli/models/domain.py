"""
Domain models for the Gogs issue tracker.

These are immutable point-in-time snapshots of tracker objects, decoded from
REST responses by ``gogs_cli.providers.gogs_rest``. Nothing here is cached
across commands; every command re-reads what it needs.

Example:
    Parsing a repository reference given on the command line::

        ref = RepoRef.parse("acme/widgets")
        assert ref.owner == "acme"
        assert str(ref) == "acme/widgets"
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from gogs_cli.exceptions import ValidationError


class IssueState(str, Enum):
    """State of a single issue as reported by the tracker."""

    OPEN = "open"
    CLOSED = "closed"

    def __str__(self) -> str:
        return self.value


class IssueFilter(str, Enum):
    """State filter accepted by the issue-list endpoint."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RepoRef:
    """A structurally validated ``owner/name`` repository reference."""

    owner: str
    name: str

    @classmethod
    def parse(cls, value: str) -> "RepoRef":
        """Parse ``owner/name``.

        Raises:
            ValidationError: If the value is not exactly two non-empty
                slash-separated parts without whitespace.
        """
        parts = value.split("/")
        if len(parts) != 2 or not all(parts) or any(ch.isspace() for ch in value):
            raise ValidationError(f"Invalid repository format. Expected 'owner/repo', got '{value}'")
        return cls(owner=parts[0], name=parts[1])

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class User:
    """Tracker account."""

    id: int
    username: str
    full_name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class Label:
    """Repository-scoped label.

    The numeric ``id`` is only meaningful inside the repository the label
    was listed from; the same name maps to different ids elsewhere.
    """

    id: int
    name: str
    color: str = ""


@dataclass(frozen=True)
class Repository:
    """Repository visible to the active identity."""

    id: int
    name: str
    full_name: str
    owner: User
    html_url: str
    clone_url: str = ""
    description: str | None = None
    private: bool = False

    @property
    def ref(self) -> RepoRef:
        return RepoRef(owner=self.owner.username, name=self.name)


@dataclass(frozen=True)
class Issue:
    """Snapshot of a tracker issue.

    Example:
        Checking whether an issue carries a label::

            if "urgent" in issue.label_names:
                ...
    """

    id: int
    """Tracker-wide database id."""

    number: int
    """Per-repository sequence number shown in the UI (``#42``)."""

    title: str
    body: str | None
    state: IssueState
    labels: tuple[Label, ...]
    created_at: datetime
    updated_at: datetime
    repository: RepoRef
    """Repository the issue was read from."""

    author: str = ""
    comments: int = 0
    """Comment count as reported by the tracker."""

    html_url: str = ""

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


@dataclass(frozen=True)
class Comment:
    """Issue comment. Append-only from the client's point of view."""

    id: int
    body: str
    author: str
    created_at: datetime
    issue_number: int
    repository: RepoRef
    updated_at: datetime | None = None


@dataclass(frozen=True)
class RepoIssues:
    """One entry of an aggregated issue listing."""

    repository: RepoRef
    issues: tuple[Issue, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class IssueDetail:
    """Result of ``issue show``: the issue plus its comments in tracker order."""

    issue: Issue
    comments: tuple[Comment, ...]


@dataclass(frozen=True)
class IssueStateChange:
    """Result of closing or reopening an issue."""

    issue: Issue
    action: str
    """Either ``"closed"`` or ``"reopened"``."""


@dataclass(frozen=True)
class LabelChange:
    """Result of attaching or detaching a single label."""

    repository: RepoRef
    issue_number: int
    label: Label
    action: str
    """Either ``"added"`` or ``"removed"``."""
