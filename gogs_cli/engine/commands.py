"""Command variants accepted by ``CommandOrchestrator.execute``.

Each operation is one frozen dataclass carrying its already-parsed
arguments. ``repo`` is the raw ``owner/name`` string from the command line,
or None to fall back to the configured default.
"""

from dataclasses import dataclass

from gogs_cli.models.domain import IssueFilter


@dataclass(frozen=True)
class ListIssues:
    state: IssueFilter = IssueFilter.OPEN
    repo: str | None = None
    labels: tuple[str, ...] = ()
    all_repos: bool = False


@dataclass(frozen=True)
class ShowIssue:
    number: int
    repo: str | None = None


@dataclass(frozen=True)
class CreateIssue:
    title: str
    body: str | None = None
    labels: tuple[str, ...] = ()
    repo: str | None = None


@dataclass(frozen=True)
class CommentOnIssue:
    number: int
    text: str
    repo: str | None = None


@dataclass(frozen=True)
class CloseIssue:
    number: int
    repo: str | None = None


@dataclass(frozen=True)
class ReopenIssue:
    number: int
    repo: str | None = None


@dataclass(frozen=True)
class AddLabel:
    number: int
    label: str
    repo: str | None = None


@dataclass(frozen=True)
class RemoveLabel:
    number: int
    label: str
    repo: str | None = None


@dataclass(frozen=True)
class ListRepositories:
    pass


Command = (
    ListIssues
    | ShowIssue
    | CreateIssue
    | CommentOnIssue
    | CloseIssue
    | ReopenIssue
    | AddLabel
    | RemoveLabel
    | ListRepositories
)
