"""
Command orchestration for the gog client.

``CommandOrchestrator`` is the façade every command handler calls. It owns
the two cross-cutting rules of the client:

- Attribution: new human-authored text (issue bodies, comments) is prefixed
  with the active identity's signature exactly once per call.
- Repository defaulting: a command without ``--repo`` uses the configured
  default; with neither, it fails before any network call.

It then delegates to ``GogsRestProvider``, ``LabelResolver`` and
``RepoAggregator`` and returns a result value for the presentation layer.

Example:
    >>> orchestrator = CommandOrchestrator(identity, provider, default_repo=RepoRef("a", "x"))
    >>> issue = await orchestrator.create_issue("Bug", body="crash on start")
    >>> issue.body
    '[Human] crash on start'
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import structlog

from gogs_cli.engine.aggregator import DEFAULT_MAX_WORKERS, RepoAggregator, filter_by_labels
from gogs_cli.engine.commands import (
    AddLabel,
    CloseIssue,
    Command,
    CommentOnIssue,
    CreateIssue,
    ListIssues,
    ListRepositories,
    RemoveLabel,
    ReopenIssue,
    ShowIssue,
)
from gogs_cli.engine.labels import LabelResolver
from gogs_cli.exceptions import MissingRepositoryError
from gogs_cli.identity import Identity
from gogs_cli.models.domain import (
    Comment,
    Issue,
    IssueDetail,
    IssueFilter,
    IssueState,
    IssueStateChange,
    LabelChange,
    RepoIssues,
    RepoRef,
    Repository,
)
from gogs_cli.providers.gogs_rest import GogsRestProvider

log = structlog.get_logger(__name__)


class CommandOrchestrator:
    """Run one client operation on behalf of the active identity.

    Attributes:
        identity: The resolved identity; its signature attributes writes
        provider: Typed tracker endpoints bound to the identity's client
        default_repo: Repository used when a command names none
        labels: Label name resolver sharing the same provider
        aggregator: Cross-repository issue collector
    """

    def __init__(
        self,
        identity: Identity,
        provider: GogsRestProvider,
        default_repo: RepoRef | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.identity = identity
        self.provider = provider
        self.default_repo = default_repo
        self.labels = LabelResolver(provider)
        self.aggregator = RepoAggregator(provider, max_workers=max_workers)

        self._handlers: dict[type, Callable[[Any], Awaitable[Any]]] = {
            ListIssues: self._run_list_issues,
            ShowIssue: lambda c: self.show_issue(c.number, repo=c.repo),
            CreateIssue: lambda c: self.create_issue(c.title, body=c.body, labels=c.labels, repo=c.repo),
            CommentOnIssue: lambda c: self.comment(c.number, c.text, repo=c.repo),
            CloseIssue: lambda c: self.close_issue(c.number, repo=c.repo),
            ReopenIssue: lambda c: self.reopen_issue(c.number, repo=c.repo),
            AddLabel: lambda c: self.add_label(c.number, c.label, repo=c.repo),
            RemoveLabel: lambda c: self.remove_label(c.number, c.label, repo=c.repo),
            ListRepositories: lambda c: self.list_repositories(),
        }

    async def execute(self, command: Command) -> Any:
        """Dispatch a command variant to its operation."""
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")
        log.debug("execute_command", command=type(command).__name__, profile=self.identity.name)
        return await handler(command)

    def sign(self, text: str) -> str:
        """Prefix ``text`` with the identity's signature and a single space.

        No deduplication: text that already starts with a signature is
        signed again.
        """
        return f"{self.identity.signature} {text}"

    def resolve_repo(self, repo: str | None) -> RepoRef:
        """Apply the default repository, then validate.

        Raises:
            MissingRepositoryError: If neither ``repo`` nor a default is set
            ValidationError: If ``repo`` is not ``owner/name``
        """
        if repo is not None:
            return RepoRef.parse(repo)
        if self.default_repo is not None:
            return self.default_repo
        raise MissingRepositoryError()

    async def list_issues(
        self,
        repo: str | None = None,
        state: IssueFilter = IssueFilter.OPEN,
        labels: Sequence[str] = (),
        all_repos: bool = False,
    ) -> list[RepoIssues]:
        """List issues for one repository, or for every visible repository.

        With ``all_repos`` the repository order is the order returned by the
        repository-listing call.
        """
        if all_repos:
            repositories = await self.provider.list_user_repos()
            return await self.aggregator.aggregate(
                [repository.ref for repository in repositories], state, labels
            )

        ref = self.resolve_repo(repo)
        issues = await self.provider.list_issues(ref, state)
        return [RepoIssues(repository=ref, issues=filter_by_labels(issues, labels))]

    async def show_issue(self, number: int, repo: str | None = None) -> IssueDetail:
        ref = self.resolve_repo(repo)
        issue = await self.provider.get_issue(ref, number)
        comments = await self.provider.list_comments(ref, number)
        return IssueDetail(issue=issue, comments=tuple(comments))

    async def create_issue(
        self,
        title: str,
        body: str | None = None,
        labels: Sequence[str] = (),
        repo: str | None = None,
    ) -> Issue:
        """Create an attributed issue.

        Without a body the stored body is the bare signature.
        """
        ref = self.resolve_repo(repo)
        label_ids = await self.labels.resolve_many(ref, list(labels))
        signed_body = self.sign(body) if body is not None else self.identity.signature
        return await self.provider.create_issue(ref, title, body=signed_body, label_ids=label_ids)

    async def comment(self, number: int, text: str, repo: str | None = None) -> Comment:
        ref = self.resolve_repo(repo)
        return await self.provider.create_comment(ref, number, self.sign(text))

    async def close_issue(self, number: int, repo: str | None = None) -> IssueStateChange:
        ref = self.resolve_repo(repo)
        issue = await self.provider.update_issue_state(ref, number, IssueState.CLOSED)
        return IssueStateChange(issue=issue, action="closed")

    async def reopen_issue(self, number: int, repo: str | None = None) -> IssueStateChange:
        ref = self.resolve_repo(repo)
        issue = await self.provider.update_issue_state(ref, number, IssueState.OPEN)
        return IssueStateChange(issue=issue, action="reopened")

    async def add_label(self, number: int, label: str, repo: str | None = None) -> LabelChange:
        ref = self.resolve_repo(repo)
        return await self.labels.attach(ref, number, label)

    async def remove_label(self, number: int, label: str, repo: str | None = None) -> LabelChange:
        ref = self.resolve_repo(repo)
        return await self.labels.detach(ref, number, label)

    async def list_repositories(self) -> list[Repository]:
        return await self.provider.list_user_repos()

    async def _run_list_issues(self, command: ListIssues) -> list[RepoIssues]:
        return await self.list_issues(
            repo=command.repo,
            state=command.state,
            labels=command.labels,
            all_repos=command.all_repos,
        )
