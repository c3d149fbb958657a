"""Tests for gogs_cli.engine.orchestrator."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from conftest import issue_payload

from gogs_cli.engine.commands import (
    AddLabel,
    CloseIssue,
    CommentOnIssue,
    CreateIssue,
    ListIssues,
    ListRepositories,
    RemoveLabel,
    ReopenIssue,
    ShowIssue,
)
from gogs_cli.engine.orchestrator import CommandOrchestrator
from gogs_cli.exceptions import MissingRepositoryError, ValidationError
from gogs_cli.models.domain import (
    Comment,
    Issue,
    IssueFilter,
    IssueState,
    Label,
    RepoIssues,
    RepoRef,
    Repository,
    User,
)
from gogs_cli.providers.gogs_rest import GogsRestProvider

NOW = datetime(2024, 6, 15, tzinfo=UTC)
DEFAULT_REPO = RepoRef("acme", "widgets")


def make_issue(repo: RepoRef = DEFAULT_REPO, number: int = 1, state: IssueState = IssueState.OPEN) -> Issue:
    return Issue(number, number, "t", "", state, (), NOW, NOW, repo)


@pytest.fixture
def mock_provider() -> AsyncMock:
    provider = AsyncMock(spec=GogsRestProvider)
    provider.create_issue.return_value = make_issue()
    provider.create_comment.return_value = Comment(1, "body", "alice", NOW, 1, DEFAULT_REPO)
    provider.list_labels.return_value = [Label(4, "bug"), Label(9, "urgent")]
    return provider


@pytest.fixture
def orchestrator(human_identity, mock_provider) -> CommandOrchestrator:
    return CommandOrchestrator(human_identity, mock_provider, default_repo=DEFAULT_REPO)


class TestSigning:
    """Authored text is prefixed with the signature exactly once per call."""

    def test_sign(self, orchestrator):
        assert orchestrator.sign("crash on start") == "[Human] crash on start"

    def test_already_signed_text_is_signed_again(self, orchestrator):
        assert orchestrator.sign("[Human] hi") == "[Human] [Human] hi"

    @pytest.mark.asyncio
    async def test_create_issue_body_signed(self, orchestrator, mock_provider):
        await orchestrator.create_issue("Bug", body="crash on start")

        mock_provider.create_issue.assert_awaited_once_with(
            DEFAULT_REPO, "Bug", body="[Human] crash on start", label_ids=[]
        )

    @pytest.mark.asyncio
    async def test_no_double_signing_across_calls(self, orchestrator, mock_provider):
        await orchestrator.create_issue("First", body="crash on start")
        await orchestrator.create_issue("Second", body="crash on start")

        bodies = [call.kwargs["body"] for call in mock_provider.create_issue.await_args_list]
        assert bodies == ["[Human] crash on start", "[Human] crash on start"]

    @pytest.mark.asyncio
    async def test_missing_body_is_bare_signature(self, orchestrator, mock_provider):
        await orchestrator.create_issue("Bug")

        assert mock_provider.create_issue.await_args.kwargs["body"] == "[Human]"

    @pytest.mark.asyncio
    async def test_comment_signed(self, orchestrator, mock_provider):
        await orchestrator.comment(42, "Working on this")

        mock_provider.create_comment.assert_awaited_once_with(DEFAULT_REPO, 42, "[Human] Working on this")

    @pytest.mark.asyncio
    async def test_create_issue_stored_body(self, human_identity, provider, fake_gogs):
        """End to end: the stored body is the signed text."""
        fake_gogs.add(
            "POST",
            "/repos/acme/widgets/issues",
            issue_payload(7, "Bug", body="[Human] crash on start"),
            status=201,
        )
        orchestrator = CommandOrchestrator(human_identity, provider, default_repo=DEFAULT_REPO)

        issue = await orchestrator.create_issue("Bug", body="crash on start")

        assert fake_gogs.payload(fake_gogs.requests[0])["body"] == "[Human] crash on start"
        assert issue.body == "[Human] crash on start"


class TestRepositoryDefaulting:
    def test_explicit_repo_wins(self, orchestrator):
        assert orchestrator.resolve_repo("other/repo") == RepoRef("other", "repo")

    def test_default_used(self, orchestrator):
        assert orchestrator.resolve_repo(None) == DEFAULT_REPO

    def test_missing_repo(self, human_identity, mock_provider):
        orchestrator = CommandOrchestrator(human_identity, mock_provider)

        with pytest.raises(MissingRepositoryError):
            orchestrator.resolve_repo(None)

    @pytest.mark.asyncio
    async def test_malformed_repo_makes_no_call(self, orchestrator, mock_provider):
        with pytest.raises(ValidationError):
            await orchestrator.close_issue(3, repo="not-a-repo")

        mock_provider.update_issue_state.assert_not_awaited()


class TestOperations:
    @pytest.mark.asyncio
    async def test_create_issue_resolves_labels(self, orchestrator, mock_provider):
        await orchestrator.create_issue("Bug", body="b", labels=["urgent", "bug"])

        assert mock_provider.create_issue.await_args.kwargs["label_ids"] == [9, 4]

    @pytest.mark.asyncio
    async def test_list_single_repository(self, orchestrator, mock_provider):
        issue = make_issue()
        mock_provider.list_issues.return_value = [issue]

        results = await orchestrator.list_issues(state=IssueFilter.CLOSED)

        mock_provider.list_issues.assert_awaited_once_with(DEFAULT_REPO, IssueFilter.CLOSED)
        assert results == [RepoIssues(DEFAULT_REPO, (issue,))]

    @pytest.mark.asyncio
    async def test_list_all_repositories_in_listing_order(self, orchestrator, mock_provider):
        owner = User(1, "a")
        mock_provider.list_user_repos.return_value = [
            Repository(1, "y", "a/y", owner, ""),
            Repository(2, "x", "a/x", owner, ""),
        ]
        mock_provider.list_issues.return_value = []

        results = await orchestrator.list_issues(all_repos=True)

        assert [str(r.repository) for r in results] == ["a/y", "a/x"]

    @pytest.mark.asyncio
    async def test_show_issue_includes_comments(self, orchestrator, mock_provider):
        mock_provider.get_issue.return_value = make_issue(number=5)
        mock_provider.list_comments.return_value = [Comment(1, "c", "bob", NOW, 5, DEFAULT_REPO)]

        detail = await orchestrator.show_issue(5)

        assert detail.issue.number == 5
        assert len(detail.comments) == 1

    @pytest.mark.asyncio
    async def test_close_and_reopen(self, orchestrator, mock_provider):
        mock_provider.update_issue_state.return_value = make_issue(state=IssueState.CLOSED)

        closed = await orchestrator.close_issue(1)
        reopened = await orchestrator.reopen_issue(1)

        assert closed.action == "closed"
        assert reopened.action == "reopened"
        states = [call.args[2] for call in mock_provider.update_issue_state.await_args_list]
        assert states == [IssueState.CLOSED, IssueState.OPEN]


class TestExecute:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("command", "method"),
        [
            (ListIssues(), "list_issues"),
            (ShowIssue(1), "get_issue"),
            (CreateIssue("t"), "create_issue"),
            (CommentOnIssue(1, "x"), "create_comment"),
            (CloseIssue(1), "update_issue_state"),
            (ReopenIssue(1), "update_issue_state"),
            (AddLabel(1, "bug"), "add_labels"),
            (RemoveLabel(1, "bug"), "remove_label"),
            (ListRepositories(), "list_user_repos"),
        ],
    )
    async def test_dispatch(self, orchestrator, mock_provider, command, method):
        mock_provider.list_issues.return_value = []
        mock_provider.get_issue.return_value = make_issue()
        mock_provider.list_comments.return_value = []
        mock_provider.update_issue_state.return_value = make_issue()

        await orchestrator.execute(command)

        getattr(mock_provider, method).assert_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_command(self, orchestrator):
        with pytest.raises(TypeError, match="Unsupported command"):
            await orchestrator.execute(object())
