"""Gogs issue-tracker endpoints on top of ``APIClient``."""

from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

import structlog

from gogs_cli.api.client import APIClient
from gogs_cli.exceptions import ResponseDecodeError
from gogs_cli.models.domain import (
    Comment,
    Issue,
    IssueFilter,
    IssueState,
    Label,
    RepoRef,
    Repository,
    User,
)

log = structlog.get_logger(__name__)

T = TypeVar("T")


class GogsRestProvider:
    """Typed access to the repository, issue, comment, and label endpoints.

    Every method maps to exactly one REST call. Responses are decoded into
    the frozen domain models; a response of the wrong shape raises
    ``ResponseDecodeError``.
    """

    def __init__(self, client: APIClient) -> None:
        self.client = client

    async def list_user_repos(self) -> list[Repository]:
        """Repositories visible to the active identity, in tracker order."""
        log.info("list_user_repos")
        data = await self.client.fetch("/user/repos")
        return self._decode_list(data, self._parse_repository, "/user/repos")

    async def list_issues(self, repo: RepoRef, state: IssueFilter = IssueFilter.OPEN) -> list[Issue]:
        """First page of issues for ``repo`` in the requested state."""
        log.info("list_issues", repo=str(repo), state=str(state))
        path = f"/repos/{repo.owner}/{repo.name}/issues"
        data = await self.client.fetch(path, params={"state": IssueFilter(state).value})
        return self._decode_list(data, lambda item: self._parse_issue(item, repo), path)

    async def get_issue(self, repo: RepoRef, number: int) -> Issue:
        log.info("get_issue", repo=str(repo), number=number)
        path = f"/repos/{repo.owner}/{repo.name}/issues/{number}"
        data = await self.client.fetch(path)
        return self._decode(data, lambda item: self._parse_issue(item, repo), path)

    async def create_issue(
        self,
        repo: RepoRef,
        title: str,
        body: str | None = None,
        label_ids: list[int] | None = None,
    ) -> Issue:
        """Create an issue. Labels must already be resolved to ids."""
        log.info("create_issue", repo=str(repo), title=title)
        path = f"/repos/{repo.owner}/{repo.name}/issues"

        payload: dict[str, Any] = {"title": title}
        if body is not None:
            payload["body"] = body
        if label_ids:
            payload["labels"] = label_ids

        data = await self.client.create(path, payload)
        return self._decode(data, lambda item: self._parse_issue(item, repo), path)

    async def update_issue_state(self, repo: RepoRef, number: int, state: IssueState) -> Issue:
        log.info("update_issue_state", repo=str(repo), number=number, state=str(state))
        path = f"/repos/{repo.owner}/{repo.name}/issues/{number}"
        data = await self.client.update(path, {"state": IssueState(state).value})
        return self._decode(data, lambda item: self._parse_issue(item, repo), path)

    async def list_comments(self, repo: RepoRef, number: int) -> list[Comment]:
        log.info("list_comments", repo=str(repo), number=number)
        path = f"/repos/{repo.owner}/{repo.name}/issues/{number}/comments"
        data = await self.client.fetch(path)
        return self._decode_list(data, lambda item: self._parse_comment(item, repo, number), path)

    async def create_comment(self, repo: RepoRef, number: int, body: str) -> Comment:
        log.info("create_comment", repo=str(repo), number=number)
        path = f"/repos/{repo.owner}/{repo.name}/issues/{number}/comments"
        data = await self.client.create(path, {"body": body})
        return self._decode(data, lambda item: self._parse_comment(item, repo, number), path)

    async def list_labels(self, repo: RepoRef) -> list[Label]:
        log.info("list_labels", repo=str(repo))
        path = f"/repos/{repo.owner}/{repo.name}/labels"
        data = await self.client.fetch(path)
        return self._decode_list(data, self._parse_label, path)

    async def add_labels(self, repo: RepoRef, number: int, label_ids: list[int]) -> list[Label]:
        """Attach labels by id without disturbing the issue's other labels.

        Returns:
            The issue's full label set after the change
        """
        log.info("add_labels", repo=str(repo), number=number, label_ids=label_ids)
        path = f"/repos/{repo.owner}/{repo.name}/issues/{number}/labels"
        data = await self.client.create(path, {"labels": label_ids})
        return self._decode_list(data, self._parse_label, path)

    async def remove_label(self, repo: RepoRef, number: int, label_id: int) -> None:
        log.info("remove_label", repo=str(repo), number=number, label_id=label_id)
        await self.client.delete(f"/repos/{repo.owner}/{repo.name}/issues/{number}/labels/{label_id}")

    @staticmethod
    def _decode(data: Any, parse: Callable[[Any], T], path: str) -> T:
        """Apply ``parse`` and turn shape mismatches into ``ResponseDecodeError``."""
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ResponseDecodeError(f"Unexpected response shape from {path}: {e!r}") from e

    @classmethod
    def _decode_list(cls, data: Any, parse: Callable[[Any], T], path: str) -> list[T]:
        if not isinstance(data, list):
            raise ResponseDecodeError(
                f"Unexpected response shape from {path}: expected a list, got {type(data).__name__}"
            )
        return [cls._decode(item, parse, path) for item in data]

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        # Gogs emits RFC 3339; fromisoformat needs +00:00 instead of Z
        return datetime.fromisoformat(value.replace("Z", "+00:00"))

    @staticmethod
    def _parse_user(data: dict[str, Any]) -> User:
        """Gogs reports the login as ``username``; Gitea-style servers use ``login``."""
        return User(
            id=data["id"],
            username=data.get("username") or data["login"],
            full_name=data.get("full_name") or None,
            email=data.get("email") or None,
        )

    @staticmethod
    def _parse_label(data: dict[str, Any]) -> Label:
        return Label(id=int(data["id"]), name=data["name"], color=data.get("color", ""))

    @classmethod
    def _parse_repository(cls, data: dict[str, Any]) -> Repository:
        return Repository(
            id=data["id"],
            name=data["name"],
            full_name=data["full_name"],
            owner=cls._parse_user(data["owner"]),
            html_url=data.get("html_url", ""),
            clone_url=data.get("clone_url", ""),
            description=data.get("description") or None,
            private=bool(data.get("private", False)),
        )

    @classmethod
    def _parse_issue(cls, data: dict[str, Any], repo: RepoRef) -> Issue:
        """Parse an issue payload.

        Field mappings:
            - data["id"] -> id, data["number"] -> number
            - data["state"] -> state ("open" -> OPEN, anything else -> CLOSED)
            - data["labels"] -> labels (label objects, order preserved)
            - data["user"] -> author (login name)
            - data["comments"] -> comments (count)

        The repository is not part of the payload; it is the one the issue
        was requested from.
        """
        return Issue(
            id=data["id"],
            number=data["number"],
            title=data["title"],
            body=data.get("body"),
            state=IssueState.OPEN if data["state"] == "open" else IssueState.CLOSED,
            labels=tuple(cls._parse_label(label) for label in data.get("labels") or []),
            created_at=cls._parse_datetime(data["created_at"]),
            updated_at=cls._parse_datetime(data["updated_at"]),
            repository=repo,
            author=cls._parse_user(data["user"]).username,
            comments=int(data.get("comments", 0)),
            html_url=data.get("html_url", ""),
        )

    @classmethod
    def _parse_comment(cls, data: dict[str, Any], repo: RepoRef, number: int) -> Comment:
        updated_at = data.get("updated_at")
        return Comment(
            id=data["id"],
            body=data["body"],
            author=cls._parse_user(data["user"]).username,
            created_at=cls._parse_datetime(data["created_at"]),
            issue_number=number,
            repository=repo,
            updated_at=cls._parse_datetime(updated_at) if updated_at else None,
        )
