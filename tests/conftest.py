"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog
import yaml

from gogs_cli.api.client import APIClient
from gogs_cli.identity import Identity
from gogs_cli.providers.gogs_rest import GogsRestProvider

SERVER_URL = "https://gogs.example.com"
TIMESTAMP = "2024-06-15T10:30:00Z"


def user_payload(username: str = "alice", user_id: int = 1) -> dict[str, Any]:
    return {"id": user_id, "username": username, "full_name": "", "email": f"{username}@example.com"}


def label_payload(label_id: int, name: str, color: str = "ee0701") -> dict[str, Any]:
    return {"id": label_id, "name": name, "color": color}


def repo_payload(owner: str, name: str, repo_id: int = 1, private: bool = False) -> dict[str, Any]:
    return {
        "id": repo_id,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": user_payload(owner),
        "html_url": f"{SERVER_URL}/{owner}/{name}",
        "clone_url": f"{SERVER_URL}/{owner}/{name}.git",
        "description": "",
        "private": private,
    }


def issue_payload(
    number: int,
    title: str,
    labels: list[dict[str, Any]] | None = None,
    state: str = "open",
    body: str | None = "",
    author: str = "alice",
) -> dict[str, Any]:
    return {
        "id": 1000 + number,
        "number": number,
        "title": title,
        "body": body,
        "state": state,
        "labels": labels or [],
        "user": user_payload(author),
        "comments": 0,
        "created_at": TIMESTAMP,
        "updated_at": TIMESTAMP,
    }


def comment_payload(comment_id: int, body: str, author: str = "alice") -> dict[str, Any]:
    return {
        "id": comment_id,
        "body": body,
        "user": user_payload(author),
        "created_at": TIMESTAMP,
        "updated_at": TIMESTAMP,
    }


Route = tuple[int, Any] | Callable[[httpx.Request], httpx.Response]


class FakeGogs:
    """In-memory Gogs API behind ``httpx.MockTransport``.

    Routes are keyed by method and path relative to ``/api/v1``. Unknown
    routes answer 404 with a Gogs-style error body. Every request is
    recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v1")
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == f"/api/v1{path}"
        ]

    @staticmethod
    def payload(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep the developer's own gog settings out of tests."""
    monkeypatch.delenv("GOGS_PROFILE", raising=False)
    monkeypatch.delenv("GOGS_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging configuration made by a test (it may point at a closed stream)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_gogs() -> FakeGogs:
    return FakeGogs()


@pytest.fixture
def api_client(fake_gogs: FakeGogs) -> APIClient:
    """APIClient wired to the fake server."""
    return APIClient(SERVER_URL, "secret-token-123", transport=fake_gogs.transport)


@pytest.fixture
def provider(api_client: APIClient) -> GogsRestProvider:
    return GogsRestProvider(api_client)


@pytest.fixture
def human_identity() -> Identity:
    return Identity(
        name="default",
        user="alice",
        server_url=SERVER_URL,
        token="secret-token-123",
        role="Human",
        signature="[Human]",
    )


@pytest.fixture
def config_data() -> dict[str, Any]:
    """Two-profile configuration as written by ``gog init``."""
    return {
        "server": {"url": SERVER_URL},
        "defaults": {"profile": "planner"},
        "profiles": {
            "planner": {
                "user": "planner-bot",
                "token": "planner-token",
                "role": "Planning Agent",
                "signature": "[Planner]",
            },
            "human": {
                "user": "alice",
                "token": "${TEST_HUMAN_TOKEN}",
                "role": "Human",
                "signature": "[Human]",
            },
        },
    }


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict[str, Any]) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config_data, sort_keys=False), encoding="utf-8")
    return path
