"""Tests for environment variable backend."""

from gogs_cli.credentials import EnvironmentBackend


class TestEnvironmentBackend:
    def test_backend_properties(self):
        backend = EnvironmentBackend({})

        assert backend.name == "environment"
        assert backend.available is True

    def test_get_from_mapping(self):
        backend = EnvironmentBackend({"PLANNER_TOKEN": "abc123"})

        assert backend.get("PLANNER_TOKEN") == "abc123"
        assert backend.get("OTHER_TOKEN") is None

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("TEST_GOG_TOKEN", "from-env")

        assert EnvironmentBackend().get("TEST_GOG_TOKEN") == "from-env"
