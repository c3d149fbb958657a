"""Tests for gogs_cli.identity."""

import pytest

from gogs_cli.config.settings import GogsConfig
from gogs_cli.exceptions import CredentialNotFoundError, ProfileNotFoundError
from gogs_cli.identity import IdentityResolver


@pytest.fixture
def config(config_file) -> GogsConfig:
    return GogsConfig.load(config_file)


class TestProfileName:
    """Resolution order: explicit, $GOGS_PROFILE, defaults.profile, "default"."""

    def test_explicit_wins(self, config):
        resolver = IdentityResolver(config, environ={"GOGS_PROFILE": "human"})

        assert resolver.profile_name("reviewer") == "reviewer"

    def test_environment_before_config_default(self, config):
        resolver = IdentityResolver(config, environ={"GOGS_PROFILE": "human"})

        assert resolver.profile_name() == "human"

    def test_config_default(self, config):
        assert IdentityResolver(config, environ={}).profile_name() == "planner"

    def test_literal_default(self, config):
        config.defaults.profile = None

        assert IdentityResolver(config, environ={}).profile_name() == "default"


class TestResolve:
    def test_every_configured_profile_resolves(self, config):
        resolver = IdentityResolver(config, environ={"TEST_HUMAN_TOKEN": "human-token"})

        for name, profile in config.profiles.items():
            identity = resolver.resolve(name)

            assert identity.name == name
            assert identity.user == profile.user
            assert identity.signature == profile.signature
            assert identity.role == profile.role
            assert identity.server_url == "https://gogs.example.com"

    def test_token_reference_resolved_from_environment(self, config):
        resolver = IdentityResolver(config, environ={"TEST_HUMAN_TOKEN": "human-token"})

        assert resolver.resolve("human").token == "human-token"

    def test_literal_token(self, config):
        assert IdentityResolver(config, environ={}).resolve().token == "planner-token"

    def test_unknown_profile(self, config):
        with pytest.raises(ProfileNotFoundError) as exc_info:
            IdentityResolver(config, environ={}).resolve("reviewer")

        assert exc_info.value.message == "Profile 'reviewer' not found in config"

    def test_missing_default_profile(self, config):
        config.defaults.profile = None

        with pytest.raises(ProfileNotFoundError, match="'default'"):
            IdentityResolver(config, environ={}).resolve()

    def test_unset_token_variable(self, config):
        with pytest.raises(CredentialNotFoundError, match="TEST_HUMAN_TOKEN"):
            IdentityResolver(config, environ={}).resolve("human")

    def test_token_not_in_repr(self, config):
        identity = IdentityResolver(config, environ={}).resolve("planner")

        assert "planner-token" not in repr(identity)
