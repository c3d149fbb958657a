"""Resolve the active agent identity for one invocation."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

import structlog

from gogs_cli.config.settings import GogsConfig
from gogs_cli.credentials import CredentialResolver, EnvironmentBackend
from gogs_cli.exceptions import ProfileNotFoundError

log = structlog.get_logger(__name__)

PROFILE_ENV_VAR = "GOGS_PROFILE"
FALLBACK_PROFILE = "default"


@dataclass(frozen=True)
class Identity:
    """Credential-and-signature bundle for the actor running this process."""

    name: str
    user: str
    server_url: str
    token: str = field(repr=False)
    role: str
    signature: str


class IdentityResolver:
    """Pick the profile to act as and materialize it into an ``Identity``.

    Resolution order: explicit name, ``$GOGS_PROFILE``, ``defaults.profile``,
    then the literal ``"default"``. No network I/O happens here; a bad token
    is only discovered on the first API call.
    """

    def __init__(
        self,
        config: GogsConfig,
        environ: Mapping[str, str] | None = None,
        credentials: CredentialResolver | None = None,
    ) -> None:
        self.config = config
        self.environ = environ if environ is not None else os.environ
        self.credentials = credentials or CredentialResolver(
            environment_backend=EnvironmentBackend(self.environ)
        )

    def profile_name(self, explicit_profile: str | None = None) -> str:
        return (
            explicit_profile
            or self.environ.get(PROFILE_ENV_VAR)
            or self.config.defaults.profile
            or FALLBACK_PROFILE
        )

    def resolve(self, explicit_profile: str | None = None) -> Identity:
        """Return the active identity.

        Raises:
            ProfileNotFoundError: If the resolved name has no profile entry
            CredentialError: If the profile's token reference cannot be resolved
        """
        name = self.profile_name(explicit_profile)
        profile = self.config.profiles.get(name)
        if profile is None:
            raise ProfileNotFoundError(name)

        token = self.credentials.resolve(profile.token)

        log.debug("identity_resolved", profile=name, user=profile.user, role=profile.role)
        return Identity(
            name=name,
            user=profile.user,
            server_url=self.config.server.base_url,
            token=token,
            role=profile.role,
            signature=profile.signature,
        )
