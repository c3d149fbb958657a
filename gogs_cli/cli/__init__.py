"""CLI commands for the gog client.

The entry point ``gog`` lives in ``gogs_cli.main``; this package holds its
subcommands and the shared plumbing they use.

Key Commands:
    init (gogs_cli.cli.init):
        Interactive wizard that writes the configuration file, tests the
        connection and optionally stores the token in the OS keyring.

    issue (gogs_cli.cli.issue):
        List, show, create, comment on, close, reopen, label and unlabel
        issues as the active profile.

    repo (gogs_cli.cli.repo):
        List repositories visible to the active profile.

Module Structure:
    - session.py: Config/identity/client wiring and error-to-exit-code mapping
    - output.py: Human and JSON rendering
"""

from gogs_cli.cli.init import init_command
from gogs_cli.cli.issue import issue_group
from gogs_cli.cli.repo import repo_group

__all__ = ["init_command", "issue_group", "repo_group"]
