"""
Label name to id resolution.

The tracker addresses labels by numeric id, and ids are scoped to one
repository. Operators and agents think in names. ``LabelResolver`` bridges
the two by re-reading the repository's label list on every lookup, because
other actors may add or delete labels between invocations.
"""

import structlog

from gogs_cli.exceptions import NotFoundError
from gogs_cli.models.domain import Label, LabelChange, RepoRef
from gogs_cli.providers.gogs_rest import GogsRestProvider

log = structlog.get_logger(__name__)


class LabelResolver:
    """Resolve label names within a repository and attach or detach them.

    Labels are never created: a name absent from the repository's label list
    is a ``NotFoundError``.

    Example:
        >>> resolver = LabelResolver(provider)
        >>> await resolver.attach(RepoRef("acme", "widgets"), 5, "urgent")
    """

    def __init__(self, provider: GogsRestProvider) -> None:
        self.provider = provider

    async def find(self, repo: RepoRef, name: str) -> Label:
        """Return the label named exactly ``name`` (case-sensitive).

        Raises:
            NotFoundError: If the repository has no such label
        """
        labels = await self.provider.list_labels(repo)
        for label in labels:
            if label.name == name:
                log.debug("label_resolved", repo=str(repo), label=name, label_id=label.id)
                return label
        raise NotFoundError(f"Label '{name}' not found in repository {repo}")

    async def resolve_label(self, repo: RepoRef, name: str) -> int:
        """Return the numeric id of the label named ``name``."""
        label = await self.find(repo, name)
        return label.id

    async def resolve_many(self, repo: RepoRef, names: list[str]) -> list[int]:
        """Resolve several names with a single label-list fetch, preserving order.

        Raises:
            NotFoundError: Naming the first label that does not exist
        """
        if not names:
            return []

        label_map = {label.name: label.id for label in await self.provider.list_labels(repo)}
        ids = []
        for name in names:
            if name not in label_map:
                raise NotFoundError(f"Label '{name}' not found in repository {repo}")
            ids.append(label_map[name])
        return ids

    async def attach(self, repo: RepoRef, issue_number: int, name: str) -> LabelChange:
        """Add one label to an issue, leaving its other labels untouched."""
        label = await self.find(repo, name)
        await self.provider.add_labels(repo, issue_number, [label.id])
        return LabelChange(repository=repo, issue_number=issue_number, label=label, action="added")

    async def detach(self, repo: RepoRef, issue_number: int, name: str) -> LabelChange:
        """Remove exactly one label from an issue by id.

        Uses the remove-by-id endpoint; the rest of the issue's label set is
        never read back or rewritten.
        """
        label = await self.find(repo, name)
        await self.provider.remove_label(repo, issue_number, label.id)
        return LabelChange(repository=repo, issue_number=issue_number, label=label, action="removed")
