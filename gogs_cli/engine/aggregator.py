"""
Multi-repository issue aggregation.

Fans out one issue-list request per repository under a small concurrency
limit, then assembles the results in the order the repositories were given.
Completion order never affects the output.
"""

import asyncio
from collections.abc import Sequence

import structlog

from gogs_cli.models.domain import Issue, IssueFilter, RepoIssues, RepoRef
from gogs_cli.providers.gogs_rest import GogsRestProvider

log = structlog.get_logger(__name__)

DEFAULT_MAX_WORKERS = 4
MAX_WORKERS_LIMIT = 8


def filter_by_labels(issues: Sequence[Issue], labels: Sequence[str]) -> tuple[Issue, ...]:
    """Keep issues carrying at least one of ``labels`` (case-insensitive).

    An empty ``labels`` keeps everything.
    """
    if not labels:
        return tuple(issues)
    wanted = {label.casefold() for label in labels}
    return tuple(
        issue for issue in issues if any(name.casefold() in wanted for name in issue.label_names)
    )


class RepoAggregator:
    """Collect issues across repositories.

    All workers share the provider's single HTTP client. Failure is
    all-or-nothing: the first repository query to fail cancels the rest and
    its error is raised; no partial result is returned.

    Example:
        >>> aggregator = RepoAggregator(provider, max_workers=4)
        >>> results = await aggregator.aggregate(repos, IssueFilter.OPEN)
        >>> [(str(r.repository), len(r.issues)) for r in results]
        [('a/x', 1), ('a/y', 0)]
    """

    def __init__(self, provider: GogsRestProvider, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        if not 1 <= max_workers <= MAX_WORKERS_LIMIT:
            raise ValueError(f"max_workers must be between 1 and {MAX_WORKERS_LIMIT}, got {max_workers}")
        self.provider = provider
        self.max_workers = max_workers

    async def aggregate(
        self,
        repos: Sequence[RepoRef],
        issue_filter: IssueFilter = IssueFilter.OPEN,
        labels: Sequence[str] = (),
    ) -> list[RepoIssues]:
        """List issues for every repository in ``repos``.

        Args:
            repos: Repositories in the order the output must follow
            issue_filter: State filter passed to the tracker
            labels: Optional label names; see ``filter_by_labels``

        Returns:
            One ``RepoIssues`` per input repository, in input order. A
            repository without matching issues has an empty ``issues`` tuple.

        Raises:
            GogsCliError: The first error raised by any repository query
        """
        log.info(
            "aggregation_started",
            repo_count=len(repos),
            state=str(issue_filter),
            max_workers=self.max_workers,
        )

        semaphore = asyncio.Semaphore(self.max_workers)
        slots: list[tuple[Issue, ...] | None] = [None] * len(repos)

        async def fetch(index: int, repo: RepoRef) -> None:
            async with semaphore:
                issues = await self.provider.list_issues(repo, issue_filter)
            slots[index] = filter_by_labels(issues, labels)

        tasks = [asyncio.create_task(fetch(index, repo)) for index, repo in enumerate(repos)]
        try:
            await asyncio.gather(*tasks)
        except BaseException as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            log.error("aggregation_failed", error=str(e))
            raise

        results = [
            RepoIssues(repository=repo, issues=slots[index] or ())
            for index, repo in enumerate(repos)
        ]
        log.info("aggregation_complete", repo_count=len(results), issue_count=sum(len(r.issues) for r in results))
        return results
