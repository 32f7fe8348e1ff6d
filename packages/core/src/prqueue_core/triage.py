"""Walk the open pull requests and summarize the ones the operator should look at."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

from prqueue_core.summary import summarize

if TYPE_CHECKING:
    from prqueue_core.mergeable import MergeabilityResolver
    from prqueue_core.models import PullRequest, PullRequestSummary

logger = logging.getLogger(__name__)


class TriageDriver:
    """Sequential scan of a repository's open pull requests.

    Each PR is fully summarized, mergeability poll included, and handed to
    the report callable before the next one starts, so output follows the
    listing order.
    """

    def __init__(
        self,
        client,
        resolver: MergeabilityResolver,
        ignored_authors: Iterable[str] = (),
        sort: str = "updated",
        direction: str = "asc",
    ):
        self._client = client
        self._resolver = resolver
        self.ignored_authors = frozenset(ignored_authors)
        self.sort = sort
        self.direction = direction

    def should_summarize(self, pr: PullRequest, operator: str) -> bool:
        author = pr.user.login
        # The operator's own PRs are always skipped.
        if author == operator or author in self.ignored_authors:
            return False
        if pr.assignee is not None and pr.assignee.login != operator:
            return False
        return True

    def run(self, operator: str, report: Callable[[PullRequestSummary], None]) -> list[int]:
        """Summarize every open PR that passes the filter and return their numbers."""
        summarized: list[int] = []
        for pr in self._client.get_open_pull_requests(sort=self.sort, direction=self.direction):
            if not self.should_summarize(pr, operator):
                logger.debug("Skipping #%d by %s", pr.number, pr.user.login)
                continue
            report(summarize(self._client, self._resolver, pr, operator))
            summarized.append(pr.number)
        return summarized
