"""Assemble the status summary for one pull request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from prqueue_core.comments import latest_comment_by
from prqueue_core.models import PullRequestSummary

if TYPE_CHECKING:
    from prqueue_core.mergeable import MergeabilityResolver
    from prqueue_core.models import Commit, PullRequest, PullRequestReview


def commits_by(commits: Iterable[Commit], login: str) -> tuple[Commit, ...]:
    """Commits whose linked author or committer account is ``login``."""
    return tuple(
        c
        for c in commits
        if (c.author is not None and c.author.login == login)
        or (c.committer is not None and c.committer.login == login)
    )


def latest_review_by(reviews: Iterable[PullRequestReview], login: str) -> PullRequestReview | None:
    """Return the last review by ``login``; GitHub lists reviews oldest first."""
    latest = None
    for review in reviews:
        if review.user.login == login:
            latest = review
    return latest


def summarize(client, resolver: MergeabilityResolver, pr: PullRequest, operator: str) -> PullRequestSummary:
    """Gather mergeability, reviews, latest comments and operator commits for ``pr``.

    Any request failure propagates; a summary is never partially built.
    """
    # The listing often already carries a definite value, which saves a poll.
    mergeable = pr.mergeable if pr.mergeable is not None else resolver.resolve(pr.number)

    reviews = tuple(client.get_reviews(pr.number))
    last_comment_by_author = latest_comment_by(client, pr, pr.user.login)
    last_comment_by_operator = latest_comment_by(client, pr, operator)
    operator_commits = commits_by(client.get_commits(pr.number), operator)

    return PullRequestSummary(
        pr=pr,
        mergeable=mergeable,
        last_comment_by_author=last_comment_by_author,
        last_comment_by_operator=last_comment_by_operator,
        commits_by_operator=operator_commits,
        reviews=reviews,
    )
