"""Picking a user's most recent comment across a PR's two comment threads.

GitHub keeps review-thread comments (attached to diff lines) and issue-thread
comments (the general conversation) in separate endpoints. The two threads
are selected with different rules:

- review thread: fetched in ascending creation order, and the *first* comment
  by the login is kept. This is the earliest one on the page, not the latest.
- issue thread: the page is reversed and the first comment by the login is
  kept, i.e. the newest one on the page.

The results are then compared on ``updated_at``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from prqueue_core.models import parse_timestamp

if TYPE_CHECKING:
    from prqueue_core.models import Comment, PullRequest

logger = logging.getLogger(__name__)


def first_review_comment_by(comments: Iterable[Comment], login: str) -> Comment | None:
    """Return the first review-thread comment by ``login`` in page order."""
    for comment in comments:
        if comment.user.login == login:
            return comment
    return None


def last_issue_comment_by(comments: Iterable[Comment], login: str) -> Comment | None:
    """Return the first issue-thread comment by ``login`` after reversing the page."""
    for comment in reversed(list(comments)):
        if comment.user.login == login:
            return comment
    return None


def pick_latest(review_comment: Comment | None, issue_comment: Comment | None) -> Comment | None:
    """Choose between the two thread candidates.

    The issue comment wins only when it was updated strictly later; equal
    timestamps keep the review comment.
    """
    if review_comment is not None and issue_comment is not None:
        if parse_timestamp(issue_comment.updated_at) > parse_timestamp(review_comment.updated_at):
            return issue_comment
        return review_comment
    if issue_comment is not None:
        return issue_comment
    return review_comment


def latest_comment_by(client, pr: PullRequest, login: str) -> Comment | None:
    review_comment = first_review_comment_by(client.get_review_comments(pr.number), login)
    issue_comment = last_issue_comment_by(client.get_issue_comments(pr.number), login)

    latest = pick_latest(review_comment, issue_comment)
    if latest is not None:
        kind = "PR" if latest is review_comment else "issue"
        logger.debug(
            "last %s comment by %s at %s was %r", kind, latest.user.login, latest.updated_at.isoformat(), latest.body
        )
    return latest
