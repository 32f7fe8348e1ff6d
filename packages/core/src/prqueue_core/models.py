"""Typed records for the pull request queue.

Decoupled from PyGithub so the summarizer and triage logic can be exercised
with plain values. The GitHub client converts API objects into these records
at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def parse_timestamp(value: datetime | str) -> datetime:
    """Return an aware datetime for an ISO-8601 string or datetime.

    GitHub timestamps end in ``Z``; naive datetimes are assumed to be UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class User:
    login: str


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    user: User
    assignee: User | None
    updated_at: datetime
    mergeable: bool | None  # None while GitHub is still computing it


@dataclass(frozen=True)
class Comment:
    body: str
    user: User
    created_at: datetime
    updated_at: datetime

    @property
    def was_edited(self) -> bool:
        return self.created_at != self.updated_at


@dataclass(frozen=True)
class Commit:
    author: User | None = None
    committer: User | None = None


class ReviewState(str, Enum):
    COMMENTED = "COMMENTED"
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"


@dataclass(frozen=True)
class PullRequestReview:
    user: User
    state: ReviewState
    submitted_at: datetime | None


@dataclass(frozen=True)
class PullRequestSummary:
    """Everything the report needs to describe one open pull request."""

    pr: PullRequest
    mergeable: bool
    last_comment_by_author: Comment | None = None
    last_comment_by_operator: Comment | None = None
    commits_by_operator: tuple[Commit, ...] = field(default_factory=tuple)
    reviews: tuple[PullRequestReview, ...] = field(default_factory=tuple)
