"""Shared fixtures: an in-memory stand-in for GitHubClient."""

from __future__ import annotations

from dataclasses import replace

import pytest

from prqueue_core.models import PullRequest, User, parse_timestamp


class FakeClient:
    """Serves canned records and records every call made against it."""

    def __init__(
        self,
        user="alice",
        pulls=(),
        mergeable_sequences=None,
        review_comments=None,
        issue_comments=None,
        reviews=None,
        commits=None,
    ):
        self.user = user
        self.pulls = list(pulls)
        self.mergeable_sequences = {k: list(v) for k, v in (mergeable_sequences or {}).items()}
        self.review_comments = review_comments or {}
        self.issue_comments = issue_comments or {}
        self.reviews = reviews or {}
        self.commits = commits or {}
        self.calls: list[tuple] = []

    def get_user(self):
        self.calls.append(("get_user",))
        return User(login=self.user)

    def get_open_pull_requests(self, sort="updated", direction="asc"):
        self.calls.append(("get_open_pull_requests", sort, direction))
        return list(self.pulls)

    def get_pull_request(self, number):
        self.calls.append(("get_pull_request", number))
        base = next((p for p in self.pulls if p.number == number), None) or make_pr(number)
        sequence = self.mergeable_sequences.get(number)
        mergeable = sequence.pop(0) if sequence else base.mergeable
        return replace(base, mergeable=mergeable)

    def get_review_comments(self, number):
        self.calls.append(("get_review_comments", number))
        return list(self.review_comments.get(number, []))

    def get_issue_comments(self, number):
        self.calls.append(("get_issue_comments", number))
        return list(self.issue_comments.get(number, []))

    def get_reviews(self, number):
        self.calls.append(("get_reviews", number))
        return list(self.reviews.get(number, []))

    def get_commits(self, number):
        self.calls.append(("get_commits", number))
        return list(self.commits.get(number, []))

    def count(self, name):
        return sum(1 for c in self.calls if c[0] == name)


def make_pr(number=1, author="bob", assignee=None, mergeable=True, title="Fix things"):
    return PullRequest(
        number=number,
        title=title,
        user=User(author),
        assignee=User(assignee) if assignee else None,
        updated_at=parse_timestamp("2024-01-01T00:00:00Z"),
        mergeable=mergeable,
    )


@pytest.fixture
def fake_client_cls():
    return FakeClient


@pytest.fixture
def pr_factory():
    return make_pr
