"""Thin typed wrapper over PyGithub for the handful of reads the queue needs.

Every list operation reads only the first page (``per_page`` records) in the
order GitHub returns it. Exhaustive pagination is deliberately not attempted.
"""

from __future__ import annotations

import logging

from github import Auth, Github

from prqueue_core.models import (
    Comment,
    Commit,
    PullRequest,
    PullRequestReview,
    ReviewState,
    User,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

PULL_REQUEST_SORTS = ("created", "updated", "popularity", "long-running")
SORT_DIRECTIONS = ("asc", "desc")
DEFAULT_PER_PAGE = 100

# GitHub reports deleted accounts as "ghost"; PyGithub gives us None instead.
_GHOST = User(login="ghost")


def _to_user(gh_user) -> User | None:
    if gh_user is None:
        return None
    return User(login=gh_user.login)


def to_pull_request(gh_pr, with_mergeable: bool = True) -> PullRequest:
    """Convert a PyGithub pull request.

    The list endpoint does not return `mergeable`, and reading it from a listed
    PR makes PyGithub fetch the whole PR. Listings pass `with_mergeable=False`
    and leave the value unknown.
    """
    return PullRequest(
        number=gh_pr.number,
        title=gh_pr.title or "",
        user=_to_user(gh_pr.user) or _GHOST,
        assignee=_to_user(gh_pr.assignee),
        updated_at=parse_timestamp(gh_pr.updated_at),
        mergeable=gh_pr.mergeable if with_mergeable else None,
    )


def to_comment(gh_comment) -> Comment:
    return Comment(
        body=gh_comment.body or "",
        user=_to_user(gh_comment.user) or _GHOST,
        created_at=parse_timestamp(gh_comment.created_at),
        updated_at=parse_timestamp(gh_comment.updated_at),
    )


def to_commit(gh_commit) -> Commit:
    # author/committer are the linked GitHub accounts, None when the commit
    # email is not attached to any account.
    return Commit(author=_to_user(gh_commit.author), committer=_to_user(gh_commit.committer))


def to_review(gh_review) -> PullRequestReview:
    submitted_at = gh_review.submitted_at
    return PullRequestReview(
        user=_to_user(gh_review.user) or _GHOST,
        state=ReviewState(gh_review.state),
        submitted_at=parse_timestamp(submitted_at) if submitted_at is not None else None,
    )


class GitHubClient:
    """Read-only access to one repository's pull requests.

    ``GithubException`` from PyGithub is never caught here; callers decide
    whether a failed request is fatal.
    """

    def __init__(self, repo_name: str, token: str, per_page: int = DEFAULT_PER_PAGE, gh: Github | None = None):
        self._gh = gh if gh is not None else Github(auth=Auth.Token(token), per_page=per_page)
        self._repo_name = repo_name
        self._repo = None
        # Raw PyGithub pull objects from this run, so per-PR list calls do not
        # need to re-fetch the pull request first.
        self._pulls: dict[int, object] = {}

    @property
    def repo(self):
        if self._repo is None:
            self._repo = self._gh.get_repo(self._repo_name)
        return self._repo

    def _raw_pull(self, number: int):
        raw = self._pulls.get(number)
        if raw is None:
            raw = self.repo.get_pull(number)
            self._pulls[number] = raw
        return raw

    def get_user(self) -> User:
        return User(login=self._gh.get_user().login)

    def get_open_pull_requests(self, sort: str = "updated", direction: str = "asc") -> list[PullRequest]:
        if sort not in PULL_REQUEST_SORTS:
            raise ValueError(f"Unknown pull request sort: {sort!r}. Choose one of {', '.join(PULL_REQUEST_SORTS)}.")
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction: {direction!r}. Choose 'asc' or 'desc'.")

        pulls = self.repo.get_pulls(state="open", sort=sort, direction=direction).get_page(0)
        result = []
        for raw in pulls:
            self._pulls[raw.number] = raw
            result.append(to_pull_request(raw, with_mergeable=False))
        logger.debug("Fetched %d open pull request(s) from %s", len(result), self._repo_name)
        return result

    def get_pull_request(self, number: int) -> PullRequest:
        """Fetch a pull request fresh from GitHub (mergeable is recomputed server-side)."""
        raw = self.repo.get_pull(number)
        self._pulls[number] = raw
        return to_pull_request(raw)

    def get_review_comments(self, number: int) -> list[Comment]:
        page = self._raw_pull(number).get_review_comments(sort="created", direction="asc").get_page(0)
        return [to_comment(c) for c in page]

    def get_issue_comments(self, number: int) -> list[Comment]:
        page = self._raw_pull(number).get_issue_comments().get_page(0)
        return [to_comment(c) for c in page]

    def get_reviews(self, number: int) -> list[PullRequestReview]:
        page = self._raw_pull(number).get_reviews().get_page(0)
        return [to_review(r) for r in page]

    def get_commits(self, number: int) -> list[Commit]:
        page = self._raw_pull(number).get_commits().get_page(0)
        return [to_commit(c) for c in page]
