"""Tests for choosing a user's latest comment across review and issue threads."""

from prqueue_core.comments import (
    first_review_comment_by,
    last_issue_comment_by,
    latest_comment_by,
    pick_latest,
)
from prqueue_core.models import Comment, User, parse_timestamp


def _comment(login, updated, created=None, body="hi"):
    return Comment(
        body=body,
        user=User(login),
        created_at=parse_timestamp(created or updated),
        updated_at=parse_timestamp(updated),
    )


T1 = "2024-01-01T00:00:00Z"
T2 = "2024-01-02T00:00:00Z"
T3 = "2024-01-03T00:00:00Z"


class TestFirstReviewCommentBy:
    def test_keeps_earliest_matching_comment(self):
        comments = [_comment("bob", T1, body="first"), _comment("carol", T2), _comment("bob", T3, body="last")]
        assert first_review_comment_by(comments, "bob").body == "first"

    def test_none_when_login_absent(self):
        assert first_review_comment_by([_comment("carol", T1)], "bob") is None

    def test_login_match_is_case_sensitive(self):
        assert first_review_comment_by([_comment("Bob", T1)], "bob") is None


class TestLastIssueCommentBy:
    def test_keeps_last_matching_comment_in_page(self):
        comments = [_comment("bob", T1, body="first"), _comment("bob", T2, body="last"), _comment("carol", T3)]
        assert last_issue_comment_by(comments, "bob").body == "last"

    def test_none_for_empty_page(self):
        assert last_issue_comment_by([], "bob") is None

    def test_does_not_mutate_input(self):
        comments = [_comment("bob", T1, body="a"), _comment("bob", T2, body="b")]
        last_issue_comment_by(comments, "bob")
        assert [c.body for c in comments] == ["a", "b"]


class TestPickLatest:
    def test_issue_comment_wins_when_strictly_later(self):
        review, issue = _comment("bob", T1, body="review"), _comment("bob", T2, body="issue")
        assert pick_latest(review, issue) is issue

    def test_review_comment_wins_when_later(self):
        review, issue = _comment("bob", T2, body="review"), _comment("bob", T1, body="issue")
        assert pick_latest(review, issue) is review

    def test_equal_timestamps_favour_review_comment(self):
        # Preserved behaviour: ties resolve to the review-thread comment.
        review, issue = _comment("bob", T1, body="review"), _comment("bob", T1, body="issue")
        assert pick_latest(review, issue) is review

    def test_compares_calendar_time_not_text(self):
        # Same instant written in different offsets.
        review = _comment("bob", "2024-01-01T12:00:00+02:00", body="review")
        issue = _comment("bob", "2024-01-01T11:00:00Z", body="issue")
        assert pick_latest(review, issue) is issue

    def test_only_review_comment(self):
        review = _comment("bob", T1)
        assert pick_latest(review, None) is review

    def test_only_issue_comment(self):
        issue = _comment("bob", T1)
        assert pick_latest(None, issue) is issue

    def test_neither(self):
        assert pick_latest(None, None) is None


class TestLatestCommentBy:
    def test_issue_comment_updated_later_is_returned(self, fake_client_cls, pr_factory):
        review = _comment("bob", T1, body="review")
        issue = _comment("bob", T2, body="issue")
        client = fake_client_cls(review_comments={5: [review]}, issue_comments={5: [issue]})

        assert latest_comment_by(client, pr_factory(5), "bob") is issue

    def test_uses_earliest_review_comment_against_latest_issue_comment(self, fake_client_cls, pr_factory):
        review_early = _comment("bob", T1, body="review early")
        review_late = _comment("bob", T3, body="review late")
        issue = _comment("bob", T2, body="issue")
        client = fake_client_cls(review_comments={5: [review_early, review_late]}, issue_comments={5: [issue]})

        # The later review comment is never considered.
        assert latest_comment_by(client, pr_factory(5), "bob") is issue

    def test_none_when_login_has_no_comments(self, fake_client_cls, pr_factory):
        client = fake_client_cls(
            review_comments={5: [_comment("carol", T1)]},
            issue_comments={5: [_comment("dave", T2)]},
        )
        assert latest_comment_by(client, pr_factory(5), "bob") is None

    def test_fetches_both_threads(self, fake_client_cls, pr_factory):
        client = fake_client_cls()
        latest_comment_by(client, pr_factory(5), "bob")
        assert ("get_review_comments", 5) in client.calls
        assert ("get_issue_comments", 5) in client.calls
