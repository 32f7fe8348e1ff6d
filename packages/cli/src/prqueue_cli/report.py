"""Console rendering of pull request summaries."""

from __future__ import annotations

from datetime import datetime, timezone

from rich.console import Console
from rich.markup import escape

from prqueue_core.models import PullRequestSummary, ReviewState, parse_timestamp
from prqueue_core.summary import latest_review_by

console = Console()


def _round(value: float) -> int:
    return int(value + 0.5)


def relative_time(when: datetime | str, now: datetime | None = None) -> str:
    """Humanize ``when`` relative to ``now``, e.g. "3 hours ago" or "in a day"."""
    then = parse_timestamp(when)
    now = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    delta = (now - then).total_seconds()

    seconds = _round(abs(delta))
    minutes = _round(seconds / 60)
    hours = _round(minutes / 60)
    days = _round(hours / 24)
    months = _round(days / 30.4)
    years = _round(days / 365)

    if seconds < 45:
        phrase = "a few seconds"
    elif minutes <= 1:
        phrase = "a minute"
    elif minutes < 45:
        phrase = f"{minutes} minutes"
    elif hours <= 1:
        phrase = "an hour"
    elif hours < 22:
        phrase = f"{hours} hours"
    elif days <= 1:
        phrase = "a day"
    elif days < 26:
        phrase = f"{days} days"
    elif months <= 1:
        phrase = "a month"
    elif months < 11:
        phrase = f"{months} months"
    elif years <= 1:
        phrase = "a year"
    else:
        phrase = f"{years} years"

    return f"{phrase} ago" if delta >= 0 else f"in {phrase}"


def output_review_summary(summary: PullRequestSummary, me: str, out: Console | None = None, now=None) -> None:
    out = out or console
    reviews = summary.reviews
    mine = latest_review_by(reviews, me)

    if mine is not None:
        when = relative_time(mine.submitted_at, now) if mine.submitted_at else "at some point"
        if mine.state == ReviewState.CHANGES_REQUESTED:
            out.print(f" - 🔍 [red]You asked changes to this PR {when}[/red]")
        elif mine.state == ReviewState.APPROVED:
            out.print(f" - 🔍 [green]You approved this PR {when}[/green]")
        else:
            out.print(f" - 🔍 You last commented on this PR {when}.")
        return

    approved = sum(1 for r in reviews if r.state == ReviewState.APPROVED)
    changes_requested = sum(1 for r in reviews if r.state == ReviewState.CHANGES_REQUESTED)
    commented = sum(1 for r in reviews if r.state == ReviewState.COMMENTED)
    out.print(
        f" - 🔍 Reviews found: {approved} approved, {changes_requested} request changes and {commented} comments"
    )


def output_pull_request_status(summary: PullRequestSummary, me: str, out: Console | None = None, now=None) -> None:
    """Print the multi-line status block for one pull request."""
    out = out or console
    pr = summary.pr

    out.print(f"📝 [bold]#{pr.number}[/bold] - {escape(pr.title)} by [bold]@{escape(pr.user.login)}[/bold]")

    if not summary.mergeable:
        out.print(" - 🚨 [red]This PR is not currently mergeable[/red]")

    # Only PRs assigned to nobody or to the operator reach the report.
    if pr.assignee is not None:
        out.print(" - ✅ [green]You are assigned to this PR[/green]")

    if summary.commits_by_operator:
        out.print(" - 🚨 [red]You have contributed to this PR[/red]")

    if summary.reviews:
        output_review_summary(summary, me, out, now)
    elif summary.last_comment_by_operator is not None:
        out.print(
            f" - 💬 Last activity from you was {relative_time(summary.last_comment_by_operator.updated_at, now)}"
        )
    else:
        out.print(" - 👻 You have not commented on this PR")

    author_comment = summary.last_comment_by_author
    if author_comment is not None:
        action = "editing a comment" if author_comment.was_edited else "a comment"
        out.print(
            f" - 💬 Last activity from {escape(author_comment.user.login)} was {action} "
            f"{relative_time(author_comment.updated_at, now)}"
        )

    out.print()
