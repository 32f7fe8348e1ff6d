"""queue command: report on open pull requests awaiting the operator's review."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console

from prqueue_cli.report import output_pull_request_status
from prqueue_core.gh.client import PULL_REQUEST_SORTS, SORT_DIRECTIONS, GitHubClient
from prqueue_core.mergeable import MergeabilityResolver, MergeabilityTimeout
from prqueue_core.triage import TriageDriver

console = Console()


def _describe_github_error(e: GithubException) -> str:
    message = e.data.get("message") if isinstance(e.data, dict) else None
    return f"GitHub request failed ({e.status}): {message or e}"


@click.command("queue")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Overrides config file.")
@click.option(
    "--ignore",
    "ignore",
    multiple=True,
    help="Skip PRs by this author. Repeatable; added to ignore_authors from the config file.",
)
@click.option("--sort", type=click.Choice(PULL_REQUEST_SORTS), default=None, help="Order of the open PR listing.")
@click.option("--direction", type=click.Choice(SORT_DIRECTIONS), default=None, help="Sort direction.")
@click.option(
    "--max-attempts",
    type=int,
    default=None,
    help="Maximum fetches while GitHub computes mergeability. Overrides config file.",
)
@click.option(
    "--retry-interval",
    type=float,
    default=None,
    help="Seconds to wait between mergeability fetches. Overrides config file.",
)
@click.pass_context
def queue_cmd(
    ctx,
    repo: str | None,
    ignore: tuple[str, ...],
    sort: str | None,
    direction: str | None,
    max_attempts: int | None,
    retry_interval: float | None,
):
    """Show the review status of open pull requests.

    Your own PRs, PRs by ignored authors and PRs assigned to someone else are
    skipped. Everything else is listed oldest-updated first.

    \b
    Required environment variables:
      GITHUB_ACCESS_TOKEN  GitHub personal access token (or GITHUB_TOKEN, or use gh CLI)
    """
    from prqueue_core.config import apply_overrides

    overrides = {
        "repo": repo,
        "sort": sort,
        "direction": direction,
        "mergeable_max_attempts": max_attempts,
        "mergeable_retry_interval": retry_interval,
    }
    try:
        config = apply_overrides(ctx.obj["config"] if ctx.obj else {}, overrides)
    except ValueError as e:
        raise click.UsageError(str(e))

    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_ACCESS_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    if not config.get("repo"):
        raise click.UsageError("No repository given. Pass --repo owner/name or set 'repo' in .prqueue.yml.")

    if config.get("sort", "updated") not in PULL_REQUEST_SORTS:
        raise click.UsageError(
            f"Unknown sort {config['sort']!r} in config. Choose one of {', '.join(PULL_REQUEST_SORTS)}."
        )
    if config.get("direction", "asc") not in SORT_DIRECTIONS:
        raise click.UsageError(f"Unknown direction {config['direction']!r} in config. Choose 'asc' or 'desc'.")

    ignored_authors = [*config.get("ignore_authors", []), *ignore]

    client = GitHubClient(config["repo"], token=token, per_page=config.get("per_page", 100))
    try:
        resolver = MergeabilityResolver(
            client,
            retry_interval=config.get("mergeable_retry_interval", 2.0),
            max_attempts=config.get("mergeable_max_attempts", 30),
        )
    except ValueError as e:
        raise click.UsageError(str(e))

    driver = TriageDriver(
        client,
        resolver,
        ignored_authors=ignored_authors,
        sort=config.get("sort", "updated"),
        direction=config.get("direction", "asc"),
    )

    try:
        me = client.get_user().login
        console.print(f"✅ token found for [bold]{me}[/bold]...")
        console.print()
        summarized = driver.run(me, lambda summary: output_pull_request_status(summary, me))
    except GithubException as e:
        raise click.ClickException(_describe_github_error(e))
    except MergeabilityTimeout as e:
        raise click.ClickException(f"{e}. Try again later or raise --max-attempts.")

    if not summarized:
        console.print("[yellow]No open pull requests need your attention.[/yellow]")
