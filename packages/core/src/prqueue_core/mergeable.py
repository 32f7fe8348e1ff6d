"""Polling for GitHub's background-computed ``mergeable`` flag."""

from __future__ import annotations

import logging
import time
from typing import Callable

from rich.console import Console

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_RETRY_INTERVAL = 2.0
DEFAULT_MAX_ATTEMPTS = 30


class MergeabilityTimeout(TimeoutError):
    """GitHub never settled on a mergeable value within the allowed attempts."""

    def __init__(self, number: int, attempts: int):
        self.number = number
        self.attempts = attempts
        super().__init__(f"mergeable is still unknown for #{number} after {attempts} attempt(s)")


class MergeabilityResolver:
    """Re-fetches a pull request until ``mergeable`` is a definite boolean.

    Right after a PR is opened or pushed to, GitHub reports ``mergeable`` as
    null while it computes the test merge. Each unresolved fetch prints a
    diagnostic and waits ``retry_interval`` seconds before trying again.
    ``max_attempts`` caps the total number of fetches; pass None to poll
    until GitHub answers.
    """

    def __init__(
        self,
        client,
        retry_interval: float = DEFAULT_RETRY_INTERVAL,
        max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if retry_interval < 0:
            raise ValueError(f"retry_interval must be >= 0, got {retry_interval!r}")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts!r}")
        self._client = client
        self.retry_interval = retry_interval
        self.max_attempts = max_attempts
        self._sleep = sleep

    def resolve(self, number: int) -> bool:
        attempts = 0
        while True:
            pr = self._client.get_pull_request(number)
            attempts += 1
            if pr.mergeable is not None:
                logger.debug("Resolved mergeable=%s for #%d after %d fetch(es)", pr.mergeable, number, attempts)
                return pr.mergeable

            logger.debug("mergeable unknown for #%d (attempt %d)", number, attempts)
            if self.max_attempts is not None and attempts >= self.max_attempts:
                console.print(f"[dim] - mergeable is still unknown for #{number} - giving up[/dim]")
                raise MergeabilityTimeout(number, attempts)

            console.print(f"[dim] - mergeable is still unknown for #{number} - checking again...[/dim]")
            self._sleep(self.retry_interval)
