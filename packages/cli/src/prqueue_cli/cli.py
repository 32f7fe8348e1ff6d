"""CLI entry point for prqueue.

Commands:
  queue    print the review status of every open PR that needs your attention
"""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from prqueue_cli.commands.queue import queue_cmd


@click.group()
@click.version_option(package_name="prqueue", prog_name="prqueue")
@click.option(
    "--config",
    "config_path",
    default=".prqueue.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRQUEUE_CONFIG",
)
@click.option("--debug", is_flag=True, help="Log GitHub requests and comment selection details.")
@click.pass_context
def main(ctx: click.Context, config_path: str, debug: bool):
    """Triage the open pull requests of a GitHub repository."""
    from prqueue_core.config import load_config
    from prqueue_cli.auth import resolve_github_token

    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(show_path=False)])

    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.UsageError(f"{config_path}: {e}")
    # Resolved once here so every subcommand sees the same token; the
    # subcommand decides whether a missing token is fatal.
    config["github_token"] = resolve_github_token()
    ctx.obj["config"] = config


main.add_command(queue_cmd)
