"""List the tags in use across all tasks."""

from __future__ import annotations

import click

from task_commander.cli import Context, pass_context
from task_commander.commands._tasks import fetch_tasks
from task_commander.exceptions import ApiError, CacheError
from task_commander.filters import get_unique_tags
from task_commander.utils.output import error, info


@click.command("tags")
@click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Read tags from the local cache without contacting the task store",
)
@pass_context
def cli(ctx: Context, offline: bool) -> None:
    """List unique tags, one per line.

    Tags differing only in case are listed once, using the first
    spelling found.
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(2)

    try:
        tasks = fetch_tasks(config, offline=offline)
    except (ApiError, CacheError) as e:
        error(f"Could not load tasks: {e}")
        raise SystemExit(3)

    tags = get_unique_tags(tasks)
    if not tags:
        info("No tags")
        return
    for tag in tags:
        click.echo(tag)
