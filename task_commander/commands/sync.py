"""Refresh the local task cache from the task store."""

from __future__ import annotations

import click

from task_commander.api.client import TaskApiClient
from task_commander.cache import get_cache_session, sync_cache
from task_commander.cli import Context, pass_context
from task_commander.exceptions import ApiError
from task_commander.utils.output import create_progress, error, success


@click.command("sync")
@pass_context
def cli(ctx: Context) -> None:
    """Fetch all tasks from the task store into the local cache.

    Other commands sync automatically; use this to prime the cache
    before working offline.
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(2)

    try:
        with get_cache_session(config.cache_path) as session:
            with TaskApiClient(config.api_url, config.api_timeout) as client:
                with create_progress() as progress:
                    progress.add_task(f"Fetching tasks from {config.api_url}...", total=None)
                    count = sync_cache(client, session)
    except ApiError as e:
        error(f"Sync failed: {e}", hint="Check api.url in your config or pass --api-url")
        raise SystemExit(1)

    success(f"Cached {count} tasks from {config.api_url}")
