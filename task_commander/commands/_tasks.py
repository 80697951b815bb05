"""Task loading shared by the commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from task_commander.api.client import TaskApiClient
from task_commander.cache import get_cache_session, get_cache_state, load_tasks, sync_cache
from task_commander.exceptions import ApiError, CacheError
from task_commander.utils.output import verbose, warning

if TYPE_CHECKING:
    from task_commander.config import Config
    from task_commander.models import Task


def fetch_tasks(config: Config, *, offline: bool = False) -> list[Task]:
    """Refresh the cache from the task store and return the cached tasks.

    When the store can't be reached, falls back to the existing cache with a
    warning. ``offline`` skips the store entirely.

    Raises:
        ApiError: If the store is unreachable and nothing has been cached yet.
        CacheError: If offline and nothing has been cached yet.
    """
    with get_cache_session(config.cache_path) as session:
        if offline:
            if get_cache_state(session) is None:
                raise CacheError(
                    f"No cached tasks at {config.cache_path}; run 'task-commander sync' first"
                )
        else:
            try:
                with TaskApiClient(config.api_url, config.api_timeout) as client:
                    count = sync_cache(client, session)
                verbose(f"Synced {count} tasks from {config.api_url}")
            except ApiError as e:
                state = get_cache_state(session)
                if state is None:
                    raise
                warning(f"Task store unavailable, using cache from {state.last_synced}: {e}")
        return load_tasks(session)
