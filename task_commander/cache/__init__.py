"""Local SQLite cache of the task store."""

from task_commander.cache.builder import get_cache_state, load_tasks, store_tasks, sync_cache
from task_commander.cache.models import CacheBase, CachedTask, CacheState, TaskTag
from task_commander.cache.session import delete_cache, get_cache_session

__all__ = [
    "CacheBase",
    "CacheState",
    "CachedTask",
    "TaskTag",
    "delete_cache",
    "get_cache_session",
    "get_cache_state",
    "load_tasks",
    "store_tasks",
    "sync_cache",
]
