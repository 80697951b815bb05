"""Fill the local cache from the task store and read tasks back out."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from task_commander.cache.models import CachedTask, CacheState, TaskTag
from task_commander.models import Task

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.orm import Session

    from task_commander.api.client import TaskApiClient

log = logging.getLogger(__name__)


def _task_to_rows(task: Task, position: int) -> tuple[CachedTask, list[TaskTag]]:
    row = CachedTask(
        task_id=task.task_id,
        store_id=task.id,
        position=position,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        priority=task.priority,
        status=task.status,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )
    tags: list[TaskTag] = []
    seen: set[str] = set()
    for index, tag in enumerate(task.tags):
        # Primary key is (task_id, tag): drop exact duplicates
        if tag in seen:
            continue
        seen.add(tag)
        tags.append(TaskTag(task_id=task.task_id, tag=tag, position=index))
    return row, tags


def store_tasks(session: Session, tasks: Iterable[Task], api_url: str | None = None) -> int:
    """Replace the cached tasks with ``tasks``.

    Tasks without a taskId, or repeating one already stored, are skipped.

    Returns the number of tasks written.
    """
    session.query(TaskTag).delete()
    session.query(CachedTask).delete()
    session.flush()

    count = 0
    seen: set[str] = set()
    for task in tasks:
        if not task.task_id or task.task_id in seen:
            log.debug("Skipping task without unique taskId: %r", task.title)
            continue
        seen.add(task.task_id)
        row, tags = _task_to_rows(task, count)
        session.add(row)
        session.add_all(tags)
        count += 1

    state = session.query(CacheState).filter_by(id=1).first()
    if state is None:
        state = CacheState(id=1)
        session.add(state)
    state.api_url = api_url
    state.last_synced = datetime.now(timezone.utc).isoformat()
    state.task_count = count
    session.commit()

    log.info("Cached %d tasks", count)
    return count


def sync_cache(client: TaskApiClient, session: Session) -> int:
    """Fetch all tasks from the store and replace the cache with them.

    Returns the number of cached tasks.

    Raises:
        ApiError: If the store can't be read. The cache is left untouched.
    """
    tasks = client.get_all()
    return store_tasks(session, tasks, api_url=client.base_url)


def get_cache_state(session: Session) -> CacheState | None:
    """Return the cache state row, or None if the cache was never filled."""
    return session.query(CacheState).filter_by(id=1).first()


def load_tasks(session: Session) -> list[Task]:
    """Load cached tasks in store order."""
    tags_by_task: dict[str, list[str]] = {}
    for tag_row in session.query(TaskTag).order_by(TaskTag.task_id, TaskTag.position):
        tags_by_task.setdefault(tag_row.task_id, []).append(tag_row.tag)

    return [
        Task(
            task_id=row.task_id,
            title=row.title or "",
            description=row.description or "",
            due_date=row.due_date,
            priority=row.priority,
            status=row.status,
            tags=tags_by_task.get(row.task_id, []),
            created_at=row.created_at or "",
            updated_at=row.updated_at or "",
            id=row.store_id,
        )
        for row in session.query(CachedTask).order_by(CachedTask.position)
    ]
