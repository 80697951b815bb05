"""View and tag filters applied ahead of the search query."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from task_commander.models import Task, TaskStatus, ViewFilter
from task_commander.search import ParsedQuery, evaluate_collection, parse_query

if TYPE_CHECKING:
    from collections.abc import Iterable


def _parse_due_date(value: str | None) -> date | None:
    """Parse an ISO-8601 date or datetime into a local calendar date.

    Timestamps with an offset (the store writes UTC "Z" timestamps) are
    converted to local time first, so they compare against the local today.
    Returns None if the value is unusable.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return (parsed.astimezone() if parsed.tzinfo else parsed).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def filter_by_view(
    tasks: Iterable[Task],
    view: ViewFilter | str,
    today: date | None = None,
) -> list[Task]:
    """Keep the tasks belonging to a top-level view.

    Args:
        tasks: Tasks to filter.
        view: One of today, upcoming, completed or all. Unknown views keep
            every task.
        today: Reference date (defaults to the local current date).
    """
    try:
        view = ViewFilter(view)
    except ValueError:
        view = ViewFilter.ALL
    today = today or date.today()

    if view is ViewFilter.TODAY:
        return [t for t in tasks if _parse_due_date(t.due_date) == today]
    if view is ViewFilter.UPCOMING:
        result = []
        for t in tasks:
            due = _parse_due_date(t.due_date)
            if due is not None and due >= today:
                result.append(t)
        return result
    if view is ViewFilter.COMPLETED:
        return [t for t in tasks if t.status == TaskStatus.COMPLETED.value]
    return list(tasks)


def filter_by_tag(tasks: Iterable[Task], tag: str | None) -> list[Task]:
    """Keep tasks carrying ``tag`` (case-insensitive); no tag keeps all."""
    if not tag:
        return list(tasks)
    wanted = tag.lower()
    return [t for t in tasks if any(task_tag.lower() == wanted for task_tag in t.tags)]


def get_unique_tags(tasks: Iterable[Task]) -> list[str]:
    """Collect tags across tasks, deduplicated case-insensitively.

    The first spelling seen wins; the result is sorted.
    """
    seen: dict[str, str] = {}
    for task in tasks:
        for tag in task.tags:
            seen.setdefault(tag.lower(), tag)
    return sorted(seen.values())


def apply_filters(
    tasks: Iterable[Task],
    view: ViewFilter | str = ViewFilter.ALL,
    tag: str | None = None,
    query: str | ParsedQuery = "",
    today: date | None = None,
) -> list[Task]:
    """Run the full filter pipeline: view, then tag, then search query.

    ``query`` may be a raw query string or an already parsed query.
    """
    if isinstance(query, str):
        query = parse_query(query)
    result = filter_by_view(tasks, view, today=today)
    result = filter_by_tag(result, tag)
    return evaluate_collection(result, query)
