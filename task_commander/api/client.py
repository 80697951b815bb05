"""HTTP client for the task store's REST API."""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any

import requests

from task_commander import __version__
from task_commander.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from task_commander.exceptions import ApiConnectionError, ApiError, TaskNotFoundError
from task_commander.models import EDITABLE_FIELDS, Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

_USER_AGENT = f"task-commander/{__version__}"
_MAX_RETRIES = 3
_BACKOFF_BASE = 2.0


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TaskApiClient:
    """Client for a json-server style ``/tasks`` collection.

    Records carry two identifiers: ``taskId`` (ours, a UUID) and ``id``
    (assigned by the store and required for PUT/DELETE).
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: int = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": _USER_AGENT})

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> TaskApiClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> requests.Response:
        """Make a request with retry and backoff logic.

        Handles HTTP 429 (rate limited) and 503 (service unavailable)
        with exponential backoff.

        Raises:
            ApiError: If the store answers with an error status.
            ApiConnectionError: If the store can't be reached.
        """
        url = f"{self.base_url}{path}"
        for attempt in range(_MAX_RETRIES):
            try:
                resp = self._session.request(
                    method, url, params=params, json=json, timeout=self.timeout
                )
            except requests.RequestException as e:
                if attempt == _MAX_RETRIES - 1:
                    raise ApiConnectionError(
                        f"{method} {url} failed after {_MAX_RETRIES} attempts: {e}"
                    ) from e
                wait = _BACKOFF_BASE * (2**attempt)
                logger.warning("Request failed, retrying in %.1fs: %s", wait, e)
                time.sleep(wait)
                continue

            if resp.status_code in (429, 503):
                if attempt == _MAX_RETRIES - 1:
                    raise ApiError(
                        f"Task store unavailable after {_MAX_RETRIES} retries "
                        f"(HTTP {resp.status_code})"
                    )
                retry_after = resp.headers.get("Retry-After")
                try:
                    wait = max(float(retry_after), _BACKOFF_BASE) if retry_after else None
                except ValueError:
                    wait = None
                if wait is None:
                    wait = _BACKOFF_BASE * (2**attempt)
                logger.warning(
                    "Task store busy (HTTP %d), waiting %.1fs...", resp.status_code, wait
                )
                time.sleep(wait)
                continue

            try:
                resp.raise_for_status()
            except requests.HTTPError as e:
                raise ApiError(f"{method} {url} failed: HTTP {resp.status_code}") from e
            return resp

        raise ApiError(f"{method} {url} failed unexpectedly")  # pragma: no cover

    def _json(self, resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"Task store sent invalid JSON: {e}") from e

    def get_all(self) -> list[Task]:
        """Fetch every task, in store order."""
        records = self._json(self._request("GET", "/tasks"))
        if not isinstance(records, list):
            raise ApiError("Expected a list of tasks from /tasks")
        logger.debug("Fetched %d tasks from %s", len(records), self.base_url)
        return [Task.from_dict(r) for r in records]

    def get_by_id(self, task_id: str) -> Task:
        """Fetch one task by its ``taskId``.

        Raises:
            TaskNotFoundError: If no record carries that taskId.
        """
        records = self._json(self._request("GET", "/tasks", params={"taskId": task_id}))
        if not isinstance(records, list):
            raise ApiError("Expected a list of tasks from /tasks")
        if not records:
            raise TaskNotFoundError(task_id)
        return Task.from_dict(records[0])

    def create(self, data: dict[str, Any]) -> Task:
        """Create a task from editable fields, assigning id and timestamps."""
        now = _now()
        task = Task(
            task_id=str(uuid.uuid4()),
            title=data.get("title", ""),
            description=data.get("description", ""),
            due_date=data.get("due_date"),
            priority=data.get("priority", TaskPriority.NORMAL.value),
            status=data.get("status", TaskStatus.PENDING.value),
            tags=list(data.get("tags", [])),
            created_at=now,
            updated_at=now,
        )
        resp = self._request("POST", "/tasks", json=task.to_dict())
        return Task.from_dict(self._json(resp))

    def update(self, task_id: str, changes: dict[str, Any]) -> Task:
        """Merge editable fields onto an existing task and store it."""
        existing = self.get_by_id(task_id)
        if existing.id is None:
            raise ApiError(f"Task {task_id} has no store id")
        for key, value in changes.items():
            if key in EDITABLE_FIELDS:
                setattr(existing, key, value)
        existing.updated_at = _now()
        resp = self._request("PUT", f"/tasks/{existing.id}", json=existing.to_dict())
        return Task.from_dict(self._json(resp))

    def delete(self, task_id: str) -> None:
        """Delete a task by its ``taskId``."""
        existing = self.get_by_id(task_id)
        if existing.id is None:
            raise ApiError(f"Task {task_id} has no store id")
        self._request("DELETE", f"/tasks/{existing.id}")
