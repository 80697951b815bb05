"""Client for the REST task store."""

from task_commander.api.client import DEFAULT_API_URL, TaskApiClient

__all__ = ["DEFAULT_API_URL", "TaskApiClient"]
