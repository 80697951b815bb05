"""Exception hierarchy for task-commander."""

from pathlib import Path


class TaskCommanderError(Exception):
    """Base exception for all task-commander errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all task-commander errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(TaskCommanderError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Task store Errors
class ApiError(TaskCommanderError):
    """The task store returned an error or an unusable response."""

    pass


class ApiConnectionError(ApiError):
    """The task store could not be reached."""

    pass


class TaskNotFoundError(ApiError):
    """Task doesn't exist in the store."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


# Cache Errors
class CacheError(TaskCommanderError):
    """Local task cache is unusable."""

    pass
