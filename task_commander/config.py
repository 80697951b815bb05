"""Configuration management for task-commander."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from task_commander.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from task_commander.models import ViewFilter

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_TIMEOUT = 30


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "task-commander" / "config.toml"


def get_default_cache_path() -> Path:
    """Get the default task cache database path."""
    return Path.home() / ".cache" / "task-commander" / "tasks.db"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        api_url: Base URL of the REST task store.
        api_timeout: Per-request timeout in seconds.
        cache_path: SQLite file holding the local task cache.
        colored_output: Whether to use colored terminal output.
        default_view: View applied by ``search`` when --view is not given.
        config_path: Path where config was loaded from (None if defaults).
    """

    api_url: str = DEFAULT_API_URL
    api_timeout: int = DEFAULT_TIMEOUT
    cache_path: Path = field(default_factory=get_default_cache_path)
    colored_output: bool = True
    default_view: str = ViewFilter.ALL.value
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        self.cache_path = self.cache_path.expanduser().resolve()
        self.api_url = self.api_url.rstrip("/")

        if not self.api_url.startswith(("http://", "https://")):
            warnings.append(f"api.url does not look like an HTTP URL: {self.api_url}")

        if self.api_timeout <= 0:
            warnings.append(
                f"api.timeout={self.api_timeout} must be positive, using {DEFAULT_TIMEOUT}"
            )
            self.api_timeout = DEFAULT_TIMEOUT

        valid_views = [v.value for v in ViewFilter]
        if self.default_view not in valid_views:
            warnings.append(
                f"display.default_view='{self.default_view}' is not one of "
                f"{', '.join(valid_views)}; using 'all'"
            )
            self.default_view = ViewFilter.ALL.value

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: task-commander init-config"
        )
        return config, warnings + config.validate()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    return config, warnings + config.validate()


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [api] section
    api = data.get("api", {})
    if "url" in api:
        value = api["url"]
        if not isinstance(value, str):
            raise ConfigValidationError("api.url", value, "must be a string")
        config.api_url = value

    if "timeout" in api:
        value = api["timeout"]
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError("api.timeout", value, "must be an integer")
        config.api_timeout = value

    # Parse [cache] section
    cache = data.get("cache", {})
    if "path" in cache:
        value = cache["path"]
        if not isinstance(value, str):
            raise ConfigValidationError("cache.path", value, "must be a string path")
        config.cache_path = Path(value)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    if "default_view" in display:
        value = display["default_view"]
        if not isinstance(value, str):
            raise ConfigValidationError("display.default_view", value, "must be a string")
        config.default_view = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.

    Returns:
        The path written.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "api": {
            "url": config.api_url,
            "timeout": config.api_timeout,
        },
        "cache": {
            "path": str(config.cache_path),
        },
        "display": {
            "colored_output": config.colored_output,
            "default_view": config.default_view,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
    return config_path
