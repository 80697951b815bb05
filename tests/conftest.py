"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from task_commander.models import Task

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[api]
url = "http://tasks.example:3001/"
timeout = 10

[cache]
path = "{temp_dir / 'tasks.db'}"

[display]
colored_output = true
default_view = "upcoming"
""")
    return config_path


@pytest.fixture
def sample_tasks() -> list[Task]:
    """A small task list covering every priority and status."""
    return [
        Task(
            task_id="t1",
            title="Write report",
            description="Quarterly numbers for the board",
            due_date="2024-05-10",
            priority="High",
            status="Pending",
            tags=["Work", "Urgent"],
            id="1",
        ),
        Task(
            task_id="t2",
            title="Sketch landing page",
            description="New hero section",
            due_date="2024-05-12T09:00:00.000Z",
            priority="Normal",
            status="In Progress",
            tags=["Design", "Work"],
            id="2",
        ),
        Task(
            task_id="t3",
            title="Buy groceries",
            description="Milk, eggs, coffee",
            due_date=None,
            priority="Low",
            status="Completed",
            tags=["home"],
            id="3",
        ),
    ]
