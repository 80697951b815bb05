"""CLI tests for search, tags, sync and init-config commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from task_commander.api.client import TaskApiClient
from task_commander.cli import Context
from task_commander.commands.init_config import cli as init_config_cli
from task_commander.commands.search import cli as search_cli
from task_commander.commands.sync import cli as sync_cli
from task_commander.commands.tags import cli as tags_cli
from task_commander.config import Config, load_config
from task_commander.exceptions import ApiConnectionError
from task_commander.models import Task


def _make_ctx(tmp_path: Path) -> Context:
    """Create a real Context with a config pointing at a temp cache."""
    ctx = Context()
    ctx.config = Config(cache_path=tmp_path / "tasks.db")
    return ctx


def _invoke(command, args: list[str], tmp_path: Path):
    runner = CliRunner()
    return runner.invoke(command, args, obj=_make_ctx(tmp_path), catch_exceptions=False)


class TestSearchCLI:
    def test_field_query_table(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(search_cli, ["priority:high"], tmp_path)

        assert result.exit_code == 0
        assert "Write report" in result.output
        assert "Buy groceries" not in result.output
        assert "1 results" in result.output

    def test_ids_format(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(search_cli, ["tag:work", "OR", "tag:home", "-f", "ids"], tmp_path)

        assert result.exit_code == 0
        assert result.output.split() == ["t1", "t2", "t3"]

    def test_json_format(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(search_cli, ["groceries", "--format", "json"], tmp_path)

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [d["taskId"] for d in data] == ["t3"]
        assert data[0]["tags"] == ["home"]

    def test_tag_and_view_options(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(
                search_cli, ["--view", "completed", "--tag", "HOME", "-f", "ids"], tmp_path
            )

        assert result.exit_code == 0
        assert result.output.split() == ["t3"]

    def test_limit(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(search_cli, ["-l", "1", "-f", "ids"], tmp_path)

        assert result.output.split() == ["t1"]

    @pytest.mark.parametrize("limit", ["0", "-1"])
    def test_limit_must_be_positive(self, tmp_path: Path, limit: str) -> None:
        with patch.object(TaskApiClient, "get_all") as mock_get_all:
            result = _invoke(search_cli, ["-l", limit, "-f", "ids"], tmp_path)

        assert result.exit_code == 2
        mock_get_all.assert_not_called()

    def test_no_results(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(search_cli, ["tag:nothing"], tmp_path)

        assert result.exit_code == 0
        assert "No results" in result.output

    def test_explain(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(
                search_cli, ["priority:high", "AND", "NOT", "tag:home", "--explain"], tmp_path
            )

        assert result.exit_code == 0
        assert "boolean fold" in result.output
        assert "operator  AND" in result.output
        assert "NOT tag = 'home'" in result.output

    def test_falls_back_to_cache(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            _invoke(search_cli, ["-f", "ids"], tmp_path)

        with patch.object(TaskApiClient, "get_all", side_effect=ApiConnectionError("down")):
            result = _invoke(search_cli, ["tag:design", "-f", "ids"], tmp_path)

        assert result.exit_code == 0
        assert "t2" in result.output.split()

    def test_offline_uses_cache_only(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            _invoke(search_cli, ["-f", "ids"], tmp_path)

        with patch.object(TaskApiClient, "get_all") as mock_get_all:
            result = _invoke(search_cli, ["report", "--offline", "-f", "ids"], tmp_path)

        mock_get_all.assert_not_called()
        assert result.output.split() == ["t1"]

    def test_offline_without_cache(self, tmp_path: Path) -> None:
        result = _invoke(search_cli, ["report", "--offline"], tmp_path)
        assert result.exit_code == 3

    def test_store_down_without_cache(self, tmp_path: Path) -> None:
        with patch.object(TaskApiClient, "get_all", side_effect=ApiConnectionError("down")):
            result = _invoke(search_cli, ["report"], tmp_path)

        assert result.exit_code == 3


class TestTagsCLI:
    def test_lists_unique_tags(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(tags_cli, [], tmp_path)

        assert result.exit_code == 0
        assert result.output.split() == ["Design", "Urgent", "Work", "home"]


class TestSyncCLI:
    def test_sync(self, tmp_path: Path, sample_tasks: list[Task]) -> None:
        with patch.object(TaskApiClient, "get_all", return_value=sample_tasks):
            result = _invoke(sync_cli, [], tmp_path)

        assert result.exit_code == 0
        assert "Cached 3 tasks" in result.output
        assert (tmp_path / "tasks.db").exists()

    def test_sync_failure(self, tmp_path: Path) -> None:
        with patch.object(TaskApiClient, "get_all", side_effect=ApiConnectionError("down")):
            result = _invoke(sync_cli, [], tmp_path)

        assert result.exit_code == 1


class TestInitConfigCLI:
    def test_writes_loadable_config(self, tmp_path: Path) -> None:
        output = tmp_path / "config.toml"
        result = _invoke(init_config_cli, ["--output", str(output)], tmp_path)

        assert result.exit_code == 0
        config, warnings = load_config(output)
        assert warnings == []
        assert config.api_url == "http://localhost:3001"

    def test_refuses_to_overwrite(self, tmp_path: Path) -> None:
        output = tmp_path / "config.toml"
        output.write_text("[api]\n")

        result = _invoke(init_config_cli, ["--output", str(output)], tmp_path)
        assert result.exit_code == 1

        result = _invoke(init_config_cli, ["--output", str(output), "--force"], tmp_path)
        assert result.exit_code == 0
