"""Command-line interface for task-commander."""

from __future__ import annotations

import os
from pathlib import Path

import click

from task_commander import __version__
from task_commander.config import Config, load_config
from task_commander.exceptions import ConfigError
from task_commander.utils.output import (
    error,
    set_color,
    set_pager,
    set_verbosity,
    warning,
)


class Context:
    """State shared between the group and its commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False
        self.pager: bool | None = None  # None = auto


pass_context = click.make_pass_decorator(Context, ensure=True)


def _use_color(no_color_flag: bool, config: Config | None) -> bool:
    """Colors stay on unless --no-color, $NO_COLOR or display.colored_output say otherwise."""
    if no_color_flag or "NO_COLOR" in os.environ:
        return False
    return config is None or config.colored_output


def _resolve_config(config_path: Path | None, api_url: str | None) -> tuple[Config, list[str]]:
    """Load the config file and apply command-line overrides on top of it."""
    config, warnings = load_config(config_path)
    if api_url is not None:
        config.api_url = api_url.rstrip("/")
    return config, warnings


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    help="Config file (default: ~/.config/task-commander/config.toml)",
)
@click.option("--api-url", "-A", default=None, help="Task store URL, overriding api.url")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Report sync and cache activity")
@click.option("--debug", is_flag=True, help="Show parser and cache internals (implies --verbose)")
@click.option("--quiet", "-q", is_flag=True, help="Hide config warnings")
@click.option("--pager/--no-pager", default=None, help="Force the pager on or off")
@click.version_option(version=__version__, prog_name="task-commander")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    api_url: str | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """Search the tasks in a task store.

    Tasks are synced into a local cache on every search, so the last known
    list stays searchable while the store is down.

    \b
    Examples:
      task-commander search "priority:high AND tag:design NOT status:completed"
      task-commander --api-url http://tasks.lan:3001 search --view today
      task-commander tags --offline
    """
    app_ctx = ctx.ensure_object(Context)
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet
    app_ctx.pager = pager

    set_verbosity(verbose=verbose, debug=debug)
    set_pager(pager)

    try:
        app_ctx.config, warnings = _resolve_config(config_path, api_url)
    except ConfigError as e:
        set_color(_use_color(no_color, None))
        error(str(e), hint="Fix the file or write a fresh one with 'task-commander init-config'")
        ctx.exit(1)

    set_color(_use_color(no_color, app_ctx.config))
    if not quiet:
        for warn in warnings:
            warning(warn)


def register_commands() -> None:
    """Attach every command module found in task_commander.commands."""
    from task_commander.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


register_commands()
