"""Initialize configuration file for task-commander."""

from __future__ import annotations

from pathlib import Path

import click

from task_commander.cli import Context, pass_context
from task_commander.config import Config, get_default_config_path, save_config
from task_commander.utils.output import error, info, success


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/task-commander/config.toml)",
)
@pass_context
def cli(ctx: Context, force: bool, output: Path | None) -> None:
    """Create a new configuration file with default settings.

    Examples:

    \b
      # Create config at default location
      task-commander init-config

    \b
      # Create config at custom location
      task-commander init-config --output ./my-config.toml
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    # Carry over an --api-url given on the command line
    config = Config()
    if ctx.config is not None:
        config.api_url = ctx.config.api_url

    try:
        written = save_config(config, config_path)
    except OSError as e:
        error(f"Failed to write config: {e}")
        raise SystemExit(1)

    success(f"Created config file: {written}")
    info("Edit api.url to point at your task store.")
