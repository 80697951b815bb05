"""Search tasks with the boolean query syntax."""

from __future__ import annotations

import io
import json

import click
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from task_commander.cli import Context, pass_context
from task_commander.commands._tasks import fetch_tasks
from task_commander.exceptions import ApiError, CacheError
from task_commander.filters import apply_filters
from task_commander.models import Task, ViewFilter
from task_commander.search import (
    FieldToken,
    OperatorToken,
    ParsedQuery,
    Token,
    parse_query,
)
from task_commander.utils.output import (
    THEME,
    console,
    create_table,
    debug,
    error,
    info,
    pager_print,
    style_for,
)

EXIT_SUCCESS = 0
EXIT_NO_RESULTS = 0
EXIT_CACHE_ERROR = 2
EXIT_NO_TASKS = 3


def _describe_token(token: Token) -> str:
    """Human-readable one-line description of a token."""
    if isinstance(token, FieldToken):
        prefix = "NOT " if token.negated else ""
        return f"field     {prefix}{token.field} = {token.value!r}"
    if isinstance(token, OperatorToken):
        return f"operator  {token.operator}"
    return f"text      {token.value!r}"


def _print_explain(parsed: ParsedQuery) -> None:
    mode = "boolean fold" if parsed.has_advanced_syntax else "plain substring"
    info(f"Mode: {mode} ({len(parsed.tokens)} tokens)")
    for token in parsed.tokens:
        console.print(f"  {_describe_token(token)}", markup=False)


@click.command("search")
@click.argument("query", nargs=-1)
@click.option(
    "--view",
    "-V",
    type=click.Choice([v.value for v in ViewFilter]),
    default=None,
    help="Restrict to a view before searching (default: display.default_view)",
)
@click.option(
    "--tag",
    "-t",
    default=None,
    help="Only tasks carrying this tag (case-insensitive)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "ids"]),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--limit",
    "-l",
    type=click.IntRange(min=1),
    default=None,
    help="Limit number of results",
)
@click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Search the local cache without contacting the task store",
)
@click.option(
    "--explain",
    is_flag=True,
    default=False,
    help="Print how the query was parsed before the results",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    view: str | None,
    tag: str | None,
    output_format: str,
    limit: int | None,
    offline: bool,
    explain: bool,
) -> None:
    """Search tasks by field filters and free text.

    QUERY mixes field filters (priority:, status:, tag:), the keywords
    AND, OR and NOT, and free text. Multiple arguments are joined with
    spaces. Keywords combine strictly left to right: "a OR b AND c"
    means "(a OR b) AND c".

    \b
    Syntax examples:
      task-commander search report
      task-commander search priority:high
      task-commander search "priority:high AND tag:design"
      task-commander search "NOT status:completed"
      task-commander search "tag:home OR tag:errands" --view upcoming

    \b
    Output formats:
      --format table   Rich table (default)
      --format json    JSON array of task records
      --format ids     One taskId per line (for piping)
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_CACHE_ERROR)

    query_string = " ".join(query)
    parsed = parse_query(query_string)
    debug(f"Parsed {len(parsed.tokens)} tokens (advanced={parsed.has_advanced_syntax})")
    if explain:
        _print_explain(parsed)

    try:
        tasks = fetch_tasks(config, offline=offline)
    except ApiError as e:
        error(f"Could not load tasks: {e}", hint="Check api.url or run with --offline")
        raise SystemExit(EXIT_NO_TASKS)
    except CacheError as e:
        error(str(e))
        raise SystemExit(EXIT_NO_TASKS)
    except Exception as e:
        error(f"Cache error: {e}")
        raise SystemExit(EXIT_CACHE_ERROR)

    tasks = apply_filters(tasks, view=view or config.default_view, tag=tag, query=parsed)

    if limit is not None:
        tasks = tasks[:limit]

    if not tasks:
        info(f"No results for: {escape(query_string)}" if query_string else "No tasks")
        raise SystemExit(EXIT_NO_RESULTS)

    if output_format == "table":
        _print_table(tasks, query_string)
    elif output_format == "json":
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
    else:
        for t in tasks:
            click.echo(t.task_id)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(tasks: list[Task], query_string: str) -> None:
    """Print results as a Rich table, using pager when appropriate."""
    label = query_string or "all tasks"
    info(f"Search: {escape(label)} ({len(tasks)} results)")

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Title", style="task.title", no_wrap=True)
    table.add_column("Priority", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Due", no_wrap=True)
    table.add_column("Tags", style="task.tag")

    for t in tasks:
        table.add_row(
            Text(t.title),
            Text(t.priority, style=style_for("priority", t.priority)),
            Text(t.status, style=style_for("status", t.status)),
            (t.due_date or "")[:10],
            Text(", ".join(t.tags)),
        )

    # Render to buffer so we can route through pager
    buf = io.StringIO()
    render_console = Console(
        file=buf,
        theme=THEME,
        force_terminal=not console.no_color,
        width=max(console.width, 100),
        no_color=console.no_color,
    )
    render_console.print(table)

    # Table header = top border + header + header border
    pager_print(buf.getvalue(), header_lines=3)
