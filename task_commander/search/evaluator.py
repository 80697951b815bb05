"""Evaluate a ParsedQuery against task records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeVar

from task_commander.search.tokens import (
    FieldToken,
    OperatorToken,
    ParsedQuery,
    TextToken,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


class Searchable(Protocol):
    """Attributes the evaluator reads from a task."""

    title: str
    description: str
    priority: str
    status: str
    tags: Sequence[str]


T = TypeVar("T", bound=Searchable)


@dataclass
class FoldState:
    """Accumulator threaded through the left-to-right fold."""

    result: bool | None = None
    pending_operator: str | None = None
    pending_not: bool = False

    def fold(self, value: bool) -> None:
        if self.result is None:
            self.result = value
        elif self.pending_operator == "OR":
            self.result = self.result or value
        else:
            # AND, or two operands with no connective between them
            self.result = self.result and value
        self.pending_operator = None
        self.pending_not = False


def _text_matches(task: Searchable, value: str) -> bool:
    """Case-insensitive substring match on title, description and tags."""
    needle = value.lower()
    return (
        needle in (task.title or "").lower()
        or needle in (task.description or "").lower()
        or any(needle in tag.lower() for tag in task.tags or ())
    )


def _field_matches(task: Searchable, token: FieldToken) -> bool | None:
    """Compare one field, or return None for a field we can't classify."""
    value = token.value.lower()
    if token.field == "priority":
        return (task.priority or "").lower() == value
    if token.field == "status":
        return (task.status or "").lower() == value
    if token.field == "tag":
        return any(tag.lower() == value for tag in task.tags or ())
    return None


def matches(task: Searchable, query: ParsedQuery) -> bool:
    """Decide whether a single task satisfies the query.

    Operands are combined strictly left to right with no precedence, so
    ``a OR b AND c`` means ``(a OR b) AND c``.
    """
    if not query.tokens:
        return True

    if not query.has_advanced_syntax:
        first = query.tokens[0]
        if isinstance(first, TextToken):
            return _text_matches(task, first.value)
        return True

    state = FoldState()
    for token in query.tokens:
        if isinstance(token, OperatorToken):
            if token.operator == "NOT":
                state.pending_not = True
            else:
                state.pending_operator = token.operator
            continue

        if isinstance(token, FieldToken):
            field_result = _field_matches(task, token)
            if field_result is None:
                effective = True
            elif token.negated or state.pending_not:
                effective = not field_result
            else:
                effective = field_result
        else:
            effective = _text_matches(task, token.value)
            if state.pending_not:
                effective = not effective

        state.fold(effective)

    return True if state.result is None else state.result


def evaluate_collection(tasks: Iterable[T], query: ParsedQuery) -> list[T]:
    """Return the tasks matching the query, in their original order."""
    if not query.tokens:
        return list(tasks)
    return [task for task in tasks if matches(task, query)]
