"""Token data classes for parsed search queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

FieldName = Literal["priority", "status", "tag"]
OperatorName = Literal["AND", "OR", "NOT"]


@dataclass(frozen=True)
class FieldToken:
    """A field-specific filter like ``priority:high`` or ``tag:design``.

    Priority and status compare by case-insensitive equality, tags by
    case-insensitive membership. ``negated`` inverts the comparison.
    """

    field: FieldName
    value: str
    negated: bool = False


@dataclass(frozen=True)
class OperatorToken:
    """A boolean connective between two operands."""

    operator: OperatorName


@dataclass(frozen=True)
class TextToken:
    """A free-text fragment matched against title, description and tags."""

    value: str


Token = Union[FieldToken, OperatorToken, TextToken]


@dataclass(frozen=True)
class ParsedQuery:
    """Top-level search query: an ordered token sequence.

    ``has_advanced_syntax`` selects the evaluation mode: plain substring
    search when False, left-to-right boolean fold when True.
    """

    tokens: tuple[Token, ...] = ()
    has_advanced_syntax: bool = False
