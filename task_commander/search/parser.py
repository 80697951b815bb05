"""Parse task search syntax into a token sequence."""

from __future__ import annotations

import re

from task_commander.search.tokens import (
    FieldToken,
    OperatorToken,
    ParsedQuery,
    TextToken,
    Token,
)

KEYWORDS: frozenset[str] = frozenset({"AND", "OR", "NOT"})

# Known fields that can be filtered with ``field:value``
KNOWN_FIELDS: frozenset[str] = frozenset({"priority", "status", "tag"})

_FIELD_ALT = "|".join(sorted(KNOWN_FIELDS))
_ADVANCED_RE = re.compile(rf"(?:{_FIELD_ALT}):|(?:^|\s)(?:AND|OR|NOT)\s", re.IGNORECASE)
_SPLIT_RE = re.compile(r"\s+(AND|OR|NOT)\s+", re.IGNORECASE)
_FIELD_RE = re.compile(rf"^({_FIELD_ALT}):(.+)$", re.IGNORECASE)
_INLINE_NOT = "NOT "


def has_advanced_syntax(query_string: str) -> bool:
    """Return True if the string uses a field prefix or a boolean keyword."""
    return _ADVANCED_RE.search(query_string) is not None


def _split_segments(query_string: str) -> list[str]:
    """Split on whitespace-bounded keywords, keeping each keyword as a segment."""
    segments: list[str] = []
    last = 0
    for match in _SPLIT_RE.finditer(query_string):
        if match.start() > last:
            segments.append(query_string[last : match.start()])
        segments.append(match.group(1).upper())
        last = match.end()
    if last < len(query_string):
        segments.append(query_string[last:])
    return [s.strip() for s in segments if s.strip()]


def parse_query(query_string: str) -> ParsedQuery:
    """Parse a task search string into a ParsedQuery.

    Parsing never fails: malformed input degrades to fewer tokens or to a
    plain text search.

    Args:
        query_string: The raw search box contents.

    Returns:
        A ParsedQuery with its tokens and evaluation mode.
    """
    query_string = query_string.strip()
    if not query_string:
        return ParsedQuery()

    if not has_advanced_syntax(query_string):
        return ParsedQuery(tokens=(TextToken(query_string),))

    tokens: list[Token] = []
    pending_operator: str | None = None

    for index, segment in enumerate(_split_segments(query_string)):
        upper = segment.upper()

        if upper in KEYWORDS:
            pending_operator = upper
            # Nothing to connect yet, and NOT binds to the next operand
            if index > 0 and tokens and upper != "NOT":
                tokens.append(OperatorToken(upper))  # type: ignore[arg-type]
            continue

        negated = False
        remainder = segment
        if pending_operator == "NOT":
            negated = True
        elif upper.startswith(_INLINE_NOT):
            negated = True
            remainder = segment[len(_INLINE_NOT) :].strip()

        field_match = _FIELD_RE.match(remainder)
        if field_match:
            field_name, value = field_match.groups()
            tokens.append(
                FieldToken(
                    field=field_name.lower(),  # type: ignore[arg-type]
                    value=value.strip(),
                    negated=negated,
                )
            )
        elif remainder and remainder.upper() not in KEYWORDS:
            tokens.append(TextToken(remainder))
        pending_operator = None

    return ParsedQuery(tokens=tuple(tokens), has_advanced_syntax=True)
