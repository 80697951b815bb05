"""Search query parsing and evaluation for task filtering."""

from task_commander.search.evaluator import evaluate_collection, matches
from task_commander.search.parser import has_advanced_syntax, parse_query
from task_commander.search.tokens import (
    FieldToken,
    OperatorToken,
    ParsedQuery,
    TextToken,
    Token,
)

__all__ = [
    "FieldToken",
    "OperatorToken",
    "ParsedQuery",
    "TextToken",
    "Token",
    "evaluate_collection",
    "has_advanced_syntax",
    "matches",
    "parse_query",
]
