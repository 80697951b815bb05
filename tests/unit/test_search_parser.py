"""Unit tests for search query parser."""

from __future__ import annotations

import pytest

from task_commander.search.parser import KNOWN_FIELDS, has_advanced_syntax, parse_query
from task_commander.search.tokens import FieldToken, OperatorToken, ParsedQuery, TextToken

# ---------------------------------------------------------------------------
# Empty and plain queries
# ---------------------------------------------------------------------------


class TestPlainQueries:
    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_empty(self, raw: str) -> None:
        q = parse_query(raw)
        assert q.tokens == ()
        assert q.has_advanced_syntax is False

    def test_single_word(self) -> None:
        q = parse_query("report")
        assert q == ParsedQuery(tokens=(TextToken("report"),), has_advanced_syntax=False)

    def test_phrase_is_trimmed_and_kept_whole(self) -> None:
        q = parse_query("  write the report  ")
        assert q.tokens == (TextToken("write the report"),)
        assert q.has_advanced_syntax is False

    @pytest.mark.parametrize("raw", ["android notes", "color red", "cannot stop", "band practice"])
    def test_keyword_inside_word_is_plain(self, raw: str) -> None:
        q = parse_query(raw)
        assert q.has_advanced_syntax is False
        assert q.tokens == (TextToken(raw),)

    def test_keyword_at_end_is_plain(self) -> None:
        # No whitespace after the keyword
        assert parse_query("this AND").has_advanced_syntax is False


class TestAdvancedDetection:
    @pytest.mark.parametrize(
        "raw",
        [
            "priority:high",
            "STATUS:pending",
            "Tag:x",
            "report AND summary",
            "report or summary",
            "NOT done",
        ],
    )
    def test_detected(self, raw: str) -> None:
        assert has_advanced_syntax(raw) is True

    def test_plain(self) -> None:
        assert has_advanced_syntax("groceries and") is False


# ---------------------------------------------------------------------------
# Field filters
# ---------------------------------------------------------------------------


class TestFieldTokens:
    def test_priority(self) -> None:
        q = parse_query("priority:high")
        assert q.has_advanced_syntax is True
        assert q.tokens == (FieldToken("priority", "high", negated=False),)

    def test_field_name_lowercased_value_kept(self) -> None:
        q = parse_query("Priority:HIGH")
        assert q.tokens == (FieldToken("priority", "HIGH"),)

    def test_value_trimmed(self) -> None:
        q = parse_query("tag:   design")
        assert q.tokens == (FieldToken("tag", "design"),)

    def test_value_with_space(self) -> None:
        q = parse_query("status:In Progress")
        assert q.tokens == (FieldToken("status", "In Progress"),)

    @pytest.mark.parametrize("field", sorted(KNOWN_FIELDS))
    def test_every_known_field(self, field: str) -> None:
        q = parse_query(f"{field.upper()}:x")
        assert q.has_advanced_syntax is True
        assert q.tokens == (FieldToken(field, "x"),)

    def test_unknown_prefix_is_text(self) -> None:
        q = parse_query("due:today AND tag:x")
        assert q.tokens == (
            TextToken("due:today"),
            OperatorToken("AND"),
            FieldToken("tag", "x"),
        )


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class TestOperators:
    def test_and(self) -> None:
        q = parse_query("priority:high AND tag:design")
        assert q.tokens == (
            FieldToken("priority", "high"),
            OperatorToken("AND"),
            FieldToken("tag", "design"),
        )

    def test_lowercase_keyword_uppercased(self) -> None:
        q = parse_query("priority:high or tag:design")
        assert q.tokens[1] == OperatorToken("OR")

    def test_left_to_right_order_kept(self) -> None:
        q = parse_query("tag:a OR tag:b AND tag:c")
        assert q.tokens == (
            FieldToken("tag", "a"),
            OperatorToken("OR"),
            FieldToken("tag", "b"),
            OperatorToken("AND"),
            FieldToken("tag", "c"),
        )

    def test_text_and_field_mixed(self) -> None:
        q = parse_query("report AND tag:work")
        assert q.tokens == (
            TextToken("report"),
            OperatorToken("AND"),
            FieldToken("tag", "work"),
        )

    def test_leading_keywords_emit_nothing(self) -> None:
        q = parse_query("NOT OR tag:x")
        assert q.tokens == (FieldToken("tag", "x"),)

    def test_trailing_keyword_tolerated(self) -> None:
        q = parse_query("priority:high AND NOT")
        assert q.tokens == (FieldToken("priority", "high"), OperatorToken("AND"))


# ---------------------------------------------------------------------------
# Negation
# ---------------------------------------------------------------------------


class TestNegation:
    def test_leading_not(self) -> None:
        q = parse_query("NOT status:complete")
        assert q.tokens == (FieldToken("status", "complete", negated=True),)

    def test_not_between_filters_negates_next(self) -> None:
        q = parse_query("tag:design NOT priority:low")
        assert q.tokens == (
            FieldToken("tag", "design"),
            FieldToken("priority", "low", negated=True),
        )

    def test_not_after_operator(self) -> None:
        q = parse_query("tag:a OR NOT tag:b")
        assert q.tokens == (
            FieldToken("tag", "a"),
            OperatorToken("OR"),
            FieldToken("tag", "b", negated=True),
        )

    def test_lowercase_not(self) -> None:
        q = parse_query("not tag:b")
        assert q.tokens == (FieldToken("tag", "b", negated=True),)

    def test_not_before_text_keeps_text(self) -> None:
        q = parse_query("NOT report")
        assert q.tokens == (TextToken("report"),)
        assert q.has_advanced_syntax is True

    def test_full_example(self) -> None:
        q = parse_query("priority:high AND tag:design NOT status:completed")
        assert q.tokens == (
            FieldToken("priority", "high"),
            OperatorToken("AND"),
            FieldToken("tag", "design"),
            FieldToken("status", "completed", negated=True),
        )


class TestTotality:
    @pytest.mark.parametrize(
        "raw",
        [
            "AND",
            "AND OR NOT",
            "tag:",
            "priority: ",
            ":::",
            "tag:a AND AND tag:b",
            "NOT NOT NOT tag:x",
            "status:[unterminated",
        ],
    )
    def test_never_raises(self, raw: str) -> None:
        q = parse_query(raw)
        assert isinstance(q, ParsedQuery)

    def test_deterministic(self) -> None:
        raw = "tag:a OR NOT priority:low AND report"
        assert parse_query(raw) == parse_query(raw)
