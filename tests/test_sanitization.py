"""Unit tests for input sanitization helpers."""

import pytest

from shiftsync.utils.sanitization import clean_text, looks_like_sql_injection, strip_html


class TestStripHtml:
    """Test HTML removal."""

    def test_removes_tags_keeps_text(self):
        assert strip_html("<p>Hello <em>there</em></p>") == "Hello there"

    def test_drops_script_bodies(self):
        assert strip_html("Hi<script>alert('x')</script>!") == "Hi!"

    def test_none_passthrough(self):
        assert strip_html(None) is None

    def test_removes_control_characters(self):
        assert strip_html("a\x00b\x07c") == "abc"


class TestCleanText:
    """Test trimming of free-text fields."""

    @pytest.mark.parametrize("value", ["", "   ", "<b></b>"])
    def test_blank_becomes_none(self, value):
        assert clean_text(value) is None

    def test_trims(self):
        assert clean_text("  Room 101 ") == "Room 101"


class TestSqlInjection:
    """Test query value screening."""

    @pytest.mark.parametrize(
        "value",
        ["1; DROP TABLE users", "x' OR 1=1", "admin'--", "SELECT * FROM shifts"],
    )
    def test_detects_common_payloads(self, value):
        assert looks_like_sql_injection(value)

    @pytest.mark.parametrize("value", ["Math", "2024-01-31", "study_group", "Rock and roll"])
    def test_allows_ordinary_values(self, value):
        assert not looks_like_sql_injection(value)

    def test_nested_values(self):
        assert looks_like_sql_injection(["ok", {"q": "1; DROP TABLE x"}])
