"""Tests for utility functions."""

import json
import pytest
from io import StringIO
from unittest.mock import patch
from brave_search_cli.utils import (
    INVALID_URL,
    REDACTED_API_KEY,
    REDACTED_QUERY,
    format_with_border,
    get_search_query,
    read_stdin,
    redact_url,
    sanitize_message,
    stringify,
)


class TestStringify:
    """Tests for stringify function."""

    def test_compact(self):
        assert stringify({"a": 1, "b": [1, 2]}) == '{"a": 1, "b": [1, 2]}'

    def test_pretty_uses_two_space_indent(self):
        assert stringify({"a": {"b": 1}}, pretty=True) == '{\n  "a": {\n    "b": 1\n  }\n}'

    def test_unicode_kept(self):
        assert stringify({"city": "Zürich"}) == '{"city": "Zürich"}'

    def test_round_trips(self):
        data = {"results": [{"title": "x", "score": 1.5, "ok": True, "none": None}]}
        assert json.loads(stringify(data, pretty=True)) == data


class TestRedactURL:
    """Tests for redact_url function."""

    def test_q_value_redacted(self):
        url = "https://api.search.brave.com/res/v1/web/search?q=secret+plans"
        assert redact_url(url) == f"https://api.search.brave.com/res/v1/web/search?q={REDACTED_QUERY}"

    def test_other_params_preserved(self):
        url = "https://example.com/search?count=5&q=hidden&country=US#frag"
        assert redact_url(url) == f"https://example.com/search?count=5&q={REDACTED_QUERY}&country=US#frag"

    def test_every_q_occurrence_redacted(self):
        url = "https://example.com/?q=one&q=two"
        assert redact_url(url) == f"https://example.com/?q={REDACTED_QUERY}&q={REDACTED_QUERY}"

    def test_similar_keys_untouched(self):
        url = "https://example.com/?qq=1&query=2"
        assert redact_url(url) == url

    def test_url_without_query_unchanged(self):
        assert redact_url("https://search.brave.com/help") == "https://search.brave.com/help"

    @pytest.mark.parametrize("url", [
        "https://[::1/search?q=x",
        "https://example.com:port/search?q=x",
        "https://",
    ])
    def test_unparseable_url_collapsed(self, url):
        assert redact_url(url) == INVALID_URL


class TestSanitizeMessage:
    """Tests for sanitize_message function."""

    def test_api_key_redacted(self):
        message = sanitize_message('{"message": "bad key abc123SECRET"}', "abc123SECRET")
        assert REDACTED_API_KEY in message
        assert "abc123SECRET" not in message

    def test_every_key_occurrence_redacted(self):
        message = sanitize_message("k1 k1 k1", "k1")
        assert message == " ".join([REDACTED_API_KEY] * 3)

    def test_urls_in_text_redacted(self):
        message = sanitize_message(
            "400 Bad Request\nhttps://api.search.brave.com/res/v1/web/search?q=secret+plans failed",
            "key"
        )
        assert "secret" not in message
        assert f"https://api.search.brave.com/res/v1/web/search?q={REDACTED_QUERY} failed" in message

    def test_urls_inside_json_redacted(self):
        body = stringify({"url": "https://api.search.brave.com/res/v1/news/search?q=private&count=2"}, pretty=True)
        message = sanitize_message(body, "key")
        assert "private" not in message
        assert f'"https://api.search.brave.com/res/v1/news/search?q={REDACTED_QUERY}&count=2"' in message

    def test_invalid_url_collapsed(self):
        message = sanitize_message("see http://[broken/path?q=leak here", None)
        assert "leak" not in message
        assert f"see {INVALID_URL} here" == message

    def test_key_inside_url_redacted(self):
        message = sanitize_message("https://example.com/?token=k3y&q=terms", "k3y")
        assert "k3y" not in message
        assert "terms" not in message

    def test_relative_path_q_redacted(self):
        message = sanitize_message(
            "Max retries exceeded with url: /res/v1/web/search?count=5&q=secret+plans (Caused by x)", "key"
        )
        assert "secret" not in message
        assert f"/res/v1/web/search?count=5&q={REDACTED_QUERY} (Caused by x)" in message

    def test_absolute_url_redacted_once(self):
        url = "https://api.search.brave.com/res/v1/web/search?q=secret"
        assert sanitize_message(url, None) == f"https://api.search.brave.com/res/v1/web/search?q={REDACTED_QUERY}"

    def test_no_api_key(self):
        assert sanitize_message("plain text", None) == "plain text"
        assert sanitize_message("plain text", "") == "plain text"


class TestReadStdin:
    """Tests for read_stdin function."""

    def test_read_stdin_with_piped_input(self):
        """Test reading from stdin when input is piped."""
        mock_stdin = StringIO("best coffee in town")

        with patch('sys.stdin', mock_stdin):
            with patch('sys.stdin.isatty', return_value=False):
                assert read_stdin() == "best coffee in town"

    def test_read_stdin_strips_whitespace(self):
        mock_stdin = StringIO("  \n  hiking trails  \n  ")

        with patch('sys.stdin', mock_stdin):
            with patch('sys.stdin.isatty', return_value=False):
                assert read_stdin() == "hiking trails"

    def test_read_stdin_without_piped_input(self):
        """Test that None is returned when stdin is a TTY (no pipe)."""
        with patch('sys.stdin.isatty', return_value=True):
            assert read_stdin() is None


class TestGetSearchQuery:
    """Tests for get_search_query function."""

    def test_stdin_takes_priority(self):
        with patch('brave_search_cli.utils.read_stdin', return_value="from pipe"):
            assert get_search_query("from arg") == "from pipe"

    def test_falls_back_to_cli_argument(self):
        with patch('brave_search_cli.utils.read_stdin', return_value=None):
            assert get_search_query("from arg") == "from arg"

    def test_empty_stdin_falls_back(self):
        with patch('brave_search_cli.utils.read_stdin', return_value=""):
            assert get_search_query("from arg") == "from arg"

    def test_no_query_raises(self):
        with patch('brave_search_cli.utils.read_stdin', return_value=None):
            with pytest.raises(ValueError) as exc_info:
                get_search_query(None)
        assert "No query provided" in str(exc_info.value)


class TestFormatWithBorder:
    """Tests for format_with_border function."""

    def test_contains_content_and_title(self):
        result = format_with_border('{"ok": true}', "web")
        assert '{"ok": true}' in result
        assert "web" in result

    def test_has_border(self):
        result = format_with_border("content", "news")
        lines = result.splitlines()
        assert len(lines) >= 3
        assert not result.endswith("\n")
