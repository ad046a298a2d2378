"""Tests for CLI main module."""

import json
import pytest
from unittest.mock import Mock, patch
from click.testing import CliRunner
from brave_search_cli.main import cli, _parse_pairs
from brave_search_cli.api import RequestFailedError
from brave_search_cli.endpoints import Endpoint


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_client():
    """Patch the API client used by the CLI."""
    with patch('brave_search_cli.main.BraveAPIClient') as mock_client_class:
        client = Mock()
        client.issue_request.return_value = {"web": {"results": [{"title": "Result"}]}}
        mock_client_class.return_value = client
        yield client


class TestParsePairs:
    """Tests for _parse_pairs."""

    def test_simple_pairs(self):
        assert _parse_pairs(("count=5", "country=US"), "parameter") == {"count": "5", "country": "US"}

    def test_repeated_key_builds_list(self):
        assert _parse_pairs(("ids=a", "ids=b", "ids=c"), "parameter") == {"ids": ["a", "b", "c"]}

    def test_value_may_contain_equals(self):
        assert _parse_pairs(("goggles=https://g.example/?a=b",), "parameter") == {
            "goggles": "https://g.example/?a=b"
        }

    def test_bool_coercion(self):
        assert _parse_pairs(("summary=true", "spellcheck=False"), "parameter", coerce_bools=True) == {
            "summary": True, "spellcheck": False
        }

    def test_no_bool_coercion_by_default(self):
        assert _parse_pairs(("DNT=true",), "header") == {"DNT": "true"}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match="Expected key=value"):
            _parse_pairs(("count",), "parameter")


class TestSearchCommand:
    """Tests for the search command."""

    def test_web_search(self, runner, mock_client):
        result = runner.invoke(cli, ['search', 'best hiking trails'])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"web": {"results": [{"title": "Result"}]}}
        endpoint, params, headers = mock_client.issue_request.call_args[0]
        assert endpoint == Endpoint.WEB
        assert params == {"query": "best hiking trails"}
        assert headers == {}

    def test_query_from_stdin(self, runner, mock_client):
        result = runner.invoke(cli, ['search'], input="piped query\n")

        assert result.exit_code == 0
        assert mock_client.issue_request.call_args[0][1]["query"] == "piped query"

    def test_missing_query(self, runner, mock_client):
        result = runner.invoke(cli, ['search'], input="")

        assert result.exit_code == 1
        assert "No query provided" in result.output
        mock_client.issue_request.assert_not_called()

    def test_endpoint_params_and_headers(self, runner, mock_client):
        result = runner.invoke(cli, [
            'search', '-e', 'news',
            '-p', 'freshness=pd', '-p', 'result_filter=news', '-p', 'result_filter=web',
            '-H', 'X-Loc-Country=US',
            'elections'
        ])

        assert result.exit_code == 0
        endpoint, params, headers = mock_client.issue_request.call_args[0]
        assert endpoint == Endpoint.NEWS
        assert params == {"freshness": "pd", "result_filter": ["news", "web"], "query": "elections"}
        assert headers == {"X-Loc-Country": "US"}

    def test_single_result_filter_sent_as_list(self, runner, mock_client):
        result = runner.invoke(cli, ['search', '-p', 'result_filter=web', 'rust'])

        assert result.exit_code == 0
        params = mock_client.issue_request.call_args[0][1]
        assert params["result_filter"] == ["web"]

    def test_local_pois_without_query(self, runner, mock_client):
        result = runner.invoke(cli, ['search', '-e', 'localPois', '-p', 'ids=a', '-p', 'ids=b'])

        assert result.exit_code == 0
        endpoint, params, _ = mock_client.issue_request.call_args[0]
        assert endpoint == Endpoint.LOCAL_POIS
        assert params == {"ids": ["a", "b"]}

    def test_unknown_endpoint_rejected(self, runner, mock_client):
        result = runner.invoke(cli, ['search', '-e', 'shopping', 'shoes'])

        assert result.exit_code != 0
        mock_client.issue_request.assert_not_called()

    def test_api_error(self, runner, mock_client):
        mock_client.issue_request.side_effect = RequestFailedError("401 Unauthorized\n[REDACTED-API-KEY]", 401)

        result = runner.invoke(cli, ['search', 'x'])

        assert result.exit_code == 1
        assert "API Error: 401 Unauthorized" in result.output

    def test_missing_api_key(self, runner, monkeypatch):
        monkeypatch.delenv("BRAVE_API_KEY", raising=False)

        result = runner.invoke(cli, ['search', 'x'])

        assert result.exit_code == 1
        assert "BRAVE_API_KEY" in result.output

    def test_border(self, runner, mock_client):
        result = runner.invoke(cli, ['search', '-b', 'x'])

        assert result.exit_code == 0
        assert '"title": "Result"' in result.output
        assert "web" in result.output

    def test_invalid_param(self, runner, mock_client):
        result = runner.invoke(cli, ['search', '-p', 'count', 'x'])

        assert result.exit_code == 1
        assert "Expected key=value" in result.output


class TestToolsCommands:
    """Tests for the tools command group."""

    def test_list(self, runner):
        result = runner.invoke(cli, ['tools', 'list'])

        assert result.exit_code == 0
        assert "Built-in tools:" in result.output
        assert "brave_web_search" in result.output
        assert "brave_summarizer" in result.output

    def test_list_schemas(self, runner):
        result = runner.invoke(cli, ['tools', 'list', '--schemas'])

        assert result.exit_code == 0
        schemas = json.loads(result.output)
        assert len(schemas) == 6
        assert all(schema["type"] == "function" for schema in schemas)

    def test_show(self, runner):
        result = runner.invoke(cli, ['tools', 'show', 'brave_local_search'])

        assert result.exit_code == 0
        assert "Tool: brave_local_search" in result.output
        assert "Type: builtin" in result.output
        assert "query: string (required)" in result.output

    def test_show_unknown(self, runner):
        result = runner.invoke(cli, ['tools', 'show', 'nonexistent'])

        assert result.exit_code == 1
        assert "Tool not found" in result.output

    def test_call(self, runner, mock_client):
        mock_client.issue_request.return_value = {"results": [{"title": "Headline"}]}

        result = runner.invoke(cli, ['tools', 'call', 'brave_news_search', '{"query": "elections"}'])

        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["results"][0]["title"] == "Headline"

    def test_call_tool_error(self, runner, mock_client):
        mock_client.issue_request.side_effect = RequestFailedError("403 Forbidden", 403)

        result = runner.invoke(cli, ['tools', 'call', 'brave_web_search', '{"query": "x"}'])

        assert result.exit_code == 1
        assert "Web search failed: 403 Forbidden" in result.output

    def test_call_unknown_tool(self, runner, mock_client):
        result = runner.invoke(cli, ['tools', 'call', 'brave_shopping', '{}'])

        assert result.exit_code == 1
        assert "Unknown tool" in result.output
