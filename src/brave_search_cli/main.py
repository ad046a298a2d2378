"""Main CLI entry point for Brave Search CLI."""

import sys
import json
import logging
import click

from brave_search_cli.api import BraveAPIClient, BraveAPIError
from brave_search_cli.endpoints import Endpoint
from brave_search_cli.utils import get_search_query, format_with_border, stringify
from brave_search_cli.tools import ToolRegistry, ToolExecutor

# Endpoints whose main input is a free-text query
QUERY_ENDPOINTS = {Endpoint.WEB, Endpoint.IMAGES, Endpoint.VIDEOS, Endpoint.NEWS}

# Parameters only encoded when given as a list, even for a single -p value
LIST_PARAMS = {"result_filter"}


def _parse_pairs(pairs: tuple, option: str, coerce_bools: bool = False) -> dict:
    """Parse repeated 'key=value' options into a dict.

    A key given more than once collects its values into a list.

    Raises:
        ValueError: If an entry has no '='
    """
    parsed = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Invalid {option} '{pair}'. Expected key=value")
        key, value = pair.split("=", 1)
        key = key.strip()

        if coerce_bools and value.lower() in ("true", "false"):
            value = value.lower() == "true"

        if key in parsed:
            existing = parsed[key]
            parsed[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            parsed[key] = value
    return parsed


def _echo_json(data, border: bool, title: str):
    output = stringify(data, pretty=True)
    if border:
        click.echo(format_with_border(output, title))
    else:
        click.echo(output)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log requests to stderr")
def cli(verbose):
    """Brave Search CLI - Query the Brave Search API and run its search tools.

    Examples:

      brave-search search "best hiking trails"

      brave-search search -e news -p freshness=pd "election results"

      brave-search search -e localPois -p ids=abc -p ids=def

      echo "rust async runtimes" | brave-search search -p count=5

      brave-search tools list

      brave-search tools call brave_web_search '{"query": "python packaging"}'
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("query", required=False)
@click.option(
    "-e", "--endpoint",
    type=click.Choice([member.value for member in Endpoint]),
    default=Endpoint.WEB.value,
    help="Endpoint to query (default: web)"
)
@click.option("-p", "--param", "params", multiple=True, help="Query parameter as key=value (repeatable)")
@click.option("-H", "--header", "headers", multiple=True, help="Extra request header as name=value (repeatable)")
@click.option("-b", "--border", is_flag=True, default=False, help="Format output with a decorative border")
def search(query, endpoint, params, headers, border):
    """Issue a single request and print the raw JSON response."""
    try:
        endpoint = Endpoint(endpoint)
        request_params = _parse_pairs(params, "parameter", coerce_bools=True)
        for key in LIST_PARAMS & request_params.keys():
            if not isinstance(request_params[key], list):
                request_params[key] = [request_params[key]]
        extra_headers = _parse_pairs(headers, "header")

        if endpoint in QUERY_ENDPOINTS:
            request_params["query"] = get_search_query(query)
        elif query:
            request_params["query"] = query

        try:
            client = BraveAPIClient()
        except ValueError as e:
            click.echo(f"Error: {str(e)}", err=True)
            sys.exit(1)

        try:
            data = client.issue_request(endpoint, request_params, extra_headers)
        except BraveAPIError as e:
            click.echo(f"API Error: {e.message}", err=True)
            sys.exit(1)

        _echo_json(data, border, endpoint.value)

    except ValueError as e:
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)


@cli.group()
def tools():
    """Manage and run search tools."""
    pass


@tools.command(name="list")
@click.option("--schemas", is_flag=True, help="Print the tool schemas as JSON instead")
def list_tools(schemas):
    """List all available tools."""
    try:
        registry = ToolRegistry()

        if schemas:
            selected = registry.select_tools("all")
            click.echo(stringify(registry.get_tool_schemas(selected), pretty=True))
            return

        available = registry.list_tools()

        if available["builtin"]:
            click.echo("Built-in tools:")
            for name, desc in sorted(available["builtin"].items()):
                click.echo(f"  {name}")
                click.echo(f"    {desc}")

        if available["user"]:
            if available["builtin"]:
                click.echo()
            click.echo("User-defined tools:")
            for name, desc in sorted(available["user"].items()):
                click.echo(f"  {name}")
                click.echo(f"    {desc}")

        if not available["builtin"] and not available["user"]:
            click.echo("No tools available")

    except Exception as e:
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)


@tools.command()
@click.argument("tool_name")
def show(tool_name):
    """Show detailed information about a specific tool."""
    try:
        registry = ToolRegistry()
        info = registry.get_tool_info(tool_name)

        click.echo(f"Tool: {info['name']}")
        click.echo(f"Type: {info['source']}")
        click.echo(f"Description: {info['description']}")
        click.echo()
        click.echo("Parameters:")

        params = info['parameters']
        if params.get('properties'):
            for param_name, param_def in params['properties'].items():
                required = " (required)" if param_name in params.get('required', []) else ""
                param_type = param_def.get('type', 'unknown')
                param_desc = param_def.get('description', 'No description')
                click.echo(f"  {param_name}: {param_type}{required}")
                click.echo(f"    {param_desc}")
        else:
            click.echo("  None")

    except ValueError as e:
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)


@tools.command()
@click.argument("tool_name")
@click.argument("arguments", required=False, default="{}")
@click.option("-b", "--border", is_flag=True, default=False, help="Format output with a decorative border")
def call(tool_name, arguments, border):
    """Run a tool the way a tool-call consumer would.

    ARGUMENTS is a JSON object with the tool's parameters.
    """
    try:
        registry = ToolRegistry()
        selected = registry.select_tools(tool_name)
        client = BraveAPIClient()
    except ValueError as e:
        click.echo(f"Error: {str(e)}", err=True)
        sys.exit(1)

    executor = ToolExecutor(registry, client)
    result = executor.execute_tool_call(
        {
            "id": "call_cli",
            "type": "function",
            "function": {"name": tool_name, "arguments": arguments}
        },
        selected
    )

    try:
        content = json.loads(result["content"])
    except json.JSONDecodeError:
        click.echo(result["content"])
        return

    _echo_json(content, border, tool_name)

    if isinstance(content, dict) and "error" in content:
        sys.exit(1)


if __name__ == "__main__":
    cli()
