"""Helper functions for Brave Search CLI."""

import json
import re
import sys
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit
from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

REDACTED_API_KEY = "[REDACTED-API-KEY]"
REDACTED_QUERY = "[REDACTED-QUERY]"
INVALID_URL = "[INVALID-URL]"

_URL_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9+.\-]*://[^\s\"'<>]+")
# `q` values in relative paths, e.g. "with url: /res/v1/web/search?q=terms" from urllib3
_QUERY_PARAM_PATTERN = re.compile(r"([?&])q=[^&#\s\"'<>]*")


def stringify(obj: Any, pretty: bool = False) -> str:
    """Serialize an object to JSON text.

    Args:
        obj: JSON-serializable object
        pretty: Indent with two spaces instead of producing compact output

    Returns:
        JSON string
    """
    if pretty:
        return json.dumps(obj, indent=2, ensure_ascii=False)
    return json.dumps(obj, ensure_ascii=False)


def redact_url(url: str) -> str:
    """Replace the `q` query parameter of a URL with a redaction token.

    Args:
        url: Absolute URL

    Returns:
        The URL with its search terms hidden, or INVALID_URL if it does not parse
    """
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError:
        return INVALID_URL

    if not parts.netloc:
        return INVALID_URL

    if not parts.query:
        return url

    segments = []
    for segment in parts.query.split("&"):
        if segment.split("=", 1)[0] == "q":
            segment = f"q={REDACTED_QUERY}"
        segments.append(segment)

    return urlunsplit(parts._replace(query="&".join(segments)))


def sanitize_message(message: str, api_key: Optional[str]) -> str:
    """Remove credentials and search terms from a message.

    Args:
        message: Error text that may be shown to users or logged
        api_key: Active API key

    Returns:
        Message with every occurrence of the key and every URL `q` value redacted
    """
    if api_key:
        message = message.replace(api_key, REDACTED_API_KEY)
    message = _URL_PATTERN.sub(lambda match: redact_url(match.group(0)), message)
    return _QUERY_PARAM_PATTERN.sub(lambda match: f"{match.group(1)}q={REDACTED_QUERY}", message)


def read_stdin() -> Optional[str]:
    """Read input from stdin if available.

    Returns:
        Content from stdin if piped, None otherwise
    """
    if not sys.stdin.isatty():
        return sys.stdin.read().strip()
    return None


def get_search_query(cli_query: Optional[str]) -> str:
    """Get the search query from CLI argument or stdin.

    Args:
        cli_query: Query provided as CLI argument

    Returns:
        The query to search for

    Raises:
        ValueError: If no query is provided via CLI or stdin
    """
    # Piped input takes priority
    stdin_input = read_stdin()
    if stdin_input:
        return stdin_input

    if cli_query:
        return cli_query

    raise ValueError(
        "No query provided. Please provide a query as an argument or pipe input.\n"
        "Examples:\n"
        "  brave-search search \"Your query here\"\n"
        "  echo \"Your query\" | brave-search search"
    )


def format_with_border(content: str, title: str) -> str:
    """Format content inside a rich panel.

    Args:
        content: The text content to wrap in a border
        title: Panel title, usually the endpoint name

    Returns:
        The content rendered with a border
    """
    console = Console()

    # Text keeps brackets in JSON output from being read as rich markup
    panel = Panel(
        Text(content),
        border_style=Style(color="cyan", bold=True),
        padding=(1, 2),
        expand=False,
        title=f"[bold magenta]{title}[/bold magenta]",
        title_align="center",
    )

    with console.capture() as capture:
        console.print(panel)

    return capture.get().rstrip()
