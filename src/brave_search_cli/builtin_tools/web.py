"""Web search tool."""

from typing import Optional, Union
from brave_search_cli.api import BraveAPIClient, BraveAPIError
from brave_search_cli.endpoints import Endpoint
from brave_search_cli.tools import tool

WEB_SEARCH_PROPERTIES = {
    "query": {
        "type": "string",
        "description": "The search query (max 400 characters, 50 words)"
    },
    "count": {
        "type": "integer",
        "description": "Number of results to return (default: 10, max: 20)",
        "default": 10
    },
    "offset": {
        "type": "integer",
        "description": "Zero-based page offset for pagination (max: 9)",
        "default": 0
    },
    "country": {
        "type": "string",
        "description": "Two-letter country code the results come from (e.g. 'US')"
    },
    "search_lang": {
        "type": "string",
        "description": "Language of the search results (e.g. 'en')"
    },
    "ui_lang": {
        "type": "string",
        "description": "Language of the response UI strings (e.g. 'en-US')"
    },
    "safesearch": {
        "type": "string",
        "enum": ["off", "moderate", "strict"],
        "description": "Adult content filter (default: moderate)"
    },
    "freshness": {
        "type": "string",
        "description": "Discovery date filter: 'pd', 'pw', 'pm', 'py' or 'YYYY-MM-DDtoYYYY-MM-DD'"
    },
    "spellcheck": {
        "type": "boolean",
        "description": "Whether to spellcheck the query"
    },
    "extra_snippets": {
        "type": "boolean",
        "description": "Return up to five additional snippets per result"
    },
}


@tool(
    name="brave_web_search",
    description="Search the web with Brave Search and return titles, URLs, and descriptions. "
                "Set summary=true to also get a key for the brave_summarizer tool.",
    parameters={
        "type": "object",
        "properties": {
            **WEB_SEARCH_PROPERTIES,
            "result_filter": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Result types to include (e.g. ['web', 'news', 'videos'])"
            },
            "goggles": {
                "type": "array",
                "items": {"type": "string"},
                "description": "HTTPS URLs of Goggles used to re-rank results"
            },
            "summary": {
                "type": "boolean",
                "description": "Request a summarizer key for this query"
            }
        },
        "required": ["query"]
    },
    builtin=True
)
def brave_web_search(
    client: BraveAPIClient,
    query: str,
    count: int = 10,
    offset: int = 0,
    country: Optional[str] = None,
    search_lang: Optional[str] = None,
    ui_lang: Optional[str] = None,
    safesearch: Optional[str] = None,
    freshness: Optional[str] = None,
    spellcheck: Optional[bool] = None,
    extra_snippets: Optional[bool] = None,
    result_filter: Optional[list[str]] = None,
    goggles: Optional[Union[str, list[str]]] = None,
    summary: Optional[bool] = None
) -> dict:
    """Search the web.

    Returns:
        Dict with 'results' list (and 'summarizer_key' when available) or 'error' key
    """
    params = {
        "query": query,
        "count": min(count, 20),
        "offset": min(offset, 9),
        "country": country,
        "search_lang": search_lang,
        "ui_lang": ui_lang,
        "safesearch": safesearch,
        "freshness": freshness,
        "spellcheck": spellcheck,
        "extra_snippets": extra_snippets,
        "result_filter": result_filter,
        "goggles": goggles,
        "summary": summary,
    }

    try:
        data = client.issue_request(Endpoint.WEB, params)
    except BraveAPIError as e:
        return {"error": f"Web search failed: {e.message}"}

    results = format_web_results(data)
    if not results:
        output = {"results": [], "message": "No results found", "query": query}
    else:
        output = {"results": results, "query": query}

    summarizer_key = (data.get("summarizer") or {}).get("key")
    if summarizer_key:
        output["summarizer_key"] = summarizer_key

    return output


def format_web_results(data: dict) -> list[dict]:
    """Extract the fields a tool consumer needs from a web search response."""
    results = []
    for result in (data.get("web") or {}).get("results", []):
        item = {
            "title": result.get("title", ""),
            "url": result.get("url", ""),
            "description": result.get("description", "")
        }
        if result.get("extra_snippets"):
            item["extra_snippets"] = result["extra_snippets"]
        results.append(item)
    return results
