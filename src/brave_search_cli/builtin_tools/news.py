"""News search tool."""

from typing import Optional, Union
from brave_search_cli.api import BraveAPIClient, BraveAPIError
from brave_search_cli.endpoints import Endpoint
from brave_search_cli.tools import tool


@tool(
    name="brave_news_search",
    description="Search recent news articles with Brave Search. Returns headlines, URLs, sources, and article age.",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The news search query"
            },
            "count": {
                "type": "integer",
                "description": "Number of results to return (default: 20, max: 50)",
                "default": 20
            },
            "offset": {
                "type": "integer",
                "description": "Zero-based page offset for pagination (max: 9)",
                "default": 0
            },
            "country": {
                "type": "string",
                "description": "Two-letter country code (e.g. 'US')"
            },
            "search_lang": {
                "type": "string",
                "description": "Language of the search results (e.g. 'en')"
            },
            "freshness": {
                "type": "string",
                "description": "Discovery date filter: 'pd', 'pw', 'pm', 'py' or 'YYYY-MM-DDtoYYYY-MM-DD'"
            },
            "extra_snippets": {
                "type": "boolean",
                "description": "Return up to five additional snippets per article"
            },
            "goggles": {
                "type": "array",
                "items": {"type": "string"},
                "description": "HTTPS URLs of Goggles used to re-rank results"
            }
        },
        "required": ["query"]
    },
    builtin=True
)
def brave_news_search(
    client: BraveAPIClient,
    query: str,
    count: int = 20,
    offset: int = 0,
    country: Optional[str] = None,
    search_lang: Optional[str] = None,
    freshness: Optional[str] = None,
    extra_snippets: Optional[bool] = None,
    goggles: Optional[Union[str, list[str]]] = None
) -> dict:
    """Search news.

    Returns:
        Dict with 'results' list or 'error' key
    """
    params = {
        "query": query,
        "count": min(count, 50),
        "offset": min(offset, 9),
        "country": country,
        "search_lang": search_lang,
        "freshness": freshness,
        "extra_snippets": extra_snippets,
        "goggles": goggles,
    }

    try:
        data = client.issue_request(Endpoint.NEWS, params)
    except BraveAPIError as e:
        return {"error": f"News search failed: {e.message}"}

    results = []
    for result in data.get("results", []):
        results.append({
            "title": result.get("title", ""),
            "url": result.get("url", ""),
            "description": result.get("description", ""),
            "source": (result.get("meta_url") or {}).get("hostname", ""),
            "age": result.get("age", ""),
            "breaking": bool(result.get("breaking", False))
        })

    if not results:
        return {"results": [], "message": "No results found", "query": query}

    return {"results": results, "query": query}
