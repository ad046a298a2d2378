"""Image and video search tools."""

from typing import Optional
from brave_search_cli.api import BraveAPIClient, BraveAPIError
from brave_search_cli.endpoints import Endpoint
from brave_search_cli.tools import tool


@tool(
    name="brave_image_search",
    description="Search images with Brave Search and return titles, page URLs, image URLs, and thumbnails.",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The image search query"
            },
            "count": {
                "type": "integer",
                "description": "Number of results to return (default: 20, max: 200)",
                "default": 20
            },
            "country": {
                "type": "string",
                "description": "Two-letter country code (e.g. 'US')"
            },
            "search_lang": {
                "type": "string",
                "description": "Language of the search results (e.g. 'en')"
            },
            "safesearch": {
                "type": "string",
                "enum": ["off", "strict"],
                "description": "Adult content filter (default: strict)"
            },
            "spellcheck": {
                "type": "boolean",
                "description": "Whether to spellcheck the query"
            }
        },
        "required": ["query"]
    },
    builtin=True
)
def brave_image_search(
    client: BraveAPIClient,
    query: str,
    count: int = 20,
    country: Optional[str] = None,
    search_lang: Optional[str] = None,
    safesearch: Optional[str] = None,
    spellcheck: Optional[bool] = None
) -> dict:
    """Search images.

    Returns:
        Dict with 'results' list or 'error' key
    """
    params = {
        "query": query,
        "count": min(count, 200),
        "country": country,
        "search_lang": search_lang,
        "safesearch": safesearch,
        "spellcheck": spellcheck,
    }

    try:
        data = client.issue_request(Endpoint.IMAGES, params)
    except BraveAPIError as e:
        return {"error": f"Image search failed: {e.message}"}

    results = []
    for result in data.get("results", []):
        results.append({
            "title": result.get("title", ""),
            "url": result.get("url", ""),
            "source": result.get("source", ""),
            "image_url": (result.get("properties") or {}).get("url", ""),
            "thumbnail": (result.get("thumbnail") or {}).get("src", "")
        })

    return {"results": results, "query": query}


@tool(
    name="brave_video_search",
    description="Search videos with Brave Search and return titles, URLs, durations, and creators.",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The video search query"
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
            "safesearch": {
                "type": "string",
                "enum": ["off", "moderate", "strict"],
                "description": "Adult content filter (default: moderate)"
            },
            "freshness": {
                "type": "string",
                "description": "Discovery date filter: 'pd', 'pw', 'pm', 'py' or 'YYYY-MM-DDtoYYYY-MM-DD'"
            }
        },
        "required": ["query"]
    },
    builtin=True
)
def brave_video_search(
    client: BraveAPIClient,
    query: str,
    count: int = 20,
    offset: int = 0,
    country: Optional[str] = None,
    search_lang: Optional[str] = None,
    safesearch: Optional[str] = None,
    freshness: Optional[str] = None
) -> dict:
    """Search videos.

    Returns:
        Dict with 'results' list or 'error' key
    """
    params = {
        "query": query,
        "count": min(count, 50),
        "offset": min(offset, 9),
        "country": country,
        "search_lang": search_lang,
        "safesearch": safesearch,
        "freshness": freshness,
    }

    try:
        data = client.issue_request(Endpoint.VIDEOS, params)
    except BraveAPIError as e:
        return {"error": f"Video search failed: {e.message}"}

    results = []
    for result in data.get("results", []):
        video = result.get("video") or {}
        results.append({
            "title": result.get("title", ""),
            "url": result.get("url", ""),
            "description": result.get("description", ""),
            "age": result.get("age", ""),
            "duration": video.get("duration", ""),
            "creator": video.get("creator", ""),
            "thumbnail": (result.get("thumbnail") or {}).get("src", "")
        })

    return {"results": results, "query": query}
