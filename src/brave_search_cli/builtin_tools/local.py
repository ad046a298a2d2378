"""Local business search tool."""

from typing import Optional
from brave_search_cli.api import BraveAPIClient, BraveAPIError
from brave_search_cli.builtin_tools.web import format_web_results
from brave_search_cli.endpoints import Endpoint
from brave_search_cli.tools import tool


@tool(
    name="brave_local_search",
    description="Search for local businesses and places (restaurants, shops, services) with Brave Search. "
                "Returns addresses, ratings, phone numbers, and opening hours. "
                "Falls back to web results when no locations match.",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Local search query (e.g. 'pizza near Central Park')"
            },
            "count": {
                "type": "integer",
                "description": "Number of results to return (default: 5, max: 20)",
                "default": 5
            },
            "country": {
                "type": "string",
                "description": "Two-letter country code (e.g. 'US')"
            },
            "search_lang": {
                "type": "string",
                "description": "Language of the search results (e.g. 'en')"
            },
            "units": {
                "type": "string",
                "enum": ["metric", "imperial"],
                "description": "Measurement units for distances"
            }
        },
        "required": ["query"]
    },
    builtin=True
)
def brave_local_search(
    client: BraveAPIClient,
    query: str,
    count: int = 5,
    country: Optional[str] = None,
    search_lang: Optional[str] = None,
    units: Optional[str] = None
) -> dict:
    """Search local businesses.

    Runs a web search restricted to locations, then looks up the matching
    points of interest and their descriptions.

    Returns:
        Dict with 'results' list or 'error' key
    """
    params = {
        "query": query,
        "count": min(count, 20),
        "country": country,
        "search_lang": search_lang,
        "units": units,
        "result_filter": ["locations"],
    }

    try:
        data = client.issue_request(Endpoint.WEB, params)
        ids = [loc["id"] for loc in (data.get("locations") or {}).get("results", []) if loc.get("id")]

        if not ids:
            # No local matches, answer with regular web results instead
            web_params = {key: value for key, value in params.items() if key != "result_filter"}
            data = client.issue_request(Endpoint.WEB, web_params)
            return {
                "results": format_web_results(data),
                "query": query,
                "message": "No local results found, showing web results"
            }

        pois = client.issue_request(Endpoint.LOCAL_POIS, {"ids": ids, "units": units})
        descriptions = client.issue_request(Endpoint.LOCAL_DESCRIPTIONS, {"ids": ids})

    except BraveAPIError as e:
        return {"error": f"Local search failed: {e.message}"}

    return {"results": merge_local_results(pois, descriptions), "query": query}


def merge_local_results(pois: dict, descriptions: dict) -> list[dict]:
    """Combine POI details with their descriptions, keyed by location id."""
    description_by_id = {
        item.get("id"): item.get("description")
        for item in descriptions.get("results", [])
        if item.get("id")
    }

    results = []
    for poi in pois.get("results", []):
        address = poi.get("postal_address") or {}
        rating = poi.get("rating") or {}
        contact = poi.get("contact") or {}
        results.append({
            "id": poi.get("id"),
            "name": poi.get("title", ""),
            "url": poi.get("url", ""),
            "address": address.get("displayAddress", ""),
            "phone": contact.get("telephone", ""),
            "rating": rating.get("ratingValue"),
            "review_count": rating.get("reviewCount"),
            "price_range": poi.get("price_range", ""),
            "opening_hours": poi.get("opening_hours"),
            "description": description_by_id.get(poi.get("id"), "")
        })

    return results
