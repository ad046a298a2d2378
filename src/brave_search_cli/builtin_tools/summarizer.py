"""Summarizer tool."""

from typing import Optional
from brave_search_cli.api import BraveAPIClient, BraveAPIError
from brave_search_cli.endpoints import Endpoint
from brave_search_cli.tools import tool


@tool(
    name="brave_summarizer",
    description="Fetch an AI-generated summary of web search results. "
                "Requires the summarizer_key returned by brave_web_search with summary=true.",
    parameters={
        "type": "object",
        "properties": {
            "key": {
                "type": "string",
                "description": "Summarizer key from a brave_web_search response"
            },
            "entity_info": {
                "type": "boolean",
                "description": "Include extra information about entities in the summary"
            },
            "inline_references": {
                "type": "boolean",
                "description": "Add inline source references to the summary text"
            }
        },
        "required": ["key"]
    },
    builtin=True
)
def brave_summarizer(
    client: BraveAPIClient,
    key: str,
    entity_info: Optional[bool] = None,
    inline_references: Optional[bool] = None
) -> dict:
    """Fetch a summary for a summarizer key.

    Returns:
        Dict with 'summary' text or 'error' key
    """
    params = {
        "key": key,
        "entity_info": entity_info,
        "inline_references": inline_references,
    }

    try:
        data = client.issue_request(Endpoint.SUMMARIZER, params)
    except BraveAPIError as e:
        return {"error": f"Summarizer request failed: {e.message}"}

    if data.get("status") == "failed":
        return {"error": "Summary generation failed for this key"}

    return {
        "title": data.get("title", ""),
        "summary": summary_text(data),
        "status": data.get("status", ""),
        "enrichments": data.get("enrichments")
    }


def summary_text(data: dict) -> str:
    """Join the text tokens of a summarizer response."""
    parts = []
    for message in data.get("summary") or []:
        if message.get("type") == "token" and message.get("data"):
            parts.append(str(message["data"]))
    return "".join(parts)
