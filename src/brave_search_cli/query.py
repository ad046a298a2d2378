"""Query string construction for Brave Search requests.

Parameters are encoded by an ordered list of rules. Each rule gets a chance to
claim a parameter; the first one that does consumes it, and anything left over
is handled by the generic scalar rule.
"""

import math
from typing import Any, Callable, List, Mapping, Tuple
from urllib.parse import urlencode, urlsplit

from brave_search_cli.endpoints import Endpoint

QueryPairs = List[Tuple[str, str]]
EncodingRule = Callable[[Endpoint, str, Any, Mapping[str, Any], QueryPairs], bool]

# Semantic parameter names that differ from their wire names
WIRE_KEYS = {"query": "q"}


def is_valid_goggle_url(url: Any) -> bool:
    """Check that a goggle URL is an absolute HTTPS URL.

    Args:
        url: Candidate goggle URL

    Returns:
        True if the URL parses and its scheme is exactly https
    """
    if not isinstance(url, str):
        return False
    try:
        parts = urlsplit(url.strip())
        # Accessing port validates it
        parts.port
    except ValueError:
        return False
    return parts.scheme == "https" and bool(parts.hostname)


def to_query_value(value: Any) -> str:
    """Serialize a parameter value to its query string form."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(to_query_value(item) for item in value)
    return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _set(query: QueryPairs, key: str, value: str) -> None:
    query[:] = [pair for pair in query if pair[0] != key]
    query.append((key, value))


def _append(query: QueryPairs, key: str, value: str) -> None:
    query.append((key, value))


def encode_ids(endpoint: Endpoint, key: str, value: Any, params: Mapping[str, Any], query: QueryPairs) -> bool:
    """Send local ids as one `ids` key per id."""
    if key != "ids" or not endpoint.takes_repeated_ids:
        return False

    if _is_sequence(value) and len(value) > 0:
        for item in value:
            _append(query, key, to_query_value(item))
    elif value is not None and not _is_sequence(value):
        _set(query, key, to_query_value(value))

    return True


def encode_result_filter(endpoint: Endpoint, key: str, value: Any, params: Mapping[str, Any], query: QueryPairs) -> bool:
    """Join result filters, or force `summarizer` when a summary is requested."""
    if key != "result_filter":
        return False

    # The API only accepts an empty filter or `summarizer` alongside summary=true
    if params.get("summary") is True:
        _set(query, key, "summarizer")
    elif _is_sequence(value) and len(value) > 0:
        _set(query, key, ",".join(to_query_value(item) for item in value))

    return True


def encode_goggles(endpoint: Endpoint, key: str, value: Any, params: Mapping[str, Any], query: QueryPairs) -> bool:
    """Pass a single goggle through, keep only HTTPS goggles from a list."""
    if key != "goggles":
        return False

    if isinstance(value, str):
        _set(query, key, value)
    elif _is_sequence(value):
        for url in value:
            if is_valid_goggle_url(url):
                _append(query, key, url.strip())

    return True


def encode_scalar(endpoint: Endpoint, key: str, value: Any, params: Mapping[str, Any], query: QueryPairs) -> bool:
    if value is None:
        return True
    _set(query, WIRE_KEYS.get(key, key), to_query_value(value))
    return True


ENCODING_RULES: Tuple[EncodingRule, ...] = (
    encode_ids,
    encode_result_filter,
    encode_goggles,
    encode_scalar,
)


def build_query_pairs(endpoint: Endpoint, params: Mapping[str, Any]) -> QueryPairs:
    """Encode a parameter map into ordered (key, value) pairs.

    Args:
        endpoint: Endpoint the parameters are meant for
        params: Endpoint-specific parameters

    Returns:
        List of query pairs; a key may repeat
    """
    query: QueryPairs = []
    for key, value in params.items():
        for rule in ENCODING_RULES:
            if rule(endpoint, key, value, params, query):
                break
    return query


def build_query_string(endpoint: Endpoint, params: Mapping[str, Any]) -> str:
    """Encode a parameter map into a URL query string."""
    return urlencode(build_query_pairs(endpoint, params), safe=",")


def build_url(base_url: str, endpoint: Endpoint, params: Mapping[str, Any]) -> str:
    """Build the full request URL for an endpoint."""
    return f"{base_url.rstrip('/')}{endpoint.path}?{build_query_string(endpoint, params)}"
