"""Brave Search API client."""

import logging
from typing import Optional, Dict, Any, Mapping, Union
import requests

from brave_search_cli.config import BraveConfig
from brave_search_cli.endpoints import Endpoint
from brave_search_cli.query import build_url
from brave_search_cli.utils import sanitize_message, stringify

logger = logging.getLogger(__name__)


class BraveAPIError(Exception):
    """Exception raised for Brave Search API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class UnknownEndpointError(BraveAPIError, ValueError):
    """Raised when a request names an endpoint outside the known set."""


class TransportError(BraveAPIError):
    """Raised when the request never produced an HTTP response."""


class RequestFailedError(BraveAPIError):
    """Raised for non-2xx responses."""


def resolve_endpoint(endpoint: Union[Endpoint, str]) -> Endpoint:
    """Look up an endpoint by member or identifier.

    Raises:
        UnknownEndpointError: If the identifier is not a known endpoint
    """
    if isinstance(endpoint, Endpoint):
        return endpoint
    try:
        return Endpoint(endpoint)
    except ValueError:
        known = ", ".join(member.value for member in Endpoint)
        raise UnknownEndpointError(f"Unknown endpoint: '{endpoint}'. Known endpoints: {known}")


class BraveAPIClient:
    """Client for issuing requests against the Brave Search API."""

    def __init__(self, config: Optional[BraveConfig] = None):
        """Initialize the API client.

        Args:
            config: Client configuration. If not provided, built from the environment.

        Raises:
            ValueError: If no configuration is given and BRAVE_API_KEY is not set
        """
        self.config = config or BraveConfig.from_env()
        self.session = requests.Session()

    def issue_request(
        self,
        endpoint: Union[Endpoint, str],
        params: Optional[Mapping[str, Any]] = None,
        extra_headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """Issue a GET request to a Brave Search endpoint.

        Args:
            endpoint: Endpoint member or identifier (e.g. "web", "localPois")
            params: Endpoint-specific query parameters
            extra_headers: Headers overriding the defaults on key collision

        Returns:
            The decoded JSON response body, unmodified

        Raises:
            UnknownEndpointError: If the endpoint is not known
            TransportError: If the request could not be completed
            RequestFailedError: If the API responds with a non-2xx status
            BraveAPIError: If a successful response is not valid JSON
        """
        endpoint = resolve_endpoint(endpoint)
        url = build_url(self.config.base_url, endpoint, params or {})
        headers = {**self.config.default_headers(), **(extra_headers or {})}

        logger.debug("GET %s", self._sanitize(url))

        try:
            response = self.session.get(url, headers=headers, timeout=self.config.timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError(self._sanitize(f"Request to {url} timed out: {e}")) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(self._sanitize(f"Request to {url} failed: {e}")) from e

        logger.debug("%s responded with %s", endpoint.value, response.status_code)

        if not response.ok:
            raise RequestFailedError(self._parse_error_response(response), response.status_code)

        try:
            return response.json()
        except ValueError:
            raise BraveAPIError(
                f"Invalid JSON in response from '{endpoint.value}' endpoint",
                response.status_code
            )

    def _parse_error_response(self, response: requests.Response) -> str:
        """Build a sanitized error message from a failed response.

        Args:
            response: The failed response object

        Returns:
            Status line followed by the pretty-printed JSON body, or the raw body
        """
        error_message = f"{response.status_code} {response.reason}"

        try:
            error_message += f"\n{stringify(response.json(), pretty=True)}"
        except ValueError:
            error_message += f"\n{response.text}"

        return self._sanitize(error_message)

    def _sanitize(self, message: str) -> str:
        return sanitize_message(message, self.config.api_key)
