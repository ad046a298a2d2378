"""Configuration for the Brave Search API client."""

import os
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError

__version__ = "0.1.0"

DEFAULT_BASE_URL = "https://api.search.brave.com"
DEFAULT_TIMEOUT = 30.0


class BraveConfig(BaseModel):
    """Settings injected into BraveAPIClient.

    Built once, usually from the environment, and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    api_key_header: str = "X-API-Key"
    product_name: str = "brave-search-cli"
    product_version: str = __version__

    @classmethod
    def from_env(cls, api_key: Optional[str] = None, **overrides) -> "BraveConfig":
        """Build a configuration from explicit arguments and the environment.

        Args:
            api_key: Brave Search API key. If not provided, reads from BRAVE_API_KEY env var.
            **overrides: Any other BraveConfig field

        Returns:
            A validated BraveConfig

        Raises:
            ValueError: If the API key is missing or a setting is invalid
        """
        api_key = api_key or os.getenv("BRAVE_API_KEY")
        if not api_key:
            raise ValueError(
                "API key not found. Please set the BRAVE_API_KEY environment variable.\n"
                "Example: export BRAVE_API_KEY='your-api-key-here'"
            )

        timeout = os.getenv("BRAVE_API_TIMEOUT")
        if timeout and "timeout" not in overrides:
            overrides["timeout"] = timeout

        try:
            return cls(api_key=api_key, **overrides)
        except ValidationError as e:
            raise ValueError(f"Invalid Brave Search configuration: {e}")

    @property
    def user_agent(self) -> str:
        return f"{self.product_name}/{self.product_version}"

    def default_headers(self) -> Dict[str, str]:
        """Headers sent with every request unless overridden per call."""
        return {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "User-Agent": self.user_agent,
            "DNT": "1",
            self.api_key_header: self.api_key,
        }
