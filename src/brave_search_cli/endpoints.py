"""Brave Search API endpoints."""

from enum import Enum


class Endpoint(str, Enum):
    """Closed set of Brave Search endpoints, each bound to its URL path."""

    IMAGES = ("images", "/res/v1/images/search")
    LOCAL_POIS = ("localPois", "/res/v1/local/pois")
    LOCAL_DESCRIPTIONS = ("localDescriptions", "/res/v1/local/descriptions")
    NEWS = ("news", "/res/v1/news/search")
    VIDEOS = ("videos", "/res/v1/videos/search")
    WEB = ("web", "/res/v1/web/search")
    SUMMARIZER = ("summarizer", "/res/v1/summarizer/search")

    def __new__(cls, identifier: str, path: str):
        member = str.__new__(cls, identifier)
        member._value_ = identifier
        member.path = path
        return member

    def __str__(self) -> str:
        return self.value

    @property
    def takes_repeated_ids(self) -> bool:
        """Whether `ids` is sent as one query key per id."""
        return self in (Endpoint.LOCAL_POIS, Endpoint.LOCAL_DESCRIPTIONS)
