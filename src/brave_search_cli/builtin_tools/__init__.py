"""Built-in tools for Brave Search CLI."""

from brave_search_cli.builtin_tools.web import brave_web_search
from brave_search_cli.builtin_tools.local import brave_local_search
from brave_search_cli.builtin_tools.media import brave_image_search, brave_video_search
from brave_search_cli.builtin_tools.news import brave_news_search
from brave_search_cli.builtin_tools.summarizer import brave_summarizer

BUILTIN_TOOLS = [
    brave_web_search,
    brave_local_search,
    brave_image_search,
    brave_video_search,
    brave_news_search,
    brave_summarizer,
]

__all__ = [
    "BUILTIN_TOOLS",
    "brave_web_search",
    "brave_local_search",
    "brave_image_search",
    "brave_video_search",
    "brave_news_search",
    "brave_summarizer"
]
