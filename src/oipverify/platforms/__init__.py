"""Social platform fetchers.

Each fetcher returns the raw text of a post, or raises PostNotFound.
"""

from .base import BasePostFetcher
from .gab import DEFAULT_GAB_URL, GabFetcher
from .twitter import DEFAULT_TWITTER_URL, TwitterFetcher, build_twitter_client, parse_status_id

FETCHERS: dict[str, type[BasePostFetcher]] = {
    "twitter": TwitterFetcher,
    "gab": GabFetcher,
}


def get_fetcher(platform: str, **kwargs) -> BasePostFetcher:
    """Get a fetcher instance by platform name."""
    cls = FETCHERS.get(platform)
    if cls is None:
        raise ValueError(f"Unknown platform: {platform}. Available: {list(FETCHERS.keys())}")
    return cls(**kwargs)


__all__ = [
    "BasePostFetcher",
    "TwitterFetcher",
    "GabFetcher",
    "FETCHERS",
    "get_fetcher",
    "build_twitter_client",
    "parse_status_id",
    "DEFAULT_GAB_URL",
    "DEFAULT_TWITTER_URL",
]
