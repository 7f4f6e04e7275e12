"""Twitter fetcher — statuses by numeric id over an OAuth 1.0a signed client."""

from __future__ import annotations

import logging

import httpx
from authlib.integrations.httpx_client import AsyncOAuth1Client

from ..errors import PostNotFound
from .base import BasePostFetcher

logger = logging.getLogger(__name__)

DEFAULT_TWITTER_URL = "https://api.twitter.com/1.1"

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1
_DIGITS = frozenset("0123456789")


def parse_status_id(post_id: str) -> int:
    """Parse a decimal signed 64-bit status id.

    Raises:
        ValueError: if ``post_id`` is not a base-10 integer in int64 range.
    """
    digits = post_id[1:] if post_id[:1] in ("+", "-") else post_id
    if not digits or not all(c in _DIGITS for c in digits):
        raise ValueError(f"invalid status id {post_id!r}")
    value = int(post_id)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"status id {post_id!r} out of range")
    return value


def build_twitter_client(consumer_key: str, consumer_secret: str,
                         access_token: str, access_secret: str, *,
                         timeout: float = 10.0) -> httpx.AsyncClient:
    """Create the process-wide OAuth1 client used for status lookups."""
    return AsyncOAuth1Client(
        consumer_key,
        client_secret=consumer_secret,
        token=access_token,
        token_secret=access_secret,
        timeout=timeout,
    )


class TwitterFetcher(BasePostFetcher):
    platform_name = "twitter"

    def __init__(self, http_client: httpx.AsyncClient | None = None, *,
                 base_url: str = DEFAULT_TWITTER_URL, timeout: float = 10.0,
                 owns_client: bool = False):
        super().__init__(http_client, timeout=timeout, owns_client=owns_client)
        self.base_url = base_url.rstrip("/")

    async def fetch(self, post_id: str) -> str:
        try:
            status_id = parse_status_id(post_id)
        except ValueError as e:
            raise PostNotFound(self.platform_name, post_id, str(e)) from e

        status = await self._get_json(
            post_id,
            f"{self.base_url}/statuses/show.json",
            params={"id": str(status_id), "tweet_mode": "extended"},
        )
        text = status.get("full_text") or status.get("text")
        if not isinstance(text, str):
            raise PostNotFound(self.platform_name, post_id, "status has no text")
        return text
