"""Gab fetcher — public post endpoint returning ``{"body": ...}``."""

from __future__ import annotations

import httpx

from ..errors import PostNotFound
from .base import BasePostFetcher

DEFAULT_GAB_URL = "https://gab.com"


class GabFetcher(BasePostFetcher):
    platform_name = "gab"

    def __init__(self, http_client: httpx.AsyncClient | None = None, *,
                 base_url: str = DEFAULT_GAB_URL, timeout: float = 10.0,
                 owns_client: bool = False):
        super().__init__(http_client, timeout=timeout, owns_client=owns_client)
        self.base_url = base_url.rstrip("/")

    async def fetch(self, post_id: str) -> str:
        post = await self._get_json(post_id, f"{self.base_url}/posts/{post_id}")
        body = post.get("body")
        if not isinstance(body, str):
            raise PostNotFound(self.platform_name, post_id, "post has no body")
        return body
