"""Base fetcher interface shared by the social platforms."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from ..errors import PostNotFound

logger = logging.getLogger(__name__)


class BasePostFetcher(ABC):
    """Fetch the raw text of one post on one platform."""

    platform_name: str = "unknown"

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, *,
                 timeout: float = 10.0, owns_client: bool = False):
        # A client passed in is closed by the caller unless ownership is handed over.
        self._owns_client = http_client is None or owns_client
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    @abstractmethod
    async def fetch(self, post_id: str) -> str:
        """Return the text body of ``post_id``.

        Must raise PostNotFound for any failure, transport errors included.
        """
        ...

    async def _get_json(self, post_id: str, url: str, **kwargs) -> dict:
        try:
            resp = await self._http.get(url, **kwargs)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            logger.warning("%s fetch failed for %s: %s", self.platform_name, post_id, e)
            raise PostNotFound(self.platform_name, post_id, str(e)) from e
        except ValueError as e:
            logger.warning("%s returned undecodable body for %s", self.platform_name, post_id)
            raise PostNotFound(self.platform_name, post_id, "invalid JSON") from e
        if not isinstance(data, dict):
            raise PostNotFound(self.platform_name, post_id, "unexpected response shape")
        return data
