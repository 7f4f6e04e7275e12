"""
oipverify.ledger — Resolve OIP ledger transaction ids to typed records.

The index answers ``GET <base>/record/get/<txid>`` with a paginated result set
that is expected to hold exactly one record. Anything else is treated as not
found; ambiguous results are never narrowed to the first hit.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .assertion import is_txid
from .errors import LedgerTransportError, RecordNotFound
from .records import LedgerRecord, Publisher, RecordKind, VerificationClaim

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_URL = "https://api.oip.io/oip/o5"


class LedgerClient:
    """Ledger index client shared by claim and publisher lookups."""

    def __init__(self, base_url: str = DEFAULT_LEDGER_URL, *,
                 http_client: Optional[httpx.AsyncClient] = None,
                 timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _get_results(self, txid: str) -> list:
        url = f"{self.base_url}/record/get/{txid}"
        try:
            resp = await self._http.get(url)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as e:
            logger.warning("Ledger request failed for %s: %s", txid, e)
            raise LedgerTransportError(txid, str(e)) from e
        except ValueError as e:
            logger.warning("Ledger returned undecodable body for %s: %s", txid, e)
            raise LedgerTransportError(txid, "invalid JSON") from e

        results = body.get("results") if isinstance(body, dict) else None
        if results is None:
            return []
        if not isinstance(results, list):
            raise LedgerTransportError(txid, "results is not an array")
        return results

    async def resolve(self, txid: str) -> LedgerRecord:
        """Fetch the single ledger record stored under ``txid``.

        Raises:
            RecordNotFound: malformed txid, or zero or several results.
            LedgerTransportError: the index could not be queried or decoded.
        """
        if not isinstance(txid, str) or not is_txid(txid):
            raise RecordNotFound(str(txid), "not a 64 character lowercase hex txid")

        results = await self._get_results(txid)
        if len(results) != 1:
            logger.info("Ledger lookup for %s returned %d results", txid, len(results))
            raise RecordNotFound(txid, f"expected exactly one result, got {len(results)}")

        try:
            return LedgerRecord.from_result(txid, results[0])
        except (AttributeError, TypeError, ValueError) as e:
            raise LedgerTransportError(txid, f"malformed record: {e}") from e

    async def get_verification_claim(self, txid: str) -> VerificationClaim:
        record = await self.resolve(txid)
        return record.view(RecordKind.VERIFICATION_CLAIM)

    async def get_publisher(self, txid: str) -> Publisher:
        record = await self.resolve(txid)
        return record.view(RecordKind.PUBLISHER)
