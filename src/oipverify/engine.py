"""
oipverify.engine — Cross-platform publisher verification.

Given the txid of a verification claim, check that the Twitter and Gab posts it
names each carry an assertion naming a publisher registered on the ledger.

Branches run sequentially, Twitter first. The Gab branch is coupled to the
Twitter branch:

* if Gab asserts exactly the same (name, txid) as Twitter, Gab does no
  publisher lookup of its own and gets no publisher message;
* otherwise Gab looks up the publisher at its own txid but compares it with
  the name Twitter asserted (empty when Twitter produced no assertion).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .assertion import Assertion, extract_assertion
from .errors import MalformedAssertion, NotFound, TransportError, VerificationError
from .ledger import LedgerClient
from .platforms.base import BasePostFetcher

logger = logging.getLogger(__name__)

NAME_MISMATCH = "Claimed name doesn't match publisher name"


@dataclass
class VerificationResult:
    """Outcome of one check. A platform is verified iff it has no message."""
    twitter_msg: str = ""
    gab_msg: str = ""
    msg: str = ""

    @property
    def twitter(self) -> bool:
        return not self.msg and not self.twitter_msg

    @property
    def gab(self) -> bool:
        return not self.msg and not self.gab_msg

    def to_dict(self) -> dict:
        """Response body; empty messages are omitted, and a claim failure
        reports only ``msg``."""
        if self.msg:
            return {"msg": self.msg}
        data: dict = {"twitter": self.twitter}
        if self.twitter_msg:
            data["twitter_msg"] = self.twitter_msg
        data["gab"] = self.gab
        if self.gab_msg:
            data["gab_msg"] = self.gab_msg
        return data


@dataclass(frozen=True)
class _Wording:
    missing_id: str
    noun: str

    @property
    def malformed(self) -> str:
        return f"{self.noun.capitalize()} contents not properly formatted"

    def not_found(self, post_id: str) -> str:
        return f"Unable to locate {self.noun} with ID {post_id}"


TWITTER_WORDING = _Wording(missing_id="No tweet ID provided", noun="tweet")
GAB_WORDING = _Wording(missing_id="No post ID provided", noun="post")


class CrossVerifier:
    """Checks a verification claim against Twitter, Gab and the ledger."""

    def __init__(self, ledger: LedgerClient, twitter: BasePostFetcher, gab: BasePostFetcher):
        self.ledger = ledger
        self.twitter = twitter
        self.gab = gab

    async def aclose(self) -> None:
        for client in (self.ledger, self.twitter, self.gab):
            await client.aclose()

    async def _read_assertion(self, fetcher: BasePostFetcher, post_id: str,
                              wording: _Wording) -> tuple[str, Optional[Assertion]]:
        """Fetch a post and extract its assertion; return (message, assertion)."""
        try:
            text = await fetcher.fetch(post_id)
        except (NotFound, TransportError) as e:
            logger.info("Could not fetch %s %s: %s", fetcher.platform_name, post_id, e)
            return wording.not_found(post_id), None

        try:
            return "", extract_assertion(text)
        except MalformedAssertion:
            logger.info("Malformed assertion in %s %s", fetcher.platform_name, post_id)
            return wording.malformed, None

    async def _check_publisher(self, txid: str, expected_name: str) -> str:
        try:
            publisher = await self.ledger.get_publisher(txid)
        except (NotFound, TransportError) as e:
            logger.info("Could not resolve publisher %s: %s", txid, e)
            return f"Unable to locate publisher with ID {txid}"
        if publisher.name != expected_name:
            return NAME_MISMATCH
        return ""

    async def check(self, claim_txid: str) -> VerificationResult:
        """Run the full check for the claim stored at ``claim_txid``."""
        try:
            claim = await self.ledger.get_verification_claim(claim_txid)
        except VerificationError as e:
            logger.info("Verification claim %s unavailable: %s", claim_txid, e)
            return VerificationResult(msg=f"Unable to locate verification claim with ID {claim_txid}")

        result = VerificationResult()

        twitter_assertion: Optional[Assertion] = None
        if not claim.twitter_id:
            result.twitter_msg = TWITTER_WORDING.missing_id
        else:
            result.twitter_msg, twitter_assertion = await self._read_assertion(
                self.twitter, claim.twitter_id, TWITTER_WORDING)
            if twitter_assertion is not None:
                result.twitter_msg = await self._check_publisher(
                    twitter_assertion.asserted_txid, twitter_assertion.claimed_name)

        if not claim.gab_id:
            result.gab_msg = GAB_WORDING.missing_id
        else:
            result.gab_msg, gab_assertion = await self._read_assertion(
                self.gab, claim.gab_id, GAB_WORDING)
            if gab_assertion is not None and gab_assertion != twitter_assertion:
                twitter_name = twitter_assertion.claimed_name if twitter_assertion else ""
                result.gab_msg = await self._check_publisher(gab_assertion.asserted_txid, twitter_name)

        logger.info(
            "Checked claim %s",
            claim_txid,
            extra={"twitter": result.twitter, "gab": result.gab},
        )
        return result
