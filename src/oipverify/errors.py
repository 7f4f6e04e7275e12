"""Error kinds raised by the resolver, fetchers and extractor.

The engine catches every one of these and turns it into a message on the
verification result; none of them escape a check.
"""

from __future__ import annotations


class VerificationError(Exception):
    """Base class for all oipverify errors."""


class NotFound(VerificationError):
    """A claim, publisher or post is absent or ambiguous."""


class RecordNotFound(NotFound):
    """The ledger index has no single record of the requested kind for a txid."""

    def __init__(self, txid: str, reason: str = ""):
        self.txid = txid
        self.reason = reason
        super().__init__(f"record {txid!r} not found" + (f": {reason}" if reason else ""))


class PostNotFound(NotFound):
    """A social post could not be fetched or decoded."""

    def __init__(self, platform: str, post_id: str, reason: str = ""):
        self.platform = platform
        self.post_id = post_id
        self.reason = reason
        super().__init__(f"{platform} post {post_id!r} not found" + (f": {reason}" if reason else ""))


class MalformedAssertion(VerificationError):
    """Post text does not contain a well-formed identity assertion."""


class TransportError(VerificationError):
    """Network or decoding failure talking to an upstream service."""


class LedgerTransportError(TransportError):
    """The ledger index could not be reached or returned garbage."""

    def __init__(self, txid: str, reason: str = ""):
        self.txid = txid
        self.reason = reason
        super().__init__(f"ledger lookup for {txid!r} failed" + (f": {reason}" if reason else ""))


class ConfigError(VerificationError):
    """Required configuration is missing."""
