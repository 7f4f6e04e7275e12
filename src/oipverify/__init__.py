"""oipverify — Cross-platform verification of OIP publisher identities."""

from oipverify.assertion import Assertion, extract_assertion, is_txid
from oipverify.engine import CrossVerifier, VerificationResult
from oipverify.errors import (
    VerificationError, NotFound, RecordNotFound, PostNotFound,
    MalformedAssertion, TransportError, LedgerTransportError, ConfigError,
)
from oipverify.ledger import LedgerClient
from oipverify.platforms import BasePostFetcher, GabFetcher, TwitterFetcher
from oipverify.records import LedgerRecord, Publisher, RecordKind, RecordMeta, VerificationClaim

__all__ = [
    "Assertion",
    "extract_assertion",
    "is_txid",
    "CrossVerifier",
    "VerificationResult",
    "VerificationError",
    "NotFound",
    "RecordNotFound",
    "PostNotFound",
    "MalformedAssertion",
    "TransportError",
    "LedgerTransportError",
    "ConfigError",
    "LedgerClient",
    "BasePostFetcher",
    "GabFetcher",
    "TwitterFetcher",
    "LedgerRecord",
    "Publisher",
    "RecordKind",
    "RecordMeta",
    "VerificationClaim",
]
