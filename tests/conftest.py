"""Fixtures wiring the engine to in-memory doubles."""

import pytest

from doubles import PUBLISHER_TXID, FakeFetcher, FakeLedger
from oipverify.engine import CrossVerifier
from oipverify.records import Publisher


@pytest.fixture
def ledger():
    return FakeLedger(publishers={PUBLISHER_TXID: Publisher(name="Acme News", flo_bip44_xpub="xpub123")})


@pytest.fixture
def twitter():
    return FakeFetcher("twitter")


@pytest.fixture
def gab():
    return FakeFetcher("gab")


@pytest.fixture
def verifier(ledger, twitter, gab):
    return CrossVerifier(ledger=ledger, twitter=twitter, gab=gab)
