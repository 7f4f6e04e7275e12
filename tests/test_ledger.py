"""Tests for the ledger index client with mocked HTTP responses."""

import httpx
import pytest
import respx

from oipverify.errors import LedgerTransportError, RecordNotFound
from oipverify.ledger import DEFAULT_LEDGER_URL, LedgerClient
from oipverify.records import Publisher, RecordKind, VerificationClaim

TXID = "ab" * 32
URL = f"{DEFAULT_LEDGER_URL}/record/get/{TXID}"


def _page(*details):
    return {
        "count": len(details),
        "total": len(details),
        "results": [
            {"record": {"details": d}, "meta": {"txid": TXID, "deactivated": False}}
            for d in details
        ],
        "after": "",
    }


@pytest.mark.asyncio
async def test_resolve_single_record():
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(200, json=_page(
            {"tmpl_433C2783": {"name": "Acme News", "floBip44XPub": "xpub"}},
        )))
        client = LedgerClient()
        record = await client.resolve(TXID)
        await client.aclose()

    assert record.txid == TXID
    assert record.kinds == {RecordKind.PUBLISHER}
    assert record.meta.txid == TXID


@pytest.mark.asyncio
async def test_get_publisher_and_claim():
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(200, json=_page({
            "tmpl_433C2783": {"name": "Acme News", "floBip44XPub": "xpub"},
            "tmpl_F471DFF9": {"twitterId": "123", "gabId": "456"},
        })))
        client = LedgerClient()
        publisher = await client.get_publisher(TXID)
        claim = await client.get_verification_claim(TXID)
        await client.aclose()

    assert publisher == Publisher(name="Acme News", flo_bip44_xpub="xpub")
    assert claim == VerificationClaim(twitter_id="123", gab_id="456")


@pytest.mark.asyncio
async def test_zero_results_not_found():
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(200, json=_page()))
        client = LedgerClient()
        with pytest.raises(RecordNotFound):
            await client.resolve(TXID)


@pytest.mark.asyncio
async def test_ambiguous_results_not_found():
    """Several hits are a failure, never 'pick the first'."""
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(200, json=_page(
            {"tmpl_433C2783": {"name": "One"}},
            {"tmpl_433C2783": {"name": "Two"}},
        )))
        client = LedgerClient()
        with pytest.raises(RecordNotFound):
            await client.get_publisher(TXID)


@pytest.mark.asyncio
async def test_missing_results_key_not_found():
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(200, json={"count": 0}))
        with pytest.raises(RecordNotFound):
            await LedgerClient().resolve(TXID)


@pytest.mark.asyncio
async def test_wrong_kind_not_found():
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(200, json=_page(
            {"tmpl_433C2783": {"name": "Acme"}},
        )))
        with pytest.raises(RecordNotFound):
            await LedgerClient().get_verification_claim(TXID)


@pytest.mark.asyncio
@pytest.mark.parametrize("txid", ["", "abc", TXID.upper(), TXID + "a", "../" + TXID[3:]])
async def test_malformed_txid_not_found_without_request(txid):
    with respx.mock(assert_all_called=False) as router:
        route = router.get(url__startswith=DEFAULT_LEDGER_URL)
        with pytest.raises(RecordNotFound):
            await LedgerClient().resolve(txid)
    assert route.call_count == 0


@pytest.mark.asyncio
async def test_connection_error_is_transport_error():
    with respx.mock:
        respx.get(URL).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(LedgerTransportError):
            await LedgerClient().resolve(TXID)


@pytest.mark.asyncio
async def test_server_error_is_transport_error():
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(502, text="bad gateway"))
        with pytest.raises(LedgerTransportError):
            await LedgerClient().resolve(TXID)


@pytest.mark.asyncio
async def test_invalid_json_is_transport_error():
    with respx.mock:
        respx.get(URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(LedgerTransportError):
            await LedgerClient().resolve(TXID)


@pytest.mark.asyncio
async def test_custom_base_url_and_shared_client():
    base = "http://ledger.local/oip/o5/"
    with respx.mock:
        route = respx.get(f"http://ledger.local/oip/o5/record/get/{TXID}").mock(
            return_value=httpx.Response(200, json=_page({"tmpl_433C2783": {"name": "Acme"}})))
        async with httpx.AsyncClient() as http:
            client = LedgerClient(base, http_client=http)
            publisher = await client.get_publisher(TXID)
            await client.aclose()
            assert not http.is_closed
    assert route.called
    assert publisher.name == "Acme"
