"""Tests for the /verified HTTP surface."""

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from doubles import CLAIM_TXID, PUBLISHER_TXID, tag
from oipverify.api import build_verifier, create_app, respond_json
from oipverify.config import Settings
from oipverify.records import VerificationClaim

CHECK_URL = f"/verified/publisher/check/{CLAIM_TXID}"


@pytest.fixture
def app(verifier):
    return create_app(verifier, use_lifespan=False)


async def _get(app, url, **kwargs):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        return await c.get(url, **kwargs)


@pytest.mark.asyncio
async def test_check_verified(app, ledger, twitter):
    ledger.claims[CLAIM_TXID] = VerificationClaim(twitter_id="123")
    twitter.posts["123"] = tag("Acme News", PUBLISHER_TXID)

    r = await _get(app, CHECK_URL)

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/json"
    assert r.json() == {"twitter": True, "gab": False, "gab_msg": "No post ID provided"}


@pytest.mark.asyncio
async def test_unknown_claim_is_still_200(app):
    r = await _get(app, CHECK_URL)
    assert r.status_code == 200
    assert r.json() == {"msg": f"Unable to locate verification claim with ID {CLAIM_TXID}"}


@pytest.mark.asyncio
@pytest.mark.parametrize("txid", ["abc", CLAIM_TXID.upper(), CLAIM_TXID + "0", "z" * 64])
async def test_non_txid_path_is_404(app, ledger, txid):
    r = await _get(app, f"/verified/publisher/check/{txid}")
    assert r.status_code == 404
    assert r.text == "404 not found"
    assert r.headers["content-type"].startswith("text/plain")
    assert ledger.claim_lookups == []


@pytest.mark.asyncio
async def test_unknown_route_is_404(app):
    r = await _get(app, "/nope")
    assert r.status_code == 404
    assert r.text == "404 not found"


@pytest.mark.asyncio
async def test_request_id_header(app):
    r = await _get(app, CHECK_URL, headers={"X-Request-ID": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_cors_allows_any_origin_by_default(app):
    r = await _get(app, CHECK_URL, headers={"Origin": "https://example.com"})
    assert r.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_cors_restricted_origins(verifier):
    app = create_app(verifier, allowed_origins=["https://oip.io"], use_lifespan=False)
    r = await _get(app, CHECK_URL, headers={"Origin": "https://evil.example"})
    assert "access-control-allow-origin" not in r.headers


def test_unencodable_payload_is_500():
    r = respond_json(200, {"bad": object()})
    assert r.status_code == 500
    assert r.body == b"Internal server error"
    assert r.media_type == "text/plain"


def test_lifespan_closes_clients(verifier, ledger, twitter, gab):
    app = create_app(verifier)
    with TestClient(app) as client:
        assert client.get(CHECK_URL).status_code == 200
    assert ledger.closed and twitter.closed and gab.closed


@pytest.mark.asyncio
async def test_built_verifier_closes_every_outbound_client():
    settings = Settings(consumer_key="ck", consumer_secret="cs",
                        access_token="at", access_secret="as")
    verifier = build_verifier(settings)
    await verifier.aclose()
    assert verifier.ledger._http.is_closed
    assert verifier.twitter._http.is_closed
    assert verifier.gab._http.is_closed


def test_unhandled_error_is_plain_text_500(verifier):
    app = create_app(verifier, use_lifespan=False)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/boom")
    assert r.status_code == 500
    assert r.text == "Internal server error"
    assert r.headers["content-type"].startswith("text/plain")


@pytest.mark.asyncio
async def test_cors_origins_come_only_from_arguments(verifier, monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://oip.io")
    app = create_app(verifier, use_lifespan=False)
    r = await _get(app, CHECK_URL, headers={"Origin": "https://example.com"})
    assert r.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_response_headers(app):
    r = await _get(app, CHECK_URL)
    assert "X-Request-ID" in r.headers
    assert "X-Content-Type-Options" not in r.headers
