"""
oipverify API — publisher verification over HTTP.

Router prefix: /verified
  GET /publisher/check/{txid}  — verify the claim stored at a 64-hex txid

Domain outcomes are always 200 with a JSON body. Only a response that cannot
be encoded is a 500.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from starlette.responses import PlainTextResponse, Response

from .assertion import is_txid
from .config import Settings
from .engine import CrossVerifier
from .ledger import LedgerClient
from .middleware import apply_middleware
from .platforms import GabFetcher, TwitterFetcher, build_twitter_client

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class VerificationResponse(BaseModel):
    """Check result. Message fields are omitted when empty; ``msg`` appears
    alone when the claim itself cannot be resolved."""
    twitter: Optional[bool] = None
    twitter_msg: Optional[str] = None
    gab: Optional[bool] = None
    gab_msg: Optional[str] = None
    msg: Optional[str] = Field(None, description="Set only when the claim is unavailable")


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_verifier(settings: Settings) -> CrossVerifier:
    """Create the engine and its outbound clients from validated settings."""
    twitter_client = build_twitter_client(
        settings.consumer_key, settings.consumer_secret,
        settings.access_token, settings.access_secret,
        timeout=settings.http_timeout,
    )
    return CrossVerifier(
        ledger=LedgerClient(settings.ledger_url, timeout=settings.http_timeout),
        twitter=TwitterFetcher(twitter_client, base_url=settings.twitter_url, owns_client=True),
        gab=GabFetcher(base_url=settings.gab_url, timeout=settings.http_timeout),
    )


def respond_json(code: int, payload) -> Response:
    try:
        body = json.dumps(payload)
    except (TypeError, ValueError) as e:
        logger.error("Unable to marshal response payload",
                     extra={"err": str(e), "payload": repr(payload)})
        return PlainTextResponse("Internal server error", status_code=500)
    return Response(content=body, status_code=code, media_type="application/json")


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------

router = APIRouter(prefix="/verified", tags=["verified"])


@router.get("/publisher/check/{txid}", responses={200: {"model": VerificationResponse}})
async def check_publisher(txid: str, request: Request):
    """Verify that a publisher controls the accounts named by its claim."""
    if not is_txid(txid):
        raise HTTPException(status_code=404)
    verifier: CrossVerifier = request.app.state.verifier
    result = await verifier.check(txid)
    return respond_json(200, result.to_dict())


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    verifier = getattr(app.state, "verifier", None)
    if verifier is not None:
        await verifier.aclose()


def create_app(verifier: CrossVerifier, *, allowed_origins: list[str] | None = None,
               use_lifespan: bool = True) -> FastAPI:
    """Create the FastAPI app serving ``verifier``."""
    app = FastAPI(
        title="oipverify",
        description="Cross-platform verification of OIP publisher identities",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )
    app.state.verifier = verifier
    apply_middleware(app, allowed_origins)
    app.include_router(router)
    return app
