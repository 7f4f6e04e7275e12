#!/usr/bin/env python3
"""
oipverify CLI — run the verification API or check a single claim.

Commands:
    serve  - Serve the HTTP API
    check  - Verify one claim txid and print the result as JSON

Flags fall back to the environment (see oipverify.config).
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from .config import Settings
from .errors import ConfigError
from .logging_config import setup_structured_logging


def _add_common(p: argparse.ArgumentParser):
    p.add_argument("--consumer-key", help="Twitter Consumer Key")
    p.add_argument("--consumer-secret", help="Twitter Consumer Secret")
    p.add_argument("--access-token", help="Twitter Access Token")
    p.add_argument("--access-secret", help="Twitter Access Secret")
    p.add_argument("--ledger-url", help="OIP ledger index base URL")
    p.add_argument("--gab-url", help="Gab base URL")
    p.add_argument("--twitter-url", help="Twitter REST API base URL")
    p.add_argument("--timeout", type=float, dest="http_timeout",
                   help="Outbound request timeout in seconds")
    p.add_argument("--log-level", help="Logging level")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oipverify",
        description="Verify that OIP publishers control the social accounts they claim",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands")

    p = sub.add_parser("serve", help="Serve the HTTP API")
    _add_common(p)
    p.add_argument("--host", help="Listen host")
    p.add_argument("--port", type=int, help="Listen port (default 1607)")
    p.add_argument("--allowed-origins", help="Comma separated CORS origins")

    p = sub.add_parser("check", help="Verify one claim and print the result")
    _add_common(p)
    p.add_argument("claim_txid", help="Ledger txid of the verification claim")

    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings overridden by any flags given on the command line."""
    values = {k: v for k, v in vars(args).items() if k not in ("command", "claim_txid")}
    origins = values.pop("allowed_origins", None)
    if origins is not None:
        values["allowed_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
    return Settings.from_env().override(**values).validate()


def cmd_serve(args):
    """Run the API under uvicorn until interrupted."""
    import uvicorn

    from .api import build_verifier, create_app

    settings = load_settings(args)
    setup_structured_logging(settings.log_level)
    app = create_app(build_verifier(settings), allowed_origins=settings.allowed_origins or None)
    uvicorn.run(app, host=settings.host, port=settings.port)


def cmd_check(args) -> dict:
    """Check one claim and print the response body."""
    from .api import build_verifier

    settings = load_settings(args)
    setup_structured_logging(settings.log_level)

    async def run() -> dict:
        verifier = build_verifier(settings)
        try:
            result = await verifier.check(args.claim_txid)
        finally:
            await verifier.aclose()
        return result.to_dict()

    result = asyncio.run(run())
    print(json.dumps(result, indent=2))
    return result


def main(argv: Optional[list[str]] = None) -> Optional[dict]:
    """CLI entry point. Returns result dict for testing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "serve": cmd_serve,
        "check": cmd_check,
    }

    try:
        return commands[args.command](args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
