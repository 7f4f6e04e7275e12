"""
oipverify.config — Runtime settings.

Values come from CLI flags when given, otherwise from the environment:

    TWITTER_CONSUMER_KEY, TWITTER_CONSUMER_SECRET,
    TWITTER_ACCESS_TOKEN, TWITTER_ACCESS_SECRET — Twitter OAuth1 credentials
    OIP_LEDGER_URL   — ledger index base URL
    GAB_API_URL      — Gab base URL
    TWITTER_API_URL  — Twitter REST base URL
    LISTEN_HOST / LISTEN_PORT — HTTP listen address (default :1607)
    ALLOWED_ORIGINS  — comma separated CORS origins (default *)
    LOG_LEVEL        — logging level (default INFO)
    HTTP_TIMEOUT     — outbound request timeout in seconds (default 10)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Mapping, Optional

from .errors import ConfigError
from .ledger import DEFAULT_LEDGER_URL
from .platforms import DEFAULT_GAB_URL, DEFAULT_TWITTER_URL

DEFAULT_PORT = 1607


def _split_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    consumer_key: str = ""
    consumer_secret: str = ""
    access_token: str = ""
    access_secret: str = ""
    ledger_url: str = DEFAULT_LEDGER_URL
    gab_url: str = DEFAULT_GAB_URL
    twitter_url: str = DEFAULT_TWITTER_URL
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    allowed_origins: list[str] = field(default_factory=list)
    log_level: str = "INFO"
    http_timeout: float = 10.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            consumer_key=env.get("TWITTER_CONSUMER_KEY", ""),
            consumer_secret=env.get("TWITTER_CONSUMER_SECRET", ""),
            access_token=env.get("TWITTER_ACCESS_TOKEN", ""),
            access_secret=env.get("TWITTER_ACCESS_SECRET", ""),
            ledger_url=env.get("OIP_LEDGER_URL", DEFAULT_LEDGER_URL),
            gab_url=env.get("GAB_API_URL", DEFAULT_GAB_URL),
            twitter_url=env.get("TWITTER_API_URL", DEFAULT_TWITTER_URL),
            host=env.get("LISTEN_HOST", "0.0.0.0"),
            port=int(env.get("LISTEN_PORT", str(DEFAULT_PORT))),
            allowed_origins=_split_origins(env.get("ALLOWED_ORIGINS", "")),
            log_level=env.get("LOG_LEVEL", "INFO"),
            http_timeout=float(env.get("HTTP_TIMEOUT", "10")),
        )

    def override(self, **values) -> "Settings":
        """Return a copy with every non-None value in ``values`` applied."""
        known = {f.name for f in fields(self)}
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in values.items():
            if key in known and value is not None:
                data[key] = value
        return Settings(**data)

    def validate(self) -> "Settings":
        if not (self.consumer_key and self.consumer_secret
                and self.access_token and self.access_secret):
            raise ConfigError("Consumer key/secret and Access token/secret required")
        return self
