from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator

from ..domain.constants import URL_POLL, URL_QR, URL_SUPPLY


def _validate_http_url(v: str, name: str) -> str:
    if not v:
        raise ValueError(f"{name} cannot be empty")
    parsed = urlparse(v)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"{name} must start with http:// or https://")
    if not parsed.netloc:
        raise ValueError(f"{name} must include a host")
    return v


class Settings(BaseModel):
    """Typed vendor client settings built from environment variables."""

    api_key: Optional[str] = None
    api_secret: Optional[str] = None

    poll_url: str = URL_POLL
    supply_url: str = URL_SUPPLY
    qr_url: str = URL_QR

    http_timeout: float = 10.0
    log_level: str = "WARNING"

    @field_validator("poll_url")
    @classmethod
    def validate_poll_url(cls, v: str) -> str:
        return _validate_http_url(v, "Poll URL")

    @field_validator("supply_url")
    @classmethod
    def validate_supply_url(cls, v: str) -> str:
        return _validate_http_url(v, "Supply URL")

    @field_validator("qr_url")
    @classmethod
    def validate_qr_url(cls, v: str) -> str:
        if v.count("%s") != 1:
            raise ValueError("QR URL template must contain exactly one %s")
        return _validate_http_url(v, "QR URL")

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {v!r}")
        return level


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        api_key=os.environ.get("ETN_VENDOR_API_KEY") or None,
        api_secret=os.environ.get("ETN_VENDOR_API_SECRET") or None,
        poll_url=os.environ.get("ETN_VENDOR_POLL_URL", URL_POLL),
        supply_url=os.environ.get("ETN_VENDOR_SUPPLY_URL", URL_SUPPLY),
        qr_url=os.environ.get("ETN_VENDOR_QR_URL", URL_QR),
        http_timeout=float(os.environ.get("ETN_VENDOR_HTTP_TIMEOUT", "10.0")),
        log_level=os.environ.get("ETN_VENDOR_LOG_LEVEL", "WARNING"),
    )
