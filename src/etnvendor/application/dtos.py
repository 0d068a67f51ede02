"""Data Transfer Objects for the vendor application layer."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Vendor API key/secret pair. Either may be absent if unused."""

    model_config = ConfigDict(frozen=True)

    key: Optional[str] = None
    secret: Optional[str] = Field(None, repr=False)


class ConversionResult(BaseModel):
    """Outcome of converting a fiat amount into a coin amount."""

    model_config = ConfigDict(frozen=True)

    coin_amount: str = Field(..., pattern=r"^\d+\.\d{2}$")
    currency: str = Field(..., min_length=3, max_length=3)
    fiat_amount: Decimal
    rate: Decimal


class PaymentRequest(BaseModel):
    """A payment token together with the pieces it was built from."""

    model_config = ConfigDict(frozen=True)

    token: str
    viewer_url: str
    outlet: str
    payment_id: str = Field(..., min_length=10, max_length=10)
    amount: str = Field(..., pattern=r"^\d+\.\d{2}$")


class SignedPayload(BaseModel):
    """Exact payload bytes paired with their HMAC-SHA256 hex signature."""

    model_config = ConfigDict(frozen=True)

    payload: bytes
    signature: str = Field(..., min_length=64, max_length=64)
