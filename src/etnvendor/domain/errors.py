"""Domain-specific exceptions.

Every failure raised by the vendor client carries an ``ErrorKind`` so callers
can branch on the kind without matching on message text. A signature that
evaluates false is not an error: ``SignatureService.verify`` returns ``False``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_CURRENCY = "InvalidCurrency"
    RATE_SOURCE_UNAVAILABLE = "RateSourceUnavailable"
    RATE_NOT_FOUND = "RateNotFound"
    INVALID_RATE = "InvalidRate"
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_OUTLET = "InvalidOutlet"
    INVALID_PAYMENT_ID = "InvalidPaymentId"
    RANDOM_SOURCE_UNAVAILABLE = "RandomSourceUnavailable"
    MISSING_KEY = "MissingKey"
    MISSING_SECRET = "MissingSecret"
    INVALID_PAYLOAD = "InvalidPayload"
    INVALID_SIGNATURE_SHAPE = "InvalidSignatureShape"
    TRANSPORT_ERROR = "TransportError"
    INVALID_RESPONSE = "InvalidResponse"


class VendorError(Exception):
    """Base class for all vendor client failures."""

    kind: ErrorKind


class InvalidCurrency(VendorError, ValueError):
    """Raised when a currency code is not in the accepted list."""

    kind = ErrorKind.INVALID_CURRENCY


class RateSourceUnavailable(VendorError):
    """Raised when the exchange-rate document cannot be fetched or parsed."""

    kind = ErrorKind.RATE_SOURCE_UNAVAILABLE


class RateNotFound(VendorError):
    """Raised when the rate document has no entry for the currency."""

    kind = ErrorKind.RATE_NOT_FOUND


class InvalidRate(VendorError, ValueError):
    """Raised when a rate is not numeric or not strictly positive."""

    kind = ErrorKind.INVALID_RATE


class InvalidAmount(VendorError, ValueError):
    kind = ErrorKind.INVALID_AMOUNT


class InvalidOutlet(VendorError, ValueError):
    kind = ErrorKind.INVALID_OUTLET


class InvalidPaymentId(VendorError, ValueError):
    kind = ErrorKind.INVALID_PAYMENT_ID


class RandomSourceUnavailable(VendorError):
    """Raised when the platform CSPRNG cannot produce bytes."""

    kind = ErrorKind.RANDOM_SOURCE_UNAVAILABLE


class MissingKey(VendorError):
    kind = ErrorKind.MISSING_KEY


class MissingSecret(VendorError):
    kind = ErrorKind.MISSING_SECRET


class InvalidPayload(VendorError, ValueError):
    """Raised when a payload is not a non-empty JSON object."""

    kind = ErrorKind.INVALID_PAYLOAD


class InvalidSignatureShape(VendorError, ValueError):
    """Raised when a signature is not exactly 64 hexadecimal characters."""

    kind = ErrorKind.INVALID_SIGNATURE_SHAPE


class TransportError(VendorError):
    """Raised when an HTTP exchange fails at the connection or status level."""

    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidResponse(VendorError):
    """Raised when a response body is not valid JSON."""

    kind = ErrorKind.INVALID_RESPONSE
