"""HMAC signatures for webhook payloads and payment polling.

``sign`` and ``verify`` raise ``VendorError`` subclasses when they cannot
evaluate (missing credentials, malformed payload or signature). Once a
signature can be evaluated, ``verify`` answers with a plain boolean.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from ..crypto.hmac_signatures import (
    PayloadInput,
    is_signature_shape,
    parse_payload_object,
    payload_to_bytes,
    sign_bytes,
    verify_signature_bytes,
)
from ..domain.constants import REPLAY_WINDOW
from ..domain.errors import InvalidSignatureShape, MissingKey, MissingSecret
from .dtos import Credentials, SignedPayload

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a webhook timestamp into an aware UTC datetime.

    Accepts ISO 8601 strings (naive values are taken as UTC) and Unix epoch
    seconds. Returns ``None`` when the value cannot be interpreted.
    """
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str) and value.strip():
            parsed = datetime.fromisoformat(value.strip())
        else:
            return None
    except (ValueError, OverflowError, OSError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class SignatureService:
    """Signs and verifies payloads with the vendor API secret."""

    def __init__(self, credentials: Credentials, clock: Clock = utc_now) -> None:
        self._credentials = credentials
        self._clock = clock

    def _require_secret(self) -> str:
        if not self._credentials.secret:
            raise MissingSecret("No vendor API secret set")
        return self._credentials.secret

    def _require_key(self) -> str:
        if not self._credentials.key:
            raise MissingKey("No vendor API key set")
        return self._credentials.key

    def sign_payload(self, payload: PayloadInput) -> SignedPayload:
        """Sign ``payload`` and keep the exact bytes the signature covers.

        Raises:
            MissingSecret: If no secret is configured.
            InvalidPayload: If the payload is not a non-empty JSON object.
        """
        secret = self._require_secret()
        payload_bytes = payload_to_bytes(payload)
        parse_payload_object(payload_bytes)
        return SignedPayload(
            payload=payload_bytes, signature=sign_bytes(secret, payload_bytes)
        )

    def sign(self, payload: PayloadInput) -> str:
        """Return the 64-character lowercase hex HMAC-SHA256 of ``payload``."""
        return self.sign_payload(payload).signature

    def verify(self, payload: PayloadInput, signature: str) -> bool:
        """Check a webhook payload against its signature.

        Raw ``str``/``bytes`` payloads are verified over their exact bytes, so
        pass the request body as received rather than a re-encoded dict.

        Returns:
            ``False`` if the embedded key is not ours, the signature does not
            match, or the timestamp is missing or older than the replay
            window. ``True`` otherwise.

        Raises:
            MissingKey: If no API key is configured.
            MissingSecret: If no API secret is configured.
            InvalidPayload: If the payload is not a non-empty JSON object.
            InvalidSignatureShape: If the signature is not 64 hex characters.
        """
        api_key = self._require_key()
        secret = self._require_secret()

        payload_bytes = payload_to_bytes(payload)
        data = parse_payload_object(payload_bytes)

        if not is_signature_shape(signature):
            raise InvalidSignatureShape("Signature must be 64 hex characters")

        if data.get("key") != api_key:
            logger.info("Rejected payload addressed to a different vendor key")
            return False

        if not verify_signature_bytes(secret, payload_bytes, signature):
            logger.info("Rejected payload with mismatched signature")
            return False

        timestamp = parse_timestamp(data.get("timestamp"))
        if timestamp is None:
            logger.info("Rejected payload without a usable timestamp")
            return False
        if timestamp < self._clock() - REPLAY_WINDOW:
            logger.info("Rejected expired payload timestamped %s", timestamp)
            return False

        return True
