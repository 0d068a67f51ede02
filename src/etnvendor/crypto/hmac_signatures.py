from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any, Mapping, NewType, Union

from ..domain.constants import SIGNATURE_LENGTH
from ..domain.errors import InvalidPayload

SignatureHex = NewType("SignatureHex", str)

PayloadInput = Union[str, bytes, Mapping[str, Any]]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def json_to_bytes(data: Mapping[str, Any]) -> bytes:
    """Serialize a mapping to canonical JSON bytes for signing/verification."""
    return json.dumps(dict(data), separators=(",", ":"), sort_keys=True).encode(
        "utf-8"
    )


def is_hex(value: str) -> bool:
    """True when ``value`` is non-empty and made only of hex digits (any case)."""
    return bool(value) and all(ch in _HEX_DIGITS for ch in value)


def is_signature_shape(signature: Any) -> bool:
    return (
        isinstance(signature, str)
        and len(signature) == SIGNATURE_LENGTH
        and is_hex(signature)
    )


def payload_to_bytes(payload: PayloadInput) -> bytes:
    """Return the exact bytes that are signed for ``payload``.

    Raw ``str``/``bytes`` payloads are used verbatim (they are what travels on
    the wire), mappings are serialized with ``json_to_bytes``.

    Raises:
        InvalidPayload: If the payload cannot be represented as bytes.
    """
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, Mapping):
        try:
            return json_to_bytes(payload)
        except (TypeError, ValueError) as e:
            raise InvalidPayload(f"Payload is not JSON serializable: {e}") from e
    raise InvalidPayload(f"Unsupported payload type {type(payload).__name__}")


def parse_payload_object(payload_bytes: bytes) -> dict[str, Any]:
    """Decode payload bytes into a non-empty JSON object.

    Raises:
        InvalidPayload: If the bytes are not JSON, not an object, or empty.
    """
    try:
        data = json.loads(payload_bytes.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise InvalidPayload(f"Payload is not valid JSON: {e}") from e
    if not isinstance(data, dict) or not data:
        raise InvalidPayload("Payload must be a non-empty JSON object")
    return data


def sign_bytes(secret: str, payload_bytes: bytes) -> SignatureHex:
    """HMAC-SHA256 over ``payload_bytes`` keyed by ``secret``, as lowercase hex."""
    digest = hmac.new(secret.encode("utf-8"), payload_bytes, hashlib.sha256)
    return SignatureHex(digest.hexdigest())


def verify_signature_bytes(secret: str, payload_bytes: bytes, signature: str) -> bool:
    """Constant-time comparison of ``signature`` against the recomputed HMAC."""
    expected = sign_bytes(secret, payload_bytes)
    return hmac.compare_digest(expected, signature.lower())
