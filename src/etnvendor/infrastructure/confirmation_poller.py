from __future__ import annotations

import logging
from typing import Any, Optional

from ..application.signature_service import SignatureService
from ..crypto.hmac_signatures import (
    PayloadInput,
    is_signature_shape,
    payload_to_bytes,
)
from ..domain.constants import SIGNATURE_HEADER, URL_POLL
from ..domain.errors import InvalidResponse, InvalidSignatureShape, TransportError
from ..middleware.timing import log_timing
from .http.http_client import HttpClient

logger = logging.getLogger(__name__)


class ConfirmationPoller:
    """Asks the vendor API whether a payment has been confirmed."""

    def __init__(
        self,
        signatures: SignatureService,
        http: HttpClient,
        url: str = URL_POLL,
    ) -> None:
        self._signatures = signatures
        self._http = http
        self._url = url

    @log_timing("poll_payment")
    def poll(self, payload: PayloadInput, signature: Optional[str] = None) -> Any:
        """POST the signed payload and return the parsed JSON response.

        The signature is generated when not supplied. Mappings are sent as
        their canonical JSON bytes, which are the bytes that get signed.

        Raises:
            MissingSecret: If a signature must be generated without a secret.
            InvalidPayload: If the payload is not a non-empty JSON object.
            InvalidSignatureShape: If the signature is not 64 hex characters.
            TransportError: On connection failures or non-2xx responses.
            InvalidResponse: If the response body is not JSON.
        """
        if not signature:
            signed = self._signatures.sign_payload(payload)
            body, signature = signed.payload, signed.signature
        else:
            body = payload_to_bytes(payload)

        if not is_signature_shape(signature):
            raise InvalidSignatureShape(
                "Check payment signature must be 64 hex characters"
            )

        headers = {
            "Content-Type": "application/json",
            SIGNATURE_HEADER: signature,
        }
        try:
            resp = self._http.post(self._url, content=body, headers=headers)
        except TransportError:
            logger.exception("Check payment request to %s failed", self._url)
            raise

        try:
            return resp.json()
        except ValueError as e:
            raise InvalidResponse("Check payment response is not valid JSON") from e
