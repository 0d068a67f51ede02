"""Payment token construction and QR viewer urls."""

from __future__ import annotations

from typing import Any, Callable, Optional
from urllib.parse import quote_plus

from ..crypto.payment_ids import generate_payment_id
from ..domain.constants import TOKEN_PREFIX, URL_QR
from ..domain.rate_source_protocol import RateSourceProtocol
from .currency_converter import CurrencyConverter
from .dtos import PaymentRequest
from .validators import (
    format_amount,
    validate_outlet,
    validate_payment_id,
    validate_token_amount,
)


class TokenBuilder:
    """Builds ``etn-it-<outlet>/<payment id>/<amount>`` tokens.

    The token format is the contract with the scanning wallet app, so the
    field order, separators and two-decimal amount must not change.
    """

    def __init__(
        self,
        converter: Optional[CurrencyConverter] = None,
        qr_url_template: str = URL_QR,
        payment_id_factory: Callable[[], str] = generate_payment_id,
    ) -> None:
        self._converter = converter or CurrencyConverter()
        self._qr_url_template = qr_url_template
        self._payment_id_factory = payment_id_factory

    def build_request(
        self, amount: Any, outlet: str, payment_id: Optional[str] = None
    ) -> PaymentRequest:
        """Validate the inputs and build a self-contained payment request.

        Raises:
            InvalidPaymentId: If a supplied payment id is not 10 hex characters.
            RandomSourceUnavailable: If a payment id must be generated and the
                CSPRNG is unavailable.
            InvalidAmount: If the amount is empty, malformed or not positive.
            InvalidOutlet: If the outlet is empty or not hex.
        """
        if payment_id is None:
            payment_id = self._payment_id_factory()
        else:
            payment_id = validate_payment_id(payment_id)

        rendered_amount = format_amount(validate_token_amount(amount))
        outlet = validate_outlet(outlet)

        token = f"{TOKEN_PREFIX}{outlet}/{payment_id}/{rendered_amount}"
        return PaymentRequest(
            token=token,
            viewer_url=self.get_viewer_url(token),
            outlet=outlet,
            payment_id=payment_id,
            amount=rendered_amount,
        )

    def build_token(
        self, amount: Any, outlet: str, payment_id: Optional[str] = None
    ) -> str:
        return self.build_request(amount, outlet, payment_id).token

    def get_viewer_url(self, token: str) -> str:
        """Return the QR image url for ``token``. No request is made."""
        return self._qr_url_template % quote_plus(token)

    def build_and_render_url(
        self,
        fiat_amount: Any,
        currency: str,
        outlet: str,
        payment_id: Optional[str] = None,
        rate_source: Optional[RateSourceProtocol] = None,
    ) -> str:
        """Convert currency, build the token and return its viewer url."""
        coin_amount = self._converter.convert(fiat_amount, currency, rate_source)
        token = self.build_token(coin_amount, outlet, payment_id)
        return self.get_viewer_url(token)
