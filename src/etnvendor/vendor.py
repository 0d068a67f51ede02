from __future__ import annotations

from typing import Any, Optional, Type
from types import TracebackType

import httpx

from .application.currency_converter import CurrencyConverter
from .application.dtos import Credentials, PaymentRequest
from .application.signature_service import Clock, SignatureService, utc_now
from .application.token_builder import TokenBuilder
from .crypto.hmac_signatures import PayloadInput
from .crypto.payment_ids import generate_payment_id
from .domain.constants import URL_POLL, URL_QR, URL_SUPPLY
from .domain.rate_source_protocol import RateSourceProtocol
from .envs.vendor_env import Settings
from .infrastructure.confirmation_poller import ConfirmationPoller
from .infrastructure.http.http_client import HttpClient
from .infrastructure.rate_source import HttpRateSource


class PaymentVendor:
    """Electroneum vendor client for one merchant session.

    Holds the API credentials and remembers the coin amount, outlet and
    payment id of the most recent successful call. Instances are not
    thread-safe; use one per thread or lock externally.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        *,
        rate_source: Optional[RateSourceProtocol] = None,
        poll_url: str = URL_POLL,
        supply_url: str = URL_SUPPLY,
        qr_url: str = URL_QR,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Clock = utc_now,
    ) -> None:
        self._credentials = Credentials(key=api_key, secret=api_secret)
        self._http = HttpClient(timeout=timeout, transport=transport)
        self._converter = CurrencyConverter(
            rate_source or HttpRateSource(self._http, supply_url)
        )
        self._tokens = TokenBuilder(self._converter, qr_url_template=qr_url)
        self._signatures = SignatureService(self._credentials, clock=clock)
        self._poller = ConfirmationPoller(self._signatures, self._http, poll_url)

        self._coin_amount: Optional[str] = None
        self._outlet: Optional[str] = None
        self._payment_id: Optional[str] = None

    @classmethod
    def from_settings(
        cls, settings: Settings, **kwargs: Any
    ) -> "PaymentVendor":
        return cls(
            settings.api_key,
            settings.api_secret,
            poll_url=settings.poll_url,
            supply_url=settings.supply_url,
            qr_url=settings.qr_url,
            timeout=settings.http_timeout,
            **kwargs,
        )

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def coin_amount(self) -> Optional[str]:
        return self._coin_amount

    @property
    def outlet(self) -> Optional[str]:
        return self._outlet

    @property
    def payment_id(self) -> Optional[str]:
        return self._payment_id

    def generate_payment_id(self) -> str:
        """Generate a cryptographically random 10-hex-character payment id."""
        self._payment_id = generate_payment_id()
        return self._payment_id

    def convert(
        self,
        fiat_amount: Any,
        currency: str,
        rate_source: Optional[RateSourceProtocol] = None,
    ) -> str:
        """Convert a local currency amount to ETN, e.g. ``"5.00"``."""
        self._coin_amount = self._converter.convert(fiat_amount, currency, rate_source)
        return self._coin_amount

    def create_payment_request(
        self, amount: Any, outlet: str, payment_id: Optional[str] = None
    ) -> PaymentRequest:
        request = self._tokens.build_request(amount, outlet, payment_id)
        self._payment_id = request.payment_id
        self._coin_amount = request.amount
        self._outlet = request.outlet
        return request

    def build_token(
        self, amount: Any, outlet: str, payment_id: Optional[str] = None
    ) -> str:
        """Return the payment token string for the QR code."""
        return self.create_payment_request(amount, outlet, payment_id).token

    def get_viewer_url(self, token: str) -> str:
        return self._tokens.get_viewer_url(token)

    def build_and_render_url(
        self,
        fiat_amount: Any,
        currency: str,
        outlet: str,
        payment_id: Optional[str] = None,
        rate_source: Optional[RateSourceProtocol] = None,
    ) -> str:
        """Convert, build the token and return the QR image url in one call."""
        coin_amount = self._converter.convert(fiat_amount, currency, rate_source)
        return self.create_payment_request(coin_amount, outlet, payment_id).viewer_url

    def sign(self, payload: PayloadInput) -> str:
        return self._signatures.sign(payload)

    def verify(self, payload: PayloadInput, signature: str) -> bool:
        return self._signatures.verify(payload, signature)

    def poll(self, payload: PayloadInput, signature: Optional[str] = None) -> Any:
        return self._poller.poll(payload, signature)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PaymentVendor":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()
