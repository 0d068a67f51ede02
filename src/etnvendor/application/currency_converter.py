"""Conversion of local currency amounts into ETN."""

from __future__ import annotations

import logging
from decimal import localcontext
from typing import Any, Optional

from ..domain.constants import RATE_KEY_PREFIX
from ..domain.errors import RateNotFound, RateSourceUnavailable
from ..domain.rate_source_protocol import RateSourceProtocol
from .dtos import ConversionResult
from .validators import (
    format_amount,
    validate_currency,
    validate_fiat_amount,
    validate_rate,
)

logger = logging.getLogger(__name__)


class CurrencyConverter:
    """Converts fiat amounts to coin amounts using a rate source.

    A default rate source may be given at construction; a source passed to
    ``convert`` takes precedence for that call.
    """

    def __init__(self, rate_source: Optional[RateSourceProtocol] = None) -> None:
        self._rate_source = rate_source

    def convert(
        self,
        fiat_amount: Any,
        currency: str,
        rate_source: Optional[RateSourceProtocol] = None,
    ) -> str:
        """Convert ``fiat_amount`` in ``currency`` and return the coin amount.

        Returns:
            The coin amount with exactly two decimals, e.g. ``"5.00"``.

        Raises:
            InvalidCurrency: If the currency is not accepted.
            InvalidAmount: If the fiat amount is malformed or negative.
            RateSourceUnavailable: If the rate document cannot be loaded.
            RateNotFound: If the document has no rate for the currency.
            InvalidRate: If the rate is not a positive number.
        """
        return self.convert_detailed(fiat_amount, currency, rate_source).coin_amount

    def convert_detailed(
        self,
        fiat_amount: Any,
        currency: str,
        rate_source: Optional[RateSourceProtocol] = None,
    ) -> ConversionResult:
        """Like ``convert`` but also returns the rate and inputs used."""
        # Currency is checked before any rate lookup happens.
        code = validate_currency(currency)
        amount = validate_fiat_amount(fiat_amount)

        source = rate_source or self._rate_source
        if source is None:
            raise RateSourceUnavailable("No exchange rate source configured")

        rates = source.fetch_rates()
        rate_key = f"{RATE_KEY_PREFIX}{code.lower()}"
        raw_rate = rates.get(rate_key)
        if raw_rate is None:
            raise RateNotFound(f"Currency rate not found for {code}")
        rate = validate_rate(raw_rate)

        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, amount.adjusted() - rate.adjusted() + 6)
            coin_amount = format_amount(amount / rate)
        logger.debug(
            "Converted %s %s at rate %s to %s", amount, code, rate, coin_amount
        )
        return ConversionResult(
            coin_amount=coin_amount,
            currency=code,
            fiat_amount=amount,
            rate=rate,
        )
