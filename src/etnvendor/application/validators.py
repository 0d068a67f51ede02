"""Pure validation functions for conversion and payment token building.

These functions contain the input rules of the vendor client and can be
tested in isolation without rate sources or HTTP transports.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from ..crypto.hmac_signatures import is_hex
from ..domain.constants import ACCEPTED_CURRENCIES, PAYMENT_ID_LENGTH
from ..domain.errors import (
    InvalidAmount,
    InvalidCurrency,
    InvalidOutlet,
    InvalidPaymentId,
    InvalidRate,
)

_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Convert a number or numeric string into a finite ``Decimal``.

    Floats go through ``repr`` so ``5.1`` becomes ``Decimal("5.1")`` rather
    than its binary expansion.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError("booleans are not amounts")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(repr(value))
    elif isinstance(value, str) and _NUMERIC_RE.match(value.strip()):
        result = Decimal(value.strip())
    else:
        raise ValueError(f"{value!r} is not numeric")
    if not result.is_finite():
        raise ValueError(f"{value!r} is not finite")
    return result


def format_amount(value: Decimal) -> str:
    """Render with exactly two decimals, ``.`` separator and no grouping.

    Zero is always rendered unsigned, so ``-0`` becomes ``0.00``.
    """
    try:
        with localcontext() as ctx:
            # Room for every integer digit plus the two decimals.
            ctx.prec = max(ctx.prec, value.adjusted() + 3)
            quantized = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise InvalidAmount(f"Amount {value} cannot be rendered") from e
    if quantized.is_zero():
        quantized = quantized.copy_abs()
    return f"{quantized:f}"


def validate_currency(currency: Any) -> str:
    """Return the upper-cased currency code if it is accepted.

    Raises:
        InvalidCurrency: If the code is not in the accepted list.
    """
    if not isinstance(currency, str) or currency.upper() not in ACCEPTED_CURRENCIES:
        raise InvalidCurrency(f"Unknown currency {currency!r}")
    return currency.upper()


def validate_fiat_amount(value: Any) -> Decimal:
    """Validate a local currency amount to convert. Zero is allowed.

    Raises:
        InvalidAmount: If the amount is not a finite non-negative number.
    """
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise InvalidAmount(f"Fiat amount is not valid: {e}") from e
    if amount < 0:
        raise InvalidAmount(f"Fiat amount {value!r} is negative")
    if amount.is_zero():
        amount = Decimal(0)
    return amount


def validate_rate(value: Any) -> Decimal:
    """Raises InvalidRate unless ``value`` is a number greater than zero."""
    try:
        rate = to_decimal(value)
    except ValueError as e:
        raise InvalidRate(f"Currency conversion rate not valid: {e}") from e
    if rate <= 0:
        raise InvalidRate(f"Currency conversion rate {value!r} must be positive")
    return rate


def validate_token_amount(value: Any) -> Decimal:
    """Validate the coin amount embedded in a payment token.

    Zero, negative amounts and amounts that round to ``0.00`` are rejected so
    a published token never requests nothing.

    Raises:
        InvalidAmount: If the amount is empty, malformed or not positive.
    """
    if value is None or value == "":
        raise InvalidAmount("Payment token amount is empty")
    try:
        amount = to_decimal(value)
    except ValueError as e:
        raise InvalidAmount(f"Payment token amount is not valid: {e}") from e
    if amount <= 0 or Decimal(format_amount(amount)) == 0:
        raise InvalidAmount(f"Payment token amount {value!r} must be positive")
    return amount


def validate_outlet(outlet: Any) -> str:
    if not isinstance(outlet, str) or not is_hex(outlet):
        raise InvalidOutlet(f"Outlet {outlet!r} must be a non-empty hex string")
    return outlet


def validate_payment_id(payment_id: Any) -> str:
    if (
        not isinstance(payment_id, str)
        or len(payment_id) != PAYMENT_ID_LENGTH
        or not is_hex(payment_id)
    ):
        raise InvalidPaymentId(
            f"Payment id {payment_id!r} must be {PAYMENT_ID_LENGTH} hex characters"
        )
    return payment_id
