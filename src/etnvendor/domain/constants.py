"""Fixed endpoints, formats and limits of the Electroneum vendor API."""

from __future__ import annotations

from datetime import timedelta

API_VERSION = "0.1.0"

# Url to poll for payment confirmation.
URL_POLL = "https://poll.electroneum.com/vendor/check-payment"

# Url for the exchange rate JSON.
URL_SUPPLY = "https://supply.electroneum.com/app-value-v2.json"

# printf-style template for a QR image url; %s receives the url-encoded token.
URL_QR = "https://chart.googleapis.com/chart?cht=qr&chs=300x300&chld=L|0&chl=%s"

TOKEN_PREFIX = "etn-it-"
RATE_KEY_PREFIX = "price_"

PAYMENT_ID_BYTES = 5
PAYMENT_ID_LENGTH = PAYMENT_ID_BYTES * 2
SIGNATURE_LENGTH = 64
SIGNATURE_HEADER = "ETN-SIGNATURE"

REPLAY_WINDOW = timedelta(minutes=5)

ACCEPTED_CURRENCIES: frozenset[str] = frozenset(
    {
        "AUD", "BRL", "BTC", "CAD", "CDF", "CHF", "CLP", "CNY", "CZK",
        "DKK", "EUR", "GBP", "HKD", "HUF", "IDR", "ILS", "INR", "JPY",
        "KRW", "MXN", "MYR", "NOK", "NZD", "PHP", "PKR", "PLN", "RUB",
        "SEK", "SGD", "THB", "TRY", "TWD", "USD", "ZAR",
    }
)  # fmt: skip
