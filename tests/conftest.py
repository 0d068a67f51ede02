"""Shared pytest fixtures for vendor client tests."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Callable, Iterator

import pytest

from etnvendor.application.dtos import Credentials
from etnvendor.application.signature_service import SignatureService
from etnvendor.vendor import PaymentVendor
from tests.fixtures import InMemoryRateSource, RecordingTransport
from tests.fixtures.constants import API_KEY, API_SECRET, FIXED_NOW


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(key=API_KEY, secret=API_SECRET)


@pytest.fixture
def signature_service(
    credentials: Credentials, fixed_clock: Callable[[], datetime]
) -> SignatureService:
    return SignatureService(credentials, clock=fixed_clock)


@pytest.fixture
def fresh_payload() -> str:
    """Webhook body addressed to API_KEY and timestamped at FIXED_NOW."""
    return json.dumps(
        {
            "key": API_KEY,
            "timestamp": FIXED_NOW.isoformat(),
            "payment_id": "0011223344",
            "amount": "5.00",
            "customer": "etn-user",
        }
    )


@pytest.fixture
def rate_source() -> InMemoryRateSource:
    return InMemoryRateSource({"price_usd": "0.02", "price_eur": 0.025, "price_gbp": 2})


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def vendor(
    rate_source: InMemoryRateSource,
    transport: RecordingTransport,
    fixed_clock: Callable[[], datetime],
) -> Iterator[PaymentVendor]:
    with PaymentVendor(
        API_KEY,
        API_SECRET,
        rate_source=rate_source,
        transport=transport,
        clock=fixed_clock,
    ) as v:
        yield v
