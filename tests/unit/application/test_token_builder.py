"""Unit tests for TokenBuilder."""

import re
from urllib.parse import parse_qs, urlparse

import pytest

from etnvendor.application.currency_converter import CurrencyConverter
from etnvendor.application.token_builder import TokenBuilder
from etnvendor.domain.errors import (
    InvalidAmount,
    InvalidCurrency,
    InvalidOutlet,
    InvalidPaymentId,
    RandomSourceUnavailable,
)
from tests.fixtures import InMemoryRateSource


def _fixed_id() -> str:
    return "a1b2c3d4e5"


class TestBuildToken:
    """Test TokenBuilder.build_token."""

    def test_canonical_token(self) -> None:
        builder = TokenBuilder()
        assert builder.build_token(5.00, "1a2b3c", "0011223344") == (
            "etn-it-1a2b3c/0011223344/5.00"
        )

    def test_amount_rendered_with_two_decimals(self) -> None:
        builder = TokenBuilder()
        assert builder.build_token("12.5", "ff", "0011223344").endswith("/12.50")
        assert builder.build_token(3, "ff", "0011223344").endswith("/3.00")
        assert builder.build_token(2.345, "ff", "0011223344").endswith("/2.35")

    def test_generates_payment_id_when_omitted(self) -> None:
        builder = TokenBuilder(payment_id_factory=_fixed_id)
        assert builder.build_token(1, "abc") == "etn-it-abc/a1b2c3d4e5/1.00"

    def test_default_generated_id_shape(self) -> None:
        token = TokenBuilder().build_token(1, "abc")
        assert re.fullmatch(r"etn-it-abc/[0-9a-f]{10}/1\.00", token)

    def test_supplied_id_case_preserved(self) -> None:
        token = TokenBuilder().build_token(1, "ABC", "ABCDEF0123")
        assert token == "etn-it-ABC/ABCDEF0123/1.00"

    @pytest.mark.parametrize("payment_id", ["00112233", "zz11223344", ""])
    def test_invalid_payment_id(self, payment_id: str) -> None:
        with pytest.raises(InvalidPaymentId):
            TokenBuilder().build_token(5, "1a2b3c", payment_id)

    @pytest.mark.parametrize("amount", ["", None, "five", 0, -1])
    def test_invalid_amount(self, amount: object) -> None:
        with pytest.raises(InvalidAmount):
            TokenBuilder().build_token(amount, "1a2b3c", "0011223344")

    @pytest.mark.parametrize("outlet", ["", "outlet-1", "12 34"])
    def test_invalid_outlet(self, outlet: str) -> None:
        with pytest.raises(InvalidOutlet):
            TokenBuilder().build_token(5, outlet, "0011223344")

    def test_random_source_failure_propagates(self) -> None:
        def broken() -> str:
            raise RandomSourceUnavailable("no entropy")

        with pytest.raises(RandomSourceUnavailable):
            TokenBuilder(payment_id_factory=broken).build_token(5, "1a")


class TestBuildRequest:
    """Test TokenBuilder.build_request."""

    def test_request_fields(self) -> None:
        request = TokenBuilder().build_request("7", "beef", "0011223344")
        assert request.token == "etn-it-beef/0011223344/7.00"
        assert request.outlet == "beef"
        assert request.payment_id == "0011223344"
        assert request.amount == "7.00"
        assert request.viewer_url.endswith("etn-it-beef%2F0011223344%2F7.00")


class TestViewerUrl:
    """Test TokenBuilder.get_viewer_url."""

    def test_url_encodes_token(self) -> None:
        url = TokenBuilder().get_viewer_url("etn-it-1a2b3c/0011223344/5.00")
        assert url == (
            "https://chart.googleapis.com/chart?cht=qr&chs=300x300&chld=L|0"
            "&chl=etn-it-1a2b3c%2F0011223344%2F5.00"
        )

    def test_token_round_trips_through_query(self) -> None:
        token = "etn-it-1a2b3c/0011223344/5.00"
        url = TokenBuilder().get_viewer_url(token)
        assert parse_qs(urlparse(url).query)["chl"] == [token]

    def test_idempotent(self) -> None:
        builder = TokenBuilder()
        token = "etn-it-1a2b3c/0011223344/5.00"
        assert builder.get_viewer_url(token) == builder.get_viewer_url(token)

    def test_custom_template(self) -> None:
        builder = TokenBuilder(qr_url_template="https://qr.example.com/render?data=%s")
        assert builder.get_viewer_url("a/b") == "https://qr.example.com/render?data=a%2Fb"


class TestBuildAndRenderUrl:
    """Test TokenBuilder.build_and_render_url."""

    def test_composes_conversion_token_and_url(self) -> None:
        converter = CurrencyConverter(InMemoryRateSource({"price_usd": 2}))
        builder = TokenBuilder(converter)
        url = builder.build_and_render_url(10, "usd", "1a2b3c", "0011223344")
        assert url.endswith("&chl=etn-it-1a2b3c%2F0011223344%2F5.00")

    def test_conversion_error_stops_pipeline(self) -> None:
        calls: list[str] = []

        def factory() -> str:
            calls.append("generated")
            return _fixed_id()

        builder = TokenBuilder(
            CurrencyConverter(InMemoryRateSource({"price_usd": 2})),
            payment_id_factory=factory,
        )
        with pytest.raises(InvalidCurrency):
            builder.build_and_render_url(10, "XYZ", "1a2b3c")
        assert calls == []

    def test_token_error_after_conversion(self) -> None:
        builder = TokenBuilder(CurrencyConverter(InMemoryRateSource({"price_usd": 2})))
        with pytest.raises(InvalidOutlet):
            builder.build_and_render_url(10, "USD", "not-hex", "0011223344")
