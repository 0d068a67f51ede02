from __future__ import annotations

import logging
from typing import Any, Mapping

from ..domain.constants import URL_SUPPLY
from ..domain.errors import RateSourceUnavailable, TransportError
from ..middleware.timing import log_timing
from .http.http_client import HttpClient

logger = logging.getLogger(__name__)


class HttpRateSource:
    """Fetches the exchange-rate JSON document over HTTP on every call."""

    def __init__(self, http: HttpClient, url: str = URL_SUPPLY) -> None:
        self._http = http
        self._url = url

    @log_timing("fetch_rates")
    def fetch_rates(self) -> Mapping[str, Any]:
        try:
            resp = self._http.get(self._url)
        except TransportError as e:
            logger.warning("Could not load currency conversion JSON: %s", e)
            raise RateSourceUnavailable(
                "Could not load currency conversion JSON"
            ) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise RateSourceUnavailable(
                "Could not load valid currency conversion JSON"
            ) from e
        if not isinstance(data, dict):
            raise RateSourceUnavailable(
                "Currency conversion JSON is not an object"
            )
        return data
