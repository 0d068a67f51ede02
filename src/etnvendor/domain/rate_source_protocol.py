"""Protocol interface for exchange-rate sources.

The converter only needs a flat mapping of ``price_<currency>`` keys to
rates, so any object satisfying this protocol can be injected: the HTTP
implementation in ``infrastructure`` or an in-memory fake in tests.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class RateSourceProtocol(Protocol):
    """Supplies the current exchange-rate document."""

    def fetch_rates(self) -> Mapping[str, Any]:
        """Return the parsed rate document.

        Raises:
            RateSourceUnavailable: If the document cannot be fetched or is not
                a JSON object.
        """
        ...
