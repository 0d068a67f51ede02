"""Test fixtures for in-memory implementations."""

from .in_memory_rate_source import InMemoryRateSource, UnavailableRateSource
from .mock_transport import (
    RecordingTransport,
    failing_handler,
    json_handler,
    text_handler,
)

__all__ = [
    "InMemoryRateSource",
    "RecordingTransport",
    "UnavailableRateSource",
    "failing_handler",
    "json_handler",
    "text_handler",
]
