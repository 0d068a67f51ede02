"""Recording httpx transport for tests that must not touch the network."""

from __future__ import annotations

from typing import Callable, Optional

import httpx

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """``httpx.MockTransport`` that keeps every request it served."""

    def __init__(self, handler: Optional[Handler] = None) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, json={}))
        super().__init__(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._handler(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def json_handler(payload: object, status_code: int = 200) -> Handler:
    return lambda request: httpx.Response(status_code, json=payload)


def text_handler(text: str, status_code: int = 200) -> Handler:
    return lambda request: httpx.Response(status_code, text=text)


def failing_handler(message: str = "connection refused") -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(message, request=request)

    return handler
