"""Pytest fixtures for testing wiredriver."""

import json
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional

import pytest

from wiredriver.core.driver import Driver
from wiredriver.core.session import Session
from wiredriver.core.wire import decode_response, encode_request


@dataclass
class RecordedRequest:
    method: str
    path: str
    body: Optional[dict]


class MockTransport:
    """
    Transport double that records encoded requests and replays canned bodies.

    Responses go through the real ``decode_response``, so tests exercise the
    same decoding as the HTTP transport.
    """

    def __init__(self):
        self.requests: list[RecordedRequest] = []
        self._responses: deque = deque()

    def respond(self, value: Any = None, status_code: int = 200, **envelope) -> None:
        """Queue a legacy-style success envelope carrying ``value``."""
        payload = {"status": 0, "value": value, **envelope}
        self.respond_raw(json.dumps(payload).encode("utf-8"), status_code)

    def respond_error(self, status: Any, message: str = "", status_code: int = 500) -> None:
        """Queue a legacy error envelope with a numeric or string status."""
        payload = {"status": status, "value": {"message": message}}
        self.respond_raw(json.dumps(payload).encode("utf-8"), status_code)

    def respond_w3c_error(self, error: str, message: str = "", status_code: int = 404) -> None:
        payload = {"value": {"error": error, "message": message, "stacktrace": ""}}
        self.respond_raw(json.dumps(payload).encode("utf-8"), status_code)

    def respond_raw(self, content: bytes, status_code: int = 200) -> None:
        self._responses.append((status_code, content))

    def send(self, request):
        encoded = encode_request(request)
        body = json.loads(encoded.body) if encoded.body is not None else None
        self.requests.append(RecordedRequest(encoded.method.value, encoded.path, body))

        status_code, content = self._responses.popleft() if self._responses else (200, b"")
        return decode_response(request, status_code, content)

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def driver(transport):
    return Driver("http://localhost:9515", transport)


@pytest.fixture
def session(driver):
    return Session(driver, "s1")

