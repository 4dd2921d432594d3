"""Transport contract and the HTTP implementation used against real drivers."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, TypeVar

import httpx

from .exceptions import ConnectionFailedError, DecodeError
from .wire import Request, decode_response, encode_request

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json;charset=UTF-8",
}


class Transport(Protocol):
    """Sends a typed request and returns its typed response.

    Implementations fail with ``ConnectionFailedError``, ``HttpError``,
    ``DecodeError`` or a decoded ``WebDriverError``.
    """

    def send(self, request: Request[T]) -> T: ...


class HTTPTransport:
    """Transport speaking JSON over HTTP to a WebDriver endpoint."""

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout, headers=DEFAULT_HEADERS)
        self._owns_client = client is None

    def url(self, path: str) -> str:
        return f"{self.endpoint}/{path.lstrip('/')}"

    def send(self, request: Request[T]) -> T:
        encoded = encode_request(request)
        url = self.url(encoded.path)
        logger.debug(f"{encoded.method.value} {url}")

        try:
            response = self._client.request(
                encoded.method.value,
                url,
                content=encoded.body,
                headers=DEFAULT_HEADERS,
            )
        except httpx.DecodingError as err:
            raise DecodeError(f"Undecodable response from {url}: {err}") from err
        except httpx.RequestError as err:
            raise ConnectionFailedError(self.endpoint, str(err)) from err

        logger.debug(f"{encoded.method.value} {url} -> {response.status_code}")
        return decode_response(request, response.status_code, response.content)

    def close(self) -> None:
        """Close the underlying connection pool if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
