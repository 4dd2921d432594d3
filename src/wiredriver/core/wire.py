"""JSON envelope codec for WebDriver wire requests and responses.

Every exchange is described by a typed ``Request`` declaring its HTTP method,
its path relative to the driver endpoint, an optional pydantic body model and
the shape of the ``value`` payload it expects back. Encoding and decoding are
generic over that declaration.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Any, Generic, Optional, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from .exceptions import (
    DecodeError,
    HttpError,
    InvalidScreenshotDataError,
    WebDriverError,
)
from .status import ErrorKind

T = TypeVar("T")

ELEMENT_KEY = "ELEMENT"
W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class MouseButton(IntEnum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class NoContent:
    """Declared response shape of requests with no meaningful return value."""


@dataclass(frozen=True)
class Request(Generic[T]):
    """A wire request typed by the payload it expects back.

    ``response_type`` is anything pydantic can validate (``str``, ``bool``,
    a model, ``list[Model]``, ``Any``) or ``NoContent``. When ``unwrap`` is
    false the whole envelope is validated instead of its ``value``.
    """

    method: HTTPMethod
    path: str
    response_type: Any = NoContent
    body: Optional[BaseModel] = None
    unwrap: bool = True


@dataclass(frozen=True)
class EncodedRequest:
    method: HTTPMethod
    path: str
    body: Optional[bytes]


# Request bodies


class ElementLookup(BaseModel):
    using: str
    value: str


class NavigateTo(BaseModel):
    url: str


class ScriptCall(BaseModel):
    script: str
    args: list[Any] = Field(default_factory=list)


class MoveTo(BaseModel):
    element: Optional[str] = None
    xoffset: Optional[int] = None
    yoffset: Optional[int] = None


class ButtonAction(BaseModel):
    button: MouseButton = MouseButton.LEFT


class KeySequence(BaseModel):
    value: list[str]


class WindowSwitch(BaseModel):
    name: str
    handle: str


class FrameSwitch(BaseModel):
    id: Any = None


class AlertText(BaseModel):
    text: str


class TimeoutSetting(BaseModel):
    type: str
    ms: int


class NewSessionBody(BaseModel):
    desired_capabilities: dict[str, Any] = Field(serialization_alias="desiredCapabilities")
    capabilities: dict[str, Any]


# Response payloads


class ElementReference(BaseModel):
    """An element reference in either its legacy or W3C form."""

    element_id: str = Field(validation_alias=AliasChoices(W3C_ELEMENT_KEY, ELEMENT_KEY))


class Location(BaseModel):
    x: float
    y: float


class Size(BaseModel):
    width: float
    height: float


class Rect(BaseModel):
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None


class Cookie(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    value: str
    path: Optional[str] = None
    domain: Optional[str] = None
    secure: Optional[bool] = None
    http_only: Optional[bool] = Field(default=None, alias="httpOnly")
    expiry: Optional[int] = None
    same_site: Optional[str] = Field(default=None, alias="sameSite")


class CookieBody(BaseModel):
    cookie: Cookie


class SessionCreated(BaseModel):
    """Result of a new-session request, read from the whole envelope."""

    session_id: str
    capabilities: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _flatten_envelope(cls, envelope: Any) -> Any:
        if not isinstance(envelope, dict):
            return envelope
        value = envelope.get("value")
        # W3C: {"value": {"sessionId", "capabilities"}}
        if isinstance(value, dict) and "sessionId" in value:
            return {
                "session_id": value["sessionId"],
                "capabilities": value.get("capabilities") or {},
            }
        # Legacy: {"sessionId", "status": 0, "value": {capabilities}}
        return {
            "session_id": envelope.get("sessionId"),
            "capabilities": value if isinstance(value, dict) else {},
        }


def encode_request(request: Request) -> EncodedRequest:
    """
    Encode a request into method, path and JSON body.

    GET and DELETE carry no body. POST always carries a JSON object; only
    the body fields explicitly set by the caller are serialized.
    """
    if request.method is not HTTPMethod.POST:
        return EncodedRequest(request.method, request.path, None)

    payload: dict[str, Any] = {}
    if request.body is not None:
        payload = request.body.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return EncodedRequest(request.method, request.path, json.dumps(payload).encode("utf-8"))


def decode_response(request: Request[T], status_code: int, content: bytes) -> T:
    """
    Decode a raw HTTP response into the request's declared payload.

    Args:
        request: The request the response answers
        status_code: HTTP status code
        content: Raw response body

    Returns:
        The validated payload, or None for NoContent requests

    Raises:
        WebDriverError: If the response carries an error envelope
        HttpError: If a non-2xx response carries no recognisable envelope
        DecodeError: If the body cannot be decoded into the declared shape
    """
    text = content.decode("utf-8", errors="replace") if content else ""

    # HTTP status is authoritative over whatever the body claims
    if not 200 <= status_code < 300:
        raise _failure_from_error_response(status_code, text)

    if not text.strip():
        if request.response_type is NoContent:
            return None
        raise DecodeError(
            f"Empty response to {request.method.value} {request.path}",
            status=status_code,
        )

    try:
        envelope = json.loads(text)
    except ValueError as err:
        raise DecodeError(
            f"Response to {request.method.value} {request.path} is not JSON",
            status=status_code,
            body=text,
        ) from err

    if not isinstance(envelope, dict):
        raise DecodeError(
            f"Response to {request.method.value} {request.path} is not an envelope",
            status=status_code,
            body=text,
        )

    error = _legacy_error(envelope)
    if error is not None:
        raise error

    if request.response_type is NoContent:
        return None

    payload = envelope.get("value") if request.unwrap else envelope
    try:
        return _adapter(request.response_type).validate_python(payload)
    except ValidationError as err:
        raise DecodeError(
            f"Unexpected payload for {request.method.value} {request.path}: {err}",
            status=status_code,
            body=text,
        ) from err


def decode_screenshot(data: str) -> bytes:
    """
    Decode base64 screenshot data and check it is a PNG image.

    Raises:
        InvalidScreenshotDataError: If the data is not base64 or not a PNG
    """
    try:
        raw = base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as err:
        raise InvalidScreenshotDataError("payload is not valid base64") from err

    if not raw.startswith(PNG_SIGNATURE):
        raise InvalidScreenshotDataError("payload is not a PNG image")
    return raw


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _legacy_error(envelope: dict) -> Optional[WebDriverError]:
    """Error carried by a 2xx envelope: a present, non-zero legacy status."""
    status = envelope.get("status")
    if status is None or status == 0 or status == "0" or status == "success":
        return None
    return WebDriverError(ErrorKind.from_wire(status), _message(envelope), status)


def _failure_from_error_response(status_code: int, text: str) -> Exception:
    try:
        envelope = json.loads(text)
    except ValueError:
        return DecodeError(
            f"Undecodable error response (HTTP {status_code})",
            status=status_code,
            body=text,
        )

    if isinstance(envelope, dict):
        value = envelope.get("value")
        if isinstance(value, dict) and isinstance(value.get("error"), str):
            return WebDriverError(
                ErrorKind.from_wire(value["error"]),
                str(value.get("message") or ""),
                value["error"],
            )
        status = envelope.get("status")
        if status is not None and status != 0:
            return WebDriverError(ErrorKind.from_wire(status), _message(envelope), status)

    return HttpError(status_code, text)


def _message(envelope: dict) -> str:
    message = envelope.get("message")
    if message is None:
        value = envelope.get("value")
        if isinstance(value, dict):
            message = value.get("message")
        elif isinstance(value, str):
            message = value
    return str(message or "")
