"""WebDriver wire-protocol client."""

from .driver import ChromiumDriver, Driver, ProcessSupervisor
from .driver_factory import DriverFactory, build_capabilities
from .element import Element
from .exceptions import (
    ConnectionFailedError,
    DataError,
    DecodeError,
    DriverNotReadyError,
    DriverProcessError,
    HttpError,
    InvalidScreenshotDataError,
    LifecycleError,
    TransportError,
    WebDriverError,
    WireDriverError,
)
from .keys import Keys, key_sequence
from .retry import CHROMIUM_RETRY_POLICY, DefaultRetryPolicy, KindSetRetryPolicy, retry_inconclusive
from .session import Session
from .status import ErrorKind
from .transport import HTTPTransport, Transport
from .wire import Cookie, MouseButton

__all__ = [
    "ChromiumDriver",
    "Driver",
    "ProcessSupervisor",
    "DriverFactory",
    "build_capabilities",
    "Element",
    "Session",
    "ErrorKind",
    "Keys",
    "key_sequence",
    "Cookie",
    "MouseButton",
    "HTTPTransport",
    "Transport",
    "CHROMIUM_RETRY_POLICY",
    "DefaultRetryPolicy",
    "KindSetRetryPolicy",
    "retry_inconclusive",
    "WireDriverError",
    "TransportError",
    "ConnectionFailedError",
    "HttpError",
    "DecodeError",
    "WebDriverError",
    "DataError",
    "InvalidScreenshotDataError",
    "LifecycleError",
    "DriverNotReadyError",
    "DriverProcessError",
]
