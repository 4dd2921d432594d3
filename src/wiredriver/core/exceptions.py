"""Error taxonomy for the wiredriver client and server."""

from typing import Optional

from .status import ErrorKind


class WireDriverError(Exception):
    """Base exception for all wiredriver errors."""

    pass


# Transport errors


class TransportError(WireDriverError):
    """A request could not be exchanged with the remote driver."""

    pass


class ConnectionFailedError(TransportError):
    """Raised when the remote driver cannot be reached."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to connect to WebDriver at {url}: {message}")


class HttpError(TransportError):
    """Raised for a non-2xx response that carries no WebDriver error envelope."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body[:200]}")


class DecodeError(TransportError):
    """Raised when a response body cannot be decoded into its declared shape."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(message)


# Wire errors


class WebDriverError(WireDriverError):
    """An error envelope decoded from the remote driver."""

    def __init__(self, kind: ErrorKind, message: str = "", status=None):
        self.kind = kind
        self.message = message
        self.status = status
        super().__init__(f"{kind.value}: {message}" if message else kind.value)


# Data errors


class DataError(WireDriverError):
    """A successful response carried a payload that is not usable."""

    pass


class InvalidScreenshotDataError(DataError):
    """Raised when screenshot data is not base64-encoded image bytes."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "Invalid screenshot data received from driver"
        super().__init__(f"{message}: {reason}" if reason else message)


# Lifecycle errors


class LifecycleError(WireDriverError):
    """The driver process or endpoint is not in a usable state."""

    pass


class DriverNotReadyError(LifecycleError):
    """Raised when the driver does not answer a status request in time."""

    def __init__(self, last_error: Optional[BaseException] = None):
        self.last_error = last_error
        if last_error is not None:
            message = f"WebDriver did not become ready: {last_error}"
        else:
            message = "WebDriver did not become ready within the timeout period"
        super().__init__(message)


class DriverProcessError(LifecycleError):
    """Raised when the driver process cannot be started."""

    def __init__(self, message: str):
        super().__init__(f"ChromeDriver process failed: {message}")
