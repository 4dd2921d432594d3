"""WebDriver wire-protocol client."""

from .core import (
    ChromiumDriver,
    Driver,
    DriverFactory,
    Element,
    ErrorKind,
    Keys,
    Session,
    WebDriverError,
    WireDriverError,
)

__version__ = "0.1.0"

__all__ = [
    "ChromiumDriver",
    "Driver",
    "DriverFactory",
    "Element",
    "ErrorKind",
    "Keys",
    "Session",
    "WebDriverError",
    "WireDriverError",
    "__version__",
]
