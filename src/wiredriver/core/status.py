"""Closed taxonomy of remote WebDriver failure reasons."""

from enum import Enum
from typing import Union


class ErrorKind(str, Enum):
    """Failure reasons reported by a remote WebDriver.

    Values are the W3C error strings. Legacy JSON Wire Protocol servers
    report numeric codes instead; see ``LEGACY_STATUS_CODES``.
    """

    NO_SUCH_DRIVER = "no such driver"
    NO_SUCH_ELEMENT = "no such element"
    NO_SUCH_FRAME = "no such frame"
    NO_SUCH_WINDOW = "no such window"
    NO_SUCH_ALERT = "no such alert"
    NO_SUCH_COOKIE = "no such cookie"
    NO_SUCH_SHADOW_ROOT = "no such shadow root"
    INVALID_SESSION_ID = "invalid session id"
    SESSION_NOT_CREATED = "session not created"
    UNKNOWN_COMMAND = "unknown command"
    UNKNOWN_METHOD = "unknown method"
    UNSUPPORTED_OPERATION = "unsupported operation"
    STALE_ELEMENT_REFERENCE = "stale element reference"
    DETACHED_SHADOW_ROOT = "detached shadow root"
    ELEMENT_NOT_VISIBLE = "element not visible"
    ELEMENT_NOT_SELECTABLE = "element not selectable"
    ELEMENT_NOT_INTERACTABLE = "element not interactable"
    ELEMENT_CLICK_INTERCEPTED = "element click intercepted"
    INVALID_ELEMENT_STATE = "invalid element state"
    INVALID_ELEMENT_COORDINATES = "invalid element coordinates"
    MOVE_TARGET_OUT_OF_BOUNDS = "move target out of bounds"
    INVALID_SELECTOR = "invalid selector"
    INVALID_ARGUMENT = "invalid argument"
    INVALID_COOKIE_DOMAIN = "invalid cookie domain"
    UNABLE_TO_SET_COOKIE = "unable to set cookie"
    UNABLE_TO_CAPTURE_SCREEN = "unable to capture screen"
    UNEXPECTED_ALERT_OPEN = "unexpected alert open"
    INSECURE_CERTIFICATE = "insecure certificate"
    JAVASCRIPT_ERROR = "javascript error"
    SCRIPT_TIMEOUT = "script timeout"
    TIMEOUT = "timeout"
    IME_NOT_AVAILABLE = "ime not available"
    IME_ENGINE_ACTIVATION_FAILED = "ime engine activation failed"
    UNKNOWN_ERROR = "unknown error"

    @classmethod
    def from_wire(cls, status: Union[int, str, None]) -> "ErrorKind":
        """
        Map a wire status (legacy code or W3C string) to an ErrorKind.

        The mapping is total: anything unrecognised maps to UNKNOWN_ERROR.

        Args:
            status: Numeric legacy status, W3C error string, or None

        Returns:
            The matching ErrorKind
        """
        if isinstance(status, bool) or status is None:
            return cls.UNKNOWN_ERROR

        if isinstance(status, int):
            return LEGACY_STATUS_CODES.get(status, cls.UNKNOWN_ERROR)

        text = str(status).strip()
        if text.isdigit():
            return LEGACY_STATUS_CODES.get(int(text), cls.UNKNOWN_ERROR)

        text = text.lower()
        try:
            return cls(text)
        except ValueError:
            return _ALIASES.get(text, cls.UNKNOWN_ERROR)


# JSON Wire Protocol numeric status codes
LEGACY_STATUS_CODES: dict[int, ErrorKind] = {
    6: ErrorKind.NO_SUCH_DRIVER,
    7: ErrorKind.NO_SUCH_ELEMENT,
    8: ErrorKind.NO_SUCH_FRAME,
    9: ErrorKind.UNKNOWN_COMMAND,
    10: ErrorKind.STALE_ELEMENT_REFERENCE,
    11: ErrorKind.ELEMENT_NOT_VISIBLE,
    12: ErrorKind.INVALID_ELEMENT_STATE,
    13: ErrorKind.UNKNOWN_ERROR,
    15: ErrorKind.ELEMENT_NOT_SELECTABLE,
    17: ErrorKind.JAVASCRIPT_ERROR,
    19: ErrorKind.INVALID_SELECTOR,
    21: ErrorKind.TIMEOUT,
    23: ErrorKind.NO_SUCH_WINDOW,
    24: ErrorKind.INVALID_COOKIE_DOMAIN,
    25: ErrorKind.UNABLE_TO_SET_COOKIE,
    26: ErrorKind.UNEXPECTED_ALERT_OPEN,
    27: ErrorKind.NO_SUCH_ALERT,
    28: ErrorKind.SCRIPT_TIMEOUT,
    29: ErrorKind.INVALID_ELEMENT_COORDINATES,
    30: ErrorKind.IME_NOT_AVAILABLE,
    31: ErrorKind.IME_ENGINE_ACTIVATION_FAILED,
    32: ErrorKind.INVALID_SELECTOR,
    33: ErrorKind.SESSION_NOT_CREATED,
    34: ErrorKind.MOVE_TARGET_OUT_OF_BOUNDS,
    51: ErrorKind.INVALID_SELECTOR,
    52: ErrorKind.INVALID_SELECTOR,
    60: ErrorKind.ELEMENT_NOT_INTERACTABLE,
    61: ErrorKind.INVALID_ARGUMENT,
    62: ErrorKind.NO_SUCH_COOKIE,
    63: ErrorKind.UNABLE_TO_CAPTURE_SCREEN,
    64: ErrorKind.ELEMENT_CLICK_INTERCEPTED,
    405: ErrorKind.UNSUPPORTED_OPERATION,
}

# Spellings seen from older drivers
_ALIASES: dict[str, ErrorKind] = {
    "element is not selectable": ErrorKind.ELEMENT_NOT_SELECTABLE,
    "unknown method exception": ErrorKind.UNKNOWN_METHOD,
    "no alert open": ErrorKind.NO_SUCH_ALERT,
    "invalid xpath selector": ErrorKind.INVALID_SELECTOR,
}
