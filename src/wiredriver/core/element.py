"""Element handles scoped to a session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .exceptions import WebDriverError
from .status import ErrorKind
from .wire import (
    ELEMENT_KEY,
    W3C_ELEMENT_KEY,
    ElementLookup,
    ElementReference,
    HTTPMethod,
    KeySequence,
    Location,
    NoContent,
    Rect,
    Request,
    Size,
    decode_screenshot,
)

if TYPE_CHECKING:
    from .session import Session


class Element:
    """
    Reference to one DOM node within a session.

    Elements are returned by session or element lookups, never built by
    callers. Every request is rooted at
    ``session/{session_id}/element/{element_id}``. Staleness is not tracked
    locally; the remote side reports it as STALE_ELEMENT_REFERENCE.
    """

    def __init__(self, session: "Session", element_id: str):
        self._session = session
        self._id = element_id

    @property
    def id(self) -> str:
        return self._id

    @property
    def session(self) -> "Session":
        return self._session

    def path(self, *parts: str) -> str:
        return self._session.path("element", self._id, *parts)

    def to_wire(self) -> dict[str, str]:
        """Element reference as sent in script arguments."""
        return {ELEMENT_KEY: self._id, W3C_ELEMENT_KEY: self._id}

    def _get(self, resource: str, response_type: Any, *parts: str):
        return self._session.send(
            Request(HTTPMethod.GET, self.path(resource, *parts), response_type)
        )

    def _post(self, resource: str, body=None) -> None:
        self._session.send(Request(HTTPMethod.POST, self.path(resource), NoContent, body))

    # Properties

    @property
    def text(self) -> str:
        return self._get("text", str)

    @property
    def tag_name(self) -> str:
        return self._get("name", str)

    @property
    def location(self) -> Location:
        return self._get("location", Location)

    @property
    def size(self) -> Size:
        return self._get("size", Size)

    @property
    def rect(self) -> Rect:
        return self._get("rect", Rect)

    def get_attribute(self, name: str) -> Optional[str]:
        """Attribute value, or None when the attribute is absent."""
        return self._get("attribute", Optional[str], name)

    def value_of_css_property(self, name: str) -> str:
        return self._get("css", str, name)

    def is_displayed(self) -> bool:
        return self._get("displayed", bool)

    def is_enabled(self) -> bool:
        return self._get("enabled", bool)

    def is_selected(self) -> bool:
        return self._get("selected", bool)

    def screenshot(self) -> bytes:
        """PNG bytes of the element's bounding box."""
        return decode_screenshot(self._get("screenshot", str))

    # Interactions

    def click(self) -> None:
        self._post("click")

    def clear(self) -> None:
        self._post("clear")

    def submit(self) -> None:
        self._post("submit")

    def send_keys(self, *keys: str) -> None:
        """
        Type a sequence of key symbols into the element.

        Each entry is sent as-is and in order; non-printable keys are the
        symbols from ``wiredriver.core.keys.Keys``.
        """
        self._post("value", KeySequence(value=list(keys)))

    # Nested lookups

    def find_element(self, by: str, value: str) -> Optional["Element"]:
        """Find the first descendant matching the locator, or None."""
        return find_one(self._session, self.path("element"), by, value)

    def find_elements(self, by: str, value: str) -> list["Element"]:
        return find_all(self._session, self.path("elements"), by, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self._session.id == other._session.id and self._id == other._id

    def __hash__(self) -> int:
        return hash((self._session.id, self._id))

    def __repr__(self) -> str:
        return f"Element(session={self._session.id!r}, id={self._id!r})"


def find_one(session: "Session", path: str, by: str, value: str) -> Optional[Element]:
    """
    Send an element lookup, mapping "no such element" to None.

    Every other error propagates.
    """
    request = Request(HTTPMethod.POST, path, ElementReference, ElementLookup(using=by, value=value))
    try:
        reference = session.send(request)
    except WebDriverError as err:
        if err.kind is ErrorKind.NO_SUCH_ELEMENT:
            return None
        raise
    return Element(session, reference.element_id)


def find_all(session: "Session", path: str, by: str, value: str) -> list[Element]:
    """Send a multi-element lookup; "no such element" yields an empty list."""
    request = Request(
        HTTPMethod.POST, path, list[ElementReference], ElementLookup(using=by, value=value)
    )
    try:
        references = session.send(request)
    except WebDriverError as err:
        if err.kind is ErrorKind.NO_SUCH_ELEMENT:
            return []
        raise
    return [Element(session, reference.element_id) for reference in references]
