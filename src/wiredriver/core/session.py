"""Session handles: one live remote browsing context."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, TypeVar
from urllib.parse import quote

from .element import Element, find_all, find_one
from .exceptions import WebDriverError
from .status import ErrorKind
from .wire import (
    AlertText,
    ButtonAction,
    Cookie,
    CookieBody,
    ElementReference,
    FrameSwitch,
    HTTPMethod,
    KeySequence,
    MouseButton,
    MoveTo,
    NavigateTo,
    NoContent,
    Rect,
    Request,
    ScriptCall,
    TimeoutSetting,
    WindowSwitch,
    decode_screenshot,
)

if TYPE_CHECKING:
    from .driver import Driver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Session:
    """
    Thin handle over an already established remote session.

    The session id scopes every request path issued by this session and its
    elements. Requests are sent through the owning driver's transport.

    Usable as a context manager: the remote session is deleted on exit,
    best-effort.
    """

    def __init__(self, driver: "Driver", session_id: str, capabilities: Optional[dict] = None):
        self._driver = driver
        self._id = session_id
        self.capabilities = capabilities or {}

    @property
    def id(self) -> str:
        return self._id

    @property
    def driver(self) -> "Driver":
        return self._driver

    def path(self, *parts: str) -> str:
        segments = ["session", self._id, *parts]
        return "/".join(quote(str(segment), safe="") for segment in segments)

    def send(self, request: Request[T]) -> T:
        return self._driver.send(request)

    def _get(self, resource: str, response_type: Any, *parts: str):
        return self.send(Request(HTTPMethod.GET, self.path(resource, *parts), response_type))

    def _post(self, resource: str, body=None, response_type: Any = NoContent, *parts: str):
        return self.send(
            Request(HTTPMethod.POST, self.path(resource, *parts), response_type, body)
        )

    def _delete(self, *parts: str) -> None:
        self.send(Request(HTTPMethod.DELETE, self.path(*parts)))

    # Page state

    @property
    def title(self) -> str:
        return self._get("title", str)

    @property
    def current_url(self) -> str:
        return self._get("url", str)

    @property
    def page_source(self) -> str:
        return self._get("source", str)

    def screenshot(self) -> bytes:
        """
        Capture the viewport as PNG bytes.

        Raises:
            InvalidScreenshotDataError: If the payload is not a base64 PNG
        """
        return decode_screenshot(self._get("screenshot", str))

    # Navigation

    def navigate(self, url: str) -> None:
        self._post("url", NavigateTo(url=url))

    def back(self) -> None:
        self._post("back")

    def forward(self) -> None:
        self._post("forward")

    def refresh(self) -> None:
        self._post("refresh")

    # Element lookup

    def find_element(self, by: str, value: str) -> Optional[Element]:
        """
        Find the first element matching the locator.

        Args:
            by: Locator strategy, e.g. ``By.NAME`` or ``By.CSS_SELECTOR``
            value: Selector for that strategy

        Returns:
            The element, or None when the driver reports "no such element"
        """
        return find_one(self, self.path("element"), by, value)

    def find_elements(self, by: str, value: str) -> list[Element]:
        return find_all(self, self.path("elements"), by, value)

    @property
    def active_element(self) -> Optional[Element]:
        """The focused element, or None when the driver reports none."""
        try:
            reference = self._post("element", None, ElementReference, "active")
        except WebDriverError as err:
            if err.kind is ErrorKind.NO_SUCH_ELEMENT:
                return None
            raise
        return Element(self, reference.element_id)

    # Cookies

    def get_cookies(self) -> list[Cookie]:
        return self._get("cookie", list[Cookie])

    def add_cookie(self, cookie: Cookie) -> None:
        self._post("cookie", CookieBody(cookie=cookie))

    def delete_cookie(self, name: str) -> None:
        self._delete("cookie", name)

    def delete_all_cookies(self) -> None:
        self._delete("cookie")

    # Windows and frames

    @property
    def current_window_handle(self) -> str:
        return self._get("window_handle", str)

    @property
    def window_handles(self) -> list[str]:
        return self._get("window_handles", list[str])

    @property
    def window_rect(self) -> Rect:
        return self._get("window", Rect, "rect")

    def set_window_rect(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> Rect:
        fields = {"x": x, "y": y, "width": width, "height": height}
        body = Rect(**{key: value for key, value in fields.items() if value is not None})
        return self._post("window", body, Rect, "rect")

    def switch_to_window(self, handle: str) -> None:
        self._post("window", WindowSwitch(name=handle, handle=handle))

    def close_window(self) -> None:
        self._delete("window")

    def switch_to_frame(self, frame: Any = None) -> None:
        """
        Switch to a frame by index, name/id, element, or None for the top level.
        """
        if isinstance(frame, Element):
            frame = self._own(frame).to_wire()
        self._post("frame", FrameSwitch(id=frame))

    def switch_to_parent_frame(self) -> None:
        self._post("frame", None, NoContent, "parent")

    # Alerts

    @property
    def alert_text(self) -> str:
        return self._get("alert_text", str)

    def send_alert_text(self, text: str) -> None:
        self._post("alert_text", AlertText(text=text))

    def accept_alert(self) -> None:
        self._post("accept_alert")

    def dismiss_alert(self) -> None:
        self._post("dismiss_alert")

    # Scripts

    def execute_script(self, script: str, *args: Any) -> Any:
        """
        Run a synchronous script in the page.

        Element handles among the arguments are sent as element references;
        everything else, including the result, is passed through untouched.
        """
        body = ScriptCall(script=script, args=[self._wrap_argument(arg) for arg in args])
        return self._post("execute", body, Any)

    def execute_async_script(self, script: str, *args: Any) -> Any:
        body = ScriptCall(script=script, args=[self._wrap_argument(arg) for arg in args])
        return self._post("execute_async", body, Any)

    def set_timeout(self, kind: str, seconds: float) -> None:
        """Set the "implicit", "script" or "page load" timeout."""
        self._post("timeouts", TimeoutSetting(type=kind, ms=int(seconds * 1000)))

    # Pointer and keyboard

    def move_to(
        self,
        element: Optional[Element] = None,
        x_offset: Optional[int] = None,
        y_offset: Optional[int] = None,
    ) -> None:
        """
        Move the pointer to an element and/or by an offset.

        Only the arguments given are sent.
        """
        fields: dict[str, Any] = {}
        if element is not None:
            fields["element"] = self._own(element).id
        if x_offset is not None:
            fields["xoffset"] = x_offset
        if y_offset is not None:
            fields["yoffset"] = y_offset
        self._post("moveto", MoveTo(**fields))

    def click(self, button: MouseButton = MouseButton.LEFT) -> None:
        self._post("click", ButtonAction(button=button))

    def button_down(self, button: MouseButton = MouseButton.LEFT) -> None:
        self._post("buttondown", ButtonAction(button=button))

    def button_up(self, button: MouseButton = MouseButton.LEFT) -> None:
        self._post("buttonup", ButtonAction(button=button))

    def double_click(self) -> None:
        self._post("doubleclick")

    def send_keys(self, *keys: str) -> None:
        """Type key symbols into the active element."""
        self._post("keys", KeySequence(value=list(keys)))

    # Lifecycle

    def delete(self) -> None:
        """
        Delete the remote session.

        Failures are logged and discarded: the remote side may already have
        closed the session on its own.
        """
        try:
            self._delete()
        except Exception as err:
            logger.debug(f"Ignoring error deleting session {self._id}: {err}")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.delete()

    def __repr__(self) -> str:
        return f"Session(id={self._id!r})"

    def _own(self, element: Element) -> Element:
        if element.session is not self:
            raise ValueError(f"{element!r} belongs to a different session than {self!r}")
        return element

    def _wrap_argument(self, value: Any) -> Any:
        if isinstance(value, Element):
            return self._own(value).to_wire()
        if isinstance(value, (list, tuple)):
            return [self._wrap_argument(item) for item in value]
        if isinstance(value, dict):
            return {key: self._wrap_argument(item) for key, item in value.items()}
        return value
