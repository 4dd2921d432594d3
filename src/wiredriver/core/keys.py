"""Key symbols for send-keys requests.

Printable keys are sent as themselves; non-printable keys use the private-use
code points defined by the WebDriver protocol, taken from selenium's ``Keys``.
"""

from typing import Iterable

from selenium.webdriver.common.keys import Keys

# Key name mapping
KEY_MAP = {
    "ENTER": Keys.ENTER,
    "RETURN": Keys.RETURN,
    "TAB": Keys.TAB,
    "ESCAPE": Keys.ESCAPE,
    "ESC": Keys.ESCAPE,
    "BACKSPACE": Keys.BACKSPACE,
    "DELETE": Keys.DELETE,
    "SPACE": Keys.SPACE,
    "UP": Keys.ARROW_UP,
    "DOWN": Keys.ARROW_DOWN,
    "LEFT": Keys.ARROW_LEFT,
    "RIGHT": Keys.ARROW_RIGHT,
    "HOME": Keys.HOME,
    "END": Keys.END,
    "PAGE_UP": Keys.PAGE_UP,
    "PAGE_DOWN": Keys.PAGE_DOWN,
    "INSERT": Keys.INSERT,
    "CONTROL": Keys.CONTROL,
    "CTRL": Keys.CONTROL,
    "ALT": Keys.ALT,
    "SHIFT": Keys.SHIFT,
    "META": Keys.META,
    "COMMAND": Keys.COMMAND,
    "NULL": Keys.NULL,
    "F1": Keys.F1,
    "F2": Keys.F2,
    "F3": Keys.F3,
    "F4": Keys.F4,
    "F5": Keys.F5,
    "F6": Keys.F6,
    "F7": Keys.F7,
    "F8": Keys.F8,
    "F9": Keys.F9,
    "F10": Keys.F10,
    "F11": Keys.F11,
    "F12": Keys.F12,
}


def key_sequence(keys: Iterable[str]) -> list[str]:
    """
    Resolve key names (e.g. "ENTER", "ctrl") to key symbols.

    Entries that are not key names are sent literally, in order.
    """
    return [KEY_MAP.get(key.upper(), key) for key in keys]


__all__ = ["KEY_MAP", "Keys", "key_sequence"]
