"""Classification of wire errors as inconclusive, and the caller-side retry helper.

A driver family decides which error kinds leave an interaction inconclusive
(worth re-attempting the original high-level action). Nothing in the client
retries on its own; callers opt in through ``retry_inconclusive``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, FrozenSet, Protocol, TypeVar

from .exceptions import WebDriverError
from .status import ErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy(Protocol):
    def is_inconclusive(self, kind: ErrorKind) -> bool: ...


class DefaultRetryPolicy:
    """Treats every error kind as conclusive."""

    def is_inconclusive(self, kind: ErrorKind) -> bool:
        return False


@dataclass(frozen=True)
class KindSetRetryPolicy:
    """Treats a fixed set of error kinds as inconclusive."""

    kinds: FrozenSet[ErrorKind]

    def is_inconclusive(self, kind: ErrorKind) -> bool:
        return kind in self.kinds


CHROMIUM_RETRY_POLICY = KindSetRetryPolicy(
    frozenset(
        {
            ErrorKind.STALE_ELEMENT_REFERENCE,
            ErrorKind.ELEMENT_NOT_VISIBLE,
            ErrorKind.ELEMENT_NOT_SELECTABLE,
            ErrorKind.NO_SUCH_DRIVER,
        }
    )
)


def retry_inconclusive(
    action: Callable[[], T],
    is_inconclusive: Callable[[ErrorKind], bool],
    *,
    timeout: float,
    interval: float = 0.1,
) -> T:
    """
    Run an action, re-running it while it fails inconclusively.

    Args:
        action: The high-level action to attempt (e.g. ``element.click``)
        is_inconclusive: Classifier, usually ``driver.is_inconclusive_interaction``
        timeout: Seconds after which the last error is raised
        interval: Seconds between attempts

    Returns:
        The action's result

    Raises:
        WebDriverError: If the error is conclusive or the timeout elapsed
    """
    deadline = time.monotonic() + timeout
    while True:
        try:
            return action()
        except WebDriverError as err:
            if not is_inconclusive(err.kind) or time.monotonic() >= deadline:
                raise
            logger.debug(f"Inconclusive interaction ({err.kind.value}), retrying")
            time.sleep(interval)
