"""Driver lifecycle: endpoint ownership, readiness, and session creation."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Protocol, TypeVar

from .exceptions import DriverNotReadyError, DriverProcessError, LifecycleError
from .retry import CHROMIUM_RETRY_POLICY, DefaultRetryPolicy, RetryPolicy
from .session import Session
from .status import ErrorKind
from .transport import HTTPTransport, Transport
from .wire import HTTPMethod, NewSessionBody, Request, SessionCreated

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProcessSupervisor(Protocol):
    """Starts, reports on, and terminates a driver executable."""

    def start(self) -> None: ...

    def is_running(self) -> bool: ...

    def terminate(self) -> None: ...


class Driver:
    """
    A remote WebDriver endpoint and the factory for its sessions.

    The driver owns the transport; sessions only borrow it to send requests.
    Which error kinds are inconclusive is decided by ``retry_policy``, which
    driver families override at class level or callers inject.
    """

    retry_policy: RetryPolicy = DefaultRetryPolicy()

    def __init__(
        self,
        endpoint: str,
        transport: Optional[Transport] = None,
        *,
        request_timeout: float = 30.0,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.transport = (
            transport
            if transport is not None
            else HTTPTransport(self.endpoint, timeout=request_timeout)
        )
        if retry_policy is not None:
            self.retry_policy = retry_policy

    def send(self, request: Request[T]) -> T:
        return self.transport.send(request)

    @property
    def status(self) -> Any:
        """Payload of the driver's status endpoint."""
        return self.send(Request(HTTPMethod.GET, "status", Any))

    def wait_until_ready(self, timeout: float = 5.0, interval: float = 0.1) -> None:
        """
        Block until the driver answers a status request.

        Any failure, connection refusal included, counts as "not ready yet".

        Raises:
            DriverNotReadyError: Carrying the last observed error
        """
        deadline = time.monotonic() + timeout
        last_error: Optional[BaseException] = None

        while time.monotonic() < deadline:
            try:
                self.status
                logger.info(f"WebDriver at {self.endpoint} is ready")
                return
            except Exception as err:
                last_error = err
                time.sleep(interval)

        raise DriverNotReadyError(last_error)

    def new_session(self, capabilities: Optional[dict] = None) -> Session:
        """
        Negotiate a new remote session.

        Args:
            capabilities: Desired capabilities, passed through untouched

        Returns:
            Session bound to this driver
        """
        caps = dict(capabilities or {})
        body = NewSessionBody(desired_capabilities=caps, capabilities={"alwaysMatch": caps})
        created = self.send(Request(HTTPMethod.POST, "session", SessionCreated, body, unwrap=False))
        logger.info(f"Created session {created.session_id} at {self.endpoint}")
        return Session(self, created.session_id, created.capabilities)

    @contextmanager
    def session(self, capabilities: Optional[dict] = None) -> Iterator[Session]:
        """Create a session that is deleted on every exit path."""
        session = self.new_session(capabilities)
        try:
            yield session
        finally:
            session.delete()

    def is_inconclusive_interaction(self, kind: ErrorKind) -> bool:
        return self.retry_policy.is_inconclusive(kind)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self.endpoint!r})"


class ChromiumDriver(Driver):
    """
    Driver for a chromedriver executable listening on localhost.

    By default the executable is supervised through selenium's chrome
    ``Service``; any object satisfying ``ProcessSupervisor`` can be injected.
    """

    retry_policy: RetryPolicy = CHROMIUM_RETRY_POLICY

    def __init__(
        self,
        chromedriver_path: Optional[str] = None,
        port: int = 9515,
        *,
        start: bool = True,
        process: Optional[ProcessSupervisor] = None,
        transport: Optional[Transport] = None,
        ready_timeout: float = 5.0,
        ready_interval: float = 0.1,
        request_timeout: float = 30.0,
    ):
        super().__init__(
            f"http://localhost:{port}",
            transport,
            request_timeout=request_timeout,
        )
        self.chromedriver_path = chromedriver_path
        self.port = port
        self.ready_timeout = ready_timeout
        self.ready_interval = ready_interval
        self._supervisor = process
        self._process: Optional[ProcessSupervisor] = None

        if start:
            self.start_driver()

    @classmethod
    def start(cls, path: str) -> "ChromiumDriver":
        """Create a driver for ``path`` and start its process."""
        return cls(chromedriver_path=path)

    @property
    def is_started(self) -> bool:
        return self._process is not None

    def start_driver(self) -> None:
        """
        Start the chromedriver process and wait until it is ready.

        Does nothing if the process was already started.

        Raises:
            DriverProcessError: If the process cannot be started
            DriverNotReadyError: If it does not become ready in time
        """
        if self._process is not None:
            return

        process = self._supervisor or self._default_supervisor()
        try:
            process.start()
        except LifecycleError:
            raise
        except Exception as err:
            raise DriverProcessError(str(err)) from err

        self._process = process
        logger.info(f"Started chromedriver on port {self.port}")
        try:
            self.wait_until_ready(self.ready_timeout, self.ready_interval)
        except Exception:
            self.stop_driver()
            raise

    def stop_driver(self) -> None:
        """Terminate the chromedriver process if it is running."""
        process, self._process = self._process, None
        if process is None or not process.is_running():
            return
        process.terminate()
        logger.info(f"Stopped chromedriver on port {self.port}")

    def _default_supervisor(self) -> ProcessSupervisor:
        if not self.chromedriver_path:
            raise ValueError("chromedriver_path is required when no process supervisor is given")

        from .process import ChromeDriverService

        return ChromeDriverService(self.chromedriver_path, port=self.port)

    def __enter__(self) -> "ChromiumDriver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop_driver()
        self.close()
