"""Process supervisor for a local chromedriver, backed by selenium's Service."""

import logging
from typing import Optional

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.service import Service

from .exceptions import DriverProcessError

logger = logging.getLogger(__name__)


class ChromeDriverService:
    """
    Runs chromedriver as a child process.

    Satisfies the ``ProcessSupervisor`` protocol expected by
    ``ChromiumDriver``: start, report running, terminate.
    """

    def __init__(
        self,
        executable_path: str,
        port: int = 9515,
        service_args: Optional[list[str]] = None,
        log_output: Optional[str] = None,
    ):
        self.executable_path = executable_path
        self.port = port
        self._service = Service(
            executable_path=executable_path,
            port=port,
            service_args=service_args,
            log_output=log_output,
        )

    def start(self) -> None:
        """
        Spawn chromedriver with ``--port={port}``.

        Raises:
            DriverProcessError: If the executable cannot be launched
        """
        logger.info(f"Launching {self.executable_path} on port {self.port}")
        try:
            self._service.start()
        except WebDriverException as err:
            raise DriverProcessError(err.msg or str(err)) from err
        except OSError as err:
            raise DriverProcessError(str(err)) from err

    def is_running(self) -> bool:
        process = getattr(self._service, "process", None)
        return process is not None and process.poll() is None

    def terminate(self) -> None:
        self._service.stop()
