"""Factory for drivers and session capabilities built from settings."""

import logging
from typing import Optional

from selenium import webdriver

from ..config import Settings, settings
from .driver import ChromiumDriver, Driver
from .retry import CHROMIUM_RETRY_POLICY

logger = logging.getLogger(__name__)

OPTIONS_CLASSES = {
    "chrome": webdriver.ChromeOptions,
    "firefox": webdriver.FirefoxOptions,
    "edge": webdriver.EdgeOptions,
}


def build_capabilities(
    browser: str = "chrome",
    headless: bool = True,
    viewport_width: Optional[int] = None,
    viewport_height: Optional[int] = None,
    extra_capabilities: Optional[dict] = None,
) -> dict:
    """
    Build desired capabilities for a new session.

    Browser arguments come from selenium's options classes; extra
    capabilities are merged last and win over the defaults.

    Raises:
        ValueError: If browser type is not supported
    """
    browser = browser.lower()
    if browser not in OPTIONS_CLASSES:
        raise ValueError(
            f"Unsupported browser: {browser}. "
            f"Supported browsers: {list(OPTIONS_CLASSES)}"
        )

    options = OPTIONS_CLASSES[browser]()

    if browser in ("chrome", "edge"):
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        if headless:
            options.add_argument("--headless=new")
        if viewport_width and viewport_height:
            options.add_argument(f"--window-size={viewport_width},{viewport_height}")
    elif headless:
        options.add_argument("-headless")

    for key, value in (extra_capabilities or {}).items():
        options.set_capability(key, value)

    return options.to_capabilities()


class DriverFactory:
    """
    Creates drivers for the configured endpoint.

    With a chromedriver path the driver supervises a local chromedriver;
    otherwise it talks to an already running endpoint, classifying errors
    by the configured driver family.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or settings

    def create(self, start: bool = True) -> Driver:
        """
        Build the driver, and with ``start`` bring it up.

        Raises:
            DriverProcessError: If a local chromedriver cannot be started
            DriverNotReadyError: If the endpoint does not become ready in time
        """
        config = self.config

        if config.launches_chromedriver:
            return ChromiumDriver(
                config.chromedriver_path,
                port=config.chromedriver_port,
                start=start,
                ready_timeout=config.ready_timeout_seconds,
                ready_interval=config.ready_poll_interval_seconds,
                request_timeout=config.request_timeout_seconds,
            )

        retry_policy = CHROMIUM_RETRY_POLICY if config.driver_family == "chromium" else None
        driver = Driver(
            config.webdriver_url,
            request_timeout=config.request_timeout_seconds,
            retry_policy=retry_policy,
        )
        if start:
            try:
                driver.wait_until_ready(
                    config.ready_timeout_seconds, config.ready_poll_interval_seconds
                )
            except Exception:
                driver.close()
                raise
        logger.info(f"Using WebDriver at {driver.endpoint} ({config.driver_family})")
        return driver

    def capabilities(
        self,
        browser: Optional[str] = None,
        headless: Optional[bool] = None,
        viewport_width: Optional[int] = None,
        viewport_height: Optional[int] = None,
        extra_capabilities: Optional[dict] = None,
    ) -> dict:
        """Capabilities for ``browser``, defaulting to the configured browser and mode."""
        return build_capabilities(
            browser or self.config.default_browser,
            self.config.headless if headless is None else headless,
            viewport_width,
            viewport_height,
            extra_capabilities,
        )
