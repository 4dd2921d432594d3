"""Fixtures for integration tests against a real chromedriver or WebDriver endpoint.

Set WIREDRIVER_CHROMEDRIVER_PATH to launch a local chromedriver, or
WIREDRIVER_WEBDRIVER_URL to use an endpoint that is already running.
"""

import os
from urllib.parse import quote

import pytest

from wiredriver.core.driver import ChromiumDriver, Driver
from wiredriver.core.driver_factory import build_capabilities

CHROMEDRIVER_PATH = os.environ.get("WIREDRIVER_CHROMEDRIVER_PATH")
WEBDRIVER_URL = os.environ.get("WIREDRIVER_WEBDRIVER_URL")

HEADLESS_CHROME = build_capabilities("chrome", headless=True)

TEST_PAGE = """
<html>
<head><title>Example</title></head>
<body>
  <h1 id="heading">Hello</h1>
  <input id="name" type="text">
  <button id="go" onclick="document.getElementById('heading').textContent = 'Clicked'">Go</button>
</body>
</html>
"""


def pytest_collection_modifyitems(config, items):
    if CHROMEDRIVER_PATH or WEBDRIVER_URL:
        return
    skip = pytest.mark.skip(reason="no chromedriver or WebDriver endpoint configured")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="module")
def live_driver():
    if CHROMEDRIVER_PATH:
        driver = ChromiumDriver(CHROMEDRIVER_PATH, port=9516)
        with driver:
            yield driver
    else:
        driver = Driver(WEBDRIVER_URL)
        driver.wait_until_ready(timeout=10.0)
        yield driver
        driver.close()


@pytest.fixture
def live_session(live_driver):
    session = live_driver.new_session(HEADLESS_CHROME)
    with session:
        yield session


@pytest.fixture
def test_page_url():
    return "data:text/html;charset=utf-8," + quote(TEST_PAGE)
