"""Tests for driver lifecycle and session creation."""

import pytest
from unittest.mock import MagicMock

from wiredriver.core.driver import ChromiumDriver, Driver
from wiredriver.core.exceptions import (
    ConnectionFailedError,
    DriverNotReadyError,
    DriverProcessError,
)
from wiredriver.core.retry import CHROMIUM_RETRY_POLICY, KindSetRetryPolicy
from wiredriver.core.status import ErrorKind


class RefusingTransport:
    """Transport whose every call fails to connect."""

    def __init__(self):
        self.calls = 0

    def send(self, request):
        self.calls += 1
        raise ConnectionFailedError("http://localhost:9515", f"refused #{self.calls}")


class FakeSupervisor:
    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.started = 0
        self.terminated = 0
        self.running = False

    def start(self):
        self.started += 1
        if self.fail_with:
            raise self.fail_with
        self.running = True

    def is_running(self):
        return self.running

    def terminate(self):
        self.terminated += 1
        self.running = False


class TestWaitUntilReady:
    """Tests for readiness polling."""

    def test_ready_immediately(self, driver, transport):
        transport.respond({"ready": True})

        driver.wait_until_ready(timeout=1.0)

        assert transport.last.method == "GET"
        assert transport.last.path == "status"

    def test_ready_after_failures(self, driver, transport):
        transport.respond_raw(b"starting", status_code=503)
        transport.respond_raw(b"starting", status_code=503)
        transport.respond({"ready": True})

        driver.wait_until_ready(timeout=2.0, interval=0.01)

        assert len(transport.requests) == 3

    def test_timeout_carries_last_error(self):
        transport = RefusingTransport()
        driver = Driver("http://localhost:9515", transport)

        with pytest.raises(DriverNotReadyError) as exc:
            driver.wait_until_ready(timeout=0.2, interval=0.02)

        assert isinstance(exc.value.last_error, ConnectionFailedError)
        assert f"refused #{transport.calls}" in str(exc.value.last_error)
        assert "did not become ready" in str(exc.value)
        assert "ChromeDriver" not in str(exc.value)


class TestNewSession:
    """Tests for session negotiation."""

    def test_legacy_response(self, driver, transport):
        transport.respond({"browserName": "chrome"}, sessionId="abc")

        session = driver.new_session({"browserName": "chrome"})

        assert session.id == "abc"
        assert session.driver is driver
        assert session.capabilities == {"browserName": "chrome"}
        assert transport.last.method == "POST"
        assert transport.last.path == "session"
        assert transport.last.body == {
            "desiredCapabilities": {"browserName": "chrome"},
            "capabilities": {"alwaysMatch": {"browserName": "chrome"}},
        }

    def test_w3c_response(self, driver, transport):
        transport.respond_raw(b'{"value":{"sessionId":"xyz","capabilities":{"browserName":"chrome"}}}')

        session = driver.new_session()

        assert session.id == "xyz"
        assert session.capabilities["browserName"] == "chrome"

    def test_session_context_manager_deletes(self, driver, transport):
        transport.respond({}, sessionId="abc")

        with driver.session() as session:
            transport.respond("Example")
            assert session.title == "Example"

        assert transport.last.method == "DELETE"
        assert transport.last.path == "session/abc"

    def test_session_context_manager_deletes_on_error(self, driver, transport):
        transport.respond({}, sessionId="abc")

        with pytest.raises(RuntimeError):
            with driver.session():
                raise RuntimeError("boom")

        assert transport.last.path == "session/abc"


class TestRetryClassification:
    """Tests for per-family inconclusive error classification."""

    def test_default_policy_retries_nothing(self, driver):
        for kind in ErrorKind:
            assert driver.is_inconclusive_interaction(kind) is False

    def test_chromium_policy(self):
        driver = ChromiumDriver(start=False, transport=MagicMock())

        assert driver.retry_policy is CHROMIUM_RETRY_POLICY
        assert driver.is_inconclusive_interaction(ErrorKind.STALE_ELEMENT_REFERENCE)
        assert driver.is_inconclusive_interaction(ErrorKind.ELEMENT_NOT_VISIBLE)
        assert driver.is_inconclusive_interaction(ErrorKind.ELEMENT_NOT_SELECTABLE)
        assert driver.is_inconclusive_interaction(ErrorKind.NO_SUCH_DRIVER)
        assert not driver.is_inconclusive_interaction(ErrorKind.NO_SUCH_ELEMENT)
        assert not driver.is_inconclusive_interaction(ErrorKind.JAVASCRIPT_ERROR)

    def test_injected_policy(self, transport):
        policy = KindSetRetryPolicy(frozenset({ErrorKind.TIMEOUT}))
        driver = Driver("http://localhost:9515", transport, retry_policy=policy)

        assert driver.is_inconclusive_interaction(ErrorKind.TIMEOUT)
        assert not driver.is_inconclusive_interaction(ErrorKind.STALE_ELEMENT_REFERENCE)


class TestChromiumDriver:
    """Tests for chromedriver process supervision."""

    def test_endpoint_uses_port(self):
        driver = ChromiumDriver(port=9999, start=False, transport=MagicMock())

        assert driver.endpoint == "http://localhost:9999"

    def test_start_waits_until_ready(self, transport):
        supervisor = FakeSupervisor()
        transport.respond({"ready": True})

        driver = ChromiumDriver(process=supervisor, transport=transport)

        assert supervisor.started == 1
        assert driver.is_started
        assert transport.last.path == "status"

    def test_start_is_idempotent(self, transport):
        supervisor = FakeSupervisor()
        transport.respond({"ready": True})
        driver = ChromiumDriver(process=supervisor, transport=transport)

        driver.start_driver()

        assert supervisor.started == 1

    def test_process_failure(self, transport):
        supervisor = FakeSupervisor(fail_with=OSError("No such file"))

        with pytest.raises(DriverProcessError) as exc:
            ChromiumDriver(process=supervisor, transport=transport)

        assert "No such file" in str(exc.value)
        assert transport.requests == []

    def test_not_ready(self):
        supervisor = FakeSupervisor()

        with pytest.raises(DriverNotReadyError):
            ChromiumDriver(
                process=supervisor,
                transport=RefusingTransport(),
                ready_timeout=0.1,
                ready_interval=0.02,
            )

        assert supervisor.terminated == 1
        assert supervisor.running is False

    def test_unready_start_stops_process(self):
        supervisor = MagicMock()
        supervisor.is_running.return_value = True
        driver = ChromiumDriver(
            process=supervisor,
            transport=RefusingTransport(),
            start=False,
            ready_timeout=0.1,
            ready_interval=0.02,
        )

        with pytest.raises(DriverNotReadyError):
            driver.start_driver()

        supervisor.start.assert_called_once()
        supervisor.terminate.assert_called_once()
        assert not driver.is_started

    def test_requires_path_or_supervisor(self):
        with pytest.raises(ValueError):
            ChromiumDriver(transport=MagicMock())

    def test_stop_terminates_running_process(self, transport):
        supervisor = FakeSupervisor()
        transport.respond({"ready": True})
        driver = ChromiumDriver(process=supervisor, transport=transport)

        driver.stop_driver()

        assert supervisor.terminated == 1
        assert not driver.is_started

    def test_stop_skips_exited_process(self, transport):
        supervisor = FakeSupervisor()
        transport.respond({"ready": True})
        driver = ChromiumDriver(process=supervisor, transport=transport)
        supervisor.running = False

        driver.stop_driver()

        assert supervisor.terminated == 0
        assert not driver.is_started

    def test_context_manager_stops(self, transport):
        supervisor = FakeSupervisor()
        transport.respond({"ready": True})

        with ChromiumDriver(process=supervisor, transport=transport):
            pass

        assert supervisor.terminated == 1
