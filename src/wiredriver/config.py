"""Configuration settings for wiredriver drivers."""

from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Driver configuration from environment variables."""

    # WebDriver endpoint
    driver_family: Literal["chromium", "generic"] = "chromium"
    webdriver_url: str = "http://localhost:9515"
    chromedriver_path: Optional[str] = None  # Launch chromedriver locally when set
    chromedriver_port: int = 9515

    # Timeouts
    request_timeout_seconds: float = 30.0
    ready_timeout_seconds: float = 5.0
    ready_poll_interval_seconds: float = 0.1

    # Session capabilities
    default_browser: Literal["chrome", "firefox", "edge"] = "chrome"
    headless: bool = True

    model_config = {"env_prefix": "WIREDRIVER_"}

    @property
    def launches_chromedriver(self) -> bool:
        return self.driver_family == "chromium" and bool(self.chromedriver_path)


# Global settings instance
settings = Settings()
