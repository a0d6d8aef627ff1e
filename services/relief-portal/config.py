"""Environment-based configuration for the relief portal."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Relief portal settings, loaded from environment variables."""

    # Server
    PORT: int = 8092
    LOG_LEVEL: str = "INFO"

    # Campaign content (empty = built-in defaults)
    CAMPAIGN_CONFIG_PATH: str = ""

    # Totals polling (0 = server-side poller disabled)
    POLL_INTERVAL_SECONDS: int = 60

    # Upstream widget fetch timeouts and retry
    UPSTREAM_TIMEOUT_SECONDS: float = 15.0
    UPSTREAM_CONNECT_TIMEOUT: float = 5.0
    UPSTREAM_RETRY_ATTEMPTS: int = 2
    UPSTREAM_RETRY_DELAY: float = 0.5
    UPSTREAM_RETRY_BACKOFF: float = 2.0
    UPSTREAM_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124 Safari/537.36"
    )

    # Embedded widget watchdog
    WIDGET_WATCHDOG_MS: int = 2500

    model_config = {"env_prefix": "", "case_sensitive": True}


settings = Settings()
