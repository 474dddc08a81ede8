"""MyRover carrier configuration."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

CALLBACK_PATH = "/api/auth/callback"


class Settings(BaseSettings):
    """Environment-driven settings for the carrier app."""

    bc_client_id: str = ""
    bc_client_secret: str = ""
    app_url: str = ""  # public base URL, e.g. https://gta-myrover-n-01.onrender.com

    host: str = "0.0.0.0"
    port: int = 3000

    bc_login_url: str = "https://login.bigcommerce.com"
    bc_api_url: str = "https://api.bigcommerce.com"

    # Bounds every outbound call (token exchange, metadata registration)
    http_timeout: float = 10.0
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def callback_url(self) -> str:
        """OAuth redirect URI registered with BigCommerce."""
        return f"{self.app_url.rstrip('/')}{CALLBACK_PATH}"

    @property
    def authorize_url(self) -> str:
        return f"{self.bc_login_url.rstrip('/')}/oauth2/authorize"

    @property
    def token_url(self) -> str:
        return f"{self.bc_login_url.rstrip('/')}/oauth2/token"

    def missing(self, *fields: str) -> list[str]:
        """Return the env names of the given fields that are empty."""
        return [name.upper() for name in fields if not getattr(self, name)]


def log_configuration(settings: Settings) -> None:
    """Startup sanity log. Never prints secret values."""
    logger.info("BC_CLIENT_ID: %s", "set" if settings.bc_client_id else "MISSING")
    logger.info("BC_CLIENT_SECRET: %s", "set" if settings.bc_client_secret else "MISSING")
    logger.info("APP_URL: %s", settings.app_url or "MISSING")


settings = Settings()
