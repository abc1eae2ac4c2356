"""
Runtime configuration for the Squarespace -> Chatwoot relay.
Values come from the environment (optionally a .env file) and are read once at startup.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

REQUIRED_VARS = (
    "CHATWOOT_BASE_URL",
    "CHATWOOT_ACCOUNT_ID",
    "CHATWOOT_INBOX_ID",
    "CHATWOOT_API_TOKEN",
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when a required setting is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    base_url: str
    account_id: str
    inbox_id: int
    api_token: str
    port: int = 8080
    source_id: str = "Squarespace"
    log_level: str = "INFO"

    @property
    def account_url(self) -> str:
        """Prefix shared by every account-scoped Chatwoot endpoint."""
        return f"{self.base_url}/api/v1/accounts/{self.account_id}"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.
    Fails fast with ConfigError if any required Chatwoot value is missing.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    missing = [key for key in REQUIRED_VARS if not environ.get(key)]
    if missing:
        logger.error("Missing required Chatwoot configuration: %s", ", ".join(missing))
        raise ConfigError(
            "Missing required Chatwoot configuration. Check your environment variables: "
            + ", ".join(missing)
        )

    try:
        inbox_id = int(environ["CHATWOOT_INBOX_ID"])
        port = int(environ.get("PORT") or 8080)
    except ValueError as e:
        raise ConfigError(f"Invalid numeric setting: {e}") from e

    log_level = (environ.get("LOG_LEVEL") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"Invalid LOG_LEVEL {log_level!r}; expected one of {', '.join(LOG_LEVELS)}")

    return Settings(
        base_url=environ["CHATWOOT_BASE_URL"].rstrip("/"),
        account_id=environ["CHATWOOT_ACCOUNT_ID"],
        inbox_id=inbox_id,
        api_token=environ["CHATWOOT_API_TOKEN"],
        port=port,
        source_id=environ.get("CHATWOOT_SOURCE_ID") or "Squarespace",
        log_level=log_level,
    )
