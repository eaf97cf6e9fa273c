"""
Bot configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
All configuration values come from environment variables or .env files;
no hardcoded credentials. The three credentials are required: a missing or
blank value raises at construction so the process never starts serving.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-001)

TODO:
- None
"""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

DEFAULT_FOXESS_BASE_URL = "https://portal.foxesscloud.us:30004"


class ConfigurationError(ValueError):
    """A required credential or identifier is missing or unusable."""


class BotSettings(BaseSettings):
    """Bot configuration for the FoxESS telemetry bot.

    All values are loaded from environment variables. Required variables
    must be set; optional variables have sensible defaults.

    Attributes:
        telegram_token: Telegram bot token issued by BotFather.
        foxess_api_key: FoxESS Open API key, sent as the ``token`` header
            and used to sign every request.
        device_sn: Serial number of the monitored inverter.
        foxess_base_url: FoxESS Cloud base URL (must be HTTPS).
        foxess_lang: Value of the ``lang`` request header.
        log_level: Root logging level name.
    """

    telegram_token: str
    foxess_api_key: str
    device_sn: str
    foxess_base_url: str = DEFAULT_FOXESS_BASE_URL
    foxess_lang: str = "en"
    log_level: str = "INFO"

    @field_validator("telegram_token", "foxess_api_key", "device_sn")
    @classmethod
    def required_values_must_not_be_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only credentials."""
        v = v.strip()
        if not v:
            raise ValueError("value must not be empty")
        return v

    @field_validator("foxess_base_url")
    @classmethod
    def foxess_base_url_must_be_https(cls, v: str) -> str:
        """Validate that the FoxESS base URL uses HTTPS.

        The API key travels in a request header, so plain HTTP is rejected
        at startup.
        """
        if not v.lower().startswith("https://"):
            raise ValueError(
                "FOXESS_BASE_URL must use HTTPS (got: " f"'{v[:20]}...')."
            )
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Validate the log level against the names known to logging."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL '{v}' is not a valid logging level")
        return level

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
