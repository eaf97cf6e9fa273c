"""
Bot entrypoint: configure logging, load settings, serve Telegram updates.

Startup is all-or-nothing: if any required setting is missing the error is
logged (field names only, never values) and the process exits with status 1
before connecting to Telegram.

Structured JSON logging is used for all events. Library loggers that would
print request URLs (the Telegram token is part of the bot API URL) are
lowered to WARNING.

CHANGELOG:
- 2026-10-19: Token masking shared with the client
- 2026-10-19: Initial creation (STORY-010)

TODO:
- None
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

from pydantic import ValidationError
from telegram import Update

from foxbot.src.client import masked_token
from foxbot.src.config import BotSettings
from foxbot.src.context import BotContext
from foxbot.src.telegram_bot import build_application

logger = logging.getLogger(__name__)

_QUIET_LOGGERS = ("httpx", "httpcore", "telegram", "apscheduler")


# ---------------------------------------------------------------------------
# Structured JSON logging setup
# ---------------------------------------------------------------------------


class _JsonFormatter(logging.Formatter):
    """Minimal JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure structured JSON logging on stderr for the whole process."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Startup config handling
# ---------------------------------------------------------------------------


def log_config_summary(settings: BotSettings) -> None:
    """Log a config summary at startup, masking both credentials."""
    logger.info(
        "FoxESS bot starting with config: "
        "device_sn=%s, foxess_base_url=%s, foxess_lang=%s, log_level=%s, "
        "telegram_token_masked=%s, foxess_api_key_masked=%s",
        settings.device_sn,
        settings.foxess_base_url,
        settings.foxess_lang,
        settings.log_level,
        masked_token(settings.telegram_token),
        masked_token(settings.foxess_api_key),
    )


def load_settings() -> BotSettings:
    """Load settings or exit the process.

    Raises:
        SystemExit: With status 1 when validation fails.
    """
    try:
        return BotSettings()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}" for err in exc.errors()
        )
        logger.critical("Invalid configuration, refusing to start: %s", problems)
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    """Synchronous entrypoint; python-telegram-bot owns the event loop."""
    configure_logging()
    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)
    log_config_summary(settings)

    context = BotContext.from_settings(settings)
    application = build_application(context)
    logger.info("Polling Telegram for updates")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
