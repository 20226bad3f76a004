"""
Structured logging configuration.

Every module logs through logging.getLogger(__name__), which puts
it under the "account_ledger" logger configured here.
"""

import json
import logging
from datetime import datetime, timezone

LOGGER_NAME = "account_ledger"


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Install a JSON stream handler on the application logger.

    Safe to call more than once: existing handlers are replaced
    rather than duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger
