import json
import logging
from datetime import datetime, timezone
from typing import Any

from app.config import LOG_LEVEL

_LOGGER_NAME = "clinical_nlp"


class _JsonLineFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, event + structured fields."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None) or record.getMessage()[:30] or "log",
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            line.update(fields)
        # enums, sets etc. fall back to str()
        return json.dumps(line, ensure_ascii=False, default=str)


def get_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)
        handler = logging.StreamHandler()
        handler.setFormatter(_JsonLineFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def log_event(event: str, level: int = logging.INFO, **fields: Any) -> None:
    """
    Emit a structured JSON line.
    Never pass raw clinical text: ids, types, lengths, counts and timings only.
    """
    get_logger().log(level, "", extra={"event": event, "fields": fields})
