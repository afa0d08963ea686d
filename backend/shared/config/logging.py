"""
Structured logging for Kitchen OS.

Every logger returned by get_logger() accepts keyword fields next to the
message:

    logger.info("Recipe saved", recipe_id=12, lines=4)

The fields travel on the record as ``fields`` and are rendered as a JSON
object in production or as ``key=value`` pairs in development. The
correlation filter stamps each record with the X-Request-ID of the
request being served.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings

SERVICE_NAME = "kitchen-api"

# Noisy third-party loggers and the level they are capped at
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    # font lookups are logged at DEBUG
    "reportlab": logging.WARNING,
    "fontTools": logging.WARNING,
}


def _request_id(record: logging.LogRecord) -> str | None:
    value = getattr(record, "request_id", None)
    return value if value and value != "-" else None


class JsonFormatter(logging.Formatter):
    """One JSON document per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = _request_id(record)
        if request_id:
            entry["request_id"] = request_id

        fields = getattr(record, "fields", None)
        if fields:
            entry["fields"] = fields

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        if settings.debug:
            entry["at"] = f"{record.pathname}:{record.lineno}"

        return json.dumps(entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output for local development."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        parts = [
            f"{color}{datetime.now():%H:%M:%S} {record.levelname:<8}{self.RESET}",
        ]

        request_id = _request_id(record)
        if request_id:
            parts.append(f"{self.DIM}{request_id[:8]}{self.RESET}")

        parts.append(f"{record.name}: {record.getMessage()}")

        fields = getattr(record, "fields", None)
        if fields:
            parts.append(self.DIM + " ".join(f"{k}={v}" for k, v in fields.items()) + self.RESET)

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """
    Logger whose methods take arbitrary keyword fields.

    The standard keywords (exc_info, extra, stack_info, stacklevel) keep
    their usual meaning; everything else lands in ``record.fields``.
    """

    def _log(
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: dict | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **fields: Any,
    ) -> None:
        extra = dict(extra or {})
        extra["fields"] = fields or None
        # One extra frame: report the caller of logger.info(), not this method
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=extra,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


logging.setLoggerClass(StructuredLogger)


def _resolve_level() -> int:
    if settings.log_level:
        return logging.getLevelName(settings.log_level.upper())
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging() -> None:
    """
    Install the stdout handler on the root logger.
    Called once from the application lifespan and the CLI.
    """
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = _resolve_level()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        JsonFormatter() if settings.environment == "production" else ConsoleFormatter()
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name, cap in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(cap)


def get_logger(name: str) -> StructuredLogger:
    """
    Logger for a module.

        logger = get_logger(__name__)
        logger.error("Export failed", outlet_id=3, exc_info=True)
    """
    return logging.getLogger(name)  # type: ignore[return-value]


kitchen_api_logger = get_logger("kitchen_api")
export_logger = get_logger("kitchen_api.exports")
