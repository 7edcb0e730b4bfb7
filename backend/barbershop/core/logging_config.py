"""
Logging setup for hosts embedding the barbershop core.

Library modules only ever call ``logging.getLogger(__name__)`` and attach
structured data with ``extra={"context": {...}}``. The host process calls
``setup_logging`` once at startup to decide where records go:

- a console handler, coloured text or one JSON object per line
- optional rotating JSON files (all records, and errors only)
- optional SQLAlchemy statement logging with per-query timing

Usage:
    from barbershop.core.logging_config import setup_logging, get_logger

    setup_logging(log_level="DEBUG", log_to_file=True)
    logger = get_logger(__name__)
    logger.info("Appointment created", extra={"context": {"appointment_id": 7}})
"""

import json
import logging
import logging.handlers
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from sqlalchemy import event
from sqlalchemy.engine import Engine

LOG_FILE_NAME = "barbershop.log"
ERROR_LOG_FILE_NAME = "barbershop_errors.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3
CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
SQL_TIMING_LOGGER = "barbershop.sql"


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``context`` is copied through as-is."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # Decimal prices and datetimes fall back to str()
        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Coloured single-line output for terminals, context as key=value."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        color = self.LEVEL_COLORS.get(record.levelno)
        return f"{color}{line}{self.RESET}" if color else line


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("barbershop_query_start", []).append(time.perf_counter())


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    started = conn.info["barbershop_query_start"].pop()
    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    logging.getLogger(SQL_TIMING_LOGGER).info(
        f"SQL {elapsed_ms}ms",
        extra={"context": {"statement": statement[:300], "duration_ms": elapsed_ms}},
    )


def enable_sql_timing() -> None:
    """Time every statement run by any engine (idempotent)."""
    if not event.contains(Engine, "before_cursor_execute", _before_cursor_execute):
        event.listen(Engine, "before_cursor_execute", _before_cursor_execute)
        event.listen(Engine, "after_cursor_execute", _after_cursor_execute)


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    resolved = logging.getLevelName(str(log_level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _console_handler(level: int, use_json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(CONSOLE_FORMAT, CONSOLE_DATE_FORMAT))
    return handler


def _file_handlers(level: int, log_dir: Path) -> List[logging.Handler]:
    """Rotating JSON files under ``log_dir``. Raises OSError if unwritable."""
    log_dir.mkdir(parents=True, exist_ok=True)
    handlers: List[logging.Handler] = []
    for file_name, handler_level in (
        (LOG_FILE_NAME, level),
        (ERROR_LOG_FILE_NAME, logging.ERROR),
    ):
        handler = logging.handlers.RotatingFileHandler(
            log_dir / file_name,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(handler_level)
        handler.setFormatter(JSONFormatter())
        handlers.append(handler)
    return handlers


def setup_logging(
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = False,
    use_json_format: bool = False,
    log_dir: Union[str, Path, None] = None,
) -> None:
    """
    Replace the root logger's handlers according to the given options.

    Args:
        log_level: Level name ("DEBUG", "info") or number; unknown names mean INFO
        enable_sql_echo: Log SQLAlchemy statements and their duration
        log_to_file: Also write rotating JSON files under ``log_dir``
        use_json_format: JSON instead of coloured text on the console
        log_dir: Directory for log files (``./logs`` when omitted)
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(level)
    root_logger.addHandler(_console_handler(level, use_json_format))

    if log_to_file:
        target_dir = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
        try:
            for handler in _file_handlers(level, target_dir):
                root_logger.addHandler(handler)
        except OSError as e:
            root_logger.warning(
                f"Cannot write log files to {target_dir} ({e}); "
                "falling back to console-only logging.",
                extra={"context": {"log_dir": str(target_dir)}},
            )

    if enable_sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        enable_sql_timing()

    logging.getLogger("barbershop").setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={
            "context": {
                "level": logging.getLevelName(level),
                "sql_echo": enable_sql_echo,
                "log_to_file": log_to_file,
                "json": use_json_format,
            }
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger; equivalent to ``logging.getLogger(name)``."""
    return logging.getLogger(name)
