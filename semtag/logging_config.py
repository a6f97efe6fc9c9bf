"""
Logging configuration for semtag.

Provides human-readable console logging by default and JSON-formatted
logging for CI systems that ingest structured logs. All handlers write to
stderr so that stdout only carries command output (e.g. the version).

Loggers:
- cli: Command-line invocations and results
- git: Git tag listing and fetching
- rewrite: File rewriting
- selector: Latest-version selection reports
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Dict, Optional


ENV_LOG_LEVEL = "SEMTAG_LOG_LEVEL"
ENV_LOG_FORMAT = "SEMTAG_LOG_FORMAT"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"
LOG_FORMATS = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOGGER_NAMES = ("cli", "git", "rewrite", "selector")


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs logs as JSON for structured logging.

    Each log record includes:
    - timestamp: ISO 8601 format
    - level: Log level (INFO, ERROR, etc.)
    - logger: Logger name (semtag.git, semtag.cli, ...)
    - message: Log message
    - module: Python module name
    - function: Function name where log was created
    - line: Line number
    - Additional fields: exception info, extra fields
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # logger.info("msg", extra={"extra_fields": {...}})
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Format: [TIMESTAMP] LEVEL - LOGGER - MESSAGE
    Example: [2025-12-29 10:30:45] INFO - semtag.git - Found 12 tags
    """

    def __init__(self):
        super().__init__(
            fmt="[%(asctime)s] %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def _resolve_log_level(level: Optional[str]) -> int:
    """
    Resolve a log level name to its logging constant.

    Falls back to SEMTAG_LOG_LEVEL, then INFO. Unknown names map to INFO.
    """
    level_str = (level or os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)).upper()
    return getattr(logging, level_str, logging.INFO)


def _resolve_log_format(log_format: Optional[str]) -> str:
    """Resolve the log format, falling back to SEMTAG_LOG_FORMAT, then console."""
    fmt = (log_format or os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT)).lower()
    return fmt if fmt in LOG_FORMATS else DEFAULT_LOG_FORMAT


def configure_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> Dict[str, logging.Logger]:
    """
    Configure logging for semtag.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "console" or "json"

    Returns:
        Dictionary mapping short logger names (cli, git, rewrite, selector)
        to configured Logger instances

    Example:
        >>> loggers = configure_logging("DEBUG", "json")
        >>> loggers["git"].info("Listing tags", extra={"extra_fields": {"cwd": "."}})
    """
    global _loggers

    log_level = _resolve_log_level(level)
    formatter = JSONFormatter() if _resolve_log_format(log_format) == "json" else ConsoleFormatter()

    loggers = {}

    for logger_name in LOGGER_NAMES:
        logger = logging.getLogger(f"semtag.{logger_name}")
        logger.setLevel(log_level)
        logger.propagate = False

        logger.handlers.clear()

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        loggers[logger_name] = logger

    _loggers = loggers
    return loggers


_loggers: Optional[Dict[str, logging.Logger]] = None


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger by short name.

    Configures logging with environment defaults on first use.

    Args:
        name: Logger name (cli, git, rewrite, selector)

    Returns:
        Configured Logger instance

    Raises:
        ValueError: If logger name is not recognized
    """
    if _loggers is None:
        configure_logging()

    if name not in _loggers:
        raise ValueError(
            f"Unknown logger name: {name}. "
            f"Valid names: {', '.join(_loggers.keys())}"
        )

    return _loggers[name]
