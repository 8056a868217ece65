"""
Centralized logging configuration for the kagi CLI.

This module provides:
- A human-readable console handler on stderr (WARNING, or INFO when verbose)
- Optional rotating JSON file logs when LOG_DIR is set
- Environment-based configuration (LOG_LEVEL, LOG_DIR)

stdout is reserved for the formatted answer, so nothing here ever writes to it.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class JsonFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs in JSON format for easy parsing by log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


class LoggerConfig:
    """
    Centralized logger configuration and management.
    """

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR = os.getenv("LOG_DIR", "").strip()
    MAX_BYTES = 10 * 1024 * 1024  # 10MB per file
    BACKUP_COUNT = 5

    _initialized = False
    _console_handler: logging.Handler | None = None

    @classmethod
    def setup_logging(cls) -> None:
        """
        Set up the logging configuration for the entire application.
        Safe to call more than once; only the first call configures handlers.
        """
        if cls._initialized:
            return

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, cls.LOG_LEVEL, logging.INFO))

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter(fmt="%(levelname)s: %(message)s"))
        root_logger.addHandler(console_handler)
        cls._console_handler = console_handler

        if cls.LOG_DIR:
            cls._add_file_handlers(root_logger, Path(cls.LOG_DIR))

        # Keep transport chatter out of the console unless debugging
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

        cls._initialized = True

        logging.getLogger(__name__).debug(
            "Logging system initialized",
            extra={
                "extra_fields": {
                    "log_level": cls.LOG_LEVEL,
                    "log_dir": cls.LOG_DIR or None,
                }
            },
        )

    @classmethod
    def _add_file_handlers(cls, root_logger: logging.Logger, log_dir: Path) -> None:
        log_dir.mkdir(parents=True, exist_ok=True)
        json_formatter = JsonFormatter()

        # 1. Main application log (INFO and above)
        app_handler = logging.handlers.RotatingFileHandler(
            log_dir / "app.log",
            maxBytes=cls.MAX_BYTES,
            backupCount=cls.BACKUP_COUNT,
            encoding="utf-8",
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(json_formatter)
        root_logger.addHandler(app_handler)

        # 2. Error log (ERROR and above)
        error_handler = logging.handlers.RotatingFileHandler(
            log_dir / "error.log",
            maxBytes=cls.MAX_BYTES,
            backupCount=cls.BACKUP_COUNT,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(json_formatter)
        root_logger.addHandler(error_handler)

        # 3. Debug log (everything, only at DEBUG level)
        if cls.LOG_LEVEL == "DEBUG":
            debug_handler = logging.handlers.RotatingFileHandler(
                log_dir / "debug.log",
                maxBytes=cls.MAX_BYTES,
                backupCount=cls.BACKUP_COUNT,
                encoding="utf-8",
            )
            debug_handler.setLevel(logging.DEBUG)
            debug_handler.setFormatter(json_formatter)
            root_logger.addHandler(debug_handler)

    @classmethod
    def set_verbose(cls, verbose: bool) -> None:
        """
        Lower the console threshold to INFO when verbose output is requested.

        Args:
            verbose: True to echo INFO records (request/response diagnostics)
        """
        cls.setup_logging()
        root_logger = logging.getLogger()
        if verbose and root_logger.getEffectiveLevel() > logging.INFO:
            # LOG_LEVEL=WARNING would otherwise drop the records before any handler
            root_logger.setLevel(logging.INFO)
        if cls._console_handler is not None:
            cls._console_handler.setLevel(logging.INFO if verbose else logging.WARNING)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger instance with the specified name.

        Args:
            name: The name of the logger (typically __name__)

        Returns:
            Configured logger instance
        """
        if not cls._initialized:
            cls.setup_logging()

        return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Example:
        >>> from utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.warning("Cache write failed", extra={"extra_fields": {"cache_dir": "/tmp/x"}})
    """
    return LoggerConfig.get_logger(name)
