"""
Logging configuration for the events widget e2e suite.

Provides structured JSON logging with file rotation and different output formats
for development and CI environments. Each test run gets its own logger instance
which is handed to page objects and helpers explicitly.
"""

import logging
import logging.handlers
import json
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from .config import Config

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]

RUN_LOGGER_PREFIX = "widget_e2e.run"
CONTEXT_FIELDS = ("test_id", "project", "step", "duration", "status")


class RunFormatter(logging.Formatter):
    """Base for run formatters: knows the run id and the test context of a record."""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    @staticmethod
    def record_time(record: logging.LogRecord) -> datetime:
        return datetime.fromtimestamp(record.created, tz=timezone.utc)

    @staticmethod
    def test_context(record: logging.LogRecord) -> Dict[str, Any]:
        """Test context fields set through ``extra``, in a fixed order."""
        return {
            attr: getattr(record, attr) for attr in CONTEXT_FIELDS if hasattr(record, attr)
        }


class StructuredFormatter(RunFormatter):
    """One JSON document per line, for CI log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.record_time(record).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
        log_entry: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "component": record.name,
            "run_id": self.run_id,
            "message": record.getMessage(),
        }
        log_entry.update(self.test_context(record))

        if getattr(record, "metadata", None) is not None:
            log_entry["metadata"] = record.metadata
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class TextFormatter(RunFormatter):
    """
    Console-friendly single line per record.

    ``[2024-01-15 10:30:00] INFO     capture | [SMOKE-01] message (run: 1a2b3c4d) | url=/``
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.record_time(record).strftime("%Y-%m-%d %H:%M:%S")
        context = self.test_context(record)
        test_id = context.pop("test_id", None)
        prefix = f"[{test_id}] " if test_id else ""

        line = (
            f"[{timestamp}] {record.levelname:8} {record.name:20} | "
            f"{prefix}{record.getMessage()} (run: {self.run_id[:8]})"
        )

        details = dict(context)
        details.update(getattr(record, "metadata", None) or {})
        if details:
            line += " | " + " | ".join(f"{k}={v}" for k, v in details.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def close_logging(logger: logging.Logger) -> None:
    """Detach and close every handler of a run logger, flushing its log file."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(config: Config, run_id: Optional[str] = None) -> logging.Logger:
    """
    Create the logger for one test run.

    The returned logger does not propagate to the root logger, so several runs
    in one process never share handlers or levels.

    Args:
        config: Configuration object with logging settings
        run_id: Run identifier for log correlation, defaults to ``config.run_id``

    Returns:
        Configured run logger
    """
    run_id = run_id or config.run_id
    logger = logging.getLogger(f"{RUN_LOGGER_PREFIX}.{run_id[:8]}")

    close_logging(logger)

    log_level = getattr(logging, config.log_level)
    logger.setLevel(log_level)
    logger.propagate = False

    if config.log_format == "json":
        formatter = StructuredFormatter(run_id)
    else:
        formatter = TextFormatter(run_id)

    # Console handler (always present)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)
    logger.addHandler(console_handler)

    # File handler for non-CI environments
    if not config.is_ci_mode:
        file_handler = logging.handlers.RotatingFileHandler(
            config.get_log_file_path(),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    logger.debug(
        "Logging configured",
        extra={
            "metadata": {
                "run_id": run_id,
                "log_level": config.log_level,
                "log_format": config.log_format,
                "ci_mode": config.is_ci_mode,
            }
        },
    )

    return logger


def get_logger(name: str, **context) -> LoggerLike:
    """
    Get a logger with optional context.

    Args:
        name: Logger name (typically module name)
        **context: Additional context to include in log records

    Returns:
        Configured logger with context
    """
    logger = logging.getLogger(name)

    if context:

        class ContextAdapter(logging.LoggerAdapter):
            def process(self, msg, kwargs):
                if "extra" not in kwargs:
                    kwargs["extra"] = {}
                kwargs["extra"].update(self.extra)
                return msg, kwargs

        return ContextAdapter(logger, context)

    return logger


def child_logger(parent: Optional[LoggerLike], name: str) -> logging.Logger:
    """
    Derive a component logger from an injected parent.

    Falls back to the ``widget_e2e.<name>`` module logger when no parent is given.
    """
    if parent is None:
        return logging.getLogger(f"widget_e2e.{name}")
    if isinstance(parent, logging.LoggerAdapter):
        parent = parent.logger
    return parent.getChild(name)


def log_step(logger: LoggerLike, step_name: str) -> None:
    """Log the start of a test step."""
    logger.info(f"Step: {step_name}", extra={"step": step_name})


def log_success(logger: LoggerLike, message: str) -> None:
    """Log a successfully completed action."""
    logger.info(f"OK: {message}", extra={"status": "passed"})
