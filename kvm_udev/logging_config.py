"""Sensor logging configuration with JSON formatting.

This module provides structured logging for the sensor:
- JSON-formatted log output so trace records can be shipped by a log collector
- Configurable log levels and formats
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from kvm_udev.config import settings

# LogRecord attributes that are not user-supplied extra fields
_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
}


class SensorJSONFormatter(logging.Formatter):
    """JSON log formatter for sensor structured logging.

    Formats log records as JSON objects with consistent fields:
    - timestamp: ISO8601 formatted timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - service: Always "kvm-udev" for identification
    - host: The host the sensor runs on (if known)
    - extra: Additional context fields, e.g. the trace record fields
    """

    def __init__(self, host: str = ""):
        super().__init__()
        self.host = host

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": "kvm-udev",
        }

        if self.host:
            log_entry["host"] = self.host

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra = {}
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                try:
                    json.dumps(value)
                    extra[key] = value
                except (TypeError, ValueError):
                    extra[key] = str(value)

        if extra:
            log_entry["extra"] = extra

        return json.dumps(log_entry)


class SensorTextFormatter(logging.Formatter):
    """Text log formatter for the sensor (development use).

    Provides a human-readable format:
    [timestamp] LEVEL [host] logger: message
    """

    def __init__(self, host: str = ""):
        super().__init__()
        self.host = host

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S"
        )
        host_part = f" [{self.host}]" if self.host else ""

        message = f"[{timestamp}] {record.levelname:8}{host_part} {record.name}: {record.getMessage()}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def setup_sensor_logging(host: str = "") -> None:
    """Configure sensor logging based on settings.

    Sets up the root logger with either JSON or text formatting
    based on the log_format setting.

    Args:
        host: Host name for inclusion in log entries
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)

    if settings.log_format.lower() == "json":
        handler.setFormatter(SensorJSONFormatter(host))
    else:
        handler.setFormatter(SensorTextFormatter(host))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("pyudev").setLevel(logging.WARNING)
