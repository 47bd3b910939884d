"""Trace sink that writes lifecycle records to the logging system.

Records go to the ``kvm_udev.trace`` logger with the trace fields attached
as extra attributes, so the JSON formatter ships them as structured data.
"""
from __future__ import annotations

import logging

from kvm_udev.config import settings
from kvm_udev.sinks.base import TraceSink

TRACE_LOGGER_NAME = "kvm_udev.trace"


class LoggingTraceSink(TraceSink):
    """Writes one INFO log record per lifecycle event."""

    def __init__(
        self,
        enabled_events: list[str] | None = None,
        logger: logging.Logger | None = None,
    ):
        if enabled_events is None:
            enabled_events = settings.enabled_events
        self._enabled_events = set(enabled_events)
        self._logger = logger or logging.getLogger(TRACE_LOGGER_NAME)

    def is_enabled(self, category: str) -> bool:
        return category in self._enabled_events and self._logger.isEnabledFor(logging.INFO)

    def kvm_created(self, pid: int, instance_id: str) -> None:
        self._logger.info(
            f"kvm_created pid={pid} uuid={instance_id}",
            extra={"event": "kvm_created", "pid": pid, "uuid": instance_id},
        )

    def kvm_destroyed(self, pid: int) -> None:
        self._logger.info(
            f"kvm_destroyed pid={pid}",
            extra={"event": "kvm_destroyed", "pid": pid},
        )
