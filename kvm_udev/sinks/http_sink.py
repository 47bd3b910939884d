"""Trace sink that forwards lifecycle records to an HTTP collector.

Each record is POSTed once. There is no retry or dead-letter handling:
a record the collector cannot take is logged and dropped.

The POST is synchronous and runs on the listener's event loop. An
unreachable collector holds the loop for up to collector_timeout seconds
per record, which also delays a signal-driven shutdown by that much.
"""
from __future__ import annotations

import logging
import socket

import httpx

from kvm_udev.config import settings
from kvm_udev.schemas import LifecycleEventPayload
from kvm_udev.sinks.base import TraceSink

logger = logging.getLogger(__name__)


class HttpTraceSink(TraceSink):
    """POSTs each lifecycle record as JSON to the collector URL.

    Every request is bounded by the client timeout (settings.collector_timeout
    unless given), so one dead collector costs at most that long per record.
    """

    def __init__(
        self,
        collector_url: str | None = None,
        enabled_events: list[str] | None = None,
        timeout: float | None = None,
        host: str | None = None,
        client: httpx.Client | None = None,
    ):
        self.collector_url = collector_url if collector_url is not None else settings.collector_url
        if not self.collector_url:
            raise ValueError("HTTP trace sink requires a collector URL")
        if enabled_events is None:
            enabled_events = settings.enabled_events
        self._enabled_events = set(enabled_events)
        self.host = host if host is not None else socket.gethostname()
        self._client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.collector_timeout
        )

    def is_enabled(self, category: str) -> bool:
        return category in self._enabled_events

    def kvm_created(self, pid: int, instance_id: str) -> None:
        self._post(LifecycleEventPayload(
            event="kvm_created", pid=pid, uuid=instance_id, host=self.host,
        ))

    def kvm_destroyed(self, pid: int) -> None:
        self._post(LifecycleEventPayload(event="kvm_destroyed", pid=pid, host=self.host))

    def _post(self, payload: LifecycleEventPayload) -> None:
        try:
            response = self._client.post(
                self.collector_url,
                content=payload.model_dump_json(),
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Dropped {payload.event} record for pid {payload.pid}: {e}")

    def close(self) -> None:
        self._client.close()
