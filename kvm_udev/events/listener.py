"""Polling listener that turns udev notifications into kvm trace records.

The listener runs as a single asyncio task:
1. Drain: while the notification source is readable, receive one
   notification, classify it, and emit its record
2. Idle: wait one poll interval (or until stopped) and drain again

Notifications are handled one at a time in arrival order. Nothing is
buffered between passes and nothing is retried.
"""
from __future__ import annotations

import asyncio
import logging

from kvm_udev.config import settings
from kvm_udev.emitter import LifecycleEventEmitter
from kvm_udev.events.base import UNKNOWN_PID, NotificationSource, RawNotification
from kvm_udev.events.classifier import classify

logger = logging.getLogger(__name__)


class KvmEventListener:
    """Polls a notification source and emits kvm lifecycle records.

    Attributes:
        processed: Notifications received since start
        emitted: Records handed to the trace sink since start
    """

    def __init__(
        self,
        source: NotificationSource,
        emitter: LifecycleEventEmitter,
        poll_interval: float | None = None,
    ):
        self.source = source
        self.emitter = emitter
        self.poll_interval = poll_interval if poll_interval is not None else settings.poll_interval
        self.processed = 0
        self.emitted = 0
        self._running = False
        self._stop_event = asyncio.Event()

    async def start(self) -> None:
        """Poll for notifications until stop() is called or the task is cancelled."""
        self._running = True
        self._stop_event.clear()
        logger.info(
            f"kvm event listener started (node={settings.device_node}, "
            f"interval={self.poll_interval}s)"
        )

        try:
            while not self._stop_event.is_set():
                try:
                    self.drain()
                except Exception as e:
                    # Drop the rest of this pass, poll again after the interval
                    logger.error(f"Error while draining udev notifications: {e}")
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self.poll_interval)
                except asyncio.TimeoutError:
                    # Normal timeout, poll again
                    continue
        except asyncio.CancelledError:
            logger.info("kvm event listener cancelled")
            raise
        finally:
            self._running = False
            logger.info(
                f"kvm event listener stopped "
                f"(processed={self.processed}, emitted={self.emitted})"
            )

    def drain(self) -> int:
        """Process every notification currently available.

        Returns:
            Number of records emitted in this pass
        """
        emitted = 0
        while self.source.is_ready():
            notification = self.source.receive()
            if notification is None:
                break
            self.processed += 1
            if self.handle(notification):
                emitted += 1
                self.emitted += 1
        return emitted

    def handle(self, notification: RawNotification) -> bool:
        """Classify one notification and emit its record.

        Returns:
            True if a record was handed to the trace sink
        """
        properties = notification.properties
        classification = classify(notification.device_node, properties)
        if classification is None:
            return False

        if classification.pid == UNKNOWN_PID:
            logger.debug(
                f"{classification.phase.value} without usable PID "
                f"(PID={properties.get('PID')!r})"
            )

        event = self.emitter.emit(classification.phase, classification.pid)
        return event is not None

    def stop(self) -> None:
        """Stop polling after the current pass."""
        logger.info("Stopping kvm event listener...")
        self._stop_event.set()

    def is_running(self) -> bool:
        return self._running
