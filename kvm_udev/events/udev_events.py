"""udev netlink notification source for the kvm device node.

Opens a udev monitor on the netlink socket, filtered to the subsystem the
kvm node lives in (``misc``), and hands received devices to the listener
without blocking. ``pyudev.Device`` already exposes ``device_node`` and
``properties``, so devices are passed through as raw notifications.
"""
from __future__ import annotations

import logging

import pyudev

from kvm_udev.config import settings
from kvm_udev.events.base import NotificationChannelError, NotificationSource

logger = logging.getLogger(__name__)


class UdevNotificationSource(NotificationSource):
    """Non-blocking udev monitor filtered to one subsystem.

    Raises NotificationChannelError from the constructor if the netlink
    monitor cannot be created; the sensor has nothing to do without it.
    """

    def __init__(self, subsystem: str | None = None, context: pyudev.Context | None = None):
        self.subsystem = subsystem or settings.udev_subsystem
        try:
            self._context = context or pyudev.Context()
            self._monitor = pyudev.Monitor.from_netlink(self._context, source="udev")
            self._monitor.filter_by(subsystem=self.subsystem)
            self._monitor.start()
        except (OSError, ImportError) as e:
            raise NotificationChannelError(str(e)) from e
        logger.info(f"udev monitor receiving on subsystem {self.subsystem}")

    def fileno(self) -> int:
        return self._monitor.fileno()

    def receive(self) -> pyudev.Device | None:
        return self._monitor.poll(timeout=0)

    def close(self) -> None:
        # pyudev has no explicit close; dropping the monitor releases the socket
        self._monitor = None
