"""KVM udev sensor - traces virtual machine lifecycle from udev.

The sensor runs on a virtualization host and:
- Listens to udev notifications for the /dev/kvm misc device
- Resolves the QEMU instance UUID of newly created virtual machines
- Emits one trace record per creation or destruction
"""

from __future__ import annotations

import asyncio
import logging
import signal
import socket
import sys

from kvm_udev.emitter import LifecycleEventEmitter
from kvm_udev.events.base import NotificationChannelError, NotificationSource
from kvm_udev.events.listener import KvmEventListener
from kvm_udev.events.udev_events import UdevNotificationSource
from kvm_udev.identity import ProcessIdentityResolver
from kvm_udev.logging_config import setup_sensor_logging
from kvm_udev.sinks import TraceSink, get_trace_sink
from kvm_udev.version import __version__

logger = logging.getLogger(__name__)


async def run_sensor(source: NotificationSource, sink: TraceSink) -> None:
    """Run the listener until SIGINT or SIGTERM."""
    emitter = LifecycleEventEmitter(sink, ProcessIdentityResolver())
    listener = KvmEventListener(source, emitter)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, listener.stop)

    await listener.start()


def main() -> int:
    """Entry point for the kvm-udev command."""
    setup_sensor_logging(socket.gethostname())
    logger.info(f"kvm-udev sensor {__version__} starting")

    try:
        source = UdevNotificationSource()
    except NotificationChannelError as e:
        logger.error(str(e))
        return 1

    try:
        sink = get_trace_sink()
    except ValueError as e:
        logger.error(f"Invalid trace sink configuration: {e}")
        source.close()
        return 1

    try:
        asyncio.run(run_sensor(source, sink))
    finally:
        sink.close()
        source.close()

    logger.info("kvm-udev sensor stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
