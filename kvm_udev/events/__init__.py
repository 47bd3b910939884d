"""Hotplug notification handling for the kvm device node.

This package turns udev notifications into kvm lifecycle records:
- UdevNotificationSource: pyudev netlink monitor on the misc subsystem
- classify: recognises create/destroy notifications for /dev/kvm
- KvmEventListener (events.listener): the polling loop
"""

from kvm_udev.events.base import (
    UNKNOWN_PID,
    KvmUdevError,
    LifecycleEvent,
    LifecyclePhase,
    NotificationChannelError,
    NotificationSource,
)
from kvm_udev.events.classifier import Classification, classify, parse_pid
from kvm_udev.events.udev_events import UdevNotificationSource

__all__ = [
    "UNKNOWN_PID",
    "KvmUdevError",
    "LifecycleEvent",
    "LifecyclePhase",
    "NotificationChannelError",
    "NotificationSource",
    "Classification",
    "classify",
    "parse_pid",
    "UdevNotificationSource",
]
