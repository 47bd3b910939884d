"""Base types for kvm lifecycle events and notification sources.

This module defines the typed lifecycle records the sensor emits and the
abstract interface a hotplug notification source must implement, keeping
the correlation logic independent of pyudev.
"""
from __future__ import annotations

import select
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Mapping, Protocol

# PID reported when a notification carries no usable PID property
UNKNOWN_PID = -1


class KvmUdevError(Exception):
    """Base class for sensor errors."""


class NotificationChannelError(KvmUdevError):
    """Raised when the hotplug notification channel cannot be created."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Cannot create udev notification channel: {reason}")


class LifecyclePhase(str, Enum):
    """Lifecycle transitions of the kvm device node.

    Values double as trace event category names.
    """

    # A process opened /dev/kvm and created a virtual machine
    CREATED = "kvm_created"

    # The virtual machine was torn down
    DESTROYED = "kvm_destroyed"


@dataclass(frozen=True)
class LifecycleEvent:
    """A single kvm lifecycle trace record.

    Attributes:
        phase: Which transition this record reports
        pid: Originating process id, or UNKNOWN_PID
        instance_id: Machine identifier; set (possibly empty) for CREATED,
            None for DESTROYED
        timestamp: When the record was produced
    """

    phase: LifecyclePhase
    pid: int
    instance_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RawNotification(Protocol):
    """Shape of a raw hotplug notification.

    ``pyudev.Device`` satisfies this protocol directly.
    """

    @property
    def device_node(self) -> str | None: ...

    @property
    def properties(self) -> Mapping[str, str]: ...


class NotificationSource(ABC):
    """Abstract base class for hotplug notification sources.

    A source owns one notification channel. The listener polls it with
    is_ready() and pulls notifications one at a time with receive().
    """

    @abstractmethod
    def fileno(self) -> int:
        """Return the file descriptor that becomes readable on new events."""

    @abstractmethod
    def receive(self) -> RawNotification | None:
        """Return the next pending notification without blocking, or None."""

    def is_ready(self) -> bool:
        """Check for pending notifications with a zero-timeout select()."""
        readable, _, _ = select.select([self.fileno()], [], [], 0)
        return bool(readable)

    def close(self) -> None:
        """Release the notification channel."""
