"""Base interface for trace sinks.

A trace sink receives typed kvm lifecycle records. The emitter asks
is_enabled() before doing any work so a disabled category costs nothing,
including the /proc read for the instance identifier.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class TraceSink(ABC):
    """Abstract base class for kvm lifecycle trace sinks.

    Implementations should:
    1. Answer is_enabled() cheaply, it runs for every notification
    2. Treat delivery as fire-and-forget; drop what cannot be delivered
    """

    @abstractmethod
    def is_enabled(self, category: str) -> bool:
        """Check whether records of an event category are wanted.

        Args:
            category: Event category, a LifecyclePhase value
        """

    @abstractmethod
    def kvm_created(self, pid: int, instance_id: str) -> None:
        """Record a virtual machine creation.

        Args:
            pid: Originating process id, -1 if unknown
            instance_id: Machine identifier, "" if it could not be resolved
        """

    @abstractmethod
    def kvm_destroyed(self, pid: int) -> None:
        """Record a virtual machine destruction."""

    def close(self) -> None:
        """Release sink resources."""
