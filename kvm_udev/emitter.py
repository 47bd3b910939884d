"""Lifecycle event emission.

Turns a classified kvm transition into exactly one trace record. The sink
is asked whether the event category is enabled before anything else, so
no /proc read happens when nobody is listening.
"""
from __future__ import annotations

import logging

from kvm_udev.events.base import LifecycleEvent, LifecyclePhase
from kvm_udev.identity import ProcessIdentityResolver
from kvm_udev.sinks.base import TraceSink

logger = logging.getLogger(__name__)


class LifecycleEventEmitter:
    """Produces typed lifecycle records and hands them to a trace sink."""

    def __init__(self, sink: TraceSink, resolver: ProcessIdentityResolver | None = None):
        self.sink = sink
        self.resolver = resolver or ProcessIdentityResolver()

    def emit(
        self,
        phase: LifecyclePhase,
        pid: int,
        instance_id: str | None = None,
    ) -> LifecycleEvent | None:
        """Emit one record for a lifecycle transition.

        Args:
            phase: The transition
            pid: Originating process id
            instance_id: Known machine identifier; resolved from the
                process command line when omitted on CREATED

        Returns:
            The record handed to the sink, or None if the category is disabled
        """
        if not self.sink.is_enabled(phase.value):
            return None

        if phase is LifecyclePhase.CREATED:
            if instance_id is None:
                instance_id = self.resolver.resolve_identity(pid).instance_id
            event = LifecycleEvent(phase=phase, pid=pid, instance_id=instance_id or "")
        else:
            event = LifecycleEvent(phase=phase, pid=pid)

        self._deliver(event)
        return event

    def _deliver(self, event: LifecycleEvent) -> None:
        try:
            if event.phase is LifecyclePhase.CREATED:
                self.sink.kvm_created(event.pid, event.instance_id or "")
            else:
                self.sink.kvm_destroyed(event.pid)
        except Exception as e:
            logger.error(f"Trace sink failed on {event.phase.value} for pid {event.pid}: {e}")
