"""Trace sink registry.

Maps the configured sink name to a sink implementation. Sinks are only
imported when selected.
"""

from __future__ import annotations

import logging

from kvm_udev.sinks.base import TraceSink

logger = logging.getLogger(__name__)

SINK_NAMES = ("log", "http")


def get_trace_sink(name: str | None = None) -> TraceSink:
    """Build the trace sink selected by name.

    Args:
        name: Sink name ('log' or 'http'), defaults to settings.trace_sink

    Returns:
        A new TraceSink instance

    Raises:
        ValueError: If the name is unknown or the sink is misconfigured
    """
    if name is None:
        from kvm_udev.config import settings
        name = settings.trace_sink

    if name == "log":
        from kvm_udev.sinks.logging_sink import LoggingTraceSink
        sink = LoggingTraceSink()
    elif name == "http":
        from kvm_udev.sinks.http_sink import HttpTraceSink
        sink = HttpTraceSink()
    else:
        raise ValueError(f"Unknown trace sink: {name!r} (expected one of {', '.join(SINK_NAMES)})")

    logger.info(f"Using trace sink: {name}")
    return sink
