"""Trace sinks for kvm lifecycle records."""

from kvm_udev.sinks.base import TraceSink
from kvm_udev.sinks.logging_sink import LoggingTraceSink
from kvm_udev.sinks.registry import get_trace_sink

__all__ = [
    "TraceSink",
    "LoggingTraceSink",
    "get_trace_sink",
]
