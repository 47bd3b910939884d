"""Sensor-collector protocol schemas.

These Pydantic models define the records the sensor POSTs to an
HTTP trace collector.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from kvm_udev.version import __version__


class LifecycleEventPayload(BaseModel):
    """Sensor -> Collector: one kvm lifecycle record."""
    event: str  # kvm_created or kvm_destroyed
    pid: int
    uuid: str | None = None  # Only sent for kvm_created
    host: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sensor_version: str = __version__
