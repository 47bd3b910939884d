"""Classification of raw udev notifications into kvm lifecycle phases.

The kernel announces kvm virtual machine creation and destruction as
``change`` uevents on the /dev/kvm misc device, with the verb in the
``EVENT`` property and the originating process in ``PID``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from kvm_udev.config import settings
from kvm_udev.events.base import UNKNOWN_PID, LifecyclePhase

# udev EVENT property values mapped to lifecycle phases
KVM_EVENT_MAP = {
    "create": LifecyclePhase.CREATED,
    "destroy": LifecyclePhase.DESTROYED,
}

# Unsigned integer in C notation, optional "+": 0x hex, leading-zero octal, or decimal
_PID_RE = re.compile(r"\+?(?:(0[xX][0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))")


@dataclass(frozen=True)
class Classification:
    """A notification recognised as a monitored-device transition."""

    phase: LifecyclePhase
    pid: int


def parse_pid(value: str | None) -> int:
    """Parse a PID property with C ``strtoul(value, NULL, 0)`` base rules.

    Returns UNKNOWN_PID when the value is missing or malformed.
    """
    if value is None:
        return UNKNOWN_PID

    match = _PID_RE.fullmatch(value.strip())
    if match is None:
        return UNKNOWN_PID

    hex_digits, octal_digits, decimal_digits = match.groups()
    if hex_digits:
        return int(hex_digits, 16)
    if octal_digits:
        return int(octal_digits, 8)
    return int(decimal_digits)


def classify(
    device_node: str | None,
    properties: Mapping[str, str],
    monitored_node: str | None = None,
) -> Classification | None:
    """Decide whether a notification is a kvm lifecycle transition.

    Args:
        device_node: Device node path of the notification
        properties: udev property bag
        monitored_node: Node to match, defaults to settings.device_node

    Returns:
        Classification for a create/destroy on the monitored node, None otherwise
    """
    if monitored_node is None:
        monitored_node = settings.device_node

    if device_node != monitored_node:
        return None

    phase = KVM_EVENT_MAP.get(properties.get("EVENT", ""))
    if phase is None:
        return None

    return Classification(phase=phase, pid=parse_pid(properties.get("PID")))
