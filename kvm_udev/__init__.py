"""KVM udev sensor.

Watches udev hotplug notifications for the /dev/kvm device node and traces
virtual machine creations and destructions.
"""

from kvm_udev.version import __version__

__all__ = ["__version__"]
