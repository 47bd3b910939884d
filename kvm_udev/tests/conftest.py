"""Shared pytest fixtures for sensor tests."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

import pytest

from kvm_udev.identity import ProcessIdentityResolver
from kvm_udev.sinks.base import TraceSink


@dataclass
class FakeNotification:
    """Stand-in for pyudev.Device."""

    device_node: str | None
    properties: dict[str, str] = field(default_factory=dict)


class FakeSource:
    """Notification source fed from a list instead of a netlink socket."""

    def __init__(self, notifications=()):
        self.pending = deque(notifications)
        self.closed = False

    def push(self, *notifications) -> None:
        self.pending.extend(notifications)

    def fileno(self) -> int:
        return -1

    def is_ready(self) -> bool:
        return bool(self.pending)

    def receive(self):
        return self.pending.popleft() if self.pending else None

    def close(self) -> None:
        self.closed = True


class RecordingSink(TraceSink):
    """Trace sink that records every call."""

    def __init__(self, enabled=("kvm_created", "kvm_destroyed")):
        self.enabled = set(enabled)
        self.records: list[tuple] = []
        self.enabled_queries: list[str] = []

    def is_enabled(self, category: str) -> bool:
        self.enabled_queries.append(category)
        return category in self.enabled

    def kvm_created(self, pid: int, instance_id: str) -> None:
        self.records.append(("kvm_created", pid, instance_id))

    def kvm_destroyed(self, pid: int) -> None:
        self.records.append(("kvm_destroyed", pid))


class CountingResolver(ProcessIdentityResolver):
    """Resolver that counts resolve() calls."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: list[int] = []

    def resolve(self, pid: int) -> str:
        self.calls.append(pid)
        return super().resolve(pid)


@pytest.fixture
def fake_proc(tmp_path):
    """Create a fake /proc tree; returns a writer for <pid>/cmdline files."""

    def write_cmdline(pid: int, args: list[str], trailing_nul: bool = True) -> None:
        proc_dir = tmp_path / str(pid)
        proc_dir.mkdir()
        data = b"\0".join(a.encode() for a in args)
        if trailing_nul:
            data += b"\0"
        (proc_dir / "cmdline").write_bytes(data)

    write_cmdline.root = str(tmp_path)
    return write_cmdline


@pytest.fixture
def resolver(fake_proc):
    return CountingResolver(flag="-uuid", proc_root=fake_proc.root, max_length=36)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def notification():
    """Factory for fake udev notifications."""

    def make(device_node="/dev/kvm", **properties):
        return FakeNotification(device_node=device_node, properties=properties)

    return make
